import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum


class RiskLevel(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Any) -> Optional['RiskLevel']:
        """Map a model-supplied level to a RiskLevel; None if unrecognized."""
        if not isinstance(value, str):
            return None
        return _RISK_LEVEL_ALIASES.get(value.strip().lower())


# Japanese labels are what the model tends to echo back for Japanese posts
_RISK_LEVEL_ALIASES = {
    "high": RiskLevel.HIGH,
    "medium": RiskLevel.MEDIUM,
    "low": RiskLevel.LOW,
    "高": RiskLevel.HIGH,
    "中": RiskLevel.MEDIUM,
    "低": RiskLevel.LOW,
}


class Persona(Enum):
    LEGAL = "legal"          # internet-savvy lawyer
    CORPORATE = "corporate"  # listed-company legal department
    EMOTIONAL = "emotional"  # sharp-tongued social commentator


class Verdict(Enum):
    FAVOR = "favor"
    NEUTRAL = "neutral"
    OPPOSE = "oppose"


def _to_int(value: Any) -> int:
    """Round a model-supplied number to the nearest int; anything non-numeric is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float):
        return int(round(value)) if math.isfinite(value) else 0
    return 0


@dataclass(frozen=True)
class RiskAssessment:
    """Categorical risk levels from the first model call"""
    legal_risk: Optional[RiskLevel]
    corporate_risk: Optional[RiskLevel]
    emotional_discomfort: Optional[RiskLevel]
    reason: Optional[str] = None   # ~50 chars, not enforced

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'RiskAssessment':
        reason = data.get("reason")
        return cls(
            legal_risk=RiskLevel.parse(data.get("legal_risk")),
            corporate_risk=RiskLevel.parse(data.get("corporate_risk")),
            emotional_discomfort=RiskLevel.parse(data.get("emotional_discomfort")),
            reason=reason if isinstance(reason, str) and reason else None,
        )


@dataclass(frozen=True)
class Adjustment:
    """Contextual score adjustments from the second model call (nominally -2..2)"""
    legal_adjust: int = 0
    corporate_adjust: int = 0
    emotional_adjust: int = 0

    @classmethod
    def zero(cls) -> 'Adjustment':
        return cls()

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'Adjustment':
        return cls(
            legal_adjust=_to_int(data.get("legal_adjust")),
            corporate_adjust=_to_int(data.get("corporate_adjust")),
            emotional_adjust=_to_int(data.get("emotional_adjust")),
        )

    def for_persona(self, persona: Persona) -> int:
        return getattr(self, f"{persona.value}_adjust")


@dataclass(frozen=True)
class PersonaScores:
    """Final 0-10 score per persona"""
    legal: int
    corporate: int
    emotional: int
    fired_rules: List[str] = field(default_factory=list, compare=False)

    def for_persona(self, persona: Persona) -> int:
        return getattr(self, persona.value)


FALLBACK_COMMENT = "A detailed comment could not be generated due to a technical problem."


@dataclass(frozen=True)
class Commentary:
    """Persona comments from the third model call"""
    legal_comment: str = ""
    corporate_comment: str = ""
    emotional_comment: str = ""

    @classmethod
    def fallback(cls) -> 'Commentary':
        return cls(FALLBACK_COMMENT, FALLBACK_COMMENT, FALLBACK_COMMENT)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'Commentary':
        def text(key: str) -> str:
            value = data.get(key)
            return value if isinstance(value, str) else ""

        return cls(
            legal_comment=text("legal_comment"),
            corporate_comment=text("corporate_comment"),
            emotional_comment=text("emotional_comment"),
        )

    def for_persona(self, persona: Persona) -> str:
        return getattr(self, f"{persona.value}_comment")


class CollectiveClass(Enum):
    DECIDED = "collective-decided"    # class A
    SPLIT = "collective-split"        # class B
    DECLINED = "collective-declined"  # class C


@dataclass(frozen=True)
class CollectiveResult:
    label: str
    css_class: CollectiveClass
    total: float
    legal_override: bool = False


MISSING_REASON = "Analysis information unavailable"


@dataclass
class DisclosureResult:
    """Everything the pipeline produced for one post"""
    collective: CollectiveResult
    displays: Dict[Persona, str]
    ai_reason: str
    scores: PersonaScores
    verdicts: Dict[Persona, Verdict]
    assessment: RiskAssessment
    adjustment: Adjustment
    metadata: Dict[str, Any] = field(default_factory=dict)  # degraded stages, model

    def to_response(self) -> Dict[str, str]:
        """Public response body."""
        return {
            "collective": self.collective.label,
            "collective_class": self.collective.css_class.value,
            "legal": self.displays[Persona.LEGAL],
            "corporate": self.displays[Persona.CORPORATE],
            "emotional": self.displays[Persona.EMOTIONAL],
            "ai_reason": self.ai_reason,
        }
