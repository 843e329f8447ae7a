"""
Verdict Aggregator
Responsible for turning persona scores into verdicts, combining them into
the collective result, and building each persona's display text.
"""

import logging
from typing import Dict, NamedTuple

from scoring.types import (
    CollectiveClass,
    CollectiveResult,
    Commentary,
    Persona,
    PersonaScores,
    Verdict,
)

logger = logging.getLogger(__name__)


class Thresholds(NamedTuple):
    favor_at: int
    neutral_at: int


PERSONA_THRESHOLDS = {
    Persona.LEGAL: Thresholds(favor_at=5, neutral_at=3),
    Persona.CORPORATE: Thresholds(favor_at=5, neutral_at=4),
    Persona.EMOTIONAL: Thresholds(favor_at=5, neutral_at=3),
}

VERDICT_WEIGHTS = {
    Verdict.FAVOR: 1.0,
    Verdict.NEUTRAL: 0.5,
    Verdict.OPPOSE: 0.0,
}

LEGAL_OVERRIDE_SCORE = 7

COLLECTIVE_DECIDED = "High disclosure likelihood!"
COLLECTIVE_SPLIT = "Disclosure possible (opinions split)"
COLLECTIVE_DECLINED = "Declined (disclosure difficult)"
COLLECTIVE_LEGAL_OVERRIDE = "Legal persona override: pursue disclosure!"

VERDICT_PREFIXES = {
    Persona.LEGAL: {
        Verdict.FAVOR: "[Verdict: in favor of disclosure]",
        Verdict.NEUTRAL: "[Verdict: neutral (needs review)]",
        Verdict.OPPOSE: "[Verdict: against disclosure]",
    },
    Persona.CORPORATE: {
        Verdict.FAVOR: "[Verdict: in favor of disclosure]",
        Verdict.NEUTRAL: "[Verdict: neutral (keep monitoring)]",
        Verdict.OPPOSE: "[Verdict: against disclosure]",
    },
    Persona.EMOTIONAL: {
        Verdict.FAVOR: "[Verdict: I'm all for it, honey!]",
        Verdict.NEUTRAL: "[Verdict: can't say either way, dear]",
        Verdict.OPPOSE: "[Verdict: I'm against it!]",
    },
}


def verdict_for(persona: Persona, score: int) -> Verdict:
    """favor at or above favor_at, neutral at or above neutral_at, otherwise oppose."""
    thresholds = PERSONA_THRESHOLDS[persona]
    if score >= thresholds.favor_at:
        return Verdict.FAVOR
    if score >= thresholds.neutral_at:
        return Verdict.NEUTRAL
    return Verdict.OPPOSE


class VerdictAggregator:

    def verdicts(self, scores: PersonaScores) -> Dict[Persona, Verdict]:
        return {persona: verdict_for(persona, scores.for_persona(persona)) for persona in Persona}

    def collective(self, verdicts: Dict[Persona, Verdict], legal_score: int) -> CollectiveResult:
        """
        Combine the three verdicts.

        Formula:
        Collective = Sum(favor=1.0, neutral=0.5, oppose=0)
        A legal score of LEGAL_OVERRIDE_SCORE or more overrides any result short of "decided".
        """
        total = sum(VERDICT_WEIGHTS[v] for v in verdicts.values())

        if total >= 2:
            label, css_class = COLLECTIVE_DECIDED, CollectiveClass.DECIDED
        elif total >= 1:
            label, css_class = COLLECTIVE_SPLIT, CollectiveClass.SPLIT
        else:
            label, css_class = COLLECTIVE_DECLINED, CollectiveClass.DECLINED

        override = legal_score >= LEGAL_OVERRIDE_SCORE and total < 2
        if override:
            label, css_class = COLLECTIVE_LEGAL_OVERRIDE, CollectiveClass.DECIDED
            logger.info(f"Legal override applied (legal score {legal_score}, collective {total})")

        return CollectiveResult(label=label, css_class=css_class, total=total, legal_override=override)

    def display_text(self, persona: Persona, verdict: Verdict, comment: str) -> str:
        return f"{VERDICT_PREFIXES[persona][verdict]} {comment or ''}"

    def displays(self, verdicts: Dict[Persona, Verdict], commentary: Commentary) -> Dict[Persona, str]:
        return {
            persona: self.display_text(persona, verdicts[persona], commentary.for_persona(persona))
            for persona in Persona
        }
