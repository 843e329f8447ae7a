"""
Persona scorer for the Disclosure Check tool
Turns categorical risk levels, keyword heuristics and AI adjustments
into one 0-10 score per persona.
"""

from typing import Dict, List, Optional
import logging

from scoring.heuristics import KeywordRule, load_keyword_rules
from scoring.types import Adjustment, Persona, PersonaScores, RiskAssessment, RiskLevel

logger = logging.getLogger(__name__)

RISK_TO_SCORE = {
    RiskLevel.HIGH: 4,
    RiskLevel.MEDIUM: 2,
    RiskLevel.LOW: 1,
}
DEFAULT_BASE_SCORE = 1

MIN_SCORE = 0
MAX_SCORE = 10


def clamp(value: int, lo: int = MIN_SCORE, hi: int = MAX_SCORE) -> int:
    return max(lo, min(hi, value))


def base_score(level: Optional[RiskLevel]) -> int:
    """high=4, medium=2, low=1; unrecognized levels count as low."""
    return RISK_TO_SCORE.get(level, DEFAULT_BASE_SCORE)


class DisclosureScorer:
    """
    Scores one post for each persona.
    Deterministic: the same assessment, adjustment and text always give the same scores.
    """

    def __init__(self, rules: Optional[List[KeywordRule]] = None):
        """
        Args:
            rules: Ordered heuristic rules; defaults to the built-in table
        """
        self.rules = rules if rules is not None else load_keyword_rules()

    def primary_scores(self, assessment: RiskAssessment, raw_text: str) -> Dict[Persona, int]:
        """Base scores plus heuristic deltas, before AI adjustment and clamping."""
        scores, _ = self._primary_scores(assessment, raw_text)
        return scores

    def _primary_scores(self, assessment: RiskAssessment, raw_text: str):
        scores = {
            Persona.LEGAL: base_score(assessment.legal_risk),
            Persona.CORPORATE: base_score(assessment.corporate_risk),
            Persona.EMOTIONAL: base_score(assessment.emotional_discomfort),
        }
        text = raw_text.lower()
        fired = []
        for rule in self.rules:
            if rule.matches(text, assessment):
                rule.apply(scores)
                fired.append(rule.name)
                logger.debug(f"Heuristic '{rule.name}' fired: {scores}")
        return scores, fired

    def score(self, assessment: RiskAssessment, adjustment: Adjustment, raw_text: str) -> PersonaScores:
        """Final clamped score per persona."""
        primary, fired = self._primary_scores(assessment, raw_text)
        final = {
            persona: clamp(primary[persona] + adjustment.for_persona(persona))
            for persona in Persona
        }
        logger.info(
            f"Persona scores: legal={final[Persona.LEGAL]} "
            f"corporate={final[Persona.CORPORATE]} emotional={final[Persona.EMOTIONAL]} "
            f"(rules: {fired or 'none'})"
        )
        return PersonaScores(
            legal=final[Persona.LEGAL],
            corporate=final[Persona.CORPORATE],
            emotional=final[Persona.EMOTIONAL],
            fired_rules=fired,
        )
