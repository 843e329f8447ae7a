"""
Disclosure check pipeline.
Runs the three dependent model calls and the deterministic scoring between them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

from prompts import (
    build_adjustment_prompt,
    build_commentary_prompt,
    build_risk_analysis_prompt,
    escape_for_prompt,
)
from scoring.aggregator import VerdictAggregator
from scoring.contract import MAX_TEXT_LENGTH, validate_post_text
from scoring.errors import LLMError
from scoring.llm_client import ChatClient
from scoring.scorer import DisclosureScorer
from scoring.types import (
    MISSING_REASON,
    Adjustment,
    Commentary,
    DisclosureResult,
    Persona,
    RiskAssessment,
    Verdict,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of one stage: a value, or the LLMError that stopped it."""
    value: Optional[T] = None
    error: Optional[LLMError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def or_else(self, fallback: Callable[[], T]) -> T:
        return self.value if self.ok else fallback()


def _model_stage(stage: str, call: Callable[[], T]) -> StageResult[T]:
    try:
        return StageResult(value=call())
    except LLMError as e:
        logger.error(f"Stage '{stage}' failed: {e}")
        return StageResult(error=e)


class DisclosurePipeline:
    """
    Orchestrates one disclosure check.

    Flow:
        1. Risk analysis (model call, fatal on failure)
        2. Adjustment suggestion (model call, zero adjustments on failure)
        3. Scoring (deterministic)
        4. Verdicts (deterministic)
        5. Commentary (model call, fallback text on failure)
        6. Assembly
    """

    def __init__(
        self,
        client: ChatClient,
        scorer: Optional[DisclosureScorer] = None,
        aggregator: Optional[VerdictAggregator] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        max_text_length: int = MAX_TEXT_LENGTH,
    ):
        self.client = client
        self.scorer = scorer or DisclosureScorer()
        self.aggregator = aggregator or VerdictAggregator()
        self.model = model
        self.max_text_length = max_text_length
        self._call_kwargs = {}
        if max_tokens is not None:
            self._call_kwargs['max_tokens'] = max_tokens
        if temperature is not None:
            self._call_kwargs['temperature'] = temperature

    def _generate(self, prompt: str):
        return self.client.generate_json(prompt, model=self.model, **self._call_kwargs)

    # -- stages ---------------------------------------------------------------

    def analyze_risk(self, escaped_text: str) -> StageResult[RiskAssessment]:
        prompt = build_risk_analysis_prompt(escaped_text)
        return _model_stage("risk_analysis", lambda: RiskAssessment.from_json(self._generate(prompt)))

    def suggest_adjustments(self, escaped_text: str) -> StageResult[Adjustment]:
        prompt = build_adjustment_prompt(escaped_text)
        return _model_stage("adjustment", lambda: Adjustment.from_json(self._generate(prompt)))

    def generate_commentary(
        self,
        escaped_text: str,
        assessment: RiskAssessment,
        verdicts: Dict[Persona, Verdict],
    ) -> StageResult[Commentary]:
        prompt = build_commentary_prompt(escaped_text, assessment, verdicts)
        return _model_stage("commentary", lambda: Commentary.from_json(self._generate(prompt)))

    # -- orchestration --------------------------------------------------------

    def run(self, text: str) -> DisclosureResult:
        """
        Check one post.

        Raises:
            InvalidInput: text rejected before any model call
            LLMError: the risk analysis call failed
        """
        validate_post_text(text, self.max_text_length)
        escaped = escape_for_prompt(text)
        degraded = []

        risk = self.analyze_risk(escaped)
        if not risk.ok:
            raise risk.error
        assessment = risk.value

        adjustment_result = self.suggest_adjustments(escaped)
        if not adjustment_result.ok:
            logger.warning("Score adjustment failed, continuing with zero adjustments")
            degraded.append("adjustment")
        adjustment = adjustment_result.or_else(Adjustment.zero)

        scores = self.scorer.score(assessment, adjustment, text)
        verdicts = self.aggregator.verdicts(scores)

        commentary_result = self.generate_commentary(escaped, assessment, verdicts)
        if not commentary_result.ok:
            logger.warning("Commentary generation failed, using fallback comments")
            degraded.append("commentary")
        commentary = commentary_result.or_else(Commentary.fallback)

        collective = self.aggregator.collective(verdicts, scores.legal)
        logger.info(f"Collective result: {collective.label} ({collective.total})")

        return DisclosureResult(
            collective=collective,
            displays=self.aggregator.displays(verdicts, commentary),
            ai_reason=assessment.reason or MISSING_REASON,
            scores=scores,
            verdicts=verdicts,
            assessment=assessment,
            adjustment=adjustment,
            metadata={
                'model': self.model or self.client.default_model,
                'degraded_stages': degraded,
            },
        )
