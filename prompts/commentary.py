"""
Commentary Prompts

Prompt for the third model call: one comment per persona, written to
support a verdict that has already been decided.
"""

from typing import Dict

from prompts.common import JSON_ONLY_RULES
from scoring.types import Persona, RiskAssessment, RiskLevel, Verdict

# =============================================================================
# PERSONAS
# =============================================================================

PERSONA_NAMES = {
    Persona.LEGAL: "Internet-savvy lawyer",
    Persona.CORPORATE: "Listed-company legal department",
    Persona.EMOTIONAL: "Sharp-tongued commentator",
}

PERSONA_DESCRIPTIONS = {
    Persona.LEGAL: (
        "Analyzes the chance of a disclosure request calmly, using legal terminology. "
        "When in favor, cite the legal grounds; when neutral, name the points at issue; "
        "when against, state the reasons forcefully."
    ),
    Persona.CORPORATE: (
        "Puts corporate risk management first and judges calmly and cautiously."
    ),
    Persona.EMOTIONAL: (
        "Foul-mouthed but with a strong sense of social justice. Judges by whether the post "
        "is acceptable as a human being, and believes malicious posts should be pursued."
    ),
}

VERDICT_PHRASES = {
    Verdict.FAVOR: "in favor of disclosure",
    Verdict.NEUTRAL: "neutral",
    Verdict.OPPOSE: "against disclosure",
}

COMMENTARY_KEYS = ("legal_comment", "corporate_comment", "emotional_comment")


def _level(level: RiskLevel) -> str:
    return level.value if level is not None else "unknown"


# =============================================================================
# PROMPT BUILDER
# =============================================================================

def build_commentary_prompt(
    escaped_text: str,
    assessment: RiskAssessment,
    verdicts: Dict[Persona, Verdict],
) -> str:
    """Build the persona commentary prompt around the decided verdicts."""
    persona_lines = "\n".join(
        f"* **{PERSONA_NAMES[p]}**: {PERSONA_DESCRIPTIONS[p]}" for p in Persona
    )
    verdict_lines = "\n".join(
        f"* {PERSONA_NAMES[p]}: {VERDICT_PHRASES[verdicts[p]]} (in favor / neutral / against)"
        for p in Persona
    )
    summary = (
        f"{assessment.reason or ''} (legal risk: {_level(assessment.legal_risk)}, "
        f"corporate risk: {_level(assessment.corporate_risk)}, "
        f"emotional discomfort: {_level(assessment.emotional_discomfort)})"
    )

    return f"""# Instructions
You simulate the thinking of three experts who analyze social media posts (an internet-savvy lawyer, the legal department of a listed company, and a sharp-tongued commentator).
Generate a comment for each of the three personas based on the information below.

# Personas
{persona_lines}

# Post
"{escaped_text}"

# Summary of the prior analysis
{summary}

# Final decision of each persona (conclusion)
{verdict_lines}

# Task
Generate the persuasive "body" of each comment so that it gives reasons supporting the final decision above.
For "neutral", explain why the decision is difficult and touch on both sides.
Never generate a comment that contradicts the conclusion.

# Constraints
{JSON_ONLY_RULES}
* Each comment must be within 100 characters and express the persona's character as much as possible.
* Write the comments in the same language as the post.
* The output must be a JSON object with exactly these keys: "legal_comment", "corporate_comment", "emotional_comment\""""
