"""
Risk Analysis Prompts

Prompts for the first two model calls: categorical risk levels and
contextual score adjustments.
"""

from prompts.common import JSON_ONLY_RULES

# =============================================================================
# RISK ANALYSIS
# =============================================================================

RISK_ANALYSIS_KEYS = ("legal_risk", "corporate_risk", "emotional_discomfort", "reason")


def build_risk_analysis_prompt(escaped_text: str) -> str:
    """Build the prompt asking for legal/corporate/emotional risk levels."""
    return f"""# Instructions
You are an expert who analyzes social media posts. Analyze the post below from three viewpoints (legal risk, corporate risk, and the emotional discomfort an ordinary reader would feel) and output the result as JSON.

# Constraints
{JSON_ONLY_RULES}
* The output must be a JSON object with exactly these keys: "legal_risk", "corporate_risk", "emotional_discomfort", "reason"
* Each risk value must be one of "high", "medium" or "low".
* Keep the reason concise, within 50 characters.

# Post
"{escaped_text}\""""


# =============================================================================
# CONTEXTUAL ADJUSTMENT
# =============================================================================

ADJUSTMENT_KEYS = ("legal_adjust", "corporate_adjust", "emotional_adjust")


def build_adjustment_prompt(escaped_text: str) -> str:
    """Build the prompt asking for -2..+2 adjustments keywords alone cannot capture."""
    return f"""# Instructions
You are an expert who evaluates how malicious social media posts are. Judge whether the post below contains elements that keywords alone cannot reveal: contextual malice, sarcasm, subtle insults, or on the contrary defense of someone or legitimate criticism.

# Post
"{escaped_text}"

# Task
From the viewpoint of each persona, rate the "adjustment" to add to its score as an integer from -2 to +2.
* Positive evaluation or legitimate criticism: negative points.
* Hidden sarcasm or subtle malice: positive points.
* No particular contextual element: 0.

# Constraints
{JSON_ONLY_RULES}
* The output must be a JSON object with exactly these keys: "legal_adjust", "corporate_adjust", "emotional_adjust"
* Each value must be an integer from -2 to 2."""
