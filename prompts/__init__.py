"""
Disclosure Check Prompts Module

Centralized prompt templates for the three model calls.
"""

from prompts.common import escape_for_prompt

from prompts.risk_analysis import (
    RISK_ANALYSIS_KEYS,
    ADJUSTMENT_KEYS,
    build_risk_analysis_prompt,
    build_adjustment_prompt,
)

from prompts.commentary import (
    COMMENTARY_KEYS,
    PERSONA_NAMES,
    VERDICT_PHRASES,
    build_commentary_prompt,
)

__all__ = [
    'escape_for_prompt',
    # Risk analysis
    'RISK_ANALYSIS_KEYS',
    'ADJUSTMENT_KEYS',
    'build_risk_analysis_prompt',
    'build_adjustment_prompt',
    # Commentary
    'COMMENTARY_KEYS',
    'PERSONA_NAMES',
    'VERDICT_PHRASES',
    'build_commentary_prompt',
]
