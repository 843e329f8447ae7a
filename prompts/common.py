"""
Shared prompt helpers.
"""

# =============================================================================
# ESCAPING
# =============================================================================

# Backslash must go first so later escapes are not doubled
_ESCAPES = [
    ('\\', '\\\\'),
    ('"', '\\"'),
    ('\n', '\\n'),
    ('\r', '\\r'),
    ('\t', '\\t'),
]


def escape_for_prompt(text: str) -> str:
    """Escape post text so it can sit inside a double-quoted prompt block."""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


# =============================================================================
# OUTPUT RULES
# =============================================================================

JSON_ONLY_RULES = """* Your answer must contain only a valid JSON object.
* Do not add any explanation, greeting or other text before or after the JSON object."""
