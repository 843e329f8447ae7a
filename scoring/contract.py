"""
Input Contract
Defines what the disclosure check accepts before any model call is made.
"""

from typing import Any

from scoring.errors import InvalidInput

# 1. Allowed Inputs
# A single post body, plain text, at most this many characters.
MAX_TEXT_LENGTH = 1000


def validate_post_text(text: Any, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Return text unchanged if it is acceptable, else raise InvalidInput."""
    if text is None or not isinstance(text, str) or text.strip() == "":
        raise InvalidInput("No text to check.")
    if len(text) > max_length:
        raise InvalidInput(f"Text is too long (max {max_length} characters).")
    return text
