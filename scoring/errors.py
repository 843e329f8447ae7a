"""
Error taxonomy for the disclosure check.

InvalidInput is caller-caused. LLMError and its subclasses describe
failures of the upstream model call.
"""

from typing import Optional


class DisclosureCheckError(Exception):
    """Base class for all disclosure check errors."""


class InvalidInput(DisclosureCheckError, ValueError):
    """The submitted post text was rejected before any model call."""


class LLMError(DisclosureCheckError):
    """The model call did not produce a usable JSON object."""


class TransportError(LLMError):
    """Non-success status (or no response at all) from the provider."""

    def __init__(self, status_code: Optional[int], detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        code = status_code if status_code is not None else "n/a"
        super().__init__(f"Model API request failed (status: {code})")


class BlockedError(LLMError):
    """The provider answered without content, usually a safety block."""

    def __init__(self, block_reason: Optional[str] = None):
        self.block_reason = block_reason
        super().__init__(f"Model blocked the response: {block_reason or 'unknown reason'}")


class ParseError(LLMError):
    """The response text was not a JSON object."""

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        super().__init__("Failed to parse the model response as JSON")
