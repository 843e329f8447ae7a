"""
Multi-provider LLM client for JSON-shaped model calls.

Supports: Google Gemini (default), OpenAI, Anthropic Claude, DeepSeek.
API keys are passed in by the caller; this module never reads the environment.
"""

import json
import logging
import re
from typing import Any, Dict, Optional
from enum import Enum

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import GenerationConfig
from openai import OpenAI
from openai import APIConnectionError as OpenAIConnectionError
from openai import APIStatusError as OpenAIStatusError
from anthropic import Anthropic
from anthropic import APIConnectionError as AnthropicConnectionError
from anthropic import APIStatusError as AnthropicStatusError

from scoring.errors import BlockedError, ParseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gemini-2.5-flash-lite'
DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 1024

JSON_SYSTEM_PROMPT = "Respond with a single valid JSON object and nothing else."


class LLMProvider(Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    DEEPSEEK = "deepseek"


class ChatClient:
    """Sends one prompt, returns one parsed JSON object."""

    PROVIDER_PATTERNS = {
        LLMProvider.ANTHROPIC: ['claude-'],
        LLMProvider.GOOGLE: ['gemini-'],
        LLMProvider.DEEPSEEK: ['deepseek-'],
        LLMProvider.OPENAI: ['gpt-', 'o1-', 'text-'],
    }

    def __init__(
        self,
        google_api_key: Optional[str] = None,
        default_model: str = DEFAULT_MODEL,
        openai_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
        deepseek_api_key: Optional[str] = None
    ):
        self.default_model = default_model
        self.google_api_key = google_api_key
        self.openai_api_key = openai_api_key
        self.anthropic_api_key = anthropic_api_key
        self.deepseek_api_key = deepseek_api_key

        self._openai_client = None
        self._anthropic_client = None
        self._deepseek_client = None
        self._google_initialized = False

    def _detect_provider(self, model: str) -> LLMProvider:
        for provider, patterns in self.PROVIDER_PATTERNS.items():
            if any(model.startswith(p) for p in patterns):
                return provider
        return LLMProvider.GOOGLE

    def _api_key_for(self, provider: LLMProvider) -> Optional[str]:
        return {
            LLMProvider.GOOGLE: self.google_api_key,
            LLMProvider.OPENAI: self.openai_api_key,
            LLMProvider.ANTHROPIC: self.anthropic_api_key,
            LLMProvider.DEEPSEEK: self.deepseek_api_key,
        }[provider]

    def is_configured(self, model: Optional[str] = None) -> bool:
        """True if an API key exists for the provider serving model."""
        return bool(self._api_key_for(self._detect_provider(model or self.default_model)))

    @property
    def openai_client(self):
        if self._openai_client is None:
            if not self.openai_api_key:
                raise ValueError("OpenAI API key not configured")
            self._openai_client = OpenAI(api_key=self.openai_api_key, max_retries=0)
        return self._openai_client

    @property
    def anthropic_client(self):
        if self._anthropic_client is None:
            if not self.anthropic_api_key:
                raise ValueError("Anthropic API key not configured")
            self._anthropic_client = Anthropic(api_key=self.anthropic_api_key, max_retries=0)
        return self._anthropic_client

    @property
    def deepseek_client(self):
        if self._deepseek_client is None:
            if not self.deepseek_api_key:
                raise ValueError("DeepSeek API key not configured")
            self._deepseek_client = OpenAI(
                api_key=self.deepseek_api_key, base_url="https://api.deepseek.com", max_retries=0
            )
        return self._deepseek_client

    def _init_google(self):
        if not self._google_initialized:
            if not self.google_api_key:
                raise ValueError("Google API key not configured")
            genai.configure(api_key=self.google_api_key)
            self._google_initialized = True

    def generate_json(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> Dict[str, Any]:
        """
        Send prompt with a strict-JSON response hint and parse the reply.

        Raises:
            TransportError: provider returned a non-success status or was unreachable
            BlockedError: provider returned no content
            ParseError: content was not a JSON object
        """
        model = model or self.default_model
        provider = self._detect_provider(model)

        dispatch = {
            LLMProvider.OPENAI: self._complete_openai,
            LLMProvider.ANTHROPIC: self._complete_anthropic,
            LLMProvider.GOOGLE: self._complete_google,
            LLMProvider.DEEPSEEK: self._complete_deepseek,
        }

        logger.info(f"Calling {provider.value}/{model} (prompt {len(prompt)} chars)")
        text = dispatch[provider](prompt, model, max_tokens, temperature)
        return self._parse_json_response(text)

    def _complete_google(self, prompt, model, max_tokens, temperature) -> str:
        self._init_google()
        gemini_model = genai.GenerativeModel(model)
        config = GenerationConfig(
            response_mime_type="application/json",
            max_output_tokens=max_tokens,
            temperature=temperature,
        )
        try:
            response = gemini_model.generate_content(
                prompt, generation_config=config, request_options={"retry": None}
            )
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini API error ({model}): {e}")
            raise TransportError(getattr(e, 'code', None), str(e)) from e

        usage = getattr(response, 'usage_metadata', None)
        if usage is not None:
            logger.debug(
                f"Gemini usage: prompt={getattr(usage, 'prompt_token_count', 0)} "
                f"completion={getattr(usage, 'candidates_token_count', 0)}"
            )

        candidates = getattr(response, 'candidates', None) or []
        text = ""
        if candidates:
            content = getattr(candidates[0], 'content', None)
            parts = getattr(content, 'parts', None) or []
            text = "".join(getattr(p, 'text', '') or '' for p in parts)
        if not text:
            feedback = getattr(response, 'prompt_feedback', None)
            reason = _enum_name(getattr(feedback, 'block_reason', None))
            if reason is None and candidates:
                reason = _enum_name(getattr(candidates[0], 'finish_reason', None))
            raise BlockedError(reason)
        return text

    def _complete_openai(self, prompt, model, max_tokens, temperature) -> str:
        return self._complete_openai_compatible(self.openai_client, prompt, model, max_tokens, temperature)

    def _complete_deepseek(self, prompt, model, max_tokens, temperature) -> str:
        return self._complete_openai_compatible(self.deepseek_client, prompt, model, max_tokens, temperature)

    def _complete_openai_compatible(self, client, prompt, model, max_tokens, temperature) -> str:
        try:
            response = client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIStatusError as e:
            logger.error(f"Chat API error ({model}): {e}")
            raise TransportError(e.status_code, str(e)) from e
        except OpenAIConnectionError as e:
            logger.error(f"Chat API unreachable ({model}): {e}")
            raise TransportError(None, str(e)) from e

        choices = getattr(response, 'choices', None) or []
        if not choices or not choices[0].message.content:
            raise BlockedError(getattr(choices[0], 'finish_reason', None) if choices else None)
        return choices[0].message.content

    def _complete_anthropic(self, prompt, model, max_tokens, temperature) -> str:
        try:
            response = self.anthropic_client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=JSON_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except AnthropicStatusError as e:
            logger.error(f"Anthropic API error ({model}): {e}")
            raise TransportError(e.status_code, str(e)) from e
        except AnthropicConnectionError as e:
            logger.error(f"Anthropic API unreachable ({model}): {e}")
            raise TransportError(None, str(e)) from e

        text = "".join(
            block.text for block in (response.content or []) if getattr(block, 'type', None) == 'text'
        )
        if not text:
            raise BlockedError(getattr(response, 'stop_reason', None))
        return text

    def _parse_json_response(self, response_text: str) -> Dict[str, Any]:
        """Parse a JSON object, tolerating a surrounding ```json fence."""
        cleaned = response_text.strip()
        match = re.match(r'^```(?:json)?\s*(.*?)\s*```$', cleaned, re.DOTALL)
        if match:
            cleaned = match.group(1)
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"JSON parse error: {e}. Raw text: {response_text[:200]}")
            raise ParseError(response_text) from e
        if not isinstance(parsed, dict):
            logger.error(f"Expected a JSON object, got {type(parsed).__name__}")
            raise ParseError(response_text)
        return parsed


def _enum_name(value: Any) -> Optional[str]:
    """Name of a provider enum value; None for missing or *_UNSPECIFIED."""
    if value is None or value == 0:
        return None
    name = getattr(value, 'name', None) or str(value)
    if name.endswith('UNSPECIFIED'):
        return None
    return name
