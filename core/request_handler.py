"""Request handler for a single disclosure check."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from config.settings import APIConfig, SETTINGS
from scoring.errors import BlockedError, InvalidInput, LLMError, ParseError, TransportError
from scoring.heuristics import load_keyword_rules
from scoring.llm_client import ChatClient
from scoring.pipeline import DisclosurePipeline
from scoring.scorer import DisclosureScorer

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]


# ------------------------------------------------------------------
# Construction
# ------------------------------------------------------------------
def build_chat_client(api_config: APIConfig, model: Optional[str] = None) -> ChatClient:
    return ChatClient(
        google_api_key=api_config.google_api_key,
        openai_api_key=api_config.openai_api_key,
        anthropic_api_key=api_config.anthropic_api_key,
        deepseek_api_key=api_config.deepseek_api_key,
        default_model=model or SETTINGS['model'],
    )


def build_pipeline(api_config: Optional[APIConfig] = None, model: Optional[str] = None) -> DisclosurePipeline:
    """Wire a pipeline from explicit config; env is only read when api_config is omitted."""
    api_config = api_config or APIConfig.from_env()
    client = build_chat_client(api_config, model=model)
    scorer = DisclosureScorer(load_keyword_rules(SETTINGS['keyword_rules_path']))
    return DisclosurePipeline(
        client,
        scorer=scorer,
        max_tokens=SETTINGS['max_output_tokens'],
        temperature=SETTINGS['temperature'],
        max_text_length=SETTINGS['max_text_length'],
    )


# ------------------------------------------------------------------
# Error mapping
# ------------------------------------------------------------------
def describe_upstream_error(error: LLMError) -> str:
    if isinstance(error, TransportError):
        code = error.status_code if error.status_code is not None else "n/a"
        return f"An error occurred while communicating with the AI (code: {code})."
    if isinstance(error, BlockedError):
        return f"The AI blocked the response: {error.block_reason or 'unknown reason'}"
    if isinstance(error, ParseError):
        return "Failed to parse the AI response."
    return "A fatal error occurred while communicating with the AI."


def _extract_text(body: Any) -> Any:
    if not isinstance(body, dict):
        return None
    if 'tweetText' in body:
        return body['tweetText']
    return body.get('text')


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------
def handle_disclosure_request(
    method: str,
    body: Any,
    pipeline: Optional[DisclosurePipeline] = None,
    api_config: Optional[APIConfig] = None,
) -> Response:
    """
    Handle one request and return (status_code, payload).

    Never raises: unexpected failures become a 500 payload.
    """
    try:
        if (method or '').upper() != 'POST':
            return 405, {'message': 'Method Not Allowed'}

        if pipeline is None:
            pipeline = build_pipeline(api_config)
        if not pipeline.client.is_configured(pipeline.model):
            logger.error("No API key configured for the selected model")
            return 500, {'error': 'The API key is not configured on the server.'}

        text = _extract_text(body)
        logger.info(f"Request received: {datetime.now().isoformat()}")
        logger.info(f"Text length: {len(text) if isinstance(text, str) else 0}")

        try:
            result = pipeline.run(text)
        except InvalidInput as e:
            return 400, {'error': str(e)}
        except LLMError as e:
            return 500, {'error': describe_upstream_error(e)}

        return 200, result.to_response()

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        payload = {'error': 'A server error occurred.'}
        if SETTINGS.get('app_env') == 'development':
            payload['details'] = str(e)
        return 500, payload
