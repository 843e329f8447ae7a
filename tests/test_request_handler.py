import pytest
from unittest.mock import MagicMock, patch

from config.settings import APIConfig
from core.request_handler import (
    build_chat_client,
    build_pipeline,
    describe_upstream_error,
    handle_disclosure_request,
)
from scoring.errors import BlockedError, LLMError, ParseError, TransportError
from scoring.llm_client import ChatClient
from scoring.pipeline import DisclosurePipeline

RISK = {"legal_risk": "low", "corporate_risk": "low", "emotional_discomfort": "low", "reason": "Death wish"}
ADJUST = {"legal_adjust": 0, "corporate_adjust": 0, "emotional_adjust": 0}
COMMENTS = {"legal_comment": "a", "corporate_comment": "b", "emotional_comment": "c"}


def mock_pipeline(*responses):
    client = MagicMock()
    client.is_configured.return_value = True
    client.generate_json.side_effect = list(responses)
    return DisclosurePipeline(client)


class TestHandleDisclosureRequest:

    @pytest.mark.parametrize("method", ["GET", "PUT", "", None])
    def test_non_post_is_rejected(self, method):
        status, payload = handle_disclosure_request(method, {}, pipeline=mock_pipeline())
        assert status == 405
        assert payload == {'message': 'Method Not Allowed'}

    def test_missing_api_key(self):
        pipeline = DisclosurePipeline(ChatClient(google_api_key=None))
        status, payload = handle_disclosure_request('POST', {'tweetText': 'hi'}, pipeline=pipeline)
        assert status == 500
        assert payload == {'error': 'The API key is not configured on the server.'}

    @pytest.mark.parametrize("body", [{}, {'tweetText': ''}, {'tweetText': '   '}, {'tweetText': 5}, None, "raw"])
    def test_invalid_text(self, body):
        pipeline = mock_pipeline()
        status, payload = handle_disclosure_request('POST', body, pipeline=pipeline)
        assert status == 400
        assert payload == {'error': 'No text to check.'}
        pipeline.client.generate_json.assert_not_called()

    def test_too_long(self):
        status, payload = handle_disclosure_request('POST', {'tweetText': 'x' * 1001}, pipeline=mock_pipeline())
        assert status == 400
        assert "1000" in payload['error']

    def test_success(self):
        pipeline = mock_pipeline(RISK, ADJUST, COMMENTS)
        status, payload = handle_disclosure_request('post', {'tweetText': 'Just go die already'}, pipeline=pipeline)

        assert status == 200
        assert set(payload) == {'collective', 'collective_class', 'legal', 'corporate', 'emotional', 'ai_reason'}
        assert payload['collective_class'] == 'collective-decided'
        assert payload['ai_reason'] == 'Death wish'

    def test_text_alias(self):
        pipeline = mock_pipeline(RISK, ADJUST, COMMENTS)
        status, _ = handle_disclosure_request('POST', {'text': 'Just go die already'}, pipeline=pipeline)
        assert status == 200

    def test_risk_failure_maps_to_500(self):
        pipeline = mock_pipeline(TransportError(429))
        status, payload = handle_disclosure_request('POST', {'tweetText': 'hello'}, pipeline=pipeline)
        assert status == 500
        assert payload == {'error': 'An error occurred while communicating with the AI (code: 429).'}

    def test_degraded_stages_still_succeed(self):
        pipeline = mock_pipeline(RISK, ParseError("x"), BlockedError("SAFETY"))
        status, payload = handle_disclosure_request('POST', {'tweetText': 'hello'}, pipeline=pipeline)
        assert status == 200
        assert "technical problem" in payload['legal']

    def test_unexpected_error_hides_details_in_production(self):
        pipeline = MagicMock()
        pipeline.run.side_effect = RuntimeError("boom")
        with patch.dict('core.request_handler.SETTINGS', {'app_env': 'production'}):
            status, payload = handle_disclosure_request('POST', {'tweetText': 'hello'}, pipeline=pipeline)
        assert status == 500
        assert payload == {'error': 'A server error occurred.'}

    def test_unexpected_error_details_in_development(self):
        pipeline = MagicMock()
        pipeline.run.side_effect = RuntimeError("boom")
        with patch.dict('core.request_handler.SETTINGS', {'app_env': 'development'}):
            status, payload = handle_disclosure_request('POST', {'tweetText': 'hello'}, pipeline=pipeline)
        assert status == 500
        assert payload['details'] == 'boom'


class TestDescribeUpstreamError:

    def test_messages(self):
        assert describe_upstream_error(TransportError(None)) == \
            "An error occurred while communicating with the AI (code: n/a)."
        assert describe_upstream_error(BlockedError("SAFETY")) == "The AI blocked the response: SAFETY"
        assert describe_upstream_error(BlockedError()) == "The AI blocked the response: unknown reason"
        assert describe_upstream_error(ParseError("x")) == "Failed to parse the AI response."
        assert describe_upstream_error(LLMError("?")) == "A fatal error occurred while communicating with the AI."


class TestConstruction:

    def test_client_gets_injected_keys(self):
        client = build_chat_client(APIConfig(google_api_key="g", openai_api_key="o"), model="gpt-4o")
        assert client.google_api_key == "g"
        assert client.openai_api_key == "o"
        assert client.default_model == "gpt-4o"
        assert client.is_configured() is True

    def test_pipeline_uses_shipped_rules(self):
        pipeline = build_pipeline(APIConfig(google_api_key="g"))
        assert [r.name for r in pipeline.scorer.rules][0] == "violent_intent"
        assert pipeline.client.is_configured() is True


class TestAPIConfig:

    def test_gemini_key_alias(self, monkeypatch):
        monkeypatch.delenv('GOOGLE_API_KEY', raising=False)
        monkeypatch.setenv('GEMINI_API_KEY', 'gem-key')
        assert APIConfig.from_env().google_api_key == 'gem-key'

    def test_blank_values_are_missing(self, monkeypatch):
        monkeypatch.setenv('GOOGLE_API_KEY', '  ')
        monkeypatch.delenv('GEMINI_API_KEY', raising=False)
        assert APIConfig.from_env().google_api_key is None
