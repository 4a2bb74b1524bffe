"""Tests for OpenAI client retry/timeout behavior."""

import sys
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from openai_client import OpenAIClient, OpenAIServiceError, OpenAIServiceUnavailable


def _completion(text: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": text}}]})


@pytest.fixture
def openai_client():
    """Create an OpenAI client with fast retry settings for testing."""
    client = OpenAIClient(
        api_key="sk-test",
        base_url="http://fake-openai/v1",
        model="gpt-test",
        timeout=5,
        connect_timeout=2,
        retry_attempts=3,
        retry_delay=0.01,  # Fast retries for tests
        retry_backoff=1.0,  # No backoff for tests
    )
    yield client
    client.close()


class TestComplete:
    def test_successful_completion(self, openai_client: OpenAIClient):
        with patch.object(openai_client._client, "post", return_value=_completion('{"goal": "x"}')) as post:
            text = openai_client.complete("system", "user prompt")

        assert text == '{"goal": "x"}'
        payload = post.call_args.kwargs["json"]
        assert post.call_args.args[0] == "/chat/completions"
        assert payload["model"] == "gpt-test"
        assert payload["messages"][0] == {"role": "system", "content": "system"}
        assert payload["messages"][1] == {"role": "user", "content": "user prompt"}

    def test_bearer_auth_header(self, openai_client: OpenAIClient):
        assert openai_client._client.headers["Authorization"] == "Bearer sk-test"

    def test_429_triggers_retry_then_succeeds(self, openai_client: OpenAIClient):
        """Rate limiting should trigger retry; succeed on second attempt."""
        response_429 = httpx.Response(429, json={"error": {"message": "Rate limit reached"}})

        call_count = 0

        def mock_post(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                return response_429
            return _completion("ok")

        with patch.object(openai_client._client, "post", side_effect=mock_post):
            assert openai_client.complete("s", "u") == "ok"
            assert call_count == 2

    def test_503_exhausts_retries(self, openai_client: OpenAIClient):
        """All 503s should exhaust retries and raise OpenAIServiceUnavailable."""
        response_503 = httpx.Response(503, json={"error": {"message": "Overloaded"}})

        with patch.object(openai_client._client, "post", return_value=response_503) as post:
            with pytest.raises(OpenAIServiceUnavailable, match="Overloaded"):
                openai_client.complete("s", "u")
            assert post.call_count == 3

    def test_401_raises_error_no_retry(self, openai_client: OpenAIClient):
        """Auth failures are not retried."""
        response_401 = httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

        with patch.object(openai_client._client, "post", return_value=response_401) as post:
            with pytest.raises(OpenAIServiceError, match="Incorrect API key"):
                openai_client.complete("s", "u")
            assert post.call_count == 1

    def test_500_without_json_body(self, openai_client: OpenAIClient):
        response_500 = httpx.Response(500, text="Internal Server Error")

        with patch.object(openai_client._client, "post", return_value=response_500):
            with pytest.raises(OpenAIServiceError, match="HTTP 500"):
                openai_client.complete("s", "u")

    def test_malformed_payload_raises_error(self, openai_client: OpenAIClient):
        response = httpx.Response(200, json={"choices": []})

        with patch.object(openai_client._client, "post", return_value=response):
            with pytest.raises(OpenAIServiceError, match="Malformed"):
                openai_client.complete("s", "u")

    def test_null_content_raises_error(self, openai_client: OpenAIClient):
        response = httpx.Response(200, json={"choices": [{"message": {"content": None}}]})

        with patch.object(openai_client._client, "post", return_value=response):
            with pytest.raises(OpenAIServiceError):
                openai_client.complete("s", "u")

    def test_connection_error_triggers_retry(self, openai_client: OpenAIClient):
        """Connection errors should trigger retry."""
        call_count = 0

        def mock_post(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count <= 2:
                raise httpx.ConnectError("Connection refused")
            return _completion("ok")

        with patch.object(openai_client._client, "post", side_effect=mock_post):
            assert openai_client.complete("s", "u") == "ok"
            assert call_count == 3

    def test_read_timeout_triggers_retry(self, openai_client: OpenAIClient):
        """Read timeout should trigger retry."""
        call_count = 0

        def mock_post(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise httpx.ReadTimeout("Read timed out")
            return _completion("ok")

        with patch.object(openai_client._client, "post", side_effect=mock_post):
            assert openai_client.complete("s", "u") == "ok"
            assert call_count == 2

    def test_other_transport_error_not_retried(self, openai_client: OpenAIClient):
        with patch.object(
            openai_client._client, "post", side_effect=httpx.RemoteProtocolError("bad frame")
        ) as post:
            with pytest.raises(OpenAIServiceError):
                openai_client.complete("s", "u")
            assert post.call_count == 1
