"""HTTP client for the OpenAI Chat Completions API.

Uses httpx with configurable timeouts and tenacity for retry with
exponential backoff on rate limiting, 5xx gateway errors and connection errors.
"""

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 502, 503, 504}


class OpenAIServiceUnavailable(Exception):
    """OpenAI is temporarily unavailable (retryable — 429, 502-504, connection error)."""


class OpenAIServiceError(Exception):
    """OpenAI returned a non-retryable error or an unusable completion."""


class OpenAIClient:
    """Chat Completions client with retry and backoff."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: int | None = None,
        connect_timeout: int | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
        retry_backoff: float | None = None,
    ):
        self._base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self.model = model or settings.OPENAI_MODEL
        self._retry_attempts = retry_attempts if retry_attempts is not None else settings.OPENAI_RETRY_ATTEMPTS
        self._retry_delay = retry_delay if retry_delay is not None else settings.OPENAI_RETRY_DELAY
        self._retry_backoff = retry_backoff if retry_backoff is not None else settings.OPENAI_RETRY_BACKOFF

        read_timeout = timeout if timeout is not None else settings.OPENAI_TIMEOUT_SECONDS
        conn_timeout = connect_timeout if connect_timeout is not None else settings.OPENAI_CONNECT_TIMEOUT

        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {api_key or settings.OPENAI_API_KEY}"},
            timeout=httpx.Timeout(
                connect=float(conn_timeout),
                read=float(read_timeout),
                write=10.0,
                pool=10.0,
            ),
        )

    def close(self):
        self._client.close()

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run a chat completion and return the assistant message text.

        Raises OpenAIServiceUnavailable (retryable) or OpenAIServiceError (non-retryable).
        """
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": settings.OPENAI_MAX_TOKENS,
            "temperature": settings.OPENAI_TEMPERATURE,
        }

        return self._complete_with_retry(payload)

    def _complete_with_retry(self, payload: dict) -> str:
        """Retry wrapper — configured dynamically based on settings."""

        @retry(
            retry=retry_if_exception_type(OpenAIServiceUnavailable),
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(
                multiplier=self._retry_delay,
                exp_base=self._retry_backoff,
                max=30,
            ),
            reraise=True,
            before_sleep=lambda state: logger.warning(
                "OpenAI unavailable, retrying in %.1fs (attempt %d/%d)",
                state.next_action.sleep,  # type: ignore[union-attr]
                state.attempt_number,
                self._retry_attempts,
            ),
        )
        def _do_complete() -> str:
            return self._send_completion(payload)

        return _do_complete()

    def _send_completion(self, payload: dict) -> str:
        """Send a single completion request."""
        try:
            resp = self._client.post("/chat/completions", json=payload)
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            logger.warning("OpenAI connection failed: %s", e)
            raise OpenAIServiceUnavailable(f"Cannot connect to OpenAI: {e}") from e
        except httpx.ReadTimeout as e:
            logger.warning("OpenAI read timeout: %s", e)
            raise OpenAIServiceUnavailable(f"OpenAI read timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.error("OpenAI HTTP error: %s", e)
            raise OpenAIServiceError(f"OpenAI HTTP error: {e}") from e

        if resp.status_code in RETRYABLE_STATUS_CODES:
            detail = _error_detail(resp)
            logger.warning("OpenAI returned %d: %s", resp.status_code, detail)
            raise OpenAIServiceUnavailable(detail)

        if resp.status_code != 200:
            detail = _error_detail(resp)
            logger.error("OpenAI error %d: %s", resp.status_code, detail)
            raise OpenAIServiceError(detail)

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise OpenAIServiceError(f"Malformed completion payload: {e}") from e

        if not isinstance(content, str):
            raise OpenAIServiceError("Completion has no text content")
        return content


def _error_detail(resp: httpx.Response) -> str:
    """Pull the error message out of an OpenAI error body."""
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return f"HTTP {resp.status_code}"
