# backend/src/dbtdoc/llm/client.py
"""Text-generation clients: LiteLLM for API keys, httpx for the email proxy."""

import json
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import httpx
from litellm import acompletion
from litellm.exceptions import (
    APIConnectionError,
    APIError,
    APIResponseValidationError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServiceUnavailableError,
    Timeout,
    UnprocessableEntityError,
)

from dbtdoc.constants import (
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    MAX_TOKENS,
    PROXY_URL,
    REQUEST_TIMEOUT_SECONDS,
)


class GenerationError(Exception):
    """Base exception for failed generation calls."""

    pass


class GenerationConnectionError(GenerationError):
    """Raised when the generation endpoint cannot be reached or times out."""

    pass


class GenerationAuthenticationError(GenerationError):
    """Raised when the endpoint rejects the credential."""

    pass


class GenerationRateLimitError(GenerationError):
    """Raised when rate limited by the endpoint."""

    pass


class GenerationResponseError(GenerationError):
    """Raised when a response cannot be deserialized into text."""

    pass


class TextGenerator(Protocol):
    """Anything that turns a prompt into generated text."""

    async def generate(self, prompt: str) -> str: ...


class QueryLog:
    """Appends one JSON line per generation call to a log file."""

    def __init__(self, path: Path | None, endpoint: str, model: str | None):
        self.path = path
        self.endpoint = endpoint
        self.model = model

    def write(
        self,
        prompt: str,
        response: str | None,
        duration_ms: int,
        error: str | None = None,
        error_details: dict | None = None,
    ) -> None:
        if not self.path:
            return

        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoint": self.endpoint,
            "model": self.model,
            "prompt": prompt,
            "response": response,
            "duration_ms": duration_ms,
            "error": error,
        }
        if error_details:
            entry["error_details"] = error_details

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError:
            # A broken query log must not fail the run
            pass


def _elapsed_ms(start_time: float) -> int:
    return int((time.perf_counter() - start_time) * 1000)


class LLMClient:
    """Generation through LiteLLM with a bearer API key."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        log_path: Path | None = None,
    ):
        """Initialize LLM client.

        Args:
            api_key: Provider API key, sent as a bearer token.
            model: LiteLLM model string.
            temperature: Sampling temperature for every call.
            max_tokens: Maximum response tokens for every call.
            timeout: Per-request timeout in seconds.
            log_path: Optional path to JSONL log file for query logging.
        """
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._query_log = QueryLog(log_path, endpoint="litellm", model=model)

    def _extract_error_details(self, e: Exception) -> dict | None:
        """Collect status code and provider info from a LiteLLM exception."""
        details: dict = {}

        if hasattr(e, "status_code"):
            details["status_code"] = e.status_code
        if hasattr(e, "llm_provider"):
            details["llm_provider"] = e.llm_provider
        if hasattr(e, "message"):
            details["message"] = str(e.message)

        return details if details else None

    async def generate(self, prompt: str) -> str:
        """Generate completion from prompt.

        Args:
            prompt: User prompt.

        Returns:
            Generated text response.

        Raises:
            GenerationError: On transport, provider, or response-shape failure.
        """
        kwargs = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "api_key": self.api_key,
            "timeout": self.timeout,
        }

        start_time = time.perf_counter()
        try:
            response = await acompletion(**kwargs)
            result = str(response.choices[0].message.content or "")
        except (AuthenticationError, PermissionDeniedError) as e:
            self._log_failure(prompt, start_time, e)
            raise GenerationAuthenticationError(f"Authentication failed: {e}") from e
        except RateLimitError as e:
            self._log_failure(prompt, start_time, e)
            raise GenerationRateLimitError(f"Rate limit exceeded: {e}") from e
        except (APIConnectionError, Timeout) as e:
            self._log_failure(prompt, start_time, e)
            raise GenerationConnectionError(f"Connection failed: {e}") from e
        except (
            APIError,
            APIResponseValidationError,
            BadRequestError,
            InternalServerError,
            NotFoundError,
            ServiceUnavailableError,
            UnprocessableEntityError,
        ) as e:
            self._log_failure(prompt, start_time, e)
            raise GenerationError(f"LLM API error: {e}") from e
        except (AttributeError, IndexError, TypeError) as e:
            self._log_failure(prompt, start_time, e)
            raise GenerationResponseError(f"Unexpected completion shape: {e}") from e

        self._query_log.write(prompt, result, _elapsed_ms(start_time))
        return result

    def _log_failure(self, prompt: str, start_time: float, e: Exception) -> None:
        self._query_log.write(
            prompt,
            None,
            _elapsed_ms(start_time),
            error=str(e),
            error_details=self._extract_error_details(e),
        )


class ProxyClient:
    """Generation through the free-tier proxy, identified by email."""

    def __init__(
        self,
        email: str,
        url: str = PROXY_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        log_path: Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the proxy client.

        Args:
            email: Address sent with each request.
            url: Proxy endpoint.
            timeout: Per-request timeout in seconds.
            log_path: Optional path to JSONL log file for query logging.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.email = email
        self.url = url
        self.timeout = timeout
        self.transport = transport
        self._query_log = QueryLog(log_path, endpoint=url, model=None)

    async def generate(self, prompt: str) -> str:
        """Post the prompt to the proxy and return the first choice's text.

        Raises:
            GenerationError: On transport, HTTP status, or response-shape failure.
        """
        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json={"prompt": prompt, "email": self.email})
                response.raise_for_status()
            result = str(response.json()["choices"][0]["text"])
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self._query_log.write(
                prompt,
                None,
                _elapsed_ms(start_time),
                error=str(e),
                error_details={"status_code": status},
            )
            if status in (401, 403):
                raise GenerationAuthenticationError(f"Authentication failed: {e}") from e
            if status == 429:
                raise GenerationRateLimitError(f"Rate limit exceeded: {e}") from e
            raise GenerationError(f"Proxy error: {e}") from e
        except httpx.TransportError as e:
            self._query_log.write(prompt, None, _elapsed_ms(start_time), error=str(e))
            raise GenerationConnectionError(f"Connection failed: {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            self._query_log.write(prompt, None, _elapsed_ms(start_time), error=str(e))
            raise GenerationResponseError(f"Unexpected proxy response: {e}") from e

        self._query_log.write(prompt, result, _elapsed_ms(start_time))
        return result
