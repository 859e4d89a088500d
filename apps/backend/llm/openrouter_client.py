from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

import httpx

from apps.backend.config import CompletionSettings

from .errors import ErrorKind, ServiceError
from .schemas import ChatMessage, Completion

_log = logging.getLogger(__name__)

FALLBACK_REPLY = "I'm sorry, I couldn't generate a response."


def _extract_reply(data: Any) -> Optional[str]:
    """Return choices[0].message.content, or None when absent or empty."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str) or not content:
        return None
    return content


class OpenRouterClient:
    """
    Chat completion client for an OpenRouter-compatible endpoint.

    Each call is a single POST bounded by a deadline. Failures are raised as
    ServiceError; nothing is retried here.
    """

    def __init__(
        self,
        settings: CompletionSettings,
        organization_name: str = "Our Company",
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._settings = settings
        self._organization_name = organization_name
        # An injected client is owned by the caller and never closed here.
        self._http_client = http_client

    @property
    def model(self) -> str:
        return self._settings.model

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._settings.referer,
            "X-Title": f"{self._organization_name} Support Chat",
        }

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout_ms: Optional[int] = None,
    ) -> Completion:
        """Send the conversation upstream and return the first choice's text."""
        if not self._settings.api_key:
            raise ServiceError(ErrorKind.CONFIG_MISSING, "OPENROUTER_API_KEY not configured")

        payload = {
            "model": self._settings.model,
            "messages": [m.model_dump() for m in messages],
            "max_tokens": max_tokens if max_tokens is not None else self._settings.max_tokens,
            "temperature": temperature if temperature is not None else self._settings.temperature,
        }
        timeout_s = (timeout_ms if timeout_ms is not None else self._settings.timeout_ms) / 1000.0

        _log.info("Sending request to model: %s", self._settings.model)
        try:
            # wait_for cancels the in-flight request when the deadline passes.
            data = await asyncio.wait_for(self._post(payload, timeout_s), timeout=timeout_s)
        except ServiceError:
            raise
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            _log.warning("Completion request timed out after %.1fs", timeout_s)
            raise ServiceError(ErrorKind.TIMEOUT, "Request timeout") from exc
        except Exception as exc:
            _log.exception("Unexpected error calling completion service")
            raise ServiceError(ErrorKind.UNKNOWN, str(exc) or type(exc).__name__) from exc

        reply = _extract_reply(data)
        if reply is None:
            _log.warning("Completion response had no content, using fallback reply")
            reply = FALLBACK_REPLY
        else:
            _log.info("Response received successfully")

        return Completion(reply=reply, model=self._settings.model)

    async def _post(self, payload: dict[str, Any], timeout_s: float) -> Any:
        if self._http_client is not None:
            return await self._send(self._http_client, payload)
        async with httpx.AsyncClient(timeout=timeout_s) as client:
            return await self._send(client, payload)

    async def _send(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> Any:
        response = await client.post(self._settings.api_url, headers=self._headers(), json=payload)

        if not response.is_success:
            # Upstream body is logged for diagnostics only.
            _log.error("API error: %d %s", response.status_code, response.text)
            raise ServiceError.from_http_status(response.status_code)

        try:
            return response.json()
        except ValueError:
            _log.warning("Completion response body is not valid JSON")
            return {}


__all__ = ["OpenRouterClient", "FALLBACK_REPLY"]
