from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx


class OpenAIBackendError(RuntimeError):
    """Raised when the OpenAI-compatible backend cannot satisfy a request."""
    pass


class OpenAIUpstreamError(OpenAIBackendError):
    """The backend answered with a non-success status.

    ``body`` keeps the raw response text so callers can surface it as-is.
    """

    def __init__(self, status_code: int, body: str):
        super().__init__(body or f"LLM backend returned status {status_code}")
        self.status_code = status_code
        self.body = body


log = logging.getLogger("bridal.integrations.openai")


class OpenAICompatibleClient:
    """Minimal async client for OpenAI-compatible chat completions.

    One ``httpx.AsyncClient`` is opened per request and closed right after, so
    an instance holds no connection state and can be shared freely.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_payload: Dict[str, Any],
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        log.debug("%s %s", method.upper(), url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.request(method.upper(), url, headers=headers, json=json_payload)
        except httpx.ConnectError as exc:
            log.error("LLM backend unreachable at %s: %s", url, exc)
            raise OpenAIBackendError(f"Unable to reach the LLM backend ({self.base_url}).") from exc
        except httpx.TimeoutException as exc:
            log.error("LLM backend timed out for %s: %s", url, exc)
            raise OpenAIBackendError(f"The LLM backend did not answer within {self.timeout_s:g}s.") from exc
        except httpx.HTTPError as exc:
            log.error("LLM backend request failed for %s: %s", url, exc)
            raise OpenAIBackendError(f"LLM backend request failed: {exc}") from exc

        if response.is_error:
            body = response.text
            log.error("LLM backend returned %s for %s: %s", response.status_code, url, body)
            raise OpenAIUpstreamError(response.status_code, body)
        return response

    async def chat_completions(self, *, model: str, messages: List[Any], **params: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"model": model}
        payload.update(params)
        payload["messages"] = messages
        resp = await self._request("post", "/chat/completions", json_payload=payload)
        return resp.json()
