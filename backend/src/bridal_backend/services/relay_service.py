from __future__ import annotations

import logging
from typing import Any, List, Protocol

import httpx

from ..core.config import Settings
from ..engines.openai_engine import OpenAIChatEngine
from ..integrations.openai_client import OpenAICompatibleClient, OpenAIUpstreamError
from ..schemas.chat import ChatMessage, RelayResult
from ..utils.text import preview_text


log = logging.getLogger("bridal.services.relay")


FALLBACK_REPLY = (
    "love it! 🌿 I’ll keep to the olive palette and your budget/size. "
    "Want me to search dresses now or do a try-on mockup?"
)
DEFAULT_REPLY = "I’m here! Tell me your size, budget, and style and I’ll help 💐"
GREETING = (
    "hey gorgeous! i’m your bridesmaid-bestie stylist 💐 drop your size, budget "
    "(or say ‘use default’), and style prefs (length, sleeves, neckline, silhouette). "
    "tell me your event date + state so I can filter shipping. i’ll only show perfect olive matches!"
)
INVALID_PAYLOAD = "Invalid payload"
GENERIC_ERROR = "Server error"


class ChatEngine(Protocol):
    async def run(self, messages: List[Any]) -> str | None:
        ...


def greeting_message() -> ChatMessage:
    return ChatMessage(role="assistant", content=GREETING)


def exception_result(exc: BaseException) -> RelayResult:
    """Map an unexpected failure to the generic 500 answer."""
    return RelayResult(status_code=500, outcome="exception", error=str(exc) or GENERIC_ERROR)


class ChatRelayService:
    """Forward a transcript to the completion provider and normalize the answer.

    Without an engine (no provider credential) the relay answers every valid
    request with ``FALLBACK_REPLY`` and makes no outbound call.
    """

    def __init__(self, engine: ChatEngine | None = None):
        self.engine = engine

    @property
    def has_credential(self) -> bool:
        return self.engine is not None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ChatRelayService":
        if not settings.has_llm_credential:
            return cls(engine=None)
        client = OpenAICompatibleClient(
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            timeout_s=settings.openai_timeout_s,
            transport=transport,
        )
        engine = OpenAIChatEngine(client=client, model=settings.llm_model, temperature=settings.llm_temperature)
        return cls(engine=engine)

    async def relay(self, payload: Any) -> RelayResult:
        messages = payload.get("messages") if isinstance(payload, dict) else None
        if not isinstance(messages, list):
            log.info("Relay rejected payload: messages_type=%s", type(messages).__name__)
            return RelayResult(status_code=400, outcome="bad_payload", error=INVALID_PAYLOAD)

        self._log_start(messages)
        if self.engine is None:
            log.info("Relay fallback: no provider credential configured")
            return RelayResult(outcome="fallback", reply=FALLBACK_REPLY)

        try:
            content = await self.engine.run(messages)
        except OpenAIUpstreamError as exc:
            log.warning("Relay upstream error: status=%s", exc.status_code)
            return RelayResult(status_code=500, outcome="upstream_error", error=exc.body)
        except Exception as exc:
            log.exception("Relay failed while calling the provider")
            return exception_result(exc)

        reply = (content or "").strip() or DEFAULT_REPLY
        log.info("Relay ok: reply_preview=\"%s\"", preview_text(reply))
        return RelayResult(outcome="ok", reply=reply)

    def _log_start(self, messages: List[Any]) -> None:
        if not messages:
            log.info("Relay start: count=0")
            return
        last = messages[-1]
        role = last.get("role") if isinstance(last, dict) else None
        content = last.get("content", "") if isinstance(last, dict) else last
        log.info(
            "Relay start: count=%d last_role=%s preview=\"%s\"",
            len(messages),
            role,
            preview_text(content, limit=80),
        )
