from __future__ import annotations

from typing import Any, List
import logging

from ..integrations.openai_client import OpenAICompatibleClient


log = logging.getLogger("bridal.engines.openai")


def extract_completion_text(data: Any) -> str | None:
    """Return ``choices[0].message.content`` when present and textual."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class OpenAIChatEngine:
    """Chat engine backed by an OpenAI-compatible API.

    Kept minimal on purpose: one request, no streaming, no tools. The transcript
    is sent exactly as received; the caller owns the system prompt.
    """

    def __init__(self, *, client: OpenAICompatibleClient, model: str, temperature: float = 0.7):
        self.client = client
        self.model = model
        self.temperature = temperature

    async def run(self, messages: List[Any]) -> str | None:
        data = await self.client.chat_completions(
            model=self.model,
            temperature=self.temperature,
            messages=messages,
        )
        content = extract_completion_text(data)
        if content is None:
            log.warning("OpenAI-compatible backend returned no completion text (model=%s)", self.model)
        return content
