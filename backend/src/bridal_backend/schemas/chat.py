from typing import Any, List, Literal

from pydantic import BaseModel, Field


Role = Literal["user", "assistant", "system"]


class ChatMessage(BaseModel):
    role: Role
    content: str


class ChatRequest(BaseModel):
    """Documented request shape. The relay reads the raw body instead so that a
    malformed ``messages`` field maps to its own 400 rather than a 422."""

    messages: List[ChatMessage] = Field(default_factory=list)


class ChatReply(BaseModel):
    reply: str


class ChatError(BaseModel):
    error: str


class RelayResult(BaseModel):
    status_code: int = 200
    outcome: Literal["fallback", "ok", "upstream_error", "bad_payload", "exception"]
    reply: str | None = None
    error: str | None = None

    def body(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error}
        return {"reply": self.reply or ""}
