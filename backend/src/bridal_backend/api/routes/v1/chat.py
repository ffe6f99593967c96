import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ....schemas.chat import ChatError, ChatMessage, ChatReply
from ....services.relay_service import ChatRelayService, exception_result, greeting_message
from ...deps import get_relay_service

log = logging.getLogger("bridal.api.chat")

router = APIRouter(prefix="/chat")


@router.post(
    "",
    response_model=ChatReply,
    responses={
        400: {"model": ChatError, "description": "messages is not an array"},
        500: {"model": ChatError, "description": "Provider error text or exception message"},
    },
)
async def relay_chat(
    request: Request,
    service: ChatRelayService = Depends(get_relay_service),
) -> JSONResponse:
    """Relay a transcript to the completion provider.

    The body is read raw: any JSON whose ``messages`` is not a list gets the
    400 ``Invalid payload`` answer, and an unreadable body becomes a 500.
    """
    try:
        payload = await request.json()
    except Exception as exc:
        log.warning("Unreadable chat body: %s", exc)
        result = exception_result(exc)
    else:
        result = await service.relay(payload)
    return JSONResponse(status_code=result.status_code, content=result.body())


@router.get("/greeting", response_model=ChatMessage)
def chat_greeting() -> ChatMessage:
    return greeting_message()
