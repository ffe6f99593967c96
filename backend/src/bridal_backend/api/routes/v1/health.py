from fastapi import APIRouter
from pydantic import BaseModel

from ....core.config import settings


router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    relay: str


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(relay="forwarded" if settings.has_llm_credential else "fallback")
