from __future__ import annotations

from fastapi import APIRouter, Depends

from ....schemas.auth import AccessRequest, AccessResponse
from ....services.access_service import AccessService
from ...deps import get_access_service


router = APIRouter()


@router.post("/auth/access", response_model=AccessResponse)
async def check_access(
    payload: AccessRequest,
    service: AccessService = Depends(get_access_service),
) -> AccessResponse:
    email = service.verify(email=payload.email, code=payload.code)
    return AccessResponse(ok=True, email=email)
