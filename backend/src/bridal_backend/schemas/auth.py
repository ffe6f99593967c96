from __future__ import annotations

from pydantic import BaseModel, Field


class AccessRequest(BaseModel):
    email: str = Field(..., max_length=254)
    code: str = Field(..., max_length=128)


class AccessResponse(BaseModel):
    ok: bool = True
    email: str
