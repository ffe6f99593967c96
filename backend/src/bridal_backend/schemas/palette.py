from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class PaletteColor(BaseModel):
    name: str
    hex: str


class PaletteResponse(BaseModel):
    colors: List[PaletteColor]
    delta_e: float
    near_delta_e: float


class PaletteMatchRequest(BaseModel):
    hex: str = Field(..., min_length=3, max_length=9)


class PaletteMatch(BaseModel):
    hex: str
    nearest: PaletteColor
    delta_e: float
    verdict: Literal["match", "near", "miss"]
