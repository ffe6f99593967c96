from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ....schemas.palette import PaletteMatch, PaletteMatchRequest, PaletteResponse
from ....services.palette_service import PaletteService
from ...deps import get_palette_service


router = APIRouter(prefix="/palette")


@router.get("", response_model=PaletteResponse)
def list_palette(service: PaletteService = Depends(get_palette_service)) -> PaletteResponse:
    return service.overview()


@router.post("/match", response_model=PaletteMatch)
def match_colour(
    payload: PaletteMatchRequest,
    service: PaletteService = Depends(get_palette_service),
) -> PaletteMatch:
    try:
        return service.match(payload.hex)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
