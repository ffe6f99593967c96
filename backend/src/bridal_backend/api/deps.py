from __future__ import annotations

from ..core.config import settings
from ..services.access_service import AccessService
from ..services.palette_service import PaletteService
from ..services.relay_service import ChatRelayService


def get_relay_service() -> ChatRelayService:
    """Relay wired from the current settings; tests override this dependency."""
    return ChatRelayService.from_settings(settings)


def get_access_service() -> AccessService:
    return AccessService(settings.access_code)


def get_palette_service() -> PaletteService:
    return PaletteService()
