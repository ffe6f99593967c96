from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Tuple

from ..schemas.palette import PaletteColor, PaletteMatch, PaletteResponse


log = logging.getLogger("bridal.services.palette")

Lab = Tuple[float, float, float]

APPROVED_PALETTE: tuple[PaletteColor, ...] = (
    PaletteColor(name="Moss Olive", hex="#6A7758"),
    PaletteColor(name="Sage Olive", hex="#666844"),
    PaletteColor(name="Forest Olive", hex="#444F24"),
    PaletteColor(name="Pistachio Olive", hex="#7E8C54"),
)
DELTA_E = 20.0
NEAR_DELTA_E = DELTA_E + 2

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# D65 reference white
_XN, _YN, _ZN = 0.95047, 1.0, 1.08883


def normalize_hex(value: str) -> str:
    """Return ``#RRGGBB`` (upper-case) or raise ``ValueError``."""
    m = _HEX_RE.match((value or "").strip())
    if not m:
        raise ValueError(f"Invalid hex colour: {value!r}")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits.upper()}"


def _linearize(channel: int) -> float:
    c = channel / 255.0
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _f(t: float) -> float:
    delta = 6 / 29
    if t > delta ** 3:
        return t ** (1 / 3)
    return t / (3 * delta ** 2) + 4 / 29


def hex_to_lab(value: str) -> Lab:
    """sRGB hex → CIELAB (D65)."""
    digits = normalize_hex(value)[1:]
    r, g, b = (_linearize(int(digits[i : i + 2], 16)) for i in (0, 2, 4))
    x = r * 0.4124564 + g * 0.3575761 + b * 0.1804375
    y = r * 0.2126729 + g * 0.7151522 + b * 0.0721750
    z = r * 0.0193339 + g * 0.1191920 + b * 0.9503041
    fx, fy, fz = _f(x / _XN), _f(y / _YN), _f(z / _ZN)
    return (116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz))


def delta_e76(a: Lab, b: Lab) -> float:
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(a, b)))


class PaletteService:
    def __init__(
        self,
        colors: Iterable[PaletteColor] = APPROVED_PALETTE,
        *,
        delta_e: float = DELTA_E,
        near_delta_e: float = NEAR_DELTA_E,
    ):
        self.colors = list(colors)
        if not self.colors:
            raise ValueError("Palette must contain at least one colour")
        self.delta_e = delta_e
        self.near_delta_e = near_delta_e
        self._labs = [hex_to_lab(c.hex) for c in self.colors]

    def overview(self) -> PaletteResponse:
        return PaletteResponse(colors=self.colors, delta_e=self.delta_e, near_delta_e=self.near_delta_e)

    def match(self, value: str) -> PaletteMatch:
        """Score ``value`` against the palette and classify the nearest hit."""
        hex_value = normalize_hex(value)
        lab = hex_to_lab(hex_value)
        distances = [delta_e76(lab, ref) for ref in self._labs]
        best = min(range(len(distances)), key=distances.__getitem__)
        score = distances[best]
        if score <= self.delta_e:
            verdict = "match"
        elif score <= self.near_delta_e:
            verdict = "near"
        else:
            verdict = "miss"
        log.debug("Palette match: hex=%s nearest=%s delta_e=%.2f", hex_value, self.colors[best].name, score)
        return PaletteMatch(
            hex=hex_value,
            nearest=self.colors[best],
            delta_e=round(score, 2),
            verdict=verdict,
        )
