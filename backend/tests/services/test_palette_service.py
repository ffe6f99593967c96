import pytest

from bridal_backend.schemas.palette import PaletteColor
from bridal_backend.services.palette_service import (
    APPROVED_PALETTE,
    DELTA_E,
    NEAR_DELTA_E,
    PaletteService,
    delta_e76,
    hex_to_lab,
    normalize_hex,
)


@pytest.fixture
def palette():
    return PaletteService()


def test_overview_lists_approved_colours(palette):
    overview = palette.overview()
    assert [c.name for c in overview.colors] == ["Moss Olive", "Sage Olive", "Forest Olive", "Pistachio Olive"]
    assert overview.delta_e == 20
    assert overview.near_delta_e == 22


@pytest.mark.parametrize("color", APPROVED_PALETTE, ids=lambda c: c.name)
def test_palette_colour_matches_itself(palette, color):
    result = palette.match(color.hex.lower())
    assert result.nearest == color
    assert result.delta_e == 0
    assert result.verdict == "match"


def test_white_is_a_miss(palette):
    result = palette.match("#ffffff")
    assert result.verdict == "miss"
    assert result.delta_e > NEAR_DELTA_E


@pytest.mark.parametrize(
    "value,expected",
    [("#abc", "#AABBCC"), ("6a7758", "#6A7758"), (" #444f24 ", "#444F24")],
)
def test_normalize_hex(value, expected):
    assert normalize_hex(value) == expected


@pytest.mark.parametrize("value", ["", "#12", "#12345", "#GGGGGG", "rgb(1,2,3)"])
def test_normalize_hex_rejects_garbage(value):
    with pytest.raises(ValueError):
        normalize_hex(value)


def test_lab_of_black_and_white():
    black = hex_to_lab("#000000")
    white = hex_to_lab("#FFFFFF")
    assert black == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)
    assert white[0] == pytest.approx(100.0, abs=0.01)
    assert delta_e76(black, white) == pytest.approx(100.0, abs=0.05)


def test_verdict_thresholds():
    # mid grey sits roughly 50 ΔE away from black
    black = [PaletteColor(name="Black", hex="#000000")]
    assert PaletteService(black, delta_e=51, near_delta_e=53).match("#777777").verdict == "match"
    assert PaletteService(black, delta_e=49, near_delta_e=51).match("#777777").verdict == "near"
    assert PaletteService(black, delta_e=40, near_delta_e=45).match("#777777").verdict == "miss"


def test_nearest_picks_closest_colour(palette):
    # a slightly darker Forest Olive
    result = palette.match("#404B20")
    assert result.nearest.name == "Forest Olive"
    assert result.delta_e < DELTA_E


def test_empty_palette_is_rejected():
    with pytest.raises(ValueError):
        PaletteService([])
