import pytest

from solong.colors import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("black", 0x0),
        ("white", 0xFFFFFF),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("lightgreen", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent_marker():
    assert lookup_color("none") == -1


def test_lookup_ignores_case():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == 0xF8F8FF


def test_unknown_name_gives_none():
    assert lookup_color("not-a-colour") is None
    assert lookup_color("") is None


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


@pytest.mark.parametrize("level", range(0, 101))
def test_gray_and_grey_agree(level):
    gray = lookup_color(f"gray{level}")
    assert gray == lookup_color(f"grey{level}")
    red, green, blue = (gray >> 16) & 0xFF, (gray >> 8) & 0xFF, gray & 0xFF
    assert red == green == blue


def test_gray_levels_increase():
    values = [lookup_color(f"gray{level}") for level in range(0, 101)]
    assert values == sorted(values)
    assert values[0] == lookup_color("black")
    assert values[-1] == lookup_color("white")


@pytest.mark.parametrize(
    "spaced, joined",
    [
        ("navy blue", "navyblue"),
        ("misty rose", "mistyrose"),
        ("dark orange", "darkorange"),
        ("light sky", "lightskyblue"),
    ],
)
def test_spaced_names_match_joined(spaced, joined):
    assert lookup_color(spaced) == lookup_color(joined)


def test_numbered_variant_one_matches_base():
    for base in ("snow", "bisque", "azure", "tomato", "gold", "red"):
        assert lookup_color(f"{base}1") == lookup_color(base)


def test_all_values_fit_in_24_bits_except_none():
    for name in ("snow", "thistle4", "darkred", "gray100", "chartreuse3"):
        value = lookup_color(name)
        assert 0 <= value <= 0xFFFFFF