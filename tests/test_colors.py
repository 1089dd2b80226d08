import pytest

from barx.colors import parse_hex_color
from barx.errors import InvalidColorFormat


class TestParseHexColor:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("#000000", (0, 0, 0, 255)),
            ("#FFFFFF", (255, 255, 255, 255)),
            ("#ff8000", (255, 128, 0, 255)),
            ("#12aBcD", (0x12, 0xAB, 0xCD, 255)),
        ],
    )
    def test_valid(self, value: str, expected: tuple) -> None:
        assert parse_hex_color(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["#GG0000", "000000", "#00000", "#0000000", "", "#", "# 00000", "#-12345", "#0x1234"],
    )
    def test_invalid(self, value: str) -> None:
        with pytest.raises(InvalidColorFormat):
            parse_hex_color(value)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(InvalidColorFormat):
            parse_hex_color(0xFFFFFF)  # type: ignore[arg-type]

    def test_error_has_color_stage(self) -> None:
        with pytest.raises(InvalidColorFormat) as exc_info:
            parse_hex_color("red")
        assert exc_info.value.stage == "color"
        assert exc_info.value.index is None
        assert "'red'" in str(exc_info.value)
