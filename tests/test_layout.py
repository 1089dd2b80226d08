import pytest

from barx.errors import EmptyRequest
from barx.layout import compute_layout
from barx.models import BarcodeSpec


def _spec(width: int, height: int, text_size: int, content: str = "A") -> BarcodeSpec:
    return BarcodeSpec(content=content, width=width, height=height, text_size=text_size)


class TestComputeLayout:
    def test_two_spec_example(self, spec_abc: BarcodeSpec, spec_xyz: BarcodeSpec) -> None:
        layout = compute_layout([spec_abc, spec_xyz])
        assert layout.width == (100 + 20) + (80 + 24) == 224
        assert layout.height == max(50 + 30, 60 + 36) == 96
        assert layout.offsets == (0, 120)

    @pytest.mark.parametrize("width,height,text_size", [(1, 1, 1), (100, 50, 10), (300, 20, 40)])
    def test_single_spec_uses_same_formula(self, width: int, height: int, text_size: int) -> None:
        layout = compute_layout([_spec(width, height, text_size)])
        assert layout.width == width + 2 * text_size
        assert layout.height == height + 3 * text_size
        assert layout.offsets == (0,)

    def test_width_sums_and_height_maxes(self) -> None:
        specs = [_spec(50, 200, 5), _spec(120, 40, 20), _spec(10, 10, 1)]
        layout = compute_layout(specs)
        assert layout.width == 60 + 160 + 12
        assert layout.height == max(215, 100, 13)

    def test_offsets_strictly_increasing(self) -> None:
        specs = [_spec(w, 30, t) for w, t in [(40, 3), (10, 1), (90, 12), (5, 7)]]
        layout = compute_layout(specs)
        assert layout.offsets[0] == 0
        for i in range(1, len(specs)):
            prev = specs[i - 1]
            assert layout.offsets[i] == layout.offsets[i - 1] + prev.width + 2 * prev.text_size
            assert layout.offsets[i] > layout.offsets[i - 1]
        last = specs[-1]
        assert layout.offsets[-1] + last.occupied_width == layout.width

    def test_empty_rejected(self) -> None:
        with pytest.raises(EmptyRequest):
            compute_layout([])

    def test_accepts_generator(self) -> None:
        layout = compute_layout(_spec(10, 10, 2) for _ in range(3))
        assert layout.offsets == (0, 14, 28)
