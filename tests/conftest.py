import logging

import numpy as np
import pytest
from PIL import Image

from barx.errors import EncodingFailed
from barx.fonts import BuiltinFontResolver
from barx.models import BarcodeSpec
from barx.symbols import BarcodeSymbolProvider, scale_modules


class StubSymbols:
    """Deterministic provider: a fixed bar/space pattern; content "BAD" is unencodable."""

    PATTERN = np.array([True, False, True, True, False, True], dtype=bool)

    def __init__(self):
        self.calls = []

    def encode(self, content: str) -> np.ndarray:
        self.calls.append(("encode", content))
        if content == "BAD":
            raise EncodingFailed(f"cannot encode {content!r}")
        return self.PATTERN

    def scale(self, modules: np.ndarray, width: int, height: int) -> Image.Image:
        self.calls.append(("scale", width, height))
        return scale_modules(modules, width, height)


@pytest.fixture
def symbols() -> BarcodeSymbolProvider:
    return BarcodeSymbolProvider()


@pytest.fixture
def stub_symbols() -> StubSymbols:
    return StubSymbols()


@pytest.fixture
def fonts() -> BuiltinFontResolver:
    return BuiltinFontResolver()


@pytest.fixture
def spec_abc() -> BarcodeSpec:
    return BarcodeSpec(
        content="ABC", width=100, height=50,
        padding_color="#FF0000", text_color="#0000FF", text_size=10,
    )


@pytest.fixture
def spec_xyz() -> BarcodeSpec:
    return BarcodeSpec(
        content="XYZ", width=80, height=60,
        padding_color="#00FF00", text_color="#000000", text_size=12, bold=True,
    )


@pytest.fixture(autouse=True)
def reset_barx_logger():
    """CLI tests install handlers bound to captured streams; drop them afterwards."""
    logger = logging.getLogger("barx")
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
