"""Linear symbol provider: encode payloads with python-barcode, scale with numpy."""

from typing import Protocol

import barcode as pybarcode
import numpy as np
from barcode.errors import BarcodeError, BarcodeNotFoundError
from PIL import Image

from barx.errors import EncodingFailed, ScalingFailed
from barx.logging import audit, get_logger, trace

log = get_logger("symbols")

BAR = 0      # black
SPACE = 255  # white


class SymbolProvider(Protocol):
    """Encodes payloads and scales module rows for the compositor.

    Implementations report failures as EncodingFailed (``encode``) and
    ScalingFailed (``scale``). The compositor tags only CompositionError
    subclasses with the failing spec index; any other exception propagates
    untagged.
    """

    def encode(self, content: str) -> np.ndarray:
        """Return the symbol's module row (bool array, True = bar)."""
        ...

    def scale(self, modules: np.ndarray, width: int, height: int) -> Image.Image:
        """Return the modules as a ``width`` x ``height`` grayscale bitmap."""
        ...


class BarcodeSymbolProvider:
    """SymbolProvider backed by a python-barcode symbology (Code 128 by default).

    Args:
        symbology: python-barcode name, e.g. "code128", "code39", "ean13".
    """

    def __init__(self, symbology: str = "code128"):
        self.symbology = symbology
        try:
            self._barcode_class = pybarcode.get_barcode_class(symbology)
        except BarcodeNotFoundError as e:
            raise ValueError(f"unknown symbology {symbology!r}") from e

    @trace
    def encode(self, content: str) -> np.ndarray:
        try:
            symbol = self._barcode_class(content)
            code = "".join(symbol.build())
        except (BarcodeError, ValueError, KeyError) as e:
            raise EncodingFailed(f"cannot encode {content!r} as {self.symbology}: {e}") from e

        modules = np.array([c != "0" for c in code], dtype=bool)
        if modules.size == 0:
            raise EncodingFailed(f"{self.symbology} produced an empty symbol for {content!r}")
        audit("symbol.encoded", logger=log,
              symbology=self.symbology, content=content[:80], modules=int(modules.size))
        return modules

    def scale(self, modules: np.ndarray, width: int, height: int) -> Image.Image:
        return scale_modules(modules, width, height)


@trace
def scale_modules(modules: np.ndarray, width: int, height: int) -> Image.Image:
    """Scale a module row to an exact pixel size.

    Each module is repeated by the largest integer factor that fits in
    ``width``; leftover columns become white quiet zone split evenly on
    both sides. Rows are copies of the first, so any height works.
    """
    count = int(modules.size)
    if width <= 0 or height <= 0:
        raise ScalingFailed(f"degenerate symbol size {width}x{height}")
    factor = width // count
    if factor == 0:
        raise ScalingFailed(
            f"cannot scale a {count}-module symbol into {width}px (minimum width {count}px)"
        )

    offset = (width - count * factor) // 2
    row = np.full(width, SPACE, dtype=np.uint8)
    row[offset:offset + count * factor] = np.where(np.repeat(modules, factor), BAR, SPACE)
    return Image.fromarray(np.tile(row, (height, 1)))
