"""Data model: per-barcode specs, requests, layouts and finished composites."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from PIL import Image

from barx.errors import EmptyRequest

# Form-only keys carried over from request files; they select nothing here.
IGNORED_KEYS = frozenset({"font_choice"})


class FontVariant(Enum):
    REGULAR = "regular"
    BOLD = "bold"


@dataclass(frozen=True)
class BarcodeSpec:
    """One barcode in a composite: payload, symbol size, colors and label size.

    ``width``/``height`` are the symbol's pixel size before padding.
    ``text_size`` is the label's point size and also the padding unit: one
    unit left, right and above the symbol, two below it for the label.
    Colors stay as ``#RRGGBB`` strings and are parsed while rendering.
    """
    content: str
    width: int
    height: int
    padding_color: str = "#FFFFFF"
    text_color: str = "#000000"
    text_size: int = 12
    bold: bool = False

    def __post_init__(self):
        if not isinstance(self.content, str) or not self.content:
            raise ValueError("content must be a non-empty string")
        for name in ("width", "height", "text_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    @property
    def font_variant(self) -> FontVariant:
        return FontVariant.BOLD if self.bold else FontVariant.REGULAR

    @property
    def occupied_width(self) -> int:
        return self.width + 2 * self.text_size

    @property
    def occupied_height(self) -> int:
        return self.height + 3 * self.text_size

    @classmethod
    def from_dict(cls, data: dict) -> "BarcodeSpec":
        """Build a spec from a JSON-style mapping (keys match the field names).

        ``font_choice`` is accepted and ignored; any other unknown key raises
        ValueError so a misspelled field does not silently fall back to its default.
        """
        unknown = sorted(set(data) - set(cls.__dataclass_fields__) - IGNORED_KEYS)
        if unknown:
            raise ValueError(f"unknown spec field(s): {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k not in IGNORED_KEYS})


@dataclass(frozen=True)
class CompositionRequest:
    """Ordered, non-empty sequence of specs; order is left-to-right draw order."""
    specs: tuple[BarcodeSpec, ...]

    def __post_init__(self):
        object.__setattr__(self, "specs", tuple(self.specs))
        if not self.specs:
            raise EmptyRequest("no barcode data provided")

    @classmethod
    def of(cls, specs: Iterable[BarcodeSpec]) -> "CompositionRequest":
        return cls(tuple(specs))

    def __len__(self) -> int:
        return len(self.specs)

    def __iter__(self):
        return iter(self.specs)


@dataclass(frozen=True)
class Layout:
    """Canvas size and the x offset of each spec's padding block."""
    width: int
    height: int
    offsets: tuple[int, ...]


@dataclass(frozen=True)
class CompositeImage:
    """A finished composite. The caller owns ``image`` from here on."""
    image: Image.Image
    layout: Layout

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size
