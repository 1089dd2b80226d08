"""Font resolution for barcode labels."""

from pathlib import Path
from typing import Protocol

from PIL import ImageFont

from barx.errors import FontUnavailable
from barx.logging import get_logger, trace
from barx.models import FontVariant

log = get_logger("fonts")

DEFAULT_FONT_FILES = {
    FontVariant.REGULAR: "ARIAL.TTF",
    FontVariant.BOLD: "ARIBLK.TTF",  # Arial Black
}


class FontResolver(Protocol):
    """Maps a label variant and point size to a loaded font.

    Implementations raise FontUnavailable when the face cannot be served and
    never substitute another face. Other exceptions reach the caller without
    the failing spec index.
    """

    def resolve(self, variant: FontVariant, point_size: int) -> ImageFont.FreeTypeFont:
        ...


class DirectoryFontResolver:
    """Loads TrueType faces from one configured directory.

    A missing or unreadable file raises FontUnavailable; there is no
    fallback face.
    """

    def __init__(
        self,
        fonts_dir: str | Path,
        regular: str = DEFAULT_FONT_FILES[FontVariant.REGULAR],
        bold: str = DEFAULT_FONT_FILES[FontVariant.BOLD],
    ):
        self.fonts_dir = Path(fonts_dir)
        self.files = {FontVariant.REGULAR: regular, FontVariant.BOLD: bold}

    def path_for(self, variant: FontVariant) -> Path:
        return self.fonts_dir / self.files[variant]

    @trace
    def resolve(self, variant: FontVariant, point_size: int) -> ImageFont.FreeTypeFont:
        path = self.path_for(variant)
        if not path.is_file():
            raise FontUnavailable(f"{variant.value} font not found at {path}")
        try:
            return ImageFont.truetype(str(path), point_size)
        except OSError as e:
            raise FontUnavailable(f"failed to load {variant.value} font {path}: {e}") from e


class BuiltinFontResolver:
    """Pillow's bundled scalable face, used for both variants.

    The bundled face has a single weight, so bold labels render in the
    regular weight. Pick DirectoryFontResolver when bold matters.
    """

    @trace
    def resolve(self, variant: FontVariant, point_size: int) -> ImageFont.FreeTypeFont:
        font = ImageFont.load_default(size=point_size)
        if not isinstance(font, ImageFont.FreeTypeFont):
            # Pillow built without FreeType only ships a fixed-size bitmap font.
            raise FontUnavailable(f"no scalable built-in font for size {point_size}")
        return font
