"""Lossless serialization of composite images."""

import io
from pathlib import Path

from barx.logging import audit, get_logger
from barx.models import CompositeImage

log = get_logger("encoder")

# Formats that store RGBA pixels exactly; palette or lossy formats would
# shift padding and label colors.
LOSSLESS_FORMATS = ("PNG", "TIFF", "BMP")

_SUFFIX_FORMATS = {
    ".png": "PNG",
    ".tif": "TIFF",
    ".tiff": "TIFF",
    ".bmp": "BMP",
}


def _check_format(fmt: str) -> str:
    fmt = fmt.upper()
    if fmt not in LOSSLESS_FORMATS:
        raise ValueError(f"unsupported image format {fmt!r}; choose one of {', '.join(LOSSLESS_FORMATS)}")
    return fmt


def encode_image(composite: CompositeImage, format: str = "PNG") -> bytes:
    """Serialize a composite to bytes in a lossless raster format."""
    fmt = _check_format(format)
    buf = io.BytesIO()
    composite.image.save(buf, format=fmt)
    data = buf.getvalue()
    audit("image.encoded", logger=log,
          format=fmt, size=f"{composite.size[0]}x{composite.size[1]}", bytes=len(data))
    return data


def save_image(composite: CompositeImage, path: str | Path, format: str | None = None) -> Path:
    """Write a composite to ``path``; the format defaults to the file suffix."""
    path = Path(path)
    if format is None:
        format = _SUFFIX_FORMATS.get(path.suffix.lower())
        if format is None:
            raise ValueError(f"cannot infer a lossless format from {path.name!r}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_image(composite, format=format))
    return path
