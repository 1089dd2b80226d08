"""Composition error taxonomy.

Every error is terminal to the composition that raised it. The compositor
stamps the failing spec's index onto the error before re-raising, so callers
can point the user at the exact barcode and stage that went wrong.
"""


class CompositionError(Exception):
    """Base class for every failure surfaced by ``compose``."""

    stage = "compose"

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.message = message
        self.index = index

    def __str__(self) -> str:
        if self.index is None:
            return f"[{self.stage}] {self.message}"
        # Users number barcodes from 1 (form slots data1..dataN).
        return f"barcode #{self.index + 1} [{self.stage}] {self.message}"


class EmptyRequest(CompositionError):
    """No barcode specs were supplied."""

    stage = "request"


class InvalidColorFormat(CompositionError):
    """A padding or text color is not of the form ``#RRGGBB``."""

    stage = "color"


class EncodingFailed(CompositionError):
    """The symbology cannot represent the content."""

    stage = "encode"


class ScalingFailed(CompositionError):
    """The symbol cannot be scaled to the requested pixel size."""

    stage = "scale"


class FontUnavailable(CompositionError):
    """No font face for the requested variant and size."""

    stage = "font"
