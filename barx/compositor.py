"""Barcode composition: draw every spec's padding, symbol and label onto one canvas."""

from collections.abc import Iterable

from PIL import Image, ImageDraw

from barx.colors import parse_hex_color
from barx.errors import CompositionError
from barx.fonts import BuiltinFontResolver, FontResolver
from barx.layout import compute_layout
from barx.logging import audit, get_logger, trace
from barx.models import BarcodeSpec, CompositeImage, CompositionRequest, Layout
from barx.symbols import BarcodeSymbolProvider, SymbolProvider

log = get_logger("compositor")

CANVAS_MODE = "RGBA"


class Compositor:
    """Renders composition requests with explicitly supplied collaborators.

    Holds no per-request state: every call allocates, fills and hands over
    its own canvas, so one instance can serve concurrent callers.
    """

    def __init__(self, symbols: SymbolProvider, fonts: FontResolver):
        self.symbols = symbols
        self.fonts = fonts

    @trace
    def compose(self, request: CompositionRequest | Iterable[BarcodeSpec]) -> CompositeImage:
        """Lay out and render a request. All-or-nothing.

        Raises:
            CompositionError: the first failure, tagged with spec index and stage.
        """
        if not isinstance(request, CompositionRequest):
            request = CompositionRequest.of(request)
        layout = compute_layout(request.specs)
        image = self.render(request, layout)
        audit("compose.completed", logger=log,
              count=len(request), size=f"{layout.width}x{layout.height}")
        return CompositeImage(image=image, layout=layout)

    def render(self, request: CompositionRequest, layout: Layout) -> Image.Image:
        """Draw all specs in order onto a fresh canvas sized by ``layout``.

        Raises:
            ValueError: ``layout`` has a different number of offsets than
                ``request`` has specs.
            CompositionError: as for ``compose``.
        """
        if len(layout.offsets) != len(request):
            raise ValueError(
                f"layout has {len(layout.offsets)} offsets for {len(request)} specs")
        # Not filled: the padding blocks cover every pixel since each spans
        # the full canvas height and together they span the full width.
        canvas = Image.new(CANVAS_MODE, (layout.width, layout.height))
        try:
            draw = ImageDraw.Draw(canvas)
            for index, (spec, offset) in enumerate(zip(request.specs, layout.offsets)):
                try:
                    self._draw_spec(canvas, draw, spec, offset, layout.height)
                except CompositionError as e:
                    e.index = index
                    audit("compose.failed", logger=log,
                          index=index, stage=e.stage, error=e.message)
                    raise
                log.debug("compose.spec_drawn index=%d offset=%d content=%s",
                          index, offset, spec.content[:80])
        except BaseException:
            canvas.close()
            raise
        return canvas

    def _draw_spec(self, canvas: Image.Image, draw: ImageDraw.ImageDraw,
                   spec: BarcodeSpec, offset: int, canvas_height: int):
        padding_color = parse_hex_color(spec.padding_color)
        text_color = parse_hex_color(spec.text_color)

        modules = self.symbols.encode(spec.content)
        symbol = self.symbols.scale(modules, spec.width, spec.height)
        try:
            draw.rectangle(
                [offset, 0, offset + spec.occupied_width - 1, canvas_height - 1],
                fill=padding_color,
            )
            canvas.paste(symbol, (offset + spec.text_size, spec.text_size))
        finally:
            symbol.close()

        font = self.fonts.resolve(spec.font_variant, spec.text_size)
        text_x = offset + spec.text_size + spec.width // 2
        text_y = spec.text_size + spec.height + spec.text_size
        draw.text((text_x, text_y), spec.content, font=font, fill=text_color, anchor="mm")


def compose(
    request: CompositionRequest | Iterable[BarcodeSpec],
    symbols: SymbolProvider | None = None,
    fonts: FontResolver | None = None,
) -> CompositeImage:
    """Compose a request into one image.

    Args:
        request: Specs in left-to-right order.
        symbols: Symbol provider (Code 128 via python-barcode if omitted).
        fonts: Font resolver (Pillow's bundled face if omitted).
    """
    compositor = Compositor(
        symbols=symbols or BarcodeSymbolProvider(),
        fonts=fonts or BuiltinFontResolver(),
    )
    return compositor.compose(request)
