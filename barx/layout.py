"""Canvas geometry for horizontally concatenated barcodes.

Widths add up while the height is the tallest entry's. This width-sum /
height-max policy is intentional: every barcode shares one canvas height
(its padding block runs the full height) and output must stay
pixel-compatible with existing composites, so do not "balance" it.
"""

from collections.abc import Sequence

from barx.errors import EmptyRequest
from barx.logging import audit, get_logger, trace
from barx.models import BarcodeSpec, Layout

log = get_logger("layout")


@trace
def compute_layout(specs: Sequence[BarcodeSpec]) -> Layout:
    """Compute total canvas size and each spec's horizontal offset.

    Each spec occupies ``width + 2*text_size`` columns and needs
    ``height + 3*text_size`` rows. A single spec goes through the same formula.
    """
    specs = tuple(specs)
    if not specs:
        raise EmptyRequest("no barcode data provided")

    offsets = []
    total_width = 0
    for spec in specs:
        offsets.append(total_width)
        total_width += spec.occupied_width
    total_height = max(spec.occupied_height for spec in specs)

    layout = Layout(width=total_width, height=total_height, offsets=tuple(offsets))
    audit("layout.computed", logger=log,
          count=len(specs), size=f"{total_width}x{total_height}", offsets=list(offsets))
    return layout
