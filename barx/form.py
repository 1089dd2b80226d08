"""Build composition requests from flat form fields (data1, width1, ... dataN)."""

from collections.abc import Mapping

from barx.logging import get_logger
from barx.models import BarcodeSpec, CompositionRequest

log = get_logger("form")

MAX_SLOTS = 4


def _int_field(fields: Mapping[str, str], name: str) -> int:
    raw = fields.get(name, "")
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValueError(f"field {name!r} must be an integer, got {raw!r}") from None


def specs_from_form(fields: Mapping[str, str], slots: int = MAX_SLOTS) -> CompositionRequest:
    """Collect the filled-in barcode slots of a form, in slot order.

    A slot is used only when its ``data{n}`` field is non-empty. ``bold{n}``
    is a checkbox: it is set only when the value is ``"on"``.

    Raises:
        ValueError: a numeric field is missing or malformed.
        EmptyRequest: no slot has data.
    """
    specs = []
    for n in range(1, slots + 1):
        data = fields.get(f"data{n}", "")
        if not data:
            continue
        specs.append(BarcodeSpec(
            content=data,
            width=_int_field(fields, f"width{n}"),
            height=_int_field(fields, f"height{n}"),
            padding_color=fields.get(f"padding_color{n}", ""),
            text_color=fields.get(f"text_color{n}", ""),
            text_size=_int_field(fields, f"text_size{n}"),
            bold=fields.get(f"bold{n}") == "on",
        ))
    log.debug("form parsed: %d of %d slots filled", len(specs), slots)
    return CompositionRequest.of(specs)
