"""barx CLI: compose barcode strips and scan-verify the results."""

import argparse
import json
import sys
from pathlib import Path

from PIL import Image

from barx.errors import CompositionError
from barx.logging import audit, get_logger, setup_logging

log = get_logger("cli")


def _form_value(value) -> str:
    """Render a JSON value the way an HTML form would submit it."""
    if value is None or value is False:
        return ""
    if value is True:
        return "on"
    return str(value)


def load_request(path: str):
    """Read a request file: a list of spec objects, or flat form fields."""
    from barx.form import specs_from_form
    from barx.models import BarcodeSpec, CompositionRequest

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        return specs_from_form({k: _form_value(v) for k, v in payload.items()})
    if isinstance(payload, list):
        return CompositionRequest.of(BarcodeSpec.from_dict(item) for item in payload)
    raise ValueError(f"{path}: expected a JSON list of specs or an object of form fields")


def build_compositor(args):
    from barx.compositor import Compositor
    from barx.fonts import BuiltinFontResolver, DirectoryFontResolver
    from barx.symbols import BarcodeSymbolProvider

    if args.builtin_font:
        fonts = BuiltinFontResolver()
    else:
        fonts = DirectoryFontResolver(args.fonts_dir, regular=args.regular_font, bold=args.bold_font)
    return Compositor(symbols=BarcodeSymbolProvider(args.symbology), fonts=fonts)


def cmd_compose(args):
    """Compose barcodes from a request file into one image."""
    from barx.encoder import save_image

    request = load_request(args.specs)
    composite = build_compositor(args).compose(request)
    output = save_image(composite, args.output, format=args.format)
    print(f"Generated: {output} ({composite.size[0]}x{composite.size[1]}, {len(request)} barcodes)")


def cmd_verify(args):
    """Scan-verify a composite image."""
    from barx.verify import verify

    expected = args.expected.split(",") if args.expected else None
    with Image.open(args.image) as img:
        results = verify(img, expected=expected)

    all_pass = True
    for r in results:
        status = "PASS" if r.success else "FAIL"
        if not r.success:
            all_pass = False
        detail = ", ".join(r.decoded) if r.success else r.error
        print(f"  [{r.decoder:12s}] {status} | {r.decode_time_ms:6.1f}ms | {detail}")

    sys.exit(0 if all_pass else 1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="barx", description="barx: compose labeled barcode strips")

    # Global logging flags
    parser.add_argument("-V", "--verbose", action="store_true", help="Enable DEBUG-level logging")
    parser.add_argument("--log-file", default=None, help="Write JSON logs to file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- compose ---
    p_comp = subparsers.add_parser("compose", help="Compose barcodes into one image")
    p_comp.add_argument("specs", help="JSON file: list of specs or form fields (data1, width1, ...)")
    p_comp.add_argument("-o", "--output", default="output/barcodes.png", help="Output file path")
    p_comp.add_argument("-f", "--format", default=None, choices=["PNG", "TIFF", "BMP"],
                        help="Image format (default: from output suffix)")
    p_comp.add_argument("-s", "--symbology", default="code128", help="python-barcode symbology name")
    p_comp.add_argument("--fonts-dir", default="static/fonts", help="Directory holding label fonts")
    p_comp.add_argument("--regular-font", default="ARIAL.TTF", help="Regular label font file")
    p_comp.add_argument("--bold-font", default="ARIBLK.TTF", help="Bold label font file")
    p_comp.add_argument("--builtin-font", action="store_true",
                        help="Use Pillow's bundled font instead of --fonts-dir")

    # --- verify ---
    p_ver = subparsers.add_parser("verify", help="Scan-verify a composite image")
    p_ver.add_argument("image", help="Path to composite image")
    p_ver.add_argument("--expected", default=None,
                       help="Comma-separated payloads, left to right (fails if mismatch)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging before any command runs
    level = "DEBUG" if args.verbose else "INFO"
    setup_logging(level=level, log_file=args.log_file)
    audit("cli.start", logger=log, command=args.command, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "compose": cmd_compose,
        "verify": cmd_verify,
    }
    try:
        commands[args.command](args)
    except (CompositionError, ValueError) as e:
        audit("cli.failed", logger=log, command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    audit("cli.done", logger=log, command=args.command)


if __name__ == "__main__":
    main()
