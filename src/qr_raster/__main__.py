"""Command line interface for generating QR code images."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import generator
from .errors import QrError
from .render import RenderOptions, parse_color, render_png
from .symbol import encode_text
from .tables import ErrorCorrection


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate QR codes as PNG images")
    data_group = parser.add_mutually_exclusive_group(required=True)
    data_group.add_argument("--text", help="Literal text/URL to encode")
    data_group.add_argument("--file", type=Path, help="Read the payload from a file")

    parser.add_argument("-o", "--output", type=Path, default=Path("qr_code.png"), help="Output PNG file path")
    parser.add_argument("--ecc", default="M", help="Error correction level (L, M, Q, H or low/medium/quartile/high)")
    parser.add_argument("--pixel-size", type=int, default=8, help="Pixels per module")
    parser.add_argument("--margin", type=int, default=2, help="Quiet-zone width in modules")
    parser.add_argument("--dark", default="#000000", help="Dark module colour")
    parser.add_argument("--light", default="#ffffff", help="Light module colour")
    parser.add_argument("--version", type=int, help="Fixed symbol version (1-40)")
    parser.add_argument("--mask", type=int, help="Fixed mask pattern (0-7)")
    parser.add_argument("--terminal", action="store_true", help="Print the symbol instead of writing a PNG")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log encoder decisions")
    return parser


def resolve_payload(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    raise SystemExit("No payload provided")


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")
    payload = resolve_payload(args)
    try:
        qr = encode_text(payload, ErrorCorrection.parse(args.ecc), version=args.version, mask=args.mask)
        if args.terminal:
            sys.stdout.write(generator.matrix_to_text(generator.add_border(qr.get_matrix(), args.margin)))
            return
        options = RenderOptions(
            pixel_size=args.pixel_size,
            margin=args.margin,
            dark_color=parse_color(args.dark),
            light_color=parse_color(args.light),
        )
        args.output.write_bytes(render_png(qr.modules, options))
    except QrError as exc:
        parser.exit(2, f"{parser.prog}: error: {exc.code}: {exc}\n")
    parser.exit(0, f"Saved version {qr.version}-{qr.error_correction.value} QR code to {args.output}\n")


if __name__ == "__main__":
    main()
