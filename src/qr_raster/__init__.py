"""QR Code encoding and PNG rendering toolkit."""

from .errors import CapacityExceeded, InternalInvariant, InvalidInput, InvalidOption, QrError
from .generator import matrix_from_bytes, matrix_from_text, png_from_text
from .render import RenderOptions, render_image, render_png
from .symbol import QrSymbol, encode_binary, encode_text
from .tables import ErrorCorrection

__all__ = [
    "CapacityExceeded",
    "ErrorCorrection",
    "InternalInvariant",
    "InvalidInput",
    "InvalidOption",
    "QrError",
    "QrSymbol",
    "RenderOptions",
    "encode_binary",
    "encode_text",
    "matrix_from_bytes",
    "matrix_from_text",
    "png_from_text",
    "render_image",
    "render_png",
]
