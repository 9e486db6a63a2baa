"""QR data helpers."""

from __future__ import annotations

from typing import List, Sequence

from .render import RenderOptions, render_png
from .symbol import encode_binary, encode_text
from .tables import ErrorCorrection


def matrix_from_text(text: str, ecc: str = "M", border: int = 4) -> List[List[bool]]:
    """Encode ``text`` into a matrix of booleans with a ``border``-module quiet zone."""
    qr = encode_text(text, ErrorCorrection.parse(ecc))
    return add_border(qr.get_matrix(), border)


def matrix_from_bytes(data: bytes, ecc: str = "M", border: int = 4) -> List[List[bool]]:
    qr = encode_binary(data, ErrorCorrection.parse(ecc))
    return add_border(qr.get_matrix(), border)


def png_from_text(text: str, ecc: str = "M", options: RenderOptions = RenderOptions()) -> bytes:
    qr = encode_text(text, ErrorCorrection.parse(ecc))
    return render_png(qr.modules, options)


def add_border(matrix: Sequence[Sequence[bool]], border: int) -> List[List[bool]]:
    if border <= 0:
        return [list(row) for row in matrix]
    size = len(matrix)
    new_size = size + border * 2
    result = [[False] * new_size for _ in range(new_size)]
    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            result[y + border][x + border] = value
    return result


def matrix_to_text(matrix: Sequence[Sequence[bool]], dark: str = "##", light: str = "  ") -> str:
    return "\n".join("".join(dark if cell else light for cell in row) for row in matrix) + "\n"
