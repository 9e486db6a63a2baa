"""Raster rendering of module matrices with Pillow."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw

from .errors import InvalidOption

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
DEFAULT_PIXEL_SIZE = 8
DEFAULT_MARGIN = 2


def parse_color(value: object) -> Color:
    """Return an RGB triple from a triple or any colour string Pillow understands."""
    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value.strip())
        except ValueError as exc:
            raise InvalidOption(f"unknown colour: {value!r}") from exc
        return (rgb[0], rgb[1], rgb[2])
    if isinstance(value, (list, tuple)) and len(value) == 3:
        if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
            return (value[0], value[1], value[2])
    raise InvalidOption(f"colour must be an RGB triple or a colour string, got {value!r}")


def _check_int(name: str, value: object, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOption(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidOption(f"{name} must be at least {minimum}, got {value}")


@dataclass(frozen=True)
class RenderOptions:
    pixel_size: int = DEFAULT_PIXEL_SIZE
    margin: int = DEFAULT_MARGIN
    dark_color: Color = BLACK
    light_color: Color = WHITE

    def __post_init__(self) -> None:
        _check_int("pixel_size", self.pixel_size, 1)
        _check_int("margin", self.margin, 0)
        object.__setattr__(self, "dark_color", parse_color(self.dark_color))
        object.__setattr__(self, "light_color", parse_color(self.light_color))

    def image_side(self, modules: int) -> int:
        return (modules + 2 * self.margin) * self.pixel_size


def pixel_size_for_width(modules: int, margin: int, width: int) -> int:
    """Largest whole module scale whose image is no wider than ``width``."""
    _check_int("width", width, 1)
    return max(1, width // (modules + 2 * margin))


def render_image(matrix: Sequence[Sequence[bool]], options: RenderOptions = RenderOptions()) -> Image.Image:
    size = len(matrix)
    if size == 0:
        raise InvalidOption("matrix must not be empty")
    box = options.pixel_size
    side = options.image_side(size)
    image = Image.new("RGB", (side, side), options.light_color)
    draw = ImageDraw.Draw(image)
    offset = options.margin * box
    for y, row in enumerate(matrix):
        for x, cell in enumerate(row):
            if not cell:
                continue
            left = offset + x * box
            top = offset + y * box
            draw.rectangle((left, top, left + box - 1, top + box - 1), fill=options.dark_color)
    return image


def render_png(matrix: Sequence[Sequence[bool]], options: RenderOptions = RenderOptions()) -> bytes:
    buffer = io.BytesIO()
    render_image(matrix, options).save(buffer, format="PNG")
    return buffer.getvalue()
