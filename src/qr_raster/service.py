"""Request-level entry point that reports failures as values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import InternalInvariant, InvalidOption, QrError
from .render import pixel_size_for_width, render_png
from .request import QrRequest
from .symbol import QrSymbol, encode_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    image: Optional[bytes] = None
    symbol: Optional[QrSymbol] = None
    error: Optional[QrError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def content_length(self) -> int:
        return len(self.image) if self.image is not None else 0


def generate_png(request: QrRequest, max_image_side: Optional[int] = None) -> GenerationResult:
    """Encode and render ``request``; raises :class:`QrError` on failure."""
    symbol = encode_text(request.text, request.error_correction)
    pixel_size = None
    if request.width is not None:
        pixel_size = pixel_size_for_width(symbol.size, request.margin, request.width)
    options = request.render_options(pixel_size)
    side = options.image_side(symbol.size)
    if max_image_side is not None and side > max_image_side:
        raise InvalidOption(f"image would be {side} pixels wide, the limit is {max_image_side}")
    return GenerationResult(image=render_png(symbol.modules, options), symbol=symbol)


def generate(request: QrRequest, max_image_side: Optional[int] = None) -> GenerationResult:
    try:
        return generate_png(request, max_image_side)
    except InternalInvariant as exc:
        logger.exception("internal error while encoding %d characters", len(request.text))
        return GenerationResult(error=exc)
    except QrError as exc:
        logger.info("rejected request: %s: %s", exc.code, exc)
        return GenerationResult(error=exc)
