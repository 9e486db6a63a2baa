"""Parsing of the generation request contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import InvalidInput, InvalidOption
from .render import BLACK, DEFAULT_MARGIN, DEFAULT_PIXEL_SIZE, WHITE, Color, RenderOptions, parse_color
from .tables import DEFAULT_ERROR_CORRECTION, ErrorCorrection


@dataclass(frozen=True)
class RequestDefaults:
    error_correction: ErrorCorrection = DEFAULT_ERROR_CORRECTION
    pixel_size: int = DEFAULT_PIXEL_SIZE
    margin: int = DEFAULT_MARGIN


@dataclass
class QrRequest:
    text: str
    error_correction: ErrorCorrection = DEFAULT_ERROR_CORRECTION
    pixel_size: int = DEFAULT_PIXEL_SIZE
    margin: int = DEFAULT_MARGIN
    dark_color: Color = BLACK
    light_color: Color = WHITE
    width: Optional[int] = None

    def render_options(self, pixel_size: Optional[int] = None) -> RenderOptions:
        return RenderOptions(
            pixel_size=self.pixel_size if pixel_size is None else pixel_size,
            margin=self.margin,
            dark_color=self.dark_color,
            light_color=self.light_color,
        )

    @staticmethod
    def _parse_int(payload: Mapping[str, object], keys: tuple, default: Optional[int], minimum: int, label: str) -> Optional[int]:
        raw_value = None
        for key in keys:
            if payload.get(key) not in (None, ""):
                raw_value = payload[key]
                break
        if raw_value is None:
            return default
        if isinstance(raw_value, bool):
            raise InvalidOption(f"{label} must be an integer")
        try:
            value = int(raw_value)  # type: ignore[call-overload]
        except (TypeError, ValueError) as exc:
            raise InvalidOption(f"{label} must be an integer") from exc
        if isinstance(raw_value, float) and raw_value != value:
            raise InvalidOption(f"{label} must be an integer")
        if value < minimum:
            raise InvalidOption(f"{label} must be at least {minimum}")
        return value

    @classmethod
    def from_payload(cls, payload: Mapping[str, object], defaults: RequestDefaults = RequestDefaults()) -> "QrRequest":
        raw_text = payload.get("text")
        if raw_text is None:
            raw_text = payload.get("url")
        if raw_text is not None and not isinstance(raw_text, str):
            raise InvalidInput("text must be a string")
        text = raw_text or ""
        if not text.strip():
            raise InvalidInput("text is required")

        error_correction = ErrorCorrection.parse(payload.get("errorCorrectionLevel") or defaults.error_correction)
        pixel_size = cls._parse_int(payload, ("pixelSize",), defaults.pixel_size, 1, "pixelSize")
        margin = cls._parse_int(payload, ("marginModules", "margin"), defaults.margin, 0, "marginModules")
        width = cls._parse_int(payload, ("width", "size"), None, 1, "width")

        return cls(
            text=text,
            error_correction=error_correction,
            pixel_size=pixel_size,  # type: ignore[arg-type]
            margin=margin,  # type: ignore[arg-type]
            dark_color=parse_color(payload.get("darkColor", BLACK)),
            light_color=parse_color(payload.get("lightColor", WHITE)),
            width=width,
        )
