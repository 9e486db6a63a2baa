"""Mode classification and version selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .errors import CapacityExceeded, InvalidInput, InvalidOption
from .tables import MAX_VERSION, MIN_VERSION, ErrorCorrection, check_version, data_codewords

logger = logging.getLogger(__name__)

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_NUMERIC = frozenset("0123456789")
_ALPHANUMERIC = frozenset(ALPHANUMERIC_CHARSET)


class Mode(Enum):
    NUMERIC = (0b0001, (10, 12, 14))
    ALPHANUMERIC = (0b0010, (9, 11, 13))
    BYTE = (0b0100, (8, 16, 16))

    def __init__(self, indicator: int, count_bits: Tuple[int, int, int]) -> None:
        self.indicator = indicator
        self._count_bits = count_bits

    def count_bits(self, version: int) -> int:
        """Width of the character count indicator for ``version``."""
        return self._count_bits[(version + 7) // 17]

    def accepts(self, text: str) -> bool:
        if self is Mode.NUMERIC:
            return all(ch in _NUMERIC for ch in text)
        if self is Mode.ALPHANUMERIC:
            return all(ch in _ALPHANUMERIC for ch in text)
        return True


@dataclass(frozen=True)
class Segment:
    mode: Mode
    data: Union[str, bytes]

    @property
    def char_count(self) -> int:
        return len(self.data)

    def payload_bits(self) -> int:
        count = self.char_count
        if self.mode is Mode.NUMERIC:
            return count // 3 * 10 + (0, 4, 7)[count % 3]
        if self.mode is Mode.ALPHANUMERIC:
            return count // 2 * 11 + (count % 2) * 6
        return count * 8

    def bit_length(self, version: int) -> int:
        return 4 + self.mode.count_bits(version) + self.payload_bits()


@dataclass(frozen=True)
class Plan:
    segment: Segment
    version: int
    level: ErrorCorrection

    @property
    def mode(self) -> Mode:
        return self.segment.mode


def classify(text: str) -> Mode:
    """Return the narrowest mode able to carry ``text``."""
    if text and Mode.NUMERIC.accepts(text):
        return Mode.NUMERIC
    if text and Mode.ALPHANUMERIC.accepts(text):
        return Mode.ALPHANUMERIC
    return Mode.BYTE


def make_segment(text: str, mode: Optional[Mode] = None) -> Segment:
    if not isinstance(text, str):
        raise InvalidInput(f"text must be a string, got {type(text).__name__}")
    if not text:
        raise InvalidInput("text must not be empty")
    if mode is None:
        mode = classify(text)
    elif not mode.accepts(text):
        raise InvalidInput(f"text cannot be encoded in {mode.name.lower()} mode")
    if mode is Mode.BYTE:
        try:
            return Segment(mode, text.encode("utf-8"))
        except UnicodeEncodeError as exc:
            raise InvalidInput(f"text contains a code point that cannot be encoded: {exc.reason}") from exc
    return Segment(mode, text)


def choose_version(segment: Segment, level: ErrorCorrection, min_version: int = MIN_VERSION) -> int:
    for version in range(min_version, MAX_VERSION + 1):
        if segment.bit_length(version) <= data_codewords(version, level) * 8:
            return version
    required = segment.bit_length(MAX_VERSION)
    capacity = data_codewords(MAX_VERSION, level) * 8
    raise CapacityExceeded(
        f"data needs {required} bits but version {MAX_VERSION}-{level.value} holds {capacity}",
        required_bits=required,
        capacity_bits=capacity,
    )


def analyze(
    text: str,
    level: ErrorCorrection = ErrorCorrection.M,
    version: Optional[int] = None,
    mode: Optional[Mode] = None,
) -> Plan:
    return plan_segment(make_segment(text, mode), level, version)


def plan_segment(segment: Segment, level: ErrorCorrection, version: Optional[int] = None) -> Plan:
    """Pick the smallest fitting version, or check that a fixed ``version`` fits."""
    if version is None:
        chosen = choose_version(segment, level)
    else:
        chosen = check_version(version)
        required = segment.bit_length(chosen)
        capacity = data_codewords(chosen, level) * 8
        if required > capacity:
            raise CapacityExceeded(
                f"data needs {required} bits but version {chosen}-{level.value} holds {capacity}",
                required_bits=required,
                capacity_bits=capacity,
            )
    logger.debug("%s mode, %d characters, version %d-%s", segment.mode.name, segment.char_count, chosen, level.value)
    return Plan(segment, chosen, level)


def parse_mode(value: Optional[str]) -> Optional[Mode]:
    if value is None:
        return None
    try:
        return Mode[value.strip().upper()]
    except KeyError as exc:
        raise InvalidOption(f"unknown mode: {value!r}") from exc
