"""Bit stream assembly: mode indicator, count, payload, terminator and padding."""

from __future__ import annotations

from typing import List

from .analyzer import ALPHANUMERIC_CHARSET, Mode, Segment
from .errors import InternalInvariant
from .tables import ErrorCorrection, data_codewords

PAD_CODEWORDS = (0xEC, 0x11)


class BitBuffer:
    def __init__(self) -> None:
        self.bits: List[int] = []

    def __len__(self) -> int:
        return len(self.bits)

    def append_bits(self, value: int, length: int) -> None:
        if length < 0 or value >> length:
            raise InternalInvariant(f"value {value} does not fit in {length} bits")
        for i in reversed(range(length)):
            self.bits.append((value >> i) & 1)

    def append_terminator(self, capacity_bits: int) -> None:
        terminator = min(4, capacity_bits - len(self.bits))
        self.bits.extend([0] * terminator)
        extra = (8 - len(self.bits) % 8) % 8
        self.bits.extend([0] * extra)

    def to_codewords(self) -> List[int]:
        codewords = []
        for i in range(0, len(self.bits), 8):
            chunk = 0
            for bit in self.bits[i:i + 8]:
                chunk = (chunk << 1) | bit
            codewords.append(chunk)
        return codewords


def pad_codewords(count: int) -> List[int]:
    return [PAD_CODEWORDS[i % 2] for i in range(count)]


def append_numeric(bb: BitBuffer, digits: str) -> None:
    for i in range(0, len(digits), 3):
        group = digits[i:i + 3]
        bb.append_bits(int(group), len(group) * 3 + 1)


def append_alphanumeric(bb: BitBuffer, text: str) -> None:
    for i in range(0, len(text) - 1, 2):
        a = ALPHANUMERIC_CHARSET.index(text[i])
        b = ALPHANUMERIC_CHARSET.index(text[i + 1])
        bb.append_bits(45 * a + b, 11)
    if len(text) % 2:
        bb.append_bits(ALPHANUMERIC_CHARSET.index(text[-1]), 6)


def append_bytes(bb: BitBuffer, data: bytes) -> None:
    for b in data:
        bb.append_bits(b, 8)


_PAYLOAD_WRITERS = {
    Mode.NUMERIC: append_numeric,
    Mode.ALPHANUMERIC: append_alphanumeric,
    Mode.BYTE: append_bytes,
}


def append_segment(bb: BitBuffer, segment: Segment, version: int) -> None:
    bb.append_bits(segment.mode.indicator, 4)
    bb.append_bits(segment.char_count, segment.mode.count_bits(version))
    _PAYLOAD_WRITERS[segment.mode](bb, segment.data)


def encode_data_codewords(segment: Segment, version: int, level: ErrorCorrection) -> List[int]:
    """Return exactly ``data_codewords(version, level)`` bytes for ``segment``."""
    capacity_codewords = data_codewords(version, level)
    capacity_bits = capacity_codewords * 8
    bb = BitBuffer()
    append_segment(bb, segment, version)
    if len(bb) > capacity_bits:
        raise InternalInvariant(f"{len(bb)} bits exceed the {capacity_bits}-bit capacity of version {version}-{level.value}")
    bb.append_terminator(capacity_bits)
    codewords = bb.to_codewords()
    codewords.extend(pad_codewords(capacity_codewords - len(codewords)))
    if len(codewords) != capacity_codewords:
        raise InternalInvariant(f"padded stream has {len(codewords)} codewords, expected {capacity_codewords}")
    return codewords
