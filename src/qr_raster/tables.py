"""Static lookup tables from ISO/IEC 18004, built once at import."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from .errors import InternalInvariant, InvalidOption

MIN_VERSION = 1
MAX_VERSION = 40


class ErrorCorrection(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self]

    @property
    def format_bits(self) -> int:
        return _FORMAT_BITS[self]

    @classmethod
    def parse(cls, value: object) -> "ErrorCorrection":
        """Accept a member, a level letter, or a long name like ``"medium"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            key = _LONG_NAMES.get(key, key)
            try:
                return cls(key)
            except ValueError:
                pass
        raise InvalidOption(f"unknown error correction level: {value!r}")


_ORDINALS = {ErrorCorrection.L: 0, ErrorCorrection.M: 1, ErrorCorrection.Q: 2, ErrorCorrection.H: 3}
_FORMAT_BITS = {ErrorCorrection.L: 1, ErrorCorrection.M: 0, ErrorCorrection.Q: 3, ErrorCorrection.H: 2}
_LONG_NAMES = {"LOW": "L", "MEDIUM": "M", "QUARTILE": "Q", "HIGH": "H"}

DEFAULT_ERROR_CORRECTION = ErrorCorrection.M

# Total error correction codewords per symbol, indexed [version - 1][level ordinal].
ECC_CODEWORDS = (
    (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 36, 44), (20, 36, 52, 64),
    (26, 48, 72, 88), (36, 64, 96, 112), (40, 72, 108, 130), (48, 88, 132, 156),
    (60, 110, 160, 192), (72, 130, 192, 224), (80, 150, 224, 264), (96, 176, 260, 308),
    (104, 198, 288, 352), (120, 216, 320, 384), (132, 240, 360, 432), (144, 280, 408, 480),
    (168, 308, 448, 532), (180, 338, 504, 588), (196, 364, 546, 650), (224, 416, 600, 700),
    (224, 442, 644, 750), (252, 476, 690, 816), (270, 504, 750, 900), (300, 560, 810, 960),
    (312, 588, 870, 1050), (336, 644, 952, 1110), (360, 700, 1020, 1200), (390, 728, 1050, 1260),
    (420, 784, 1140, 1350), (450, 812, 1200, 1440), (480, 868, 1290, 1530), (510, 924, 1350, 1620),
    (540, 980, 1440, 1710), (570, 1036, 1530, 1800), (570, 1064, 1590, 1890), (600, 1120, 1680, 1980),
    (630, 1204, 1770, 2100), (660, 1260, 1860, 2220), (720, 1316, 1950, 2310), (750, 1372, 2040, 2430),
)

NUM_ERROR_CORRECTION_BLOCKS = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
    (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
    (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
    (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
    (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
    (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
    (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
    (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81),
)

# Alignment pattern centre coordinates, shared by rows and columns.
ALIGNMENT_PATTERN_POSITIONS = (
    (), (6, 18), (6, 22), (6, 26), (6, 30), (6, 34),
    (6, 22, 38), (6, 24, 42), (6, 26, 46), (6, 28, 50), (6, 30, 54), (6, 32, 58), (6, 34, 62),
    (6, 26, 46, 66), (6, 26, 48, 70), (6, 26, 50, 74), (6, 30, 54, 78), (6, 30, 56, 82),
    (6, 30, 58, 86), (6, 34, 62, 90),
    (6, 28, 50, 72, 94), (6, 26, 50, 74, 98), (6, 30, 54, 78, 102), (6, 28, 54, 80, 106),
    (6, 32, 58, 84, 110), (6, 30, 58, 86, 114), (6, 34, 62, 90, 118),
    (6, 26, 50, 74, 98, 122), (6, 30, 54, 78, 102, 126), (6, 26, 52, 78, 104, 130),
    (6, 30, 56, 82, 108, 134), (6, 34, 60, 86, 112, 138), (6, 30, 58, 86, 114, 142),
    (6, 34, 62, 90, 118, 146),
    (6, 30, 54, 78, 102, 126, 150), (6, 24, 50, 76, 102, 128, 154), (6, 28, 54, 80, 106, 132, 158),
    (6, 32, 58, 84, 110, 136, 162), (6, 26, 54, 82, 110, 138, 166), (6, 30, 58, 86, 114, 142, 170),
)


def check_version(version: int) -> int:
    if isinstance(version, bool) or not isinstance(version, int):
        raise InvalidOption(f"version must be an integer, got {version!r}")
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise InvalidOption(f"version must be between {MIN_VERSION} and {MAX_VERSION}, got {version}")
    return version


def symbol_size(version: int) -> int:
    return version * 4 + 17


def raw_data_modules(version: int) -> int:
    """Number of modules left for codewords once function patterns are drawn.

    Includes the remainder bits that do not fill a whole codeword.
    """
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def _build_data_codewords() -> Tuple[Tuple[int, ...], ...]:
    table = []
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        total = raw_data_modules(version) // 8
        table.append(tuple(total - ecc for ecc in ECC_CODEWORDS[version - 1]))
    return tuple(table)


DATA_CODEWORDS = _build_data_codewords()


def data_codewords(version: int, level: ErrorCorrection) -> int:
    return DATA_CODEWORDS[version - 1][level.ordinal]


def block_layout(version: int, level: ErrorCorrection) -> Tuple[int, int]:
    """Return ``(num_blocks, ecc_per_block)`` for a version and level."""
    total_ecc = ECC_CODEWORDS[version - 1][level.ordinal]
    num_blocks = NUM_ERROR_CORRECTION_BLOCKS[version - 1][level.ordinal]
    if total_ecc % num_blocks:
        raise InternalInvariant(
            f"{total_ecc} EC codewords do not split into {num_blocks} blocks (version {version}, level {level.value})"
        )
    return num_blocks, total_ecc // num_blocks
