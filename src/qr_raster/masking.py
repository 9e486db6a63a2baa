"""Data masking, penalty scoring, and format/version information."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import InvalidOption
from .matrix import Cell, ModuleGrid
from .tables import ErrorCorrection

logger = logging.getLogger(__name__)

MaskFunction = Callable[[int, int], bool]

MASK_PATTERNS: Tuple[MaskFunction, ...] = (
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
)

FORMAT_GENERATOR = 0x537
FORMAT_MASK = 0x5412
VERSION_GENERATOR = 0x1F25

_FINDER_LIKE = (
    (True, False, True, True, True, False, True, False, False, False, False),
    (False, False, False, False, True, False, True, True, True, False, True),
)


def check_mask(mask: int) -> int:
    if isinstance(mask, bool) or not isinstance(mask, int) or not 0 <= mask <= 7:
        raise InvalidOption(f"mask must be an integer between 0 and 7, got {mask!r}")
    return mask


def apply_mask(grid: ModuleGrid, mask: int) -> None:
    """XOR the mask into the data cells; applying the same mask twice is a no-op."""
    func = MASK_PATTERNS[mask]
    size = grid.size
    modules = grid.modules
    cells = grid.cells
    for row in range(size):
        base = row * size
        for col in range(size):
            if cells[base + col] is Cell.DATA and func(row, col):
                modules[base + col] = not modules[base + col]


def _lines(rows: Sequence[Sequence[bool]]) -> List[Sequence[bool]]:
    return list(rows) + [tuple(column) for column in zip(*rows)]


def _penalty_consecutive(line: Sequence[bool]) -> int:
    score = 0
    run_color = None
    run_length = 0
    for color in line:
        if color == run_color:
            run_length += 1
            if run_length == 5:
                score += 3
            elif run_length > 5:
                score += 1
        else:
            run_color = color
            run_length = 1
    return score


def penalty_runs(rows: Sequence[Sequence[bool]]) -> int:
    """N1: ``3 + (run - 5)`` for each row or column run of five or more."""
    return sum(_penalty_consecutive(line) for line in _lines(rows))


def penalty_blocks(rows: Sequence[Sequence[bool]]) -> int:
    """N2: 3 for each 2x2 block of a single colour."""
    score = 0
    for upper, lower in zip(rows, rows[1:]):
        for x in range(len(upper) - 1):
            if upper[x] == upper[x + 1] == lower[x] == lower[x + 1]:
                score += 3
    return score


def _penalty_pattern(line: Sequence[bool]) -> int:
    score = 0
    window = len(_FINDER_LIKE[0])
    for i in range(len(line) - window + 1):
        chunk = tuple(line[i:i + window])
        for pattern in _FINDER_LIKE:
            if chunk == pattern:
                score += 40
    return score


def penalty_finder_like(rows: Sequence[Sequence[bool]]) -> int:
    """N3: 40 for each 1:1:3:1:1 pattern with four light modules on one side."""
    return sum(_penalty_pattern(line) for line in _lines(rows))


def penalty_balance(rows: Sequence[Sequence[bool]]) -> int:
    """N4: 10 for every full 5% the dark ratio strays from 50%."""
    total = sum(len(row) for row in rows)
    dark = sum(sum(row) for row in rows)
    return abs(dark * 100 - total * 50) // (total * 5) * 10


def penalty_score(rows: Sequence[Sequence[bool]]) -> int:
    return penalty_runs(rows) + penalty_blocks(rows) + penalty_finder_like(rows) + penalty_balance(rows)


def _masked_candidate(grid: ModuleGrid, level: ErrorCorrection, mask: int) -> ModuleGrid:
    masked = grid.copy()
    apply_mask(masked, mask)
    draw_format_bits(masked, level, mask)
    draw_version_bits(masked)
    return masked


def choose_mask(grid: ModuleGrid, level: ErrorCorrection, mask: Optional[int] = None) -> Tuple[int, ModuleGrid]:
    """Return the lowest-penalty mask and the finished grid for it.

    Each candidate is scored with its own format and version bits drawn. A
    forced ``mask`` skips scoring.
    """
    if mask is not None:
        return mask, _masked_candidate(grid, level, check_mask(mask))
    best_mask = -1
    best_grid = None
    best_penalty = 0
    for candidate in range(len(MASK_PATTERNS)):
        masked = _masked_candidate(grid, level, candidate)
        penalty = penalty_score(masked.rows())
        logger.debug("mask %d penalty %d", candidate, penalty)
        if best_grid is None or penalty < best_penalty:
            best_mask, best_grid, best_penalty = candidate, masked, penalty
    assert best_grid is not None
    return best_mask, best_grid


def format_bits(level: ErrorCorrection, mask: int) -> int:
    data = (level.format_bits << 3) | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ (FORMAT_GENERATOR if (rem >> 9) & 1 else 0)
    return ((data << 10) | rem) ^ FORMAT_MASK


def version_bits(version: int) -> int:
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ (VERSION_GENERATOR if (rem >> 11) & 1 else 0)
    return (version << 12) | rem


def draw_format_bits(grid: ModuleGrid, level: ErrorCorrection, mask: int) -> None:
    bits = format_bits(level, mask)
    size = grid.size

    def bit(i: int) -> bool:
        return ((bits >> i) & 1) != 0

    # Around the top-left finder.
    for i in range(6):
        grid.set(i, 8, bit(i))
    grid.set(7, 8, bit(6))
    grid.set(8, 8, bit(7))
    grid.set(8, 7, bit(8))
    for i in range(9, 15):
        grid.set(8, 14 - i, bit(i))
    # Split between the top-right and bottom-left finders.
    for i in range(8):
        grid.set(8, size - 1 - i, bit(i))
    for i in range(8, 15):
        grid.set(size - 15 + i, 8, bit(i))


def draw_version_bits(grid: ModuleGrid) -> None:
    if grid.version < 7:
        return
    bits = version_bits(grid.version)
    size = grid.size
    for i in range(18):
        dark = ((bits >> i) & 1) != 0
        a = size - 11 + i % 3
        b = i // 3
        grid.set(b, a, dark)
        grid.set(a, b, dark)
