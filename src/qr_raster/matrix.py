"""Module grid construction: function patterns, reserved areas and codeword placement."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence, Tuple

from .errors import InternalInvariant
from .tables import ALIGNMENT_PATTERN_POSITIONS, raw_data_modules, symbol_size


class Cell(Enum):
    UNSET = 0
    FUNCTION = 1
    DATA = 2
    RESERVED = 3


class ModuleGrid:
    """Square grid stored row-major; ``True`` is a dark module."""

    def __init__(self, version: int) -> None:
        self.version = version
        self.size = symbol_size(version)
        self.modules: List[bool] = [False] * (self.size * self.size)
        self.cells: List[Cell] = [Cell.UNSET] * (self.size * self.size)

    def copy(self) -> "ModuleGrid":
        other = ModuleGrid.__new__(ModuleGrid)
        other.version = self.version
        other.size = self.size
        other.modules = self.modules[:]
        other.cells = self.cells[:]
        return other

    def get(self, row: int, col: int) -> bool:
        return self.modules[row * self.size + col]

    def kind(self, row: int, col: int) -> Cell:
        return self.cells[row * self.size + col]

    def set(self, row: int, col: int, dark: bool) -> None:
        self.modules[row * self.size + col] = dark

    def set_function(self, row: int, col: int, dark: bool) -> None:
        index = row * self.size + col
        self.modules[index] = dark
        self.cells[index] = Cell.FUNCTION

    def reserve(self, row: int, col: int) -> None:
        index = row * self.size + col
        if self.cells[index] is Cell.UNSET:
            self.cells[index] = Cell.RESERVED

    def rows(self) -> List[List[bool]]:
        size = self.size
        return [self.modules[r * size:(r + 1) * size] for r in range(size)]

    def count(self, kind: Cell) -> int:
        return self.cells.count(kind)


_FINDER = (
    (True, True, True, True, True, True, True),
    (True, False, False, False, False, False, True),
    (True, False, True, True, True, False, True),
    (True, False, True, True, True, False, True),
    (True, False, True, True, True, False, True),
    (True, False, False, False, False, False, True),
    (True, True, True, True, True, True, True),
)


def _place_finder(grid: ModuleGrid, top: int, left: int) -> None:
    """Draw a finder with its light separator; off-grid separator cells are skipped."""
    size = grid.size
    for dy in range(-1, 8):
        for dx in range(-1, 8):
            row = top + dy
            col = left + dx
            if not (0 <= row < size and 0 <= col < size):
                continue
            inside = 0 <= dy < 7 and 0 <= dx < 7
            grid.set_function(row, col, inside and _FINDER[dy][dx])


def _place_timing(grid: ModuleGrid) -> None:
    for i in range(8, grid.size - 8):
        grid.set_function(6, i, i % 2 == 0)
        grid.set_function(i, 6, i % 2 == 0)


def alignment_centres(version: int) -> List[Tuple[int, int]]:
    positions = ALIGNMENT_PATTERN_POSITIONS[version - 1]
    if not positions:
        return []
    first, last = positions[0], positions[-1]
    skip = {(first, first), (first, last), (last, first)}
    return [(r, c) for r in positions for c in positions if (r, c) not in skip]


def _place_alignment(grid: ModuleGrid, row: int, col: int) -> None:
    for dy in range(-2, 3):
        for dx in range(-2, 3):
            grid.set_function(row + dy, col + dx, max(abs(dx), abs(dy)) != 1)


def _reserve_format_areas(grid: ModuleGrid) -> None:
    size = grid.size
    for i in range(9):
        grid.reserve(8, i)
        grid.reserve(i, 8)
    for i in range(8):
        grid.reserve(8, size - 1 - i)
        grid.reserve(size - 1 - i, 8)


def _reserve_version_areas(grid: ModuleGrid) -> None:
    size = grid.size
    for i in range(6):
        for j in range(3):
            grid.reserve(i, size - 11 + j)
            grid.reserve(size - 11 + j, i)


def build_function_patterns(version: int) -> ModuleGrid:
    """Return a grid with every non-data cell placed and every data cell tagged."""
    grid = ModuleGrid(version)
    size = grid.size
    _place_finder(grid, 0, 0)
    _place_finder(grid, 0, size - 7)
    _place_finder(grid, size - 7, 0)
    _place_timing(grid)
    for row, col in alignment_centres(version):
        _place_alignment(grid, row, col)
    grid.set_function(size - 8, 8, True)
    _reserve_format_areas(grid)
    if version >= 7:
        _reserve_version_areas(grid)
    grid.cells = [Cell.DATA if cell is Cell.UNSET else cell for cell in grid.cells]
    data_modules = grid.count(Cell.DATA)
    if data_modules != raw_data_modules(version):
        raise InternalInvariant(
            f"version {version} has {data_modules} data modules, expected {raw_data_modules(version)}"
        )
    return grid


def data_module_order(grid: ModuleGrid) -> List[Tuple[int, int]]:
    """Coordinates of the data cells in codeword placement order."""
    size = grid.size
    order = []
    upward = True
    for right in range(size - 1, 0, -2):
        if right <= 6:
            right -= 1
        for offset in range(size):
            row = size - 1 - offset if upward else offset
            for col in (right, right - 1):
                if grid.kind(row, col) is Cell.DATA:
                    order.append((row, col))
        upward = not upward
    return order


def place_codewords(grid: ModuleGrid, codewords: Sequence[int]) -> None:
    order = data_module_order(grid)
    total_bits = len(codewords) * 8
    if total_bits > len(order):
        raise InternalInvariant(f"{total_bits} codeword bits do not fit in {len(order)} data modules")
    for i, (row, col) in enumerate(order[:total_bits]):
        grid.set(row, col, bool((codewords[i >> 3] >> (7 - (i & 7))) & 1))
