import pytest

from qr_raster.errors import InvalidOption
from qr_raster.masking import (
    MASK_PATTERNS,
    apply_mask,
    check_mask,
    choose_mask,
    draw_format_bits,
    draw_version_bits,
    format_bits,
    penalty_balance,
    penalty_blocks,
    penalty_finder_like,
    penalty_runs,
    penalty_score,
    version_bits,
)
from qr_raster.matrix import Cell, build_function_patterns, place_codewords
from qr_raster.tables import ErrorCorrection


@pytest.fixture
def filled_grid():
    grid = build_function_patterns(2)
    place_codewords(grid, [(i * 37) & 0xFF for i in range(44)])
    return grid


@pytest.mark.parametrize("mask", range(8))
def test_mask_is_its_own_inverse(filled_grid, mask: int) -> None:
    original = filled_grid.modules[:]
    apply_mask(filled_grid, mask)
    assert filled_grid.modules != original
    apply_mask(filled_grid, mask)
    assert filled_grid.modules == original


@pytest.mark.parametrize("mask", range(8))
def test_mask_leaves_function_cells_alone(filled_grid, mask: int) -> None:
    masked = filled_grid.copy()
    apply_mask(masked, mask)
    for i, cell in enumerate(filled_grid.cells):
        if cell is not Cell.DATA:
            assert masked.modules[i] == filled_grid.modules[i]


def test_mask_formulas_at_origin_row() -> None:
    assert [int(MASK_PATTERNS[m](0, 0)) for m in range(8)] == [1] * 8
    assert [int(MASK_PATTERNS[m](1, 2)) for m in range(8)] == [0, 0, 0, 1, 1, 0, 1, 0]


def test_all_dark_penalties() -> None:
    rows = [[True] * 21 for _ in range(21)]
    assert penalty_runs(rows) == 42 * (3 + 16)
    assert penalty_blocks(rows) == 20 * 20 * 3
    assert penalty_finder_like(rows) == 0
    assert penalty_balance(rows) == 100


def test_balanced_grid_has_no_balance_penalty() -> None:
    rows = [[(r + c) % 2 == 0 for c in range(20)] for r in range(20)]
    assert penalty_balance(rows) == 0
    assert penalty_runs(rows) == 0
    assert penalty_blocks(rows) == 0


def test_balance_steps_by_five_percent() -> None:
    # 11 of 20 dark is 55%: exactly one step
    assert penalty_balance([[True] * 11 + [False] * 9]) == 10
    assert penalty_balance([[True] * 10 + [False] * 10]) == 0


def test_run_penalty_grows_with_length() -> None:
    assert penalty_runs([[True] * 4 + [False]]) == 0
    assert penalty_runs([[True] * 5 + [False]]) == 3
    assert penalty_runs([[True] * 7 + [False]]) == 5


def test_finder_like_penalty() -> None:
    pattern = [True, False, True, True, True, False, True]
    assert penalty_finder_like([pattern + [False] * 4]) == 40
    assert penalty_finder_like([[False] * 4 + pattern]) == 40
    assert penalty_finder_like([[False] * 4 + pattern + [False] * 4]) == 80
    assert penalty_finder_like([pattern]) == 0


def test_choose_mask_scores_with_format_bits(filled_grid) -> None:
    penalties = []
    candidates = []
    for mask in range(8):
        candidate = filled_grid.copy()
        apply_mask(candidate, mask)
        draw_format_bits(candidate, ErrorCorrection.M, mask)
        penalties.append(penalty_score(candidate.rows()))
        candidates.append(candidate)
    chosen, masked = choose_mask(filled_grid, ErrorCorrection.M)
    assert chosen == penalties.index(min(penalties))
    assert masked.modules == candidates[chosen].modules


def test_choose_mask_forced(filled_grid) -> None:
    chosen, masked = choose_mask(filled_grid, ErrorCorrection.Q, 5)
    assert chosen == 5
    expected = filled_grid.copy()
    apply_mask(expected, 5)
    draw_format_bits(expected, ErrorCorrection.Q, 5)
    assert masked.modules == expected.modules
    with pytest.raises(InvalidOption):
        choose_mask(filled_grid, ErrorCorrection.Q, 8)


@pytest.mark.parametrize("mask", [-1, 8, True, None])
def test_check_mask(mask) -> None:
    with pytest.raises(InvalidOption):
        check_mask(mask)


@pytest.mark.parametrize(
    "level, mask, expected",
    [
        (ErrorCorrection.L, 0, 0b111011111000100),
        (ErrorCorrection.L, 4, 0b110011000101111),
        (ErrorCorrection.M, 0, 0b101010000010010),
        (ErrorCorrection.Q, 0, 0b011010101011111),
        (ErrorCorrection.H, 0, 0b001011010001001),
    ],
)
def test_format_bits(level: ErrorCorrection, mask: int, expected: int) -> None:
    assert format_bits(level, mask) == expected


def test_version_bits() -> None:
    assert version_bits(7) == 0x07C94
    assert version_bits(40) == 0x28C69


def test_format_bits_are_drawn_twice() -> None:
    grid = build_function_patterns(1)
    draw_format_bits(grid, ErrorCorrection.M, 0)
    size = grid.size
    first = [grid.get(r, 8) for r in (0, 1, 2, 3, 4, 5, 7, 8)] + [grid.get(8, c) for c in (7, 5, 4, 3, 2, 1, 0)]
    second = [grid.get(8, size - 1 - i) for i in range(8)] + [grid.get(size - 7 + i, 8) for i in range(7)]
    bits = [bool((0b101010000010010 >> i) & 1) for i in range(15)]
    assert first == bits
    assert second == bits
    assert grid.get(size - 8, 8)


def test_version_bits_drawn_only_from_version_7() -> None:
    grid = build_function_patterns(6)
    before = grid.modules[:]
    draw_version_bits(grid)
    assert grid.modules == before

    grid = build_function_patterns(7)
    draw_version_bits(grid)
    size = grid.size
    bits = [bool((0x07C94 >> i) & 1) for i in range(18)]
    assert [grid.get(i // 3, size - 11 + i % 3) for i in range(18)] == bits
    assert [grid.get(size - 11 + i % 3, i // 3) for i in range(18)] == bits
