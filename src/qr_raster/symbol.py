"""End-to-end symbol encoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from . import masking
from .analyzer import Mode, Plan, Segment, analyze, plan_segment
from .bitstream import encode_data_codewords
from .ecc import add_ecc_and_interleave
from .errors import InvalidInput
from .matrix import build_function_patterns, place_codewords
from .tables import DEFAULT_ERROR_CORRECTION, ErrorCorrection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QrSymbol:
    version: int
    error_correction: ErrorCorrection
    mode: Mode
    mask: int
    modules: Tuple[Tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        return len(self.modules)

    def get_module(self, row: int, col: int) -> bool:
        return self.modules[row][col]

    def get_matrix(self) -> List[List[bool]]:
        return [list(row) for row in self.modules]


def encode_plan(plan: Plan, mask: Optional[int] = None) -> QrSymbol:
    data = encode_data_codewords(plan.segment, plan.version, plan.level)
    codewords = add_ecc_and_interleave(data, plan.version, plan.level)
    grid = build_function_patterns(plan.version)
    place_codewords(grid, codewords)
    chosen, grid = masking.choose_mask(grid, plan.level, mask)
    logger.debug("encoded version %d-%s with mask %d", plan.version, plan.level.value, chosen)
    return QrSymbol(
        version=plan.version,
        error_correction=plan.level,
        mode=plan.mode,
        mask=chosen,
        modules=tuple(tuple(row) for row in grid.rows()),
    )


def encode_text(
    text: str,
    ecc: ErrorCorrection = DEFAULT_ERROR_CORRECTION,
    *,
    version: Optional[int] = None,
    mask: Optional[int] = None,
    mode: Optional[Mode] = None,
) -> QrSymbol:
    """Encode ``text`` in the narrowest mode and smallest version that fit."""
    if mask is not None:
        masking.check_mask(mask)
    plan = analyze(text, ErrorCorrection.parse(ecc), version=version, mode=mode)
    return encode_plan(plan, mask)


def encode_binary(
    data: bytes,
    ecc: ErrorCorrection = DEFAULT_ERROR_CORRECTION,
    *,
    version: Optional[int] = None,
    mask: Optional[int] = None,
) -> QrSymbol:
    if not data:
        raise InvalidInput("data must not be empty")
    if mask is not None:
        masking.check_mask(mask)
    plan = plan_segment(Segment(Mode.BYTE, bytes(data)), ErrorCorrection.parse(ecc), version)
    return encode_plan(plan, mask)
