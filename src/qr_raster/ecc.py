"""Reed-Solomon error correction and block interleaving."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from . import galois
from .errors import InternalInvariant
from .tables import ErrorCorrection, block_layout, data_codewords


class ReedSolomonGenerator:
    def __init__(self, degree: int):
        self.degree = degree
        self.coefficients = galois.generator_polynomial(degree)

    def remainder(self, data: Sequence[int]) -> List[int]:
        """Return the EC codewords for ``data``, i.e. ``data * x^degree mod g(x)``."""
        result = [0] * self.degree
        for byte in data:
            factor = byte ^ result[0]
            result = result[1:] + [0]
            if factor:
                for i in range(self.degree):
                    result[i] ^= galois.multiply(self.coefficients[i + 1], factor)
        return result


def split_blocks(data: Sequence[int], num_blocks: int) -> List[List[int]]:
    """Split data codewords into short blocks followed by blocks one codeword longer."""
    short_len = len(data) // num_blocks
    num_long = len(data) % num_blocks
    blocks = []
    k = 0
    for i in range(num_blocks):
        length = short_len + (1 if i >= num_blocks - num_long else 0)
        blocks.append(list(data[k:k + length]))
        k += length
    return blocks


def interleave(blocks: Sequence[Tuple[Sequence[int], Sequence[int]]]) -> List[int]:
    result: List[int] = []
    max_data = max(len(data) for data, _ in blocks)
    for i in range(max_data):
        for data, _ in blocks:
            if i < len(data):
                result.append(data[i])
    max_ecc = max(len(ecc) for _, ecc in blocks)
    for i in range(max_ecc):
        for _, ecc in blocks:
            result.append(ecc[i])
    return result


def add_ecc_and_interleave(data: Sequence[int], version: int, level: ErrorCorrection) -> List[int]:
    expected = data_codewords(version, level)
    if len(data) != expected:
        raise InternalInvariant(
            f"expected {expected} data codewords for version {version}-{level.value}, got {len(data)}"
        )
    num_blocks, ecc_len = block_layout(version, level)
    rs = ReedSolomonGenerator(ecc_len)
    blocks = [(block, rs.remainder(block)) for block in split_blocks(data, num_blocks)]
    return interleave(blocks)
