import pytest

from qr_raster import galois
from qr_raster.ecc import ReedSolomonGenerator, add_ecc_and_interleave, interleave, split_blocks
from qr_raster.errors import InternalInvariant
from qr_raster.tables import ErrorCorrection


def test_tables() -> None:
    assert galois.EXP_TABLE[0] == 1
    assert galois.EXP_TABLE[8] == 0x1D
    assert galois.EXP_TABLE[255] == 1
    for i in range(255):
        assert galois.LOG_TABLE[galois.EXP_TABLE[i]] == i
    assert sorted(galois.EXP_TABLE[:255]) == list(range(1, 256))


def test_multiply() -> None:
    assert galois.multiply(0, 7) == 0
    assert galois.multiply(1, 0x53) == 0x53
    assert galois.multiply(2, 0x80) == 0x1D
    for a in range(1, 256):
        inverse = galois.EXP_TABLE[255 - galois.LOG_TABLE[a]]
        assert galois.multiply(a, inverse) == 1


def test_generator_polynomial_degree_7() -> None:
    exponents = (0, 87, 229, 146, 149, 238, 102, 21)
    assert galois.generator_polynomial(7) == tuple(galois.EXP_TABLE[e] for e in exponents)


@pytest.mark.parametrize("degree", [0, 255])
def test_generator_polynomial_rejects_degree(degree: int) -> None:
    with pytest.raises(InternalInvariant):
        galois.generator_polynomial(degree)


def test_hello_world_ecc() -> None:
    data = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
    assert ReedSolomonGenerator(10).remainder(data) == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_split_blocks_puts_long_blocks_last() -> None:
    blocks = split_blocks(list(range(62)), 4)
    assert [len(block) for block in blocks] == [15, 15, 16, 16]
    assert blocks[2][0] == 30


def test_interleave() -> None:
    blocks = [([1, 2], [7, 8]), ([3, 4, 5], [9, 10])]
    assert interleave(blocks) == [1, 3, 2, 4, 5, 7, 9, 8, 10]


def test_add_ecc_and_interleave_length() -> None:
    data = list(range(62))
    result = add_ecc_and_interleave(data, 5, ErrorCorrection.Q)
    assert len(result) == 62 + 72
    # first codeword of each block, then the second
    assert result[:8] == [0, 15, 30, 46, 1, 16, 31, 47]
    # the extra codeword of the long blocks follows the shared positions
    assert result[60:62] == [45, 61]


def test_add_ecc_rejects_wrong_length() -> None:
    with pytest.raises(InternalInvariant):
        add_ecc_and_interleave([0] * 15, 1, ErrorCorrection.M)
