"""GF(256) arithmetic over the QR primitive polynomial x^8 + x^4 + x^3 + x^2 + 1."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Tuple

from .errors import InternalInvariant

PRIMITIVE_POLYNOMIAL = 0x11D
GENERATOR = 0x02


def _build_tables() -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    exp = [0] * 512
    log = [0] * 256
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLYNOMIAL
    # Doubled so that log[a] + log[b] never needs a modulo.
    for i in range(255, 512):
        exp[i] = exp[i - 255]
    return tuple(exp), tuple(log)


EXP_TABLE, LOG_TABLE = _build_tables()


def multiply(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[a] + LOG_TABLE[b]]


def power(exponent: int) -> int:
    """Return ``2 ** exponent`` in the field."""
    return EXP_TABLE[exponent % 255]


def poly_multiply(p: Tuple[int, ...], q: Tuple[int, ...]) -> List[int]:
    result = [0] * (len(p) + len(q) - 1)
    for i, a in enumerate(p):
        for j, b in enumerate(q):
            result[i + j] ^= multiply(a, b)
    return result


@lru_cache(maxsize=None)
def generator_polynomial(degree: int) -> Tuple[int, ...]:
    """Coefficients of prod(x - 2^i, i < degree), highest power first."""
    if not 1 <= degree <= 254:
        raise InternalInvariant(f"generator polynomial degree out of range: {degree}")
    coefficients: Tuple[int, ...] = (1,)
    for i in range(degree):
        coefficients = tuple(poly_multiply(coefficients, (1, power(i))))
    return coefficients
