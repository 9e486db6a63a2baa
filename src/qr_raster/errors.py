"""Error types raised by the QR encoding engine."""

from __future__ import annotations


class QrError(Exception):
    """Base class for every error the engine reports to its caller."""

    code = "QrError"


class InvalidInput(QrError, ValueError):
    code = "InvalidInput"


class CapacityExceeded(QrError, ValueError):
    """The payload does not fit in any allowed version at the requested level."""

    code = "CapacityExceeded"

    def __init__(self, message: str, required_bits: int = 0, capacity_bits: int = 0) -> None:
        super().__init__(message)
        self.required_bits = required_bits
        self.capacity_bits = capacity_bits


class InvalidOption(QrError, ValueError):
    code = "InvalidOption"


class InternalInvariant(QrError, RuntimeError):
    """A static table or derived size disagreed with itself; this is a bug."""

    code = "InternalInvariant"
