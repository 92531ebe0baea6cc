"""
Error taxonomy for size normalization.

Every user-facing failure is detected while normalizing input and raised as a
SizingError subclass. Each carries a stable ``kind`` so a presentation layer
can map it to a field-level message, plus a readable default message.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class ErrorKind(str, Enum):
    """Stable identifiers for the ways caller input can be rejected."""

    INVALID_MAGNITUDE = "invalid_magnitude"
    UNRECOGNIZED_CODE = "unrecognized_code"
    EMPTY_INPUT = "empty_input"


class SizingError(ValueError):
    """Base class for rejected size input."""

    kind: ErrorKind


class InvalidMagnitudeError(SizingError):
    """Raised when a measurement or scale value is non-finite or not positive."""

    kind = ErrorKind.INVALID_MAGNITUDE

    def __init__(self, label: str, value: object) -> None:
        self.label = label
        self.value = value
        super().__init__(f"Enter a positive number for {label}, got {value!r}")


class UnrecognizedCodeError(SizingError):
    """Raised when a size code matches no chart entry."""

    kind = ErrorKind.UNRECOGNIZED_CODE

    def __init__(self, code: str, accepted: Sequence[str], label: str = "size code") -> None:
        self.code = code
        self.accepted = tuple(accepted)
        super().__init__(
            f"{label} {code!r} not recognized. Use one of: {', '.join(self.accepted)}"
        )


class EmptyInputError(SizingError):
    """Raised when the caller supplied no usable value at all."""

    kind = ErrorKind.EMPTY_INPUT

    def __init__(self, label: str | None = None) -> None:
        self.label = label
        if label is None:
            super().__init__("Please enter a value.")
        else:
            super().__init__(f"Please enter a value for {label}.")
