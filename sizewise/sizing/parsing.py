"""
Raw caller input to typed SizeInput.

Form widgets hand over whatever the user typed: "7", "6,5", " o ", "17.3 mm",
"2.1in". parse_input() resolves the system name, turns the text into the
matching SizeInput kind and leaves range checks to normalize().
"""

from __future__ import annotations

import re

from sizewise.utilities.conversion import cm_to_mm, inches_to_mm

from .errors import EmptyInputError, InvalidMagnitudeError
from .systems import SystemKind, SystemRegistry, get_registry
from .types import (
    Circumference,
    Diameter,
    LetterScale,
    NumericScale,
    RegionalScale,
    SizeInput,
)

_UNIT_SUFFIX = re.compile(r"^(?P<number>.*?)\s*(?P<unit>mm|cm|in)\.?$", re.IGNORECASE)


def parse_number(text: str, label: str | None = None) -> float:
    """
    Parse user-typed numeric text, accepting a decimal comma.

    Raises:
        EmptyInputError: *text* is blank.
        InvalidMagnitudeError: *text* is not a number.
    """
    stripped = text.strip()
    if not stripped:
        raise EmptyInputError(label)
    try:
        return float(stripped.replace(",", "."))
    except ValueError:
        raise InvalidMagnitudeError(label or "value", text) from None


def parse_length_mm(text: str, label: str | None = None) -> float:
    """Parse a length with an optional ``mm``, ``cm`` or ``in`` suffix into mm."""
    stripped = text.strip()
    suffixed = _UNIT_SUFFIX.match(stripped)
    if suffixed is None:
        return parse_number(stripped, label)
    number = parse_number(suffixed.group("number"), label)
    match suffixed.group("unit").lower():
        case "cm":
            return cm_to_mm(number)
        case "in":
            return inches_to_mm(number)
        case _:
            return number


def parse_input(
    system: str,
    raw: str | float | None,
    registry: SystemRegistry | None = None,
) -> SizeInput:
    """
    Build the SizeInput for *raw* expressed in *system*.

    Args:
        system: System id or alias (case-insensitive), e.g. "us", "India", "eu".
        raw: The value as typed, or already a number.
        registry: Alternative system registry (defaults to the shipped one).

    Raises:
        KeyError: *system* names no known system.
        EmptyInputError: *raw* is missing or blank.
        InvalidMagnitudeError: A numeric system received non-numeric text.
    """
    if registry is None:
        registry = get_registry()
    size_system = registry.resolve(system)
    label = size_system.label

    if raw is None:
        raise EmptyInputError(label)

    match size_system.kind:
        case SystemKind.LETTER:
            code = str(raw).strip()
            if not code:
                raise EmptyInputError(label)
            return LetterScale(code=code.upper())
        case SystemKind.CIRCUMFERENCE:
            return Circumference(mm=_as_length(raw, label))
        case SystemKind.DIAMETER:
            return Diameter(mm=_as_length(raw, label))
        case SystemKind.NUMERIC:
            return NumericScale(value=_as_number(raw, label))
        case SystemKind.REGIONAL:
            return RegionalScale(scale=size_system.id, value=_as_number(raw, label))


def _as_number(raw: str | float, label: str) -> float:
    if isinstance(raw, str):
        return parse_number(raw, label)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidMagnitudeError(label, raw)
    try:
        return float(raw)
    except OverflowError:
        raise InvalidMagnitudeError(label, raw) from None


def _as_length(raw: str | float, label: str) -> float:
    if isinstance(raw, str):
        return parse_length_mm(raw, label)
    return _as_number(raw, label)
