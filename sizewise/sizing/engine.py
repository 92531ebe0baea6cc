"""
Conversion engine: normalize any supported size into a canonical inner
circumference, then re-derive every system from it.

    caller ──SizeInput──▶ normalize ──CanonicalQuantity──▶ derive_all ──▶ ConversionResult
                                                      └──▶ nearest_match

All functions are pure: no I/O, no shared mutable state. The only fallible
step is normalize(); derive_all() and nearest_match() accept any valid
CanonicalQuantity and always succeed because a reference table is never
empty.
"""

from __future__ import annotations

import math

from sizewise.utilities.conversion import diameter_to_circumference, round_half_up

from .errors import EmptyInputError, InvalidMagnitudeError, UnrecognizedCodeError
from .interpolation import interpolate
from .parsing import parse_number
from .systems import SystemKind, SystemRegistry, get_registry
from .table import ReferenceTable, get_ring_table
from .types import (
    CanonicalQuantity,
    Circumference,
    ConversionResult,
    Diameter,
    LetterScale,
    NearestMatch,
    NumericScale,
    RegionalScale,
    SizeInput,
)


def normalize(size_input: SizeInput, table: ReferenceTable | None = None) -> CanonicalQuantity:
    """
    Convert a size in any supported system to a canonical circumference.

    Numeric and regional scales are interpolated to a diameter over the
    table and clamped to its first/last row outside the charted range.
    Letter codes must match a row exactly (case-insensitive) and resolve to
    that row's diameter × π.

    Raises:
        EmptyInputError: The value is missing or blank.
        InvalidMagnitudeError: A numeric value is non-finite or not positive.
        UnrecognizedCodeError: A letter code or regional scale name is not in the table.
    """
    if table is None:
        table = get_ring_table()
    rows = table.rows()
    diameter_value = table.key_for("linear_diameter")

    match size_input:
        case Circumference(mm=mm):
            return CanonicalQuantity(_require_magnitude(mm, "circumference in mm"))

        case Diameter(mm=mm):
            diameter_mm = _require_magnitude(mm, "diameter in mm")
            return CanonicalQuantity(diameter_to_circumference(diameter_mm))

        case NumericScale(value=value):
            size = _require_magnitude(value, "numeric size")
            diameter_mm = interpolate(
                rows, size, key=table.key_for("numeric_scale"), value=diameter_value
            )
            return CanonicalQuantity(diameter_to_circumference(diameter_mm))

        case RegionalScale(scale=scale, value=value):
            if scale not in table.regional_scale_names:
                raise UnrecognizedCodeError(
                    scale, table.regional_scale_names, label="regional scale"
                )
            size = _require_magnitude(value, f"{scale} size")
            diameter_mm = interpolate(rows, size, key=table.key_for(scale), value=diameter_value)
            return CanonicalQuantity(diameter_to_circumference(diameter_mm))

        case LetterScale(code=code):
            if code is None or not str(code).strip():
                raise EmptyInputError("size code")
            row = table.find_letter(str(code))
            if row is None:
                raise UnrecognizedCodeError(str(code), table.letter_codes(), label="letter size")
            return CanonicalQuantity(diameter_to_circumference(row.linear_diameter))

        case _:
            raise TypeError(f"Unsupported size input: {size_input!r}")


def derive_all(
    quantity: CanonicalQuantity,
    table: ReferenceTable | None = None,
    registry: SystemRegistry | None = None,
) -> ConversionResult:
    """
    Express *quantity* in every system the table supports.

    Circumference and diameter come straight from the quantity; the numeric
    and regional scales are interpolated over diameter; the letter code is
    the nearest row's. Values are rounded half-up to the precision each
    system declares in the registry. Regional scales the registry does not
    know are reported unrounded.
    """
    if table is None:
        table = get_ring_table()
    if registry is None:
        registry = get_registry()
    rows = table.rows()
    diameter_mm = quantity.diameter_mm
    by_diameter = table.key_for("linear_diameter")

    numeric = interpolate(rows, diameter_mm, key=by_diameter, value=table.key_for("numeric_scale"))

    regional: dict[str, float] = {}
    for name in table.regional_scale_names:
        raw = interpolate(rows, diameter_mm, key=by_diameter, value=table.key_for(name))
        system = registry.find(name)
        if system is not None and system.kind is SystemKind.REGIONAL:
            raw = round_half_up(raw, system.precision)
        regional[name] = raw

    nearest = nearest_match(quantity, table)

    return ConversionResult(
        canonical=quantity,
        circumference_mm=round_half_up(
            quantity.circumference_mm, _precision(registry, SystemKind.CIRCUMFERENCE)
        ),
        diameter_mm=round_half_up(diameter_mm, _precision(registry, SystemKind.DIAMETER)),
        numeric_scale=round_half_up(numeric, _precision(registry, SystemKind.NUMERIC)),
        letter_scale=nearest.row.letter_scale,
        regional_scales=regional,
        nearest=nearest,
    )


def nearest_match(quantity: CanonicalQuantity, table: ReferenceTable | None = None) -> NearestMatch:
    """
    Find the row whose circumference is closest to *quantity*.

    Scans the whole table. When two rows are equally close the earlier
    (smaller) row wins.
    """
    if table is None:
        table = get_ring_table()
    circumference = quantity.circumference_mm
    rows = table.rows()

    best = rows[0]
    best_diff = abs(circumference - best.linear_circumference)
    for row in rows[1:]:
        diff = abs(circumference - row.linear_circumference)
        if diff < best_diff:
            best, best_diff = row, diff
    return NearestMatch(row=best, signed_delta_mm=circumference - best.linear_circumference)


def convert(size_input: SizeInput, table: ReferenceTable | None = None) -> ConversionResult:
    """normalize() followed by derive_all() against the same table."""
    return derive_all(normalize(size_input, table), table)


# ── Helpers ────────────────────────────────────────────────────────────────────


def _require_magnitude(value: object, label: str) -> float:
    if value is None:
        raise EmptyInputError(label)
    if isinstance(value, str):
        number = parse_number(value, label)
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMagnitudeError(label, value)
    else:
        try:
            number = float(value)
        except OverflowError:
            raise InvalidMagnitudeError(label, value) from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidMagnitudeError(label, value)
    return number


def _precision(registry: SystemRegistry, kind: SystemKind) -> int:
    return registry.by_kind(kind)[0].precision
