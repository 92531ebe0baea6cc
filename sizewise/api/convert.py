"""
Public size conversion API for presentation layers.

convert_size() parses a raw form value for a named system, converts it with
the sizing engine and returns a ConversionReport whether or not the input was
acceptable, so a form can show either the converted sizes or a field-level
message keyed by ErrorKind.

Unknown system names are programming errors and raise KeyError.
"""

from __future__ import annotations

from dataclasses import dataclass

from sizewise.sizing.engine import derive_all, normalize
from sizewise.sizing.errors import ErrorKind, SizingError
from sizewise.sizing.parsing import parse_input
from sizewise.sizing.systems import SystemKind, SystemRegistry, get_registry
from sizewise.sizing.table import ReferenceTable
from sizewise.sizing.types import ConversionResult, ReferenceRow
from sizewise.utilities.tolerance import FitDirection, MatchPrecision, classify_deviation

# The widget's "Example: US 7" button.
EXAMPLE_INPUT: tuple[str, str] = ("us", "7")


@dataclass(frozen=True)
class ConversionReport:
    """Outcome of converting one form value.

    Attributes:
        passed: True when the input was accepted and converted.
        result: Every system's value, or None if the input was rejected.
        error_kind: Why the input was rejected, or None.
        error_message: Default human-readable message for error_kind, or None.
        closest_standard: Nearest chart size, e.g. "7 (UK N)", or None.
        fit: Whether the input runs over, under or exactly at closest_standard.
        deviation_text: Signed deviation from closest_standard, e.g. "+0.3 mm over".
    """

    passed: bool
    result: ConversionResult | None
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    closest_standard: str | None = None
    fit: FitDirection | None = None
    deviation_text: str | None = None


def convert_size(
    system: str,
    raw: str | float | None,
    table: ReferenceTable | None = None,
    precision: MatchPrecision = MatchPrecision.MEDIUM,
    registry: SystemRegistry | None = None,
) -> ConversionReport:
    """
    Convert a raw value typed for *system* into every supported system.

    Parameters
    ----------
    system:
        System id or alias, e.g. "us", "uk", "india", "eu", "circumference".
    raw:
        The value as typed ("7", "6,5", "n", "54.4 mm") or a number.
    table:
        Reference chart to convert against; defaults to the ring-size chart.
    precision:
        Band within which the deviation from the nearest size counts as exact.
    registry:
        System definitions; defaults to the shipped registry.

    Returns
    -------
    ConversionReport
        Always returned for acceptable system names; ``passed`` is False when
        the value was rejected.

    Raises
    ------
    KeyError
        If *system* names no known system.
    """
    if registry is None:
        registry = get_registry()

    try:
        size_input = parse_input(system, raw, registry)
        quantity = normalize(size_input, table)
    except SizingError as exc:
        return ConversionReport(
            passed=False,
            result=None,
            error_kind=exc.kind,
            error_message=str(exc),
        )

    result = derive_all(quantity, table, registry)
    delta = result.nearest.signed_delta_mm
    fit = classify_deviation(delta, precision)
    return ConversionReport(
        passed=True,
        result=result,
        closest_standard=format_closest_standard(result.nearest.row, registry),
        fit=fit,
        deviation_text=format_deviation(delta, fit),
    )


def format_closest_standard(row: ReferenceRow, registry: SystemRegistry | None = None) -> str:
    """Label a chart row by its numeric and letter sizes, e.g. "7.5 (UK O)"."""
    if registry is None:
        registry = get_registry()
    letter_label = registry.by_kind(SystemKind.LETTER)[0].label
    return f"{row.numeric_scale:g} ({letter_label} {row.letter_scale})"


def format_deviation(signed_delta_mm: float, fit: FitDirection) -> str:
    """Render a signed deviation with one decimal, e.g. "-0.3 mm under"."""
    # Adding 0.0 turns a rounded -0.0 into 0.0.
    shown = round(signed_delta_mm, 1) + 0.0
    if fit is FitDirection.EXACT:
        return f"{shown:+.1f} mm (exact fit)"
    return f"{shown:+.1f} mm {fit.value}"
