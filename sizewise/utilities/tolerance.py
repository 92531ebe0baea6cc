"""
Fit classification for the deviation between a measurement and a chart size.

A measured circumference is only as accurate as the tape or string used to
take it. Deviations inside the precision band are reported as an exact fit;
outside it, the sign tells the caller whether the measurement runs over or
under the nearest standard size.
"""

from __future__ import annotations

from enum import Enum


class MatchPrecision(float, Enum):
    """Half-width (mm) of the band treated as an exact fit."""

    HIGH = 0.1
    MEDIUM = 0.2
    LOW = 0.5


class FitDirection(str, Enum):
    """Where a measurement sits relative to its nearest chart size."""

    EXACT = "exact"
    OVER = "over"
    UNDER = "under"


def classify_deviation(
    signed_delta_mm: float,
    precision: MatchPrecision = MatchPrecision.MEDIUM,
) -> FitDirection:
    """
    Classify a signed deviation (measurement − chart value) in mm.

    Args:
        signed_delta_mm: Positive when the measurement is larger than the chart size.
        precision: Band half-width within which the fit counts as exact.

    Returns:
        EXACT inside the band (boundary inclusive), otherwise OVER or UNDER.
    """
    if abs(signed_delta_mm) <= precision.value:
        return FitDirection.EXACT
    return FitDirection.OVER if signed_delta_mm > 0 else FitDirection.UNDER
