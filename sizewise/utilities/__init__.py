"""
Shared utilities for the sizewise conversion engine.

Provides the deterministic building blocks used by the sizing engine and the
presentation API: linear unit conversion, diameter/circumference geometry,
chart-style rounding, and fit classification.
"""

from .conversion import (
    MM_PER_CM,
    MM_PER_INCH,
    circumference_to_diameter,
    cm_to_mm,
    diameter_to_circumference,
    inches_to_mm,
    mm_to_inches,
    round_half_up,
)
from .tolerance import FitDirection, MatchPrecision, classify_deviation

__all__ = [
    # types
    "FitDirection",
    "MatchPrecision",
    # conversion
    "MM_PER_CM",
    "MM_PER_INCH",
    "inches_to_mm",
    "mm_to_inches",
    "cm_to_mm",
    "diameter_to_circumference",
    "circumference_to_diameter",
    "round_half_up",
    # tolerance
    "classify_deviation",
]
