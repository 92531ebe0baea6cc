"""
Unit conversion between linear measurements and the ring geometry.

All physical dimensions are in millimeters unless otherwise noted.
All functions are pure and hold no state.
"""

from __future__ import annotations

import math

MM_PER_INCH: float = 25.4
MM_PER_CM: float = 10.0


def inches_to_mm(inches: float) -> float:
    """Convert inches to millimeters."""
    return inches * MM_PER_INCH


def mm_to_inches(mm: float) -> float:
    """Convert millimeters to inches."""
    return mm / MM_PER_INCH


def cm_to_mm(cm: float) -> float:
    """Convert centimeters to millimeters."""
    return cm * MM_PER_CM


def diameter_to_circumference(diameter_mm: float) -> float:
    """Inner circumference (mm) of a ring with the given inner diameter."""
    return diameter_mm * math.pi


def circumference_to_diameter(circumference_mm: float) -> float:
    """Inner diameter (mm) of a ring with the given inner circumference."""
    return circumference_mm / math.pi


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round to *places* decimals with halves rounded away from zero.

    Published size charts round 54.5 to 55; the built-in ``round()`` would
    give 54.
    """
    factor = 10**places
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value)
