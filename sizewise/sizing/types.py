"""
Core type definitions for the sizing layer.

Input kinds form a closed union (SizeInput); the engine matches on it
exhaustively. Reference rows and results are frozen dataclasses with
fail-fast validation in __post_init__. They are immutable after construction and
safe to share across threads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

from sizewise.utilities.conversion import circumference_to_diameter

from .errors import InvalidMagnitudeError
from .systems import SystemKind, SystemRegistry, get_registry

# ── Reference data ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReferenceRow:
    """
    One calibration point of a size chart.

    The same physical ring expressed in every supported system at once.

    Attributes:
        numeric_scale: Primary numeric size (e.g. US 7.5).
        letter_scale: Letter code (e.g. UK "O"). Stored as written; matched
            case-insensitively.
        linear_diameter: Inner diameter in mm.
        linear_circumference: Inner circumference in mm (≈ diameter × π).
        regional_scales: Additional numeric scales keyed by system id
            (e.g. {"eu": 55, "jp": 15}).
    """

    numeric_scale: float
    letter_scale: str
    linear_diameter: float
    linear_circumference: float
    regional_scales: MappingProxyType[str, float] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        # Accept plain dicts at construction sites and promote to MappingProxyType.
        if isinstance(self.regional_scales, dict):
            object.__setattr__(self, "regional_scales", MappingProxyType(self.regional_scales))
        if not self.letter_scale or not self.letter_scale.strip():
            raise ValueError("letter_scale must be a non-empty code")
        for name in ("linear_diameter", "linear_circumference"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be positive and finite, got {value}")


# ── Input kinds ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Circumference:
    """Inner circumference in mm (the EU convention)."""

    mm: float


@dataclass(frozen=True)
class Diameter:
    """Inner diameter in mm."""

    mm: float


@dataclass(frozen=True)
class NumericScale:
    """Size on the table's primary numeric scale (US)."""

    value: float


@dataclass(frozen=True)
class LetterScale:
    """Size on the table's letter scale (UK / India)."""

    code: str


@dataclass(frozen=True)
class RegionalScale:
    """Size on one of the table's additional numeric scales, named by system id."""

    scale: str
    value: float


SizeInput = Union[Circumference, Diameter, NumericScale, LetterScale, RegionalScale]


# ── Values produced by the engine ──────────────────────────────────────────────


@dataclass(frozen=True)
class CanonicalQuantity:
    """
    Inner circumference in mm that every system is derived from.

    Has no identity beyond its value. Must be positive and finite.
    """

    circumference_mm: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.circumference_mm) or self.circumference_mm <= 0:
            raise InvalidMagnitudeError("circumference in mm", self.circumference_mm)

    @property
    def diameter_mm(self) -> float:
        return circumference_to_diameter(self.circumference_mm)


@dataclass(frozen=True)
class NearestMatch:
    """The chart row closest to a canonical quantity.

    Attributes:
        row: Row whose circumference is closest.
        signed_delta_mm: canonical − row circumference. Positive means the
            measurement runs over the chart size.
    """

    row: ReferenceRow
    signed_delta_mm: float

    @property
    def abs_delta_mm(self) -> float:
        return abs(self.signed_delta_mm)


@dataclass(frozen=True)
class ConversionResult:
    """
    One value per supported system for a single canonical quantity.

    Attributes:
        canonical: The quantity everything below was derived from.
        circumference_mm: Rounded to the circumference system's precision.
        diameter_mm: Rounded to the diameter system's precision.
        numeric_scale: Interpolated primary numeric size (fractions preserved).
        letter_scale: Letter code of the nearest row.
        regional_scales: Interpolated value for each additional scale.
        nearest: Best-fit chart row and signed deviation.
    """

    canonical: CanonicalQuantity
    circumference_mm: float
    diameter_mm: float
    numeric_scale: float
    letter_scale: str
    regional_scales: MappingProxyType[str, float]
    nearest: NearestMatch

    def __post_init__(self) -> None:
        if isinstance(self.regional_scales, dict):
            object.__setattr__(self, "regional_scales", MappingProxyType(self.regional_scales))

    def value_for(self, key: str, registry: SystemRegistry | None = None) -> float | str:
        """
        Return the value for one system.

        *key* may be a registered system id or alias ("us", "uk", "india",
        "eu"), a system kind ("numeric", "letter") or the name of any
        additional scale carried in regional_scales.

        Raises:
            KeyError: If *key* names nothing this result holds.
        """
        if key in self.regional_scales:
            return self.regional_scales[key]
        if registry is None:
            registry = get_registry()
        try:
            system = registry.resolve(key)
        except KeyError:
            kind = key
        else:
            if system.id in self.regional_scales:
                return self.regional_scales[system.id]
            kind = system.kind

        match kind:
            case SystemKind.CIRCUMFERENCE:
                return self.circumference_mm
            case SystemKind.DIAMETER:
                return self.diameter_mm
            case SystemKind.NUMERIC:
                return self.numeric_scale
            case SystemKind.LETTER:
                return self.letter_scale
            case _:
                raise KeyError(f"Unknown system: {key!r}")
