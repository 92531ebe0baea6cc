"""
Regional size conversion over a fixed reference chart.

normalize() turns a size in any supported system into a canonical inner
circumference; derive_all() expresses that circumference in every system;
nearest_match() finds the closest chart row and the signed deviation from it.
"""

from .engine import convert, derive_all, nearest_match, normalize
from .errors import (
    EmptyInputError,
    ErrorKind,
    InvalidMagnitudeError,
    SizingError,
    UnrecognizedCodeError,
)
from .interpolation import interpolate
from .parsing import parse_input, parse_length_mm, parse_number
from .systems import SizeSystem, SystemKind, SystemRegistry, get_registry
from .table import CIRCUMFERENCE_TOLERANCE_MM, RING_SIZES, ReferenceTable, get_ring_table
from .types import (
    CanonicalQuantity,
    Circumference,
    ConversionResult,
    Diameter,
    LetterScale,
    NearestMatch,
    NumericScale,
    ReferenceRow,
    RegionalScale,
    SizeInput,
)

__all__ = [
    # types
    "CanonicalQuantity",
    "Circumference",
    "ConversionResult",
    "Diameter",
    "LetterScale",
    "NearestMatch",
    "NumericScale",
    "ReferenceRow",
    "RegionalScale",
    "SizeInput",
    "SizeSystem",
    "SystemKind",
    # errors
    "ErrorKind",
    "SizingError",
    "EmptyInputError",
    "InvalidMagnitudeError",
    "UnrecognizedCodeError",
    # reference data
    "CIRCUMFERENCE_TOLERANCE_MM",
    "RING_SIZES",
    "ReferenceTable",
    "SystemRegistry",
    "get_registry",
    "get_ring_table",
    # engine
    "convert",
    "derive_all",
    "interpolate",
    "nearest_match",
    "normalize",
    # parsing
    "parse_input",
    "parse_length_mm",
    "parse_number",
]
