"""Presentation-facing conversion API."""

from .convert import (
    EXAMPLE_INPUT,
    ConversionReport,
    convert_size,
    format_closest_standard,
    format_deviation,
)

__all__ = [
    "EXAMPLE_INPUT",
    "ConversionReport",
    "convert_size",
    "format_closest_standard",
    "format_deviation",
]
