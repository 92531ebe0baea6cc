"""
Piecewise-linear interpolation over a co-monotonic reference table.

One routine serves both directions of conversion: the caller chooses which
row field is the key and which is the value. Targets outside the table's
range are clamped to the boundary row.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Callable, Sequence

from .types import ReferenceRow

logger = logging.getLogger(__name__)

RowField = Callable[[ReferenceRow], float]


def interpolate(
    rows: Sequence[ReferenceRow],
    target: float,
    key: RowField,
    value: RowField,
) -> float:
    """
    Map *target* on the key scale to the value scale.

    Args:
        rows: Non-empty rows sorted ascending on both *key* and *value*.
        target: Position on the key scale.
        key: Field accessor for the scale *target* is expressed in.
        value: Field accessor for the scale to produce.

    Returns:
        ``value(a) + t × (value(b) − value(a))`` for the bracketing rows a, b,
        or the boundary row's value when *target* lies outside the table.
    """
    first, last = rows[0], rows[-1]
    if target <= key(first):
        if target < key(first):
            logger.debug("Clamping %s to lower table bound %s", target, key(first))
        return value(first)
    if target >= key(last):
        if target > key(last):
            logger.debug("Clamping %s to upper table bound %s", target, key(last))
        return value(last)

    # rows[i - 1].key <= target < rows[i].key
    i = bisect_right(rows, target, key=key)
    a, b = rows[i - 1], rows[i]
    t = (target - key(a)) / (key(b) - key(a))
    return value(a) + t * (value(b) - value(a))
