"""
Reference table: the fixed calibration chart every conversion is derived from.

The table is built once at import time and validated before anything can use
it. A chart that is not strictly increasing on every column would make
interpolation meaningless, so ordering violations are programming errors and
fail at startup with a ValueError listing every problem found.

Nothing writes to a table after construction; sharing it across threads is
safe.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator
from operator import attrgetter

from .types import ReferenceRow

# Published charts round diameter and circumference independently.
CIRCUMFERENCE_TOLERANCE_MM: float = 0.2

_CORE_FIELDS: tuple[str, ...] = (
    "numeric_scale",
    "letter_scale",
    "linear_diameter",
    "linear_circumference",
)


class ReferenceTable:
    """
    Immutable, ascending sequence of ReferenceRows.

    Every row must carry the same set of regional scale names. Instantiate
    directly to use a custom chart (e.g. in tests); otherwise use
    get_ring_table() for the shipped ring-size chart.
    """

    def __init__(self, rows: Iterable[ReferenceRow]) -> None:
        self._rows: tuple[ReferenceRow, ...] = tuple(rows)
        self._validate()
        self._regional_scale_names: tuple[str, ...] = tuple(self._rows[0].regional_scales)
        self._by_letter: dict[str, ReferenceRow] = {
            row.letter_scale.upper(): row for row in self._rows
        }

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[ReferenceRow]:
        return iter(self._rows)

    # ── Validation ─────────────────────────────────────────────────────────────

    def _validate(self) -> None:
        if not self._rows:
            raise ValueError("Reference table must contain at least one row")

        errors: list[str] = []

        scale_names = set(self._rows[0].regional_scales)
        for i, row in enumerate(self._rows):
            if set(row.regional_scales) != scale_names:
                errors.append(
                    f"row {i} regional scales {sorted(row.regional_scales)} "
                    f"differ from row 0 {sorted(scale_names)}"
                )

        # Circumference must agree with diameter × π
        for i, row in enumerate(self._rows):
            expected = row.linear_diameter * math.pi
            if abs(row.linear_circumference - expected) > CIRCUMFERENCE_TOLERANCE_MM:
                errors.append(
                    f"row {i} circumference {row.linear_circumference} deviates from "
                    f"diameter × π = {expected:.2f} by more than {CIRCUMFERENCE_TOLERANCE_MM}mm"
                )

        # Every column strictly increasing between adjacent rows
        for i, (a, b) in enumerate(zip(self._rows, self._rows[1:])):
            for name in _CORE_FIELDS:
                if not getattr(a, name) < getattr(b, name):
                    errors.append(
                        f"{name} not strictly increasing between rows {i} and {i + 1}: "
                        f"{getattr(a, name)!r} -> {getattr(b, name)!r}"
                    )
            for name in scale_names & set(b.regional_scales) & set(a.regional_scales):
                if not a.regional_scales[name] < b.regional_scales[name]:
                    errors.append(
                        f"regional scale {name!r} not strictly increasing between rows "
                        f"{i} and {i + 1}: {a.regional_scales[name]!r} -> "
                        f"{b.regional_scales[name]!r}"
                    )

        seen: set[str] = set()
        for row in self._rows:
            code = row.letter_scale.upper()
            if code in seen:
                errors.append(f"duplicate letter code {row.letter_scale!r}")
            seen.add(code)

        if errors:
            raise ValueError(
                "Reference table validation failed:\n"
                + "\n".join(f"  • {e}" for e in errors)
            )

    # ── Query API ──────────────────────────────────────────────────────────────

    def rows(self) -> tuple[ReferenceRow, ...]:
        """Return all rows in ascending order."""
        return self._rows

    @property
    def regional_scale_names(self) -> tuple[str, ...]:
        return self._regional_scale_names

    def letter_codes(self) -> list[str]:
        """Letter codes in ascending chart order."""
        return [row.letter_scale for row in self._rows]

    def find_letter(self, code: str) -> ReferenceRow | None:
        """Return the row for *code* (case-insensitive), or None."""
        return self._by_letter.get(code.strip().upper())

    def key_for(self, field_name: str) -> Callable[[ReferenceRow], float]:
        """
        Return an accessor for a numeric column.

        *field_name* is a core numeric field (``numeric_scale``,
        ``linear_diameter``, ``linear_circumference``) or a regional scale name.

        Raises
        ------
        KeyError
            If *field_name* names no numeric column of this table.
        """
        if field_name in _CORE_FIELDS and field_name != "letter_scale":
            return attrgetter(field_name)
        if field_name in self._regional_scale_names:
            return lambda row: row.regional_scales[field_name]
        raise KeyError(f"Unknown numeric column: {field_name!r}")


# ── Standard ring-size chart ───────────────────────────────────────────────────
#
# US, UK/India letter, inner diameter (mm), inner circumference (mm),
# EU and Japan sizes.

_RING_CHART: tuple[tuple[float, str, float, float, int, int], ...] = (
    (3.0, "F", 13.7, 43.1, 44, 4),
    (3.5, "G", 14.1, 44.3, 45, 5),
    (4.0, "H", 14.5, 45.5, 46, 6),
    (4.5, "I", 14.9, 46.8, 47, 7),
    (5.0, "J", 15.3, 48.0, 49, 9),
    (5.5, "K", 15.7, 49.3, 50, 10),
    (6.0, "L", 16.1, 50.6, 51, 11),
    (6.5, "M", 16.5, 51.8, 52, 12),
    (7.0, "N", 16.9, 53.1, 54, 14),
    (7.5, "O", 17.3, 54.4, 55, 15),
    (8.0, "P", 17.7, 55.7, 56, 16),
    (8.5, "Q", 18.1, 57.0, 58, 17),
    (9.0, "R", 18.5, 58.3, 59, 18),
    (9.5, "S", 19.0, 59.5, 60, 19),
    (10.0, "T", 19.4, 60.8, 62, 20),
    (10.5, "U", 19.8, 62.1, 63, 22),
    (11.0, "V", 20.2, 63.3, 64, 23),
    (11.5, "W", 20.6, 64.6, 66, 25),
    (12.0, "X", 21.0, 65.9, 67, 26),
    (12.5, "Y", 21.4, 67.2, 68, 27),
    (13.0, "Z", 21.8, 68.5, 70, 28),
)

RING_SIZES: ReferenceTable = ReferenceTable(
    ReferenceRow(
        numeric_scale=us,
        letter_scale=uk,
        linear_diameter=dia,
        linear_circumference=circ,
        regional_scales={"eu": float(eu), "jp": float(jp)},
    )
    for us, uk, dia, circ, eu, jp in _RING_CHART
)


def get_ring_table() -> ReferenceTable:
    """Return the shipped ring-size chart."""
    return RING_SIZES
