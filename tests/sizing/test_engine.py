"""Tests for the conversion engine: normalize, derive_all, nearest_match."""

import math

import pytest

from sizewise.sizing.engine import convert, derive_all, nearest_match, normalize
from sizewise.sizing.errors import (
    EmptyInputError,
    ErrorKind,
    InvalidMagnitudeError,
    UnrecognizedCodeError,
)
from sizewise.sizing.systems import get_registry
from sizewise.sizing.table import RING_SIZES, ReferenceTable
from sizewise.sizing.types import (
    CanonicalQuantity,
    Circumference,
    Diameter,
    LetterScale,
    NumericScale,
    ReferenceRow,
    RegionalScale,
)

# Chart values are rounded to 0.1 mm; compare in the base unit with this slack.
EPS_MM = 0.05

ROWS = RING_SIZES.rows()


@pytest.fixture(scope="module")
def small_table():
    """Three rows around US 7 with the letter scale shifted by one (7 → "O")."""
    return ReferenceTable(
        [
            ReferenceRow(6.5, "N", 16.9, 53.1),
            ReferenceRow(7.0, "O", 17.3, 54.4),
            ReferenceRow(7.5, "P", 17.7, 55.7),
        ]
    )


@pytest.fixture(scope="module")
def tie_table():
    """Two rows exactly 2 mm apart in circumference."""
    return ReferenceTable(
        [
            ReferenceRow(1.0, "A", 50.0 / math.pi, 50.0),
            ReferenceRow(2.0, "B", 52.0 / math.pi, 52.0),
        ]
    )


# ── normalize ──────────────────────────────────────────────────────────────────


class TestNormalizeLinear:
    def test_circumference_is_identity(self):
        assert normalize(Circumference(54.4)).circumference_mm == 54.4

    def test_diameter_times_pi(self):
        q = normalize(Diameter(17.3))
        assert q.circumference_mm == pytest.approx(17.3 * math.pi)

    @pytest.mark.parametrize("value", [0, -5, -0.1, math.inf, -math.inf, math.nan])
    def test_bad_circumference_rejected(self, value):
        with pytest.raises(InvalidMagnitudeError) as exc_info:
            normalize(Circumference(value))
        assert exc_info.value.kind is ErrorKind.INVALID_MAGNITUDE

    def test_bad_diameter_rejected(self):
        with pytest.raises(InvalidMagnitudeError):
            normalize(Diameter(0.0))

    def test_missing_value_is_empty(self):
        with pytest.raises(EmptyInputError):
            normalize(Circumference(None))  # type: ignore[arg-type]

    def test_text_value_parsed(self):
        assert normalize(Circumference("54,4")).circumference_mm == pytest.approx(54.4)  # type: ignore[arg-type]

    def test_non_numeric_object_rejected(self):
        with pytest.raises(InvalidMagnitudeError):
            normalize(Diameter([17.3]))  # type: ignore[arg-type]


class TestNormalizeNumericScale:
    def test_exact_row(self):
        q = normalize(NumericScale(7.0))
        assert q.diameter_mm == pytest.approx(16.9)

    def test_interpolation_midpoint(self):
        """Every adjacent pair: the scale midpoint maps to the diameter midpoint."""
        for a, b in zip(ROWS, ROWS[1:]):
            q = normalize(NumericScale((a.numeric_scale + b.numeric_scale) / 2))
            expected = (a.linear_diameter + b.linear_diameter) / 2 * math.pi
            assert q.circumference_mm == pytest.approx(expected)

    def test_clamps_below_table(self):
        assert normalize(NumericScale(1.0)) == normalize(NumericScale(ROWS[0].numeric_scale))

    def test_clamps_above_table(self):
        assert normalize(NumericScale(20.0)) == normalize(NumericScale(ROWS[-1].numeric_scale))

    @pytest.mark.parametrize("value", [0, -1, math.nan, math.inf])
    def test_bad_scale_rejected(self, value):
        with pytest.raises(InvalidMagnitudeError):
            normalize(NumericScale(value))

    def test_int_too_large_for_float_rejected(self):
        with pytest.raises(InvalidMagnitudeError):
            normalize(NumericScale(10**400))

    def test_concrete_row_scenario(self, small_table):
        """US 7 in a chart where 7 ↔ 17.3 mm ↔ 54.4 mm."""
        q = normalize(NumericScale(7), small_table)
        assert q.circumference_mm == pytest.approx(54.4, abs=0.1)
        assert q.circumference_mm == pytest.approx(17.3 * math.pi)


class TestNormalizeLetterScale:
    def test_exact_code(self):
        q = normalize(LetterScale("O"))
        assert q.diameter_mm == pytest.approx(17.3)

    def test_case_insensitive(self):
        assert normalize(LetterScale("o")) == normalize(LetterScale("O"))

    def test_letter_agrees_with_numeric_of_same_row(self):
        for row in ROWS:
            assert normalize(LetterScale(row.letter_scale)).circumference_mm == pytest.approx(
                normalize(NumericScale(row.numeric_scale)).circumference_mm
            )

    def test_unknown_code_rejected(self):
        with pytest.raises(UnrecognizedCodeError) as exc_info:
            normalize(LetterScale("Z1"))
        err = exc_info.value
        assert err.kind is ErrorKind.UNRECOGNIZED_CODE
        assert err.code == "Z1"
        assert err.accepted[0] == "F"
        assert "F" in str(err) and "Z" in str(err)

    def test_letter_outside_chart_rejected(self):
        """No interpolation between or beyond codes: "A" is not charted."""
        with pytest.raises(UnrecognizedCodeError):
            normalize(LetterScale("A"))

    def test_blank_code_is_empty(self):
        with pytest.raises(EmptyInputError):
            normalize(LetterScale("  "))


class TestNormalizeRegionalScale:
    def test_eu_row(self):
        assert normalize(RegionalScale("eu", 54)).diameter_mm == pytest.approx(16.9)

    def test_jp_interpolated(self):
        """JP 13 lies halfway between JP 12 (16.5 mm) and JP 14 (16.9 mm)."""
        assert normalize(RegionalScale("jp", 13)).diameter_mm == pytest.approx(16.7)

    def test_unknown_scale_rejected(self):
        with pytest.raises(UnrecognizedCodeError, match="eu"):
            normalize(RegionalScale("mars", 5))

    def test_bad_value_rejected(self):
        with pytest.raises(InvalidMagnitudeError):
            normalize(RegionalScale("eu", -54))


def test_unsupported_input_type_raises():
    with pytest.raises(TypeError):
        normalize(54.4)  # type: ignore[arg-type]


# ── derive_all ─────────────────────────────────────────────────────────────────


class TestDeriveAll:
    def test_us_seven(self):
        result = convert(NumericScale(7))
        assert result.numeric_scale == pytest.approx(7.0)
        assert result.letter_scale == "N"
        assert result.diameter_mm == pytest.approx(16.9)
        assert result.circumference_mm == pytest.approx(53.1)
        assert result.regional_scales["eu"] == 54.0
        assert result.regional_scales["jp"] == 14.0

    def test_fractional_scale_preserved(self):
        """54.4 mm sits just above the O row: US ≈ 7.52, not rounded to a half size."""
        result = convert(Circumference(54.4))
        assert result.numeric_scale == pytest.approx(7.52)
        assert result.letter_scale == "O"
        assert result.regional_scales["eu"] == 55.0

    def test_rounding_precision(self):
        result = convert(Circumference(54.46))
        assert result.circumference_mm == pytest.approx(54.5)
        assert result.diameter_mm == pytest.approx(17.34)

    def test_canonical_carried_unrounded(self):
        result = convert(Circumference(54.46))
        assert result.canonical.circumference_mm == 54.46

    def test_clamped_outputs_at_bounds(self):
        small = convert(Circumference(30.0))
        large = convert(Circumference(90.0))
        assert small.numeric_scale == ROWS[0].numeric_scale
        assert large.numeric_scale == ROWS[-1].numeric_scale
        assert small.letter_scale == "F"
        assert large.letter_scale == "Z"

    def test_concrete_row_scenario(self, small_table):
        result = derive_all(normalize(NumericScale(7), small_table), small_table)
        assert result.letter_scale == "O"
        assert result.numeric_scale == pytest.approx(7.00)

    def test_custom_table_without_regional_scales(self, small_table):
        result = convert(Diameter(17.5), small_table)
        assert dict(result.regional_scales) == {}

    def test_unregistered_regional_scale_unrounded(self):
        table = ReferenceTable(
            [
                ReferenceRow(1.0, "A", 10.0, 31.4, {"mars": 1.0}),
                ReferenceRow(2.0, "B", 11.0, 34.6, {"mars": 2.0}),
            ]
        )
        result = convert(Diameter(10.25), table)
        assert result.regional_scales["mars"] == pytest.approx(1.25)

    def test_value_for_every_registered_system(self):
        result = convert(NumericScale(7))
        for system_id in get_registry().list_ids():
            assert result.value_for(system_id) is not None
        assert result.value_for("us") == pytest.approx(7.0)
        assert result.value_for("uk") == "N"
        assert result.value_for("india") == "N"
        assert result.value_for("jp") == 14.0


class TestRoundTrip:
    def test_numeric_scale(self):
        for row in ROWS:
            result = convert(NumericScale(row.numeric_scale))
            assert result.numeric_scale == pytest.approx(row.numeric_scale, abs=0.005)

    def test_diameter(self):
        for row in ROWS:
            result = convert(Diameter(row.linear_diameter))
            assert result.diameter_mm == pytest.approx(row.linear_diameter, abs=0.005)

    def test_circumference(self):
        for row in ROWS:
            result = convert(Circumference(row.linear_circumference))
            assert result.circumference_mm == pytest.approx(row.linear_circumference, abs=EPS_MM)

    def test_letter_scale(self):
        for row in ROWS:
            assert convert(LetterScale(row.letter_scale)).letter_scale == row.letter_scale

    def test_regional_scales(self):
        for row in ROWS:
            for name, value in row.regional_scales.items():
                result = convert(RegionalScale(name, value))
                assert result.regional_scales[name] == value

    def test_outputs_feed_back_to_same_quantity(self):
        """Any derived value re-normalizes to the original canonical quantity."""
        original = normalize(NumericScale(8.25))
        result = derive_all(original)
        for size_input in (
            Diameter(result.diameter_mm),
            Circumference(result.circumference_mm),
            NumericScale(result.numeric_scale),
        ):
            assert normalize(size_input).circumference_mm == pytest.approx(
                original.circumference_mm, abs=EPS_MM
            )


class TestMonotonicity:
    @pytest.mark.parametrize(
        "kind, values",
        [
            (NumericScale, [0.5, 3, 3.25, 4.1, 7, 7.5, 9.9, 13, 15]),
            (Diameter, [12.0, 13.7, 15.0, 17.31, 21.8, 25.0]),
            (Circumference, [40.0, 43.1, 50.0, 54.4, 68.5, 80.0]),
        ],
    )
    def test_circumference_non_decreasing(self, kind, values):
        outputs = [convert(kind(v)).circumference_mm for v in values]
        assert outputs == sorted(outputs)

    def test_numeric_scale_non_decreasing(self):
        outputs = [convert(Circumference(c)).numeric_scale for c in range(40, 72)]
        assert outputs == sorted(outputs)


# ── nearest_match ──────────────────────────────────────────────────────────────


class TestNearestMatch:
    def test_exact_row(self):
        match = nearest_match(CanonicalQuantity(54.4))
        assert match.row.letter_scale == "O"
        assert match.signed_delta_mm == pytest.approx(0.0)

    def test_signed_delta_over(self):
        match = nearest_match(CanonicalQuantity(54.7))
        assert match.row.letter_scale == "O"
        assert match.signed_delta_mm == pytest.approx(0.3)

    def test_signed_delta_under(self):
        match = nearest_match(CanonicalQuantity(54.1))
        assert match.row.letter_scale == "O"
        assert match.signed_delta_mm == pytest.approx(-0.3)

    def test_below_and_above_table(self):
        assert nearest_match(CanonicalQuantity(10.0)).row is ROWS[0]
        assert nearest_match(CanonicalQuantity(100.0)).row is ROWS[-1]

    def test_truly_minimal(self):
        probe = 40.0
        while probe < 72.0:
            match = nearest_match(CanonicalQuantity(probe))
            best = min(abs(probe - row.linear_circumference) for row in ROWS)
            assert match.abs_delta_mm == pytest.approx(best)
            probe += 0.37

    def test_tie_goes_to_earlier_row(self, tie_table):
        match = nearest_match(CanonicalQuantity(51.0), tie_table)
        assert match.row.letter_scale == "A"
        assert match.signed_delta_mm == pytest.approx(1.0)

    def test_tie_break_is_deterministic(self, tie_table):
        first = nearest_match(CanonicalQuantity(51.0), tie_table)
        for _ in range(10):
            assert nearest_match(CanonicalQuantity(51.0), tie_table) == first

    def test_result_embedded_in_derive_all(self):
        q = CanonicalQuantity(60.0)
        assert derive_all(q).nearest == nearest_match(q)
