import math

import pytest

from cavitation_checker.data_model import CurvePoint
from cavitation_checker.npshr_curve import NpshrCurve


@pytest.fixture
def curve():
    return NpshrCurve([(200, 14), (50, 8)])


def test_points_are_sorted_by_flow(curve):
    assert curve.points == (CurvePoint(50.0, 8.0), CurvePoint(200.0, 14.0))
    assert curve.flow_range == (50.0, 200.0)
    assert len(curve) == 2


def test_linear_interpolation(curve):
    assert curve.interpolate(100) == pytest.approx(10.0)
    assert curve.interpolate(125) == pytest.approx(11.0)


def test_exact_points(curve):
    assert curve.interpolate(50) == 8.0
    assert curve.interpolate(200) == 14.0


def test_flat_outside_range(curve):
    assert curve.interpolate(10) == 8.0
    assert curve.interpolate(-5) == 8.0
    assert curve.interpolate(300) == 14.0


def test_callable(curve):
    assert curve(100) == curve.interpolate(100)


def test_single_point_curve_is_constant():
    curve = NpshrCurve([CurvePoint(80, 3.5)])
    assert curve.interpolate(0) == 3.5
    assert curve.interpolate(80) == 3.5
    assert curve.interpolate(500) == 3.5


def test_duplicate_flows():
    curve = NpshrCurve([(100, 5), (50, 2), (100, 7), (150, 9)])
    # Exact hit: first point listed at that flow
    assert curve.interpolate(100) == 5.0
    # Below the duplicate: bounded by the first of the pair
    assert curve.interpolate(75) == pytest.approx(3.5)
    # Above the duplicate: bounded by the last of the pair
    assert curve.interpolate(125) == pytest.approx(8.0)


def test_duplicate_flows_at_the_ends():
    curve = NpshrCurve([(50, 2), (50, 3), (150, 9), (150, 10)])
    assert curve.interpolate(10) == 2.0
    assert curve.interpolate(500) == 10.0


def test_empty_curve_rejected():
    with pytest.raises(ValueError, match="at least one point"):
        NpshrCurve([])


def test_non_finite_point_rejected():
    with pytest.raises(ValueError, match="finite"):
        NpshrCurve([(50, 2), (math.nan, 3)])


def test_non_finite_query_rejected(curve):
    with pytest.raises(ValueError):
        curve.interpolate(float("nan"))
    with pytest.raises(ValueError):
        curve.interpolate(float("inf"))


def test_from_rows_skips_bad_points():
    diagnostics = []
    curve = NpshrCurve.from_rows(
        ["Point", "Débit (m3/h)", "NPSHr (m)"],
        [
            {"Point": "1", "Débit (m3/h)": "150", "NPSHr (m)": "6"},
            {"Point": "2", "Débit (m3/h)": "x", "NPSHr (m)": "4"},
            {"Point": "3", "Débit (m3/h)": "50", "NPSHr (m)": "2"},
        ],
        line_numbers=[3, 4, 5],
        diagnostics=diagnostics,
    )
    assert curve.points == (CurvePoint(50.0, 2.0), CurvePoint(150.0, 6.0))
    assert len(diagnostics) == 1
    assert diagnostics[0].line == 4
    assert diagnostics[0].section == "npshr curve"
    assert "numeric" in diagnostics[0].reason


def test_from_rows_without_usable_columns():
    diagnostics = []
    curve = NpshrCurve.from_rows(
        ["Q", "NPSHr"], [{"Q": "1", "NPSHr": "2"}], diagnostics=diagnostics
    )
    assert curve is None
    assert diagnostics[0].line is None
    assert "no flow column" in diagnostics[0].reason


def test_from_rows_without_any_valid_point():
    assert NpshrCurve.from_rows(["Flow", "NPSHr"], [{"Flow": "", "NPSHr": "2"}]) is None
