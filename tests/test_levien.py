import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bezierflat import levien
from bezierflat.geometry import CubicBezierSegment, QuadraticBezierSegment, Vector

FLAT_CUSP = CubicBezierSegment(
    Vector(0.0, 10.0), Vector(-10.0, 10.0), Vector(180.0, 10.0), Vector(60.0, 10.0)
)
CURVED = CubicBezierSegment(
    Vector(0.0, 0.0), Vector(100.0, 0.0), Vector(100.0, 100.0), Vector(0.0, 100.0)
)
QUAD = QuadraticBezierSegment(Vector(0.0, 0.0), Vector(100.0, 0.0), Vector(100.0, 100.0))

CUBIC_FUNCS = [
    levien.flatten_cubic_19,
    levien.flatten_cubic_37,
    levien.flatten_cubic_55,
    levien.flatten_cubic_scalar,
    levien.flatten_cubic_scalar2,
]


def _assert_chained(segments):
    for a, b in zip(segments, segments[1:]):
        assert a.end is b.start or a.end == b.start


def _distance_to_curve(curve, point, samples=4000):
    return min(point.distance_to(curve.sample(k / samples)) for k in range(samples + 1))


def test_scalar_and_scalar2_agree_on_curved():
    p1 = [seg.end for seg in levien.flatten_cubic_scalar(CURVED, 0.25)]
    p2 = [seg.end for seg in levien.flatten_cubic_scalar2(CURVED, 0.25)]
    assert len(p1) > 1
    assert p1[-1].distance_to(p2[-1]) < 1e-6


def test_parabola_integral_at_zero():
    assert levien.approx_parabola_integral(0.0) == 0.0
    assert levien.approx_parabola_inv_integral(0.0) == 0.0


def test_parabola_integral_is_monotonic():
    xs = [-10.0, -1.0, -0.1, 0.0, 0.1, 1.0, 10.0]
    values = [levien.approx_parabola_integral(x) for x in xs]
    assert values == sorted(values)
    inv = [levien.approx_parabola_inv_integral(x) for x in xs]
    assert inv == sorted(inv)


def test_inverse_roughly_undoes_integral():
    for x in (0.1, 0.5, 1.0, 2.0):
        y = levien.approx_parabola_inv_integral(levien.approx_parabola_integral(x))
        assert y == pytest.approx(x, rel=0.1)


def test_get_t_spans_unit_interval():
    params = levien.flattening_params(QUAD, math.sqrt(0.25))
    assert params.scaled_count > 0.0
    assert params.get_t(0.0) == pytest.approx(0.0, abs=1e-9)
    assert params.get_t(1.0) == pytest.approx(1.0, abs=1e-9)
    assert params.get_t(0.25) < params.get_t(0.5) < params.get_t(0.75)


def test_straight_quadratic_has_zero_count():
    line = QuadraticBezierSegment(Vector(0.0, 0.0), Vector(5.0, 0.0), Vector(10.0, 0.0))
    params = levien.flattening_params(line, 0.5)
    assert params.scaled_count == 0.0
    segments = list(levien.flatten_quadratic(line, 0.1))
    assert len(segments) == 1
    assert segments[0].start == line.start and segments[0].end == line.end


def test_num_quadratics_of_line_is_one():
    line = CubicBezierSegment(
        Vector(0.0, 0.0), Vector(10.0, 0.0), Vector(20.0, 0.0), Vector(30.0, 0.0)
    )
    assert levien.num_quadratics(line, 0.1) == 1.0


def test_num_quadratics_grows_with_smaller_tolerance():
    assert levien.num_quadratics(CURVED, 0.01) >= levien.num_quadratics(CURVED, 1.0)


def test_flatten_quadratic_within_tolerance():
    tolerance = 0.5
    segments = list(levien.flatten_quadratic(QUAD, tolerance))
    assert len(segments) > 1
    _assert_chained(segments)
    assert segments[0].start == QUAD.start
    assert segments[-1].end == QUAD.end
    for seg in segments:
        mid = seg.sample(0.5)
        assert _distance_to_curve(QUAD, mid) <= tolerance * 1.5


def test_smaller_tolerance_gives_more_edges():
    coarse = list(levien.flatten_quadratic(QUAD, 1.0))
    fine = list(levien.flatten_quadratic(QUAD, 0.01))
    assert len(fine) > len(coarse)


@pytest.mark.parametrize("func", CUBIC_FUNCS)
def test_cubic_variants_chain_and_reach_end(func):
    segments = list(func(CURVED, 0.25))
    assert len(segments) > 1
    assert segments[0].start == CURVED.start
    _assert_chained(segments)
    assert segments[-1].end.distance_to(CURVED.end) < 1e-6


def test_flatten_cubic_19_rejects_non_positive_tolerance():
    with pytest.raises(ValueError):
        list(levien.flatten_cubic_19(CURVED, 0.0))


def test_flatten_cubic_37_rejects_non_positive_tolerance():
    with pytest.raises(ValueError):
        list(levien.flatten_cubic_37(CURVED, 0.0))


def test_flatten_cubic_55_rejects_non_positive_tolerance():
    with pytest.raises(ValueError):
        list(levien.flatten_cubic_55(CURVED, 0.0))


def test_flatten_cubic_scalar_rejects_non_positive_tolerance():
    with pytest.raises(ValueError):
        list(levien.flatten_cubic_scalar(CURVED, 0.0))


def test_flatten_cubic_scalar2_rejects_non_positive_tolerance():
    with pytest.raises(ValueError):
        list(levien.flatten_cubic_scalar2(CURVED, 0.0))


def test_flatten_quadratic_rejects_non_positive_tolerance():
    with pytest.raises(ValueError):
        list(levien.flatten_quadratic(QUAD, 0.0))


@settings(max_examples=50, deadline=None)
@given(
    coords=st.lists(st.integers(-100, 100), min_size=6, max_size=6),
    tolerance=st.floats(0.1, 1.0),
)
def test_flatten_quadratic_always_connects_endpoints(coords, tolerance):
    quad = QuadraticBezierSegment(
        Vector(coords[0], coords[1]), Vector(coords[2], coords[3]), Vector(coords[4], coords[5])
    )
    segments = list(levien.flatten_quadratic(quad, tolerance))
    assert segments[0].start == quad.start
    assert segments[-1].end == quad.end
    for a, b in zip(segments, segments[1:]):
        assert a.end is b.start