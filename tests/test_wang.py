import math

import pytest

from bezierflat import wang
from bezierflat.geometry import CubicBezierSegment, QuadraticBezierSegment, Vector

CUBIC = CubicBezierSegment(
    Vector(100.0, 100.0), Vector(0.0, 100.0), Vector(100.0, 0.0), Vector(10.0, 0.0)
)
QUAD = QuadraticBezierSegment(Vector(0.0, 0.0), Vector(100.0, 0.0), Vector(100.0, 100.0))
TOLERANCES = [0.01, 0.025, 0.05, 0.075, 0.1, 0.15, 0.2, 0.25, 0.5, 1.0]


@pytest.mark.parametrize("tolerance", TOLERANCES)
def test_cubic_chain_and_count(tolerance):
    segments = list(wang.flatten_cubic(CUBIC, tolerance))
    assert len(segments) == wang.num_segments_cubic(CUBIC, tolerance)
    vertices = [CUBIC.start] + [s.end for s in segments]
    assert [s.start for s in segments] == vertices[:-1]
    assert vertices[-1] == CUBIC.end


@pytest.mark.parametrize("tolerance", TOLERANCES)
def test_quadratic_chain_and_count(tolerance):
    segments = list(wang.flatten_quadratic(QUAD, tolerance))
    assert len(segments) == wang.num_segments_quadratic(QUAD, tolerance)
    vertices = [QUAD.start] + [s.end for s in segments]
    assert [s.start for s in segments] == vertices[:-1]
    assert vertices[-1] == QUAD.end


@pytest.mark.parametrize("tolerance", [0.001, 0.01])
def test_cubic_vertices_at_uniform_t(tolerance):
    segments = list(wang.flatten_cubic(CUBIC, tolerance))
    n = len(segments)
    assert n > 1
    for i, seg in enumerate(segments, start=1):
        assert seg.end.distance_to(CUBIC.sample(i / n)) <= 1e-6


@pytest.mark.parametrize("tolerance", [0.001, 0.01])
def test_quadratic_vertices_at_uniform_t(tolerance):
    segments = list(wang.flatten_quadratic(QUAD, tolerance))
    n = len(segments)
    assert n > 1
    for i, seg in enumerate(segments, start=1):
        assert seg.end.distance_to(QUAD.sample(i / n)) <= 1e-6


def test_cubic_segment_count_shrinks_with_tolerance():
    counts = [wang.num_segments_cubic(CUBIC, tol) for tol in TOLERANCES]
    assert counts == sorted(counts, reverse=True)
    assert counts[0] > counts[-1]


def test_quadratic_segment_count_shrinks_with_tolerance():
    counts = [wang.num_segments_quadratic(QUAD, tol) for tol in TOLERANCES]
    assert counts == sorted(counts, reverse=True)
    assert counts[0] > counts[-1]


def test_point_curve_is_one_segment():
    p = Vector(5.0, 5.0)
    segments = list(wang.flatten_cubic(CubicBezierSegment(p, p, p, p), 0.1))
    assert len(segments) == 1
    assert segments[0].start == p and segments[0].end == p


def test_straight_quadratic_is_one_segment():
    line = QuadraticBezierSegment(Vector(0.0, 0.0), Vector(5.0, 5.0), Vector(10.0, 10.0))
    assert wang.num_segments_quadratic(line, 0.01) == 1.0
    assert len(list(wang.flatten_quadratic(line, 0.01))) == 1


@pytest.mark.parametrize("tolerance", [0.0, -1.0, math.nan])
def test_rejects_non_positive_tolerance(tolerance):
    with pytest.raises(ValueError):
        wang.num_segments_cubic(CUBIC, tolerance)
    with pytest.raises(ValueError):
        wang.flatten_quadratic(QUAD, tolerance)