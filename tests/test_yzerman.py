from itertools import pairwise

import pytest

from bezierflat import yzerman
from bezierflat.geometry import CubicBezierSegment, LineSegment, Vector

CURVED = CubicBezierSegment(
    Vector(0.0, 0.0), Vector(100.0, 0.0), Vector(100.0, 100.0), Vector(0.0, 100.0)
)
LINE = CubicBezierSegment(
    Vector(0.0, 0.0), Vector(10.0, 0.0), Vector(20.0, 0.0), Vector(30.0, 0.0)
)


def _distance_to_curve(curve, point, samples=2000):
    return min(point.distance_to(curve.sample(k / samples)) for k in range(samples + 1))


def test_num_quadratics_of_line_is_one():
    assert yzerman.num_quadratics(LINE, 0.05) == 1.0


@pytest.mark.parametrize("tolerance", [0.01, 0.05, 0.25, 1.0])
def test_num_quadratics_is_whole_and_at_least_one(tolerance):
    n = yzerman.num_quadratics(CURVED, tolerance)
    assert n >= 1.0
    assert n == int(n)


def test_straight_line_gives_baseline():
    assert list(yzerman.flatten_cubic(LINE, 0.25)) == [
        LineSegment(Vector(0.0, 0.0), Vector(30.0, 0.0))
    ]


def test_segments_run_from_start_to_end():
    segments = list(yzerman.flatten_cubic(CURVED, 0.25))
    assert len(segments) > 1
    assert (segments[0].start, segments[-1].end) == (CURVED.start, CURVED.end)
    assert all(a.end == b.start for a, b in pairwise(segments))


def test_vertices_lie_near_curve():
    for seg in yzerman.flatten_cubic(CURVED, 0.25):
        assert _distance_to_curve(CURVED, seg.end) < 0.5


def test_smaller_tolerance_gives_more_edges():
    coarse = list(yzerman.flatten_cubic(CURVED, 1.0))
    fine = list(yzerman.flatten_cubic(CURVED, 0.01))
    assert len(fine) > len(coarse)


@pytest.mark.parametrize("tolerance", [0.0, -3.0])
def test_rejects_non_positive_tolerance(tolerance):
    with pytest.raises(ValueError):
        yzerman.flatten_cubic(CURVED, tolerance)