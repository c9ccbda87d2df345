"""Flattening at uniform parameter steps, with the step count from Wang's formula."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator

from . import geometry as geo


def _check_tolerance(tolerance: float) -> None:
    if not tolerance > 0.0:
        raise ValueError("tolerance must be positive")


def _segment_count(length: float, tolerance: float) -> float:
    _check_tolerance(tolerance)
    return float(max(math.ceil(math.sqrt(length / (8.0 * tolerance))), 1))


def num_segments_cubic(curve: geo.CubicBezierSegment, tolerance: float) -> float:
    """Number of line segments needed when splitting at regular ``t`` intervals."""
    start, ctrl1, ctrl2, end = curve.start, curve.ctrl1, curve.ctrl2, curve.end
    l = (start - ctrl1 * 2.0 + end).max(ctrl1 - ctrl2 * 2.0 + end) * 6.0
    return _segment_count(l.length(), tolerance)


def num_segments_quadratic(
    curve: geo.QuadraticBezierSegment, tolerance: float
) -> float:
    """Number of line segments needed when splitting at regular ``t`` intervals."""
    l = (curve.start - curve.ctrl * 2.0 + curve.end) * 2.0
    return _segment_count(l.length(), tolerance)


def _uniform(curve, n: float, to_polynomial: Callable) -> Iterator[geo.LineSegment]:
    poly = to_polynomial(curve)
    step = 1.0 / n
    t = 0.0
    prev = curve.start
    for _ in range(int(n) - 1):
        t += step
        point = poly.sample(t)
        yield geo.LineSegment(prev, point)
        prev = point
    yield geo.LineSegment(prev, curve.end)


def flatten_cubic(
    curve: geo.CubicBezierSegment, tolerance: float
) -> Iterator[geo.LineSegment]:
    """Yield line segments approximating the cubic at regular ``t`` intervals."""
    n = num_segments_cubic(curve, tolerance)
    return _uniform(curve, n, geo.polynomial_form_cubic)


def flatten_quadratic(
    curve: geo.QuadraticBezierSegment, tolerance: float
) -> Iterator[geo.LineSegment]:
    """Yield line segments approximating the quadratic at regular ``t`` intervals."""
    n = num_segments_quadratic(curve, tolerance)
    return _uniform(curve, n, geo.polynomial_form_quadratic)