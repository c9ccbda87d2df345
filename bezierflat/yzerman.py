"""Flattening of cubics through quadratic segments split at regular intervals.

The cubic is cut into quadratic approximations at uniform parameter steps,
and each quadratic is flattened at uniform steps as well, unless it is flat
enough to be replaced by its baseline.
"""

from __future__ import annotations

from collections.abc import Iterator

from . import wang
from .flatness import quadratic_is_flat
from .geometry import CubicBezierSegment, LineSegment

_K = 20.784609691  # 12 * sqrt(3)


def _check_tolerance(tolerance: float) -> None:
    if not tolerance > 0.0:
        raise ValueError("tolerance must be positive")


def num_quadratics(curve: CubicBezierSegment, tolerance: float) -> float:
    """Number of quadratic segments used to approximate the cubic."""
    q = curve.start - curve.end + (curve.ctrl2 - curve.ctrl1) * 3.0
    value = (tolerance * _K * q.length()) ** (1.0 / 3.0)
    return max(float(-(-value // 1)), 1.0)


def flatten_cubic(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    """Yield line segments approximating the cubic within ``tolerance``."""
    _check_tolerance(tolerance)
    return _segments(curve, tolerance)


def _segments(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    simplify_tolerance = tolerance * 0.2
    flatten_tolerance = tolerance - simplify_tolerance

    step = 1.0 / num_quadratics(curve, simplify_tolerance)
    t0 = 0.0
    while t0 < 1.0:
        t1 = t0 + step
        if t1 > 0.999:
            t1 = 1.0
        quad = curve.split_range(t0, t1).to_quadratic()
        # Flat quadratics skip the costlier segment count evaluation.
        if quadratic_is_flat(quad, flatten_tolerance):
            yield quad.baseline()
        else:
            yield from wang.flatten_quadratic(quad, flatten_tolerance)
        t0 = t1