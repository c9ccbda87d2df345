"""Non-adaptive forward differencing with the step count from Wang's formula."""

from __future__ import annotations

from collections.abc import Iterator

from .geometry import (
    CubicBezierSegment,
    LineSegment,
    QuadraticBezierSegment,
    Vector,
    polynomial_form_cubic,
    polynomial_form_quadratic,
)
from .wang import num_segments_cubic, num_segments_quadratic


def flatten_cubic(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    """Yield line segments approximating the cubic using forward differences."""
    n = num_segments_cubic(curve, tolerance)
    poly = polynomial_form_cubic(curve)
    dt = 1.0 / n
    a1, a2, a3 = poly.a1 * dt, poly.a2 * (dt * dt), poly.a3 * (dt * dt * dt)
    return _walk(curve, n, [a1 + a2 + a3, a2 * 2.0 + a3 * 6.0, a3 * 6.0])


def flatten_quadratic(
    curve: QuadraticBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    """Yield line segments approximating the quadratic using forward differences."""
    n = num_segments_quadratic(curve, tolerance)
    poly = polynomial_form_quadratic(curve)
    dt = 1.0 / n
    a1, a2 = poly.a1 * dt, poly.a2 * (dt * dt)
    return _walk(curve, n, [a1 + a2, a2 * 2.0])


def _walk(curve, n: float, deltas: list[Vector]) -> Iterator[LineSegment]:
    """Step through ``n`` uniform intervals; ``deltas`` are the forward differences."""
    prev = point = curve.start
    for _ in range(int(n) - 1):
        point = point + deltas[0]
        deltas = [d + higher for d, higher in zip(deltas, deltas[1:])] + deltas[-1:]
        yield LineSegment(prev, point)
        prev = point
    yield LineSegment(prev, curve.end)