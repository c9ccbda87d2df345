"""Iterative flattening that cuts flat pieces off the front of the curve."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TypeVar

from .flatness import Flatness, quadratic_is_flat
from .geometry import (
    CubicBezierSegment,
    LineSegment,
    QuadraticBezierSegment,
    cubic_is_a_point,
)
from .wang import _check_tolerance

_Curve = TypeVar("_Curve", CubicBezierSegment, QuadraticBezierSegment)


def flatten_cubic(
    curve: CubicBezierSegment,
    tolerance: float,
    flatness: Flatness = Flatness.DEFAULT,
) -> Iterator[LineSegment]:
    """Yield line segments approximating the cubic; nothing if it is a point."""
    _check_tolerance(tolerance)
    if cubic_is_a_point(curve, tolerance):
        return iter(())
    return _subdivide(curve, tolerance, flatness.is_flat)


def flatten_quadratic(
    curve: QuadraticBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    """Yield line segments approximating the quadratic."""
    _check_tolerance(tolerance)
    return _subdivide(curve, tolerance, quadratic_is_flat)


def _subdivide(
    curve: _Curve,
    tolerance: float,
    is_flat: Callable[[_Curve, float], bool],
) -> Iterator[LineSegment]:
    remaining = curve
    start = remaining.start
    split = 0.5
    while True:
        # Only test the whole remainder when not in the middle of fine subdivision.
        if split >= 0.25 and is_flat(remaining, tolerance):
            yield LineSegment(start, remaining.end)
            return

        while True:
            head, tail = remaining.split(split)
            if is_flat(head, tolerance):
                yield LineSegment(start, head.end)
                start = head.end
                remaining = tail
                if split * 2.0 < 1.0:
                    split *= 2.0
                break
            split *= 0.5