"""Flattening by recursive subdivision at the parameter midpoint."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .flatness import Flatness
from .geometry import (
    CubicBezierSegment,
    LineSegment,
    QuadraticBezierSegment,
    Vector,
    cubic_is_a_point,
)

_EPSILON = 1.1920929e-07


def _check_tolerance(tolerance: float) -> None:
    if not tolerance > 0.0:
        raise ValueError("tolerance must be positive")


def _chain(start: Vector, ends: Iterable[Vector]) -> Iterator[LineSegment]:
    prev = start
    for end in ends:
        yield LineSegment(prev, end)
        prev = end


def flatten_cubic(
    curve: CubicBezierSegment,
    tolerance: float,
    flatness: Flatness = Flatness.DEFAULT,
) -> Iterator[LineSegment]:
    """Yield line segments approximating the cubic; nothing if it is a point."""
    _check_tolerance(tolerance)
    if cubic_is_a_point(curve, tolerance):
        return iter(())
    return _chain(curve.start, _cubic_ends(curve, tolerance, flatness, 0.0, 1.0))


def _cubic_ends(
    curve: CubicBezierSegment,
    tolerance: float,
    flatness: Flatness,
    t0: float,
    t1: float,
) -> Iterator[Vector]:
    if t1 < t0 + 0.001 or flatness.is_flat(curve, tolerance):
        yield curve.end
        return
    t = (t0 + t1) * 0.5
    first, second = curve.split(0.5)
    yield from _cubic_ends(first, tolerance, flatness, t0, t)
    yield from _cubic_ends(second, tolerance, flatness, t, t1)


def flatten_quadratic(
    curve: QuadraticBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    """Yield line segments approximating the quadratic."""
    _check_tolerance(tolerance)
    return _chain(curve.start, _quadratic_ends(curve, tolerance))


def _is_collapsed(curve: QuadraticBezierSegment, tolerance: float) -> bool:
    # A piece that has shrunk to a point can never pass the linearity test.
    return (
        (curve.end - curve.start).square_length() < _EPSILON
        and (curve.ctrl - curve.start).square_length() < tolerance * tolerance
    )


def _quadratic_ends(curve: QuadraticBezierSegment, tolerance: float) -> Iterator[Vector]:
    if curve.is_linear(tolerance) or _is_collapsed(curve, tolerance):
        yield curve.end
        return
    first, second = curve.split(0.5)
    yield from _quadratic_ends(first, tolerance)
    yield from _quadratic_ends(second, tolerance)