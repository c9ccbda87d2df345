"""Flattening of cubic Bézier segments by locally approximating them with parabolas.

For a small parameter step the cubic term of the curve is negligible, so the
distance between the curve and its chord can be bounded with a quadratic
approximation.  Inflection points break that assumption; around each of
them a range is computed in which the curve is close enough to a straight
line, and the pieces between these ranges are flattened separately.
"""

from __future__ import annotations

import math
from collections.abc import Iterator

from .geometry import CubicBezierSegment, LineSegment

_EPSILON = 1e-4


def _in_range(t: float) -> bool:
    return 0.0 <= t < 1.0


def _check_tolerance(tolerance: float) -> None:
    if not tolerance > 0.0:
        raise ValueError("tolerance must be positive")


def find_inflection_points(curve: CubicBezierSegment) -> list[float]:
    """Return the parameters of the curve's inflection points, at most two.

    A curve that is a straight line reports a single inflection at ``t = 0``.
    """
    pa = curve.ctrl1 - curve.start
    pb = curve.ctrl2 - curve.ctrl1 * 2.0 + curve.start
    pc = curve.end - curve.ctrl2 * 3.0 + curve.ctrl1 * 3.0 - curve.start

    a = pb.cross(pc)
    b = pa.cross(pc)
    c = pa.cross(pb)

    if abs(a) < _EPSILON:
        # Not a quadratic equation.
        if abs(b) < _EPSILON:
            # Constant acceleration change: no solution unless the curve is
            # a straight line, which is treated as an inflection at t = 0.
            if abs(c) < _EPSILON:
                return [0.0]
        else:
            t = -c / b
            if _in_range(t):
                return [t]
        return []

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return []
    if discriminant < _EPSILON:
        return [-b / (2.0 * a)]

    # Numerically stable form of the quadratic roots.
    sign_b = 1.0 if b >= 0.0 else -1.0
    q = -0.5 * (b + sign_b * math.sqrt(discriminant))
    first, second = sorted((q / a, c / q))
    return [t for t in (first, second) if _in_range(t)]


def _inflection_approximation_range(
    curve: CubicBezierSegment, t: float, tolerance: float
) -> tuple[float, float]:
    """Range around ``t`` where the curve is within ``tolerance`` of a line."""
    next_curve = curve.after_split(t)

    # Move the curve so that it starts at the origin.
    p1 = next_curve.ctrl1 - next_curve.start
    p2 = next_curve.ctrl2 - next_curve.start
    p3 = next_curve.end - next_curve.start

    if p1.x == 0.0 and p1.y == 0.0:
        p1 = p2

    if p1.x == 0.0 and p1.y == 0.0:
        s3 = p3.x - p3.y
        if s3 == 0.0:
            return -1.0, 2.0
        r = abs(tolerance / s3) ** (1.0 / 3.0)
        return t - r, t + r

    length = p2.length()
    s3 = p2.cross(p3) / length if length != 0.0 else math.nan
    if s3 == 0.0:
        return -1.0, 2.0

    r_next = abs(tolerance / s3) ** (1.0 / 3.0)
    r = r_next * (1.0 - t)
    return t - r, t + r


def _no_inflection_step(curve: CubicBezierSegment, tolerance: float) -> float:
    v1 = curve.ctrl1 - curve.start
    v2 = curve.ctrl2 - curve.start

    v2_cross_v1 = v2.cross(v1)
    if v2_cross_v1 == 0.0:
        return 1.0
    s2inv = math.sqrt(v1.x * v1.x + v1.y * v1.y) / (3.0 * v2_cross_v1)

    # Close to 2 for small tolerances, closer to 1 otherwise.
    factor = 2.0 - min(tolerance * 4.0, 1.0)
    t = factor * math.sqrt(tolerance * abs(s2inv))

    if t >= 0.995 or t == 0.0:
        return 1.0
    return t


def _flatten_no_inflection(
    curve: CubicBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    end = curve.end
    start = curve.start
    while True:
        step = _no_inflection_step(curve, tolerance)
        if step >= 1.0:
            yield LineSegment(start, end)
            return
        curve = curve.after_split(step)
        yield LineSegment(start, curve.start)
        start = curve.start


def flatten_cubic(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    """Yield line segments approximating the cubic within ``tolerance``."""
    _check_tolerance(tolerance)
    return _segments(curve, tolerance)


def _segments(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    inflections = find_inflection_points(curve)
    if not inflections:
        yield from _flatten_no_inflection(curve, tolerance)
        return

    count = len(inflections)
    t1 = inflections[0]
    t2 = inflections[1] if count == 2 else 2.0

    t1_min, t1_max = _inflection_approximation_range(curve, t1, tolerance)
    t2_min, t2_max = t2, t2
    if count == 2:
        t2_min, t2_max = _inflection_approximation_range(curve, t2, tolerance)

    if count == 1 and t1_min < 0.0 and t1_max > 1.0:
        # The inflection range covers the whole curve.
        yield curve.baseline()
        return

    start = curve.start

    if t1_min > 0.0:
        before = curve.before_split(t1_min)
        yield from _flatten_no_inflection(before, tolerance)
        start = before.end

    if _in_range(t1_max) and (count == 1 or t2_min > t1_max):
        # No second range, or it does not overlap the first.
        after = curve.after_split(t1_max)
        yield LineSegment(start, after.start)
        start = after.start
        if count == 1 or t2_min > 1.0:
            yield from _flatten_no_inflection(after, tolerance)
            start = after.end
    elif count == 2 and t2_min > 1.0:
        yield LineSegment(start, curve.end)
        return

    if count == 2 and t2_min < 1.0 and t2_max > 0.0:
        if 0.0 < t2_min < t1_max:
            # t2_min lies inside the first range.
            point = curve.sample(t1_max)
            yield LineSegment(start, point)
            start = point
        elif t2_min > 0.0 and t1_max > 0.0:
            middle = curve.split_range(t1_max, t2_min)
            yield from _flatten_no_inflection(middle, tolerance)
            start = middle.end
        elif t2_min > 0.0:
            before = curve.before_split(t2_min)
            yield from _flatten_no_inflection(before, tolerance)
            start = before.end

        if t2_max < 1.0:
            after = curve.after_split(t1_max)
            yield LineSegment(start, after.start)
            yield from _flatten_no_inflection(after, tolerance)
        else:
            yield LineSegment(start, curve.start)