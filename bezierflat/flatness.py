"""Criteria deciding whether a Bézier segment can be replaced by its baseline."""

from __future__ import annotations

from enum import Enum

from .geometry import CubicBezierSegment, QuadraticBezierSegment, Vector


def _approx_norm(v: Vector) -> float:
    return max(abs(v.x), abs(v.y))


def cubic_is_flat(curve: CubicBezierSegment, tolerance: float) -> bool:
    """True if the cubic can be approximated by a single line within ``tolerance``."""
    baseline = curve.end - curve.start
    v1 = curve.ctrl1 - curve.start
    v2 = curve.ctrl2 - curve.start
    v3 = curve.ctrl2 - curve.end

    c1 = baseline.cross(v1)
    c2 = baseline.cross(v2)
    baseline_len2 = baseline.square_length()
    d1 = c1 * c1
    d2 = c2 * c2

    # Tighter bound when both control points are on the same side.
    factor = 3.0 / 4.0 if c1 * c2 > 0.0 else 4.0 / 9.0
    f2 = factor * factor
    threshold = baseline_len2 * tolerance * tolerance

    return (
        d1 * f2 <= threshold
        and d2 * f2 <= threshold
        and baseline.dot(v1) > -tolerance
        and baseline.dot(v3) < tolerance
    )


def hfd_is_flat(curve: CubicBezierSegment, tolerance: float) -> bool:
    """Flatness from the second differences of the control polygon."""
    v212 = curve.ctrl1 - curve.start
    v214 = curve.ctrl2 - curve.ctrl1
    v216 = curve.end - curve.ctrl2
    v218 = v214 - v212
    v220 = v216 - v214
    return max(_approx_norm(v218), _approx_norm(v220)) <= tolerance


def agg_is_flat(curve: CubicBezierSegment, tolerance: float) -> bool:
    """Flatness from the summed distances of the control points to the baseline."""
    baseline = curve.end - curve.start
    c1 = baseline.cross(curve.ctrl1 - curve.end)
    c2 = baseline.cross(curve.ctrl2 - curve.end)
    return (c1 + c2) * (c1 + c2) <= tolerance * tolerance * baseline.square_length()


def quadratic_is_flat(curve: QuadraticBezierSegment, tolerance: float) -> bool:
    """True if the quadratic can be approximated by a single line within ``tolerance``."""
    baseline = curve.end - curve.start
    c = baseline.cross(curve.ctrl - curve.start)
    threshold = baseline.square_length() * tolerance * tolerance
    return c * c * 0.25 <= threshold


class Flatness(Enum):
    """Selectable flatness criterion for cubic segments."""

    DEFAULT = "default"
    HFD = "hfd"
    AGG = "agg"

    def is_flat(self, curve: CubicBezierSegment, tolerance: float) -> bool:
        return _CHECKS[self](curve, tolerance)


_CHECKS = {
    Flatness.DEFAULT: cubic_is_flat,
    Flatness.HFD: hfd_is_flat,
    Flatness.AGG: agg_is_flat,
}