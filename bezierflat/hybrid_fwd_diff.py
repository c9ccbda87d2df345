"""Adaptive flattening with hybrid forward differencing.

The curve is expressed in a basis made of the current point, the difference
to the next point and the second derivatives at both ends of the current
step.  Stepping forward, halving and doubling the step size each have cheap
update formulas in that basis.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .geometry import CubicBezierSegment, LineSegment, Vector


def _approx_norm(v: Vector) -> float:
    return max(abs(v.x), abs(v.y))


@dataclass(slots=True)
class _HfdFlattener:
    current: Vector
    v1: Vector
    v2: Vector
    v3: Vector
    tol: float
    quarter_tol: float
    steps: int = 1
    step_size: float = 1.0

    @classmethod
    def for_curve(cls, curve: CubicBezierSegment, tolerance: float) -> _HfdFlattener:
        flattener = cls(
            current=curve.start,
            v1=curve.end - curve.start,
            v2=(curve.ctrl1 - curve.ctrl2 * 2.0 + curve.end) * 6.0,
            v3=(curve.start - curve.ctrl1 * 2.0 + curve.ctrl2) * 6.0,
            tol=6.0 * tolerance,
            quarter_tol=6.0 / 4.0 * tolerance,
        )
        while (
            _approx_norm(flattener.v2) > flattener.tol
            or _approx_norm(flattener.v3) > flattener.tol
        ):
            flattener.halve_step()
        return flattener

    def step(self) -> None:
        self.current = self.current + self.v1
        previous_v2 = self.v2
        self.v1 = self.v1 + self.v2
        self.v2 = self.v2 + self.v2 - self.v3
        self.v3 = previous_v2
        self.steps -= 1

    def halve_step(self) -> None:
        self.v2 = (self.v2 + self.v3) * 0.125
        self.v1 = (self.v1 - self.v2) * 0.5
        self.v3 = self.v3 * 0.25
        self.steps *= 2
        self.step_size *= 0.5

    def maybe_double_step(self) -> bool:
        doubled_v2 = self.v2 * 2.0 - self.v3
        doubled = (
            _approx_norm(self.v3) <= self.quarter_tol
            and _approx_norm(doubled_v2) <= self.quarter_tol
        )
        if doubled:
            self.v1 = self.v1 * 2.0 + self.v2
            self.v3 = self.v3 * 4.0
            self.v2 = doubled_v2 * 4.0
            self.steps //= 2
            self.step_size *= 2.0
        return doubled

    def adjust_step(self) -> None:
        if _approx_norm(self.v2) > self.tol and self.step_size > 1e-3:
            # Halving once is sufficient.
            self.halve_step()
        elif self.steps % 2 == 0:
            # The step may be doubled more than once.
            while self.steps > 0 and self.maybe_double_step():
                pass


def flatten_cubic(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    """Yield line segments approximating the cubic with hybrid forward differencing."""
    if not tolerance > 0.0:
        raise ValueError("tolerance must be positive")
    return _segments(curve, _HfdFlattener.for_curve(curve, tolerance))


def _segments(curve: CubicBezierSegment, flattener: _HfdFlattener) -> Iterator[LineSegment]:
    prev = curve.start
    while flattener.steps > 1:
        flattener.step()
        point = flattener.current
        yield LineSegment(prev, point)
        prev = point
        flattener.adjust_step()
    yield LineSegment(prev, curve.end)