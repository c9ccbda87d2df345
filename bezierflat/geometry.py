"""Basic 2D geometry: vectors, line segments, Bézier segments and their polynomial forms."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector:
    """A 2D vector, also used to represent points."""

    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vector:
        return Vector(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> Vector:
        return Vector(self.x / scale, self.y / scale)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector) -> float:
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def square_length(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance_to(self, other: Vector) -> float:
        return (self - other).length()

    def lerp(self, other: Vector, t: float) -> Vector:
        return Vector(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def max(self, other: Vector) -> Vector:
        """Component-wise maximum."""
        return Vector(max(self.x, other.x), max(self.y, other.y))


Point = Vector


@dataclass(frozen=True, slots=True)
class LineSegment:
    start: Vector
    end: Vector

    def sample(self, t: float) -> Vector:
        return self.start.lerp(self.end, t)


@dataclass(frozen=True, slots=True)
class QuadraticBezierSegment:
    start: Vector
    ctrl: Vector
    end: Vector

    def sample(self, t: float) -> Vector:
        one_t = 1.0 - t
        return (
            self.start * (one_t * one_t)
            + self.ctrl * (2.0 * one_t * t)
            + self.end * (t * t)
        )

    def split(self, t: float) -> tuple[QuadraticBezierSegment, QuadraticBezierSegment]:
        """Split at ``t`` into the parts before and after it."""
        ctrl1 = self.start.lerp(self.ctrl, t)
        ctrl2 = self.ctrl.lerp(self.end, t)
        mid = ctrl1.lerp(ctrl2, t)
        return (
            QuadraticBezierSegment(self.start, ctrl1, mid),
            QuadraticBezierSegment(mid, ctrl2, self.end),
        )

    def before_split(self, t: float) -> QuadraticBezierSegment:
        return self.split(t)[0]

    def after_split(self, t: float) -> QuadraticBezierSegment:
        return self.split(t)[1]

    def baseline(self) -> LineSegment:
        return LineSegment(self.start, self.end)

    def is_linear(self, tolerance: float) -> bool:
        """True if the control point lies within ``tolerance`` of the baseline."""
        baseline = self.end - self.start
        if baseline.square_length() < 1.1920929e-07:
            return False
        distance = abs(baseline.cross(self.ctrl - self.start)) / baseline.length()
        return distance < tolerance

    def to_cubic(self) -> CubicBezierSegment:
        return CubicBezierSegment(
            self.start,
            self.start + (self.ctrl - self.start) * (2.0 / 3.0),
            self.end + (self.ctrl - self.end) * (2.0 / 3.0),
            self.end,
        )


@dataclass(frozen=True, slots=True)
class CubicBezierSegment:
    start: Vector
    ctrl1: Vector
    ctrl2: Vector
    end: Vector

    def sample(self, t: float) -> Vector:
        one_t = 1.0 - t
        one_t2 = one_t * one_t
        t2 = t * t
        return (
            self.start * (one_t2 * one_t)
            + self.ctrl1 * (3.0 * one_t2 * t)
            + self.ctrl2 * (3.0 * one_t * t2)
            + self.end * (t2 * t)
        )

    def split(self, t: float) -> tuple[CubicBezierSegment, CubicBezierSegment]:
        """Split at ``t`` into the parts before and after it."""
        ctrl1a = self.start.lerp(self.ctrl1, t)
        ctrl12 = self.ctrl1.lerp(self.ctrl2, t)
        ctrl2b = self.ctrl2.lerp(self.end, t)
        ctrl1aa = ctrl1a.lerp(ctrl12, t)
        ctrl2bb = ctrl12.lerp(ctrl2b, t)
        mid = ctrl1aa.lerp(ctrl2bb, t)
        return (
            CubicBezierSegment(self.start, ctrl1a, ctrl1aa, mid),
            CubicBezierSegment(mid, ctrl2bb, ctrl2b, self.end),
        )

    def before_split(self, t: float) -> CubicBezierSegment:
        return self.split(t)[0]

    def after_split(self, t: float) -> CubicBezierSegment:
        return self.split(t)[1]

    def split_range(self, t0: float, t1: float) -> CubicBezierSegment:
        """Return the part of the curve between ``t0`` and ``t1``."""
        start = self.sample(t0)
        end = self.sample(t1)
        derivative = QuadraticBezierSegment(
            self.ctrl1 - self.start,
            self.ctrl2 - self.ctrl1,
            self.end - self.ctrl2,
        )
        dt = t1 - t0
        ctrl1 = start + derivative.sample(t0) * dt
        ctrl2 = end - derivative.sample(t1) * dt
        return CubicBezierSegment(start, ctrl1, ctrl2, end)

    def baseline(self) -> LineSegment:
        return LineSegment(self.start, self.end)

    def to_quadratic(self) -> QuadraticBezierSegment:
        """Approximate the curve with a single quadratic segment."""
        c1 = (self.ctrl1 * 3.0 - self.start) * 0.5
        c2 = (self.ctrl2 * 3.0 - self.end) * 0.5
        return QuadraticBezierSegment(self.start, (c1 + c2) * 0.5, self.end)

    def _num_quadratics(self, tolerance: float) -> int:
        x = self.start.x - 3.0 * self.ctrl1.x + 3.0 * self.ctrl2.x - self.end.x
        y = self.start.y - 3.0 * self.ctrl1.y + 3.0 * self.ctrl2.y - self.end.y
        err = x * x + y * y
        return max(math.ceil((err / (432.0 * tolerance * tolerance)) ** (1.0 / 6.0)), 1)

    def quadratics(self, tolerance: float) -> Iterator[QuadraticBezierSegment]:
        """Yield quadratic segments approximating the curve within ``tolerance``."""
        if not tolerance > 0.0:
            raise ValueError("tolerance must be positive")
        count = self._num_quadratics(tolerance)
        step = 1.0 / count
        t0 = 0.0
        for _ in range(count - 1):
            t1 = t0 + step
            yield self.split_range(t0, t1).to_quadratic()
            t0 = t1
        # The last one ends exactly at t = 1.
        yield self.split_range(t0, 1.0).to_quadratic()


@dataclass(frozen=True, slots=True)
class QuadraticPolynomial:
    """Power-basis form: a0 + a1*t + a2*t^2."""

    a0: Vector
    a1: Vector
    a2: Vector

    def sample(self, t: float) -> Vector:
        return self.a0 + (self.a1 + self.a2 * t) * t


@dataclass(frozen=True, slots=True)
class CubicPolynomial:
    """Power-basis form: a0 + a1*t + a2*t^2 + a3*t^3."""

    a0: Vector
    a1: Vector
    a2: Vector
    a3: Vector

    def sample(self, t: float) -> Vector:
        return self.a0 + (self.a1 + (self.a2 + self.a3 * t) * t) * t


def polynomial_form_quadratic(curve: QuadraticBezierSegment) -> QuadraticPolynomial:
    return QuadraticPolynomial(
        a0=curve.start,
        a1=(curve.ctrl - curve.start) * 2.0,
        a2=curve.start + curve.end - curve.ctrl * 2.0,
    )


def polynomial_form_cubic(curve: CubicBezierSegment) -> CubicPolynomial:
    return CubicPolynomial(
        a0=curve.start,
        a1=(curve.ctrl1 - curve.start) * 3.0,
        a2=curve.start * 3.0 - curve.ctrl1 * 6.0 + curve.ctrl2 * 3.0,
        a3=curve.end - curve.start + (curve.ctrl1 - curve.ctrl2) * 3.0,
    )


def cubic_is_a_point(curve: CubicBezierSegment, tolerance: float) -> bool:
    """True if the whole curve fits within ``tolerance`` of a single point."""
    tolerance_squared = tolerance * tolerance
    return (
        (curve.start - curve.end).square_length() < tolerance_squared
        and (curve.start - curve.ctrl1).square_length() < tolerance_squared
        and (curve.end - curve.ctrl2).square_length() < tolerance_squared
    )