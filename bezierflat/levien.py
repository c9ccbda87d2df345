"""Flattening by mapping quadratic segments onto the parabola y = x².

Along that parabola the number of line segments needed per unit of arc has
a closed-form approximation.  Subdivision points are spread evenly in that
measure, which gives a close to optimal number of edges.  Cubic segments are
first approximated by a sequence of quadratic segments.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from .geometry import (
    CubicBezierSegment,
    LineSegment,
    QuadraticBezierSegment,
    QuadraticPolynomial,
    Vector,
    polynomial_form_quadratic,
)

_BATCH_SIZE = 16
_U32_MAX = 2**32 - 1


def _check_tolerance(tolerance: float) -> None:
    if not tolerance > 0.0:
        raise ValueError("tolerance must be positive")


def _div(a: float, b: float) -> float:
    """Division following IEEE rules instead of raising on a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _ceil_count(x: float) -> int:
    """Ceil ``x`` into an unsigned count, saturating like a float-to-u32 cast."""
    if math.isnan(x):
        return 0
    if math.isinf(x):
        return 0 if x < 0.0 else _U32_MAX
    return max(0, min(math.ceil(x), _U32_MAX))


def approx_parabola_integral(x: float) -> float:
    """Approximate the integral of (1 + 4x²)^-0.25 dx."""
    d = 0.67
    quarter = 0.25
    return _div(x, 1.0 - d + math.sqrt(math.sqrt(d * d * d * d + quarter * x * x)))


def approx_parabola_inv_integral(x: float) -> float:
    """Approximate the inverse of :func:`approx_parabola_integral`."""
    b = 0.39
    quarter = 0.25
    return x * (1.0 - b + math.sqrt(b * b + quarter * x * x))


@dataclass(frozen=True, slots=True)
class FlatteningParams:
    """Parameters of a quadratic segment mapped onto the unit parabola."""

    # Edge count * 2 * sqrt(tolerance).
    scaled_count: float
    integral_from: float
    integral_to: float
    inv_integral_from: float
    div_inv_integral_diff: float

    def get_t(self, norm_step: float) -> float:
        """Curve parameter at the normalised position ``norm_step`` in [0, 1]."""
        u = approx_parabola_inv_integral(
            self.integral_from + (self.integral_to - self.integral_from) * norm_step
        )
        return (u - self.inv_integral_from) * self.div_inv_integral_diff


def flattening_params(
    curve: QuadraticBezierSegment, sqrt_tolerance: float
) -> FlatteningParams:
    """Compute the flattening parameters of a quadratic segment."""
    start, ctrl, end = curve.start, curve.ctrl, curve.end
    ddx = 2.0 * ctrl.x - start.x - end.x
    ddy = 2.0 * ctrl.y - start.y - end.y
    cross = (end.x - start.x) * ddy - (end.y - start.y) * ddx
    parabola_from = _div((ctrl.x - start.x) * ddx + (ctrl.y - start.y) * ddy, cross)
    parabola_to = _div((end.x - ctrl.x) * ddx + (end.y - ctrl.y) * ddy, cross)

    scale = abs(
        _div(cross, math.sqrt(ddx * ddx + ddy * ddy) * (parabola_to - parabola_from))
    )

    integral_from = approx_parabola_integral(parabola_from)
    integral_to = approx_parabola_integral(parabola_to)

    inv_integral_from = approx_parabola_inv_integral(integral_from)
    inv_integral_to = approx_parabola_inv_integral(integral_to)
    div_inv_integral_diff = _div(1.0, inv_integral_to - inv_integral_from)

    if scale != 0.0 and math.isfinite(scale):
        integral_diff = abs(integral_to - integral_from)
        sqrt_scale = math.sqrt(scale)
        if math.copysign(1.0, parabola_from) == math.copysign(1.0, parabola_to):
            scaled_count = integral_diff * sqrt_scale
        else:
            # The segment contains the curvature maximum (cusp case).
            xmin = _div(sqrt_tolerance, sqrt_scale)
            scaled_count = _div(
                sqrt_tolerance * integral_diff, approx_parabola_integral(xmin)
            )
    else:
        scaled_count = 0.0

    return FlatteningParams(
        scaled_count=scaled_count,
        integral_from=integral_from,
        integral_to=integral_to,
        inv_integral_from=inv_integral_from,
        div_inv_integral_diff=div_inv_integral_diff,
    )


def num_quadratics(curve: CubicBezierSegment, tolerance: float) -> float:
    """Number of quadratic segments needed to approximate the cubic within ``tolerance``."""
    _check_tolerance(tolerance)
    x = curve.start.x - 3.0 * curve.ctrl1.x + 3.0 * curve.ctrl2.x - curve.end.x
    y = curve.start.y - 3.0 * curve.ctrl1.y + 3.0 * curve.ctrl2.y - curve.end.y
    err = x * x + y * y
    value = (err / (432.0 * tolerance * tolerance)) ** (1.0 / 6.0)
    if not math.isfinite(value):
        return value
    return max(float(math.ceil(value)), 1.0)


def flatten_quadratic(
    curve: QuadraticBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    """Yield line segments approximating the quadratic within ``tolerance``."""
    _check_tolerance(tolerance)
    return _quadratic_segments(curve, tolerance)


def _quadratic_segments(
    curve: QuadraticBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    sqrt_tol = math.sqrt(tolerance)
    params = flattening_params(curve, sqrt_tol)
    n = max(_ceil_count(0.5 * params.scaled_count / sqrt_tol), 1)
    step = 1.0 / n
    start = curve.start
    for i in range(1, n):
        point = curve.sample(params.get_t(i * step))
        yield LineSegment(start, point)
        start = point
    yield LineSegment(start, curve.end)


def _via_quadratics(
    curve: CubicBezierSegment, quads_tolerance: float, flatten_tolerance: float
) -> Iterator[LineSegment]:
    for quad in curve.quadratics(quads_tolerance):
        yield from _quadratic_segments(quad, flatten_tolerance)


def flatten_cubic_19(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    """Flatten through quadratics, spending 10% of the tolerance on the quadratics."""
    _check_tolerance(tolerance)
    return _via_quadratics(curve, tolerance * 0.1, tolerance * 0.9)


def flatten_cubic_37(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    """Flatten through quadratics, spending 30% of the tolerance on the quadratics."""
    _check_tolerance(tolerance)
    return _via_quadratics(curve, tolerance * 0.3, tolerance * 0.7)


def flatten_cubic_55(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    """Flatten through quadratics, spending half the tolerance on the quadratics."""
    _check_tolerance(tolerance)
    return _via_quadratics(curve, tolerance * 0.5, tolerance * 0.5)


@dataclass(frozen=True, slots=True)
class _Piece:
    params: FlatteningParams
    poly: QuadraticPolynomial
    end: Vector


def _batches(
    curve: CubicBezierSegment, tolerance: float
) -> Iterator[tuple[list[_Piece], float]]:
    """Yield the approximating quadratics in batches, with the flatten tolerance's root."""
    quads_tolerance = tolerance * 0.1
    sqrt_flatten_tolerance = math.sqrt(tolerance * 0.9)
    count = num_quadratics(curve, quads_tolerance)
    quad_step = 1.0 / count
    total = int(count)

    batch: list[_Piece] = []
    t0 = 0.0
    for _ in range(total):
        t1 = t0 + quad_step
        quad = curve.split_range(t0, t1).to_quadratic()
        batch.append(
            _Piece(
                flattening_params(quad, sqrt_flatten_tolerance),
                polynomial_form_quadratic(quad),
                quad.end,
            )
        )
        t0 = t1
        if len(batch) == _BATCH_SIZE:
            yield batch, sqrt_flatten_tolerance
            batch = []
    if batch or total == 0:
        yield batch, sqrt_flatten_tolerance


def flatten_cubic_scalar(
    curve: CubicBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    """Yield line segments, spreading edges evenly over a run of quadratics."""
    _check_tolerance(tolerance)
    return _scalar_segments(curve, tolerance)


def _scalar_segments(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    start = curve.start
    for batch, sqrt_tol in _batches(curve, tolerance):
        total = sum(piece.params.scaled_count for piece in batch)
        num_edges = max(_ceil_count(0.5 * total / sqrt_tol), 1)
        step = total / num_edges
        i = 1
        count_sum = 0.0
        for piece in batch:
            params = piece.params
            target = i * step
            recip_count = _div(1.0, params.scaled_count)
            while target < count_sum + params.scaled_count:
                u = (target - count_sum) * recip_count
                point = piece.poly.sample(params.get_t(u))
                yield LineSegment(start, point)
                start = point
                if i == num_edges:
                    break
                i += 1
                target = i * step
            count_sum += params.scaled_count
        last_end = batch[-1].end if batch else Vector(0.0, 0.0)
        yield LineSegment(start, last_end)
        start = last_end


def flatten_cubic_scalar2(
    curve: CubicBezierSegment, tolerance: float
) -> Iterator[LineSegment]:
    """Like :func:`flatten_cubic_scalar`, with the edges per quadratic counted up front."""
    _check_tolerance(tolerance)
    return _scalar2_segments(curve, tolerance)


def _scalar2_segments(curve: CubicBezierSegment, tolerance: float) -> Iterator[LineSegment]:
    start = curve.start
    for batch, sqrt_tol in _batches(curve, tolerance):
        total = sum(piece.params.scaled_count for piece in batch)
        num_edges = max(_ceil_count(0.5 * total / sqrt_tol), 1)
        step = total / num_edges
        i = 1
        count_sum = 0.0
        for piece in batch:
            params = piece.params
            recip_count = _div(1.0, params.scaled_count)
            n = min(num_edges, _ceil_count(_div(count_sum + params.scaled_count, step)))
            while i < n:
                u = (i * step - count_sum) * recip_count
                point = piece.poly.sample(params.get_t(u))
                yield LineSegment(start, point)
                start = point
                i += 1
            count_sum += params.scaled_count
        last_end = batch[-1].end if batch else Vector(0.0, 0.0)
        yield LineSegment(start, last_end)
        start = last_end