# bezierflat

A collection of algorithms that turn quadratic and cubic Bézier curves into
polylines, each line segment staying close to the true curve within a given
distance (the tolerance). The algorithms differ in how many segments they emit
and how much work each one costs, so you can pick whichever fits your needs.
The package is pure Python and has no dependencies.

## Installation

```
pip install bezierflat
```

To run the test suite:

```
pip install "bezierflat[test]"
pytest
```

## Curves

`bezierflat.geometry` holds the basic types. Points are `Vector` values, and
segments have `start` and `end` attributes (plus `ctrl`, or `ctrl1` and
`ctrl2`, for the control points):

```python
from bezierflat.geometry import Vector, QuadraticBezierSegment, CubicBezierSegment

cubic = CubicBezierSegment(
    Vector(0.0, 0.0), Vector(70.0, 0.0), Vector(100.0, 30.0), Vector(100.0, 100.0)
)
quad = QuadraticBezierSegment(Vector(0.0, 0.0), Vector(100.0, 0.0), Vector(100.0, 100.0))

cubic.sample(0.5)                # point on the curve
left, right = cubic.split(0.5)   # the parts before and after t = 0.5
cubic.split_range(0.25, 0.75)    # the sub-curve between two parameters
cubic.to_quadratic()             # a single quadratic approximation
for q in cubic.quadratics(0.1):  # a run of quadratics within the tolerance
    ...
```

`Vector` supports `+`, `-`, multiplication and division by a number, and
`dot`, `cross`, `length`, `square_length`, `distance_to`, `lerp` and a
component-wise `max`. `QuadraticPolynomial` and `CubicPolynomial`, built with
`polynomial_form_quadratic` and `polynomial_form_cubic`, evaluate a curve in
power-basis form. `cubic_is_a_point` tells whether a cubic fits within the
tolerance of a single point.

## Flattening

Every flattening function takes a curve and a tolerance and returns an
iterator of `LineSegment` objects, each with a `start` and an `end` point.
A tolerance that is not positive raises `ValueError`.

```python
from bezierflat import levien, wang

segments = list(levien.flatten_cubic_scalar(cubic, 0.25))
points = [cubic.start] + [seg.end for seg in segments]
edges = list(wang.flatten_quadratic(quad, 0.1))
```

The available algorithms:

| Module                       | Cubic                                           | Quadratic             |
|------------------------------|-------------------------------------------------|-----------------------|
| `bezierflat.levien`          | `flatten_cubic_scalar`, `flatten_cubic_scalar2`, `flatten_cubic_19`, `flatten_cubic_37`, `flatten_cubic_55` | `flatten_quadratic` |
| `bezierflat.yzerman`         | `flatten_cubic`                                 |                       |
| `bezierflat.wang`            | `flatten_cubic`                                 | `flatten_quadratic`   |
| `bezierflat.fwd_diff`        | `flatten_cubic`                                 | `flatten_quadratic`   |
| `bezierflat.hybrid_fwd_diff` | `flatten_cubic`                                 |                       |
| `bezierflat.hain`            | `flatten_cubic`                                 |                       |
| `bezierflat.linear`          | `flatten_cubic`                                 | `flatten_quadratic`   |
| `bezierflat.recursive`       | `flatten_cubic`                                 | `flatten_quadratic`   |

- `levien` maps quadratics onto a parabola and spreads the subdivision points
  evenly in an arc-based measure; cubics go through quadratics first. The
  `19`, `37` and `55` variants split the tolerance 10/90, 30/70 and 50/50
  between the quadratic approximation and the flattening.
- `yzerman` cuts the cubic into quadratics at regular steps and flattens each
  one at regular steps, replacing flat ones by their baseline.
- `wang` splits at regular parameter steps; `fwd_diff` does the same with
  forward differences.
- `hybrid_fwd_diff` adapts its step size as it goes.
- `hain` handles inflection points separately and steps through the rest
  with a parabolic approximation.
- `linear` cuts flat pieces off the front of the curve; `recursive`
  subdivides at the midpoint until each piece is flat.

The `linear` and `recursive` cubic flatteners yield nothing for a curve that
is a single point within the tolerance, and take an optional flatness
criterion from `bezierflat.flatness.Flatness`: `DEFAULT`, `HFD` (second
differences of the control polygon) or `AGG` (summed distances of the control
points to the baseline):

```python
from bezierflat import linear
from bezierflat.flatness import Flatness

segments = list(linear.flatten_cubic(cubic, 0.25, Flatness.AGG))
```

## Helpers

- `wang.num_segments_cubic` / `wang.num_segments_quadratic`: the segment count
  for uniform parameter steps.
- `levien.num_quadratics` and `yzerman.num_quadratics`: how many quadratics a
  cubic is cut into.
- `levien.flattening_params` and `FlatteningParams.get_t`, with
  `levien.approx_parabola_integral` and `levien.approx_parabola_inv_integral`.
- `hain.find_inflection_points`: the inflection parameters of a cubic in
  `[0, 1)`, at most two; a straight line reports a single one at `0.0`.
- `flatness.cubic_is_flat`, `flatness.quadratic_is_flat`, `flatness.hfd_is_flat`,
  `flatness.agg_is_flat`: single-segment flatness tests.

## What it does not do

This is a library only. It has no command-line tool, does not read SVG or any
other file format, does not render anything, and has no benchmark or
error-measurement harness: curves are built in code and the segments are
handed back to the caller.