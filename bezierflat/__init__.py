"""Flattening of quadratic and cubic Bézier curves into line segments."""

__version__ = "0.1.0"
__all__ = [
    "flatness",
    "fwd_diff",
    "geometry",
    "hain",
    "hybrid_fwd_diff",
    "levien",
    "linear",
    "recursive",
    "wang",
    "yzerman",
]