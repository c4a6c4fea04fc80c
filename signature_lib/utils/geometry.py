"""Geometric utility functions.

This module converts outline path commands into the flat polygons that the
rasterizer fills. Curves are sampled in their Bernstein form with numpy,
with a sample count that grows with the curve's control-polygon length.

The module provides the following functions:
    bezier_points: Sample a quadratic or cubic bezier curve.
    curve_sample_count: Number of samples needed for a given tolerance.
    flatten_outline: Convert an Outline into a closed polygon.

Example usage:
    Flattening an outline::

        from signature_lib.drawing.outliner import dot
        from signature_lib.domain import Point, WeightedPoint
        from signature_lib.utils.geometry import flatten_outline

        polygon = flatten_outline(dot(WeightedPoint(Point(10, 10), 3.0)))
        print(f"{len(polygon)} vertices")
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

from ..config import FLATTEN_TOLERANCE
from ..domain.geometry import Point
from ..domain.outline import ClosePath, CubicTo, LineTo, MoveTo, Outline, QuadTo

MIN_CURVE_SAMPLES = 4
MAX_CURVE_SAMPLES = 128


def bezier_points(control_points: Sequence[Point], num: int) -> np.ndarray:
    """Sample a bezier curve at evenly spaced parameter values.

    Args:
        control_points: Three (quadratic) or four (cubic) control points.
        num: Number of samples, including both endpoints. Must be >= 2.

    Returns:
        Array of shape (num, 2) with the sampled (x, y) positions. The
        first and last rows equal the first and last control points.

    Example:
        >>> pts = bezier_points([Point(0, 0), Point(5, 10), Point(10, 0)], 3)
        >>> pts[1].tolist()
        [5.0, 5.0]
    """
    ctrl = np.array([p.to_tuple() for p in control_points], dtype=np.float64)
    degree = len(ctrl) - 1
    t = np.linspace(0.0, 1.0, max(2, num))[:, None]
    mt = 1.0 - t

    result = np.zeros((len(t), 2), dtype=np.float64)
    for i in range(degree + 1):
        coeff = math.comb(degree, i) * (mt ** (degree - i)) * (t ** i)
        result += coeff * ctrl[i]

    # Exact endpoints keep adjoining segments watertight
    result[0] = ctrl[0]
    result[-1] = ctrl[-1]
    return result


def curve_sample_count(control_points: Sequence[Point],
                       tolerance: float = FLATTEN_TOLERANCE) -> int:
    """Number of samples needed to flatten a curve within a tolerance.

    Uses the control-polygon length as an upper bound of the arc length.
    """
    length = sum(
        control_points[i].distance_to(control_points[i + 1])
        for i in range(len(control_points) - 1)
    )
    if length == 0:
        return 2
    n = math.ceil(math.sqrt(length / tolerance))
    return int(min(MAX_CURVE_SAMPLES, max(MIN_CURVE_SAMPLES, n)))


def flatten_outline(outline: Outline,
                    tolerance: float = FLATTEN_TOLERANCE) -> List[Tuple[float, float]]:
    """Convert an outline into a polygon suitable for filling.

    Args:
        outline: Outline to flatten.
        tolerance: Approximate maximum distance between a curve and its
            flattened polygon, in canvas units.

    Returns:
        List of (x, y) vertices. The polygon is implicitly closed; the
        starting vertex is not repeated at the end. Empty if the outline
        has no commands.
    """
    polygon: List[Tuple[float, float]] = []
    current = None
    start = None

    for cmd in outline:
        if isinstance(cmd, MoveTo):
            current = start = cmd.point
            polygon.append((float(cmd.point.x), float(cmd.point.y)))
        elif isinstance(cmd, LineTo):
            current = cmd.point
            polygon.append((float(cmd.point.x), float(cmd.point.y)))
        elif isinstance(cmd, (QuadTo, CubicTo)):
            if isinstance(cmd, QuadTo):
                ctrl = [current, cmd.control, cmd.point]
            else:
                ctrl = [current, cmd.control1, cmd.control2, cmd.point]
            samples = bezier_points(ctrl, curve_sample_count(ctrl, tolerance))
            polygon.extend((float(x), float(y)) for x, y in samples[1:])
            current = cmd.point
        elif isinstance(cmd, ClosePath):
            current = start

    if len(polygon) > 1 and polygon[-1] == polygon[0]:
        polygon.pop()
    return polygon
