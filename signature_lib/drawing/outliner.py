"""Geometric curve outliner.

Turns one to four weighted points into a closed outline whose thickness
varies per point: a dot for a single point, up to a full cubic bezier for
four. Instead of stroking a path with one fixed width, each edge of the
outline is offset from the centre line by half of the local weight, so the
thickness changes gradually along the curve.

Every function here is pure and deterministic.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..domain.geometry import Point, WeightedPoint, perpendiculars
from ..domain.outline import Outline, OutlineBuilder

# Control point distance for a quarter circle drawn as a cubic bezier
_KAPPA = 0.5522847498307936


def dot(p: WeightedPoint) -> Outline:
    """Circle centered on the point with radius equal to its weight."""
    c = p.point
    r = p.weight
    k = r * _KAPPA
    return (OutlineBuilder()
            .move_to(Point(c.x + r, c.y))
            .cubic_to(Point(c.x + r, c.y + k), Point(c.x + k, c.y + r), Point(c.x, c.y + r))
            .cubic_to(Point(c.x - k, c.y + r), Point(c.x - r, c.y + k), Point(c.x - r, c.y))
            .cubic_to(Point(c.x - r, c.y - k), Point(c.x - k, c.y - r), Point(c.x, c.y - r))
            .cubic_to(Point(c.x + k, c.y - r), Point(c.x + r, c.y - k), Point(c.x + r, c.y))
            .close())


def line(a: WeightedPoint, b: WeightedPoint) -> Outline:
    """Straight ribbon between two points.

    A quadrilateral joining the perpendicular segments at each end.
    """
    line_a, line_b = perpendiculars(a, b)
    return (OutlineBuilder()
            .move_to(line_a.start)
            .line_to(line_b.start)
            .line_to(line_b.end)
            .line_to(line_a.end)
            .close())


def quad_curve(a: WeightedPoint, b: WeightedPoint, c: WeightedPoint) -> Outline:
    """Quadratic ribbon through three points.

    The perpendicular at ``b`` is the average of the two perpendiculars
    computed for the lines a->b and b->c, so neither edge kinks at ``b``.
    """
    ab_start, ab_end = perpendiculars(a, b)
    bc_start, bc_end = perpendiculars(b, c)

    line_a = ab_start
    line_b = ab_end.average(bc_start)
    line_c = bc_end

    return (OutlineBuilder()
            .move_to(line_a.start)
            .quad_to(line_b.start, line_c.start)
            .line_to(line_c.end)
            .quad_to(line_b.end, line_a.end)
            .close())


def bezier_curve(a: WeightedPoint, b: WeightedPoint,
                 c: WeightedPoint, d: WeightedPoint) -> Outline:
    """Cubic ribbon through four points.

    Both interior perpendiculars are averaged with their neighbouring
    line's perpendicular, giving smooth joins at ``b`` and ``c``.
    """
    ab_start, ab_end = perpendiculars(a, b)
    bc_start, bc_end = perpendiculars(b, c)
    cd_start, cd_end = perpendiculars(c, d)

    line_a = ab_start
    line_b = ab_end.average(bc_start)
    line_c = bc_end.average(cd_start)
    line_d = cd_end

    return (OutlineBuilder()
            .move_to(line_a.start)
            .cubic_to(line_b.start, line_c.start, line_d.start)
            .line_to(line_d.end)
            .cubic_to(line_c.end, line_b.end, line_a.end)
            .close())


def outline_for_window(window: Sequence[WeightedPoint], index: int) -> Optional[Outline]:
    """Outline for the window prefix ending at ``index``.

    Index 0 gives a dot, 1 a line, 2 a quad curve and 3 a cubic curve.
    Any other index gives None.
    """
    if index == 0:
        return dot(window[0])
    if index == 1:
        return line(window[0], window[1])
    if index == 2:
        return quad_curve(window[0], window[1], window[2])
    if index == 3:
        return bezier_curve(window[0], window[1], window[2], window[3])
    return None
