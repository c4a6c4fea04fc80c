"""Domain objects for signature strokes.

This module provides the value objects shared by every layer of the
package: geometric primitives, the outline shapes produced from them, and
the events that carry outlines from the segment controller to the raster
model.

The module exports the following classes:

Geometry classes:
    Point: Immutable 2D point with vector operations.
    WeightedPoint: Point plus local stroke thickness.
    Line: Straight line with perpendicular-segment construction.

Outline classes:
    Outline: Immutable closed contour of path commands.
    OutlineBuilder: Fluent builder producing an Outline.
    MoveTo, LineTo, QuadTo, CubicTo, ClosePath: Path commands.

Event classes:
    TemporaryOutline: Replaces the pending (uncommitted) outline.
    FinalizedOutline: Completed segment ready to be committed.

Example usage:
    Building an outline by hand::

        from signature_lib.domain import OutlineBuilder, Point

        outline = (OutlineBuilder()
                   .move_to(Point(0, 0))
                   .line_to(Point(10, 0))
                   .line_to(Point(10, 10))
                   .close())
        print(outline.bounds())
"""

from .events import FinalizedOutline, OutlineEvent, OutlineListener, TemporaryOutline
from .geometry import Line, Point, WeightedPoint, perpendiculars
from .outline import ClosePath, CubicTo, LineTo, MoveTo, Outline, OutlineBuilder, QuadTo

__all__ = [
    'Point', 'WeightedPoint', 'Line', 'perpendiculars',
    'Outline', 'OutlineBuilder', 'MoveTo', 'LineTo', 'QuadTo', 'CubicTo', 'ClosePath',
    'TemporaryOutline', 'FinalizedOutline', 'OutlineEvent', 'OutlineListener',
]
