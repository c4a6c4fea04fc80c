"""Closed, fillable outline shapes.

An Outline is the vector form of one piece of signature: a single closed
contour made of straight and bezier path commands. Thickness is baked into
the geometry, so outlines are filled, never stroked.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

from .geometry import Point


@dataclass(frozen=True)
class MoveTo:
    """Start the contour at a point."""
    point: Point


@dataclass(frozen=True)
class LineTo:
    """Straight edge to a point."""
    point: Point


@dataclass(frozen=True)
class QuadTo:
    """Quadratic bezier edge to a point."""
    control: Point
    point: Point


@dataclass(frozen=True)
class CubicTo:
    """Cubic bezier edge to a point."""
    control1: Point
    control2: Point
    point: Point


@dataclass(frozen=True)
class ClosePath:
    """Straight edge back to the contour's starting point."""


PathCommand = Union[MoveTo, LineTo, QuadTo, CubicTo, ClosePath]


@dataclass(frozen=True)
class Outline:
    """Immutable closed contour built from path commands.

    Attributes:
        commands: Path commands in drawing order. The first command is a
            MoveTo and the last a ClosePath.
    """
    commands: Tuple[PathCommand, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def control_points(self) -> List[Point]:
        """All points referenced by the path, including bezier controls."""
        points: List[Point] = []
        for cmd in self.commands:
            if isinstance(cmd, (MoveTo, LineTo)):
                points.append(cmd.point)
            elif isinstance(cmd, QuadTo):
                points.extend((cmd.control, cmd.point))
            elif isinstance(cmd, CubicTo):
                points.extend((cmd.control1, cmd.control2, cmd.point))
        return points

    def on_curve_points(self) -> List[Point]:
        """Points the contour actually passes through (segment endpoints)."""
        return [cmd.point for cmd in self.commands if not isinstance(cmd, ClosePath)]

    def bounds(self) -> Tuple[float, float, float, float]:
        """Conservative bounding box as (x_min, y_min, x_max, y_max).

        Uses the control polygon, which always contains the curve.
        """
        points = self.control_points()
        if not points:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return (min(xs), min(ys), max(xs), max(ys))


class OutlineBuilder:
    """Accumulates path commands and produces an Outline."""

    def __init__(self):
        self._commands: List[PathCommand] = []

    def move_to(self, point: Point) -> OutlineBuilder:
        self._commands.append(MoveTo(point))
        return self

    def line_to(self, point: Point) -> OutlineBuilder:
        self._commands.append(LineTo(point))
        return self

    def quad_to(self, control: Point, point: Point) -> OutlineBuilder:
        self._commands.append(QuadTo(control, point))
        return self

    def cubic_to(self, control1: Point, control2: Point, point: Point) -> OutlineBuilder:
        self._commands.append(CubicTo(control1, control2, point))
        return self

    def close(self) -> Outline:
        self._commands.append(ClosePath())
        return Outline(tuple(self._commands))
