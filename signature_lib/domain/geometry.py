"""Geometric value objects for signature strokes."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import math


@dataclass(frozen=True)
class Point:
    """Immutable 2D point."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return self.differential(other).length()

    def differential(self, other: Point) -> Point:
        """Vector from this point to another."""
        return Point(other.x - self.x, other.y - self.y)

    def average(self, other: Point) -> Point:
        """Midpoint between this point and another."""
        return Point((self.x + other.x) * 0.5, (self.y + other.y) * 0.5)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        """Length when treated as a vector from origin."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, t: Tuple[float, float]) -> Point:
        """Create from tuple."""
        return cls(float(t[0]), float(t[1]))


@dataclass(frozen=True)
class WeightedPoint:
    """A point plus the local stroke thickness (diameter) at that point."""
    point: Point
    weight: float

    @classmethod
    def zero(cls) -> WeightedPoint:
        """Filler for window slots that have not been populated yet."""
        return cls(Point(0.0, 0.0), 0.0)


@dataclass(frozen=True)
class Line:
    """A straight line between two points."""
    start: Point
    end: Point

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def average(self, other: Line) -> Line:
        """Line whose endpoints are the midpoints of both lines' endpoints."""
        return Line(self.start.average(other.start), self.end.average(other.end))

    def perpendicular_at(self, weighted_point: WeightedPoint) -> Line:
        """Segment perpendicular to this line, centered on a weighted point.

        The result has length equal to the point's weight, half on each
        side of the point. A zero weight or a zero-length line yields a
        zero-length segment at the point.
        """
        middle = weighted_point.point
        weight = weighted_point.weight
        relative_end = self.start.differential(self.end)

        if weight == 0 or (relative_end.x == 0 and relative_end.y == 0):
            return Line(middle, middle)

        modifier = (weight / 2) / relative_end.length()
        dx = relative_end.x * modifier
        dy = relative_end.y * modifier

        # Rotated by 90 degrees either way
        return Line(
            Point(middle.x + dy, middle.y - dx),
            Point(middle.x - dy, middle.y + dx),
        )


def perpendiculars(a: WeightedPoint, b: WeightedPoint) -> Tuple[Line, Line]:
    """Perpendicular segments at both ends of the line a -> b."""
    line = Line(a.point, b.point)
    return line.perpendicular_at(a), line.perpendicular_at(b)
