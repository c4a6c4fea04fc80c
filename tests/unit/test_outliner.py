"""Unit tests for the curve outliner.

Tests the outline constructors in signature_lib.drawing.outliner:
    - dot: circle of radius equal to the weight
    - line: quadrilateral ribbon between two points
    - quad_curve: quadratic ribbon with an averaged middle perpendicular
    - bezier_curve: cubic ribbon with averaged interior perpendiculars
    - outline_for_window: dispatch on the window index
"""

import math
import unittest

from signature_lib.domain.geometry import Point, WeightedPoint
from signature_lib.domain.outline import ClosePath, CubicTo, LineTo, MoveTo, QuadTo
from signature_lib.drawing.outliner import (
    bezier_curve,
    dot,
    line,
    outline_for_window,
    quad_curve,
)


def wp(x, y, weight):
    return WeightedPoint(Point(x, y), weight)


class TestDot(unittest.TestCase):
    """Tests for dot function."""

    def test_four_arcs(self):
        outline = dot(wp(10, 10, 3.0))
        kinds = [type(cmd) for cmd in outline]
        self.assertEqual(kinds, [MoveTo, CubicTo, CubicTo, CubicTo, CubicTo, ClosePath])

    def test_radius_equals_weight(self):
        outline = dot(wp(10, 10, 3.0))
        for p in outline.on_curve_points():
            self.assertAlmostEqual(math.hypot(p.x - 10, p.y - 10), 3.0)

    def test_closed_at_start(self):
        outline = dot(wp(0, 0, 5.0))
        self.assertEqual(outline.commands[0].point, outline.commands[-2].point)


class TestLine(unittest.TestCase):
    """Tests for line function."""

    def test_quadrilateral(self):
        """Edges run start->end on one side and back on the other."""
        outline = line(wp(0, 0, 4.0), wp(10, 0, 2.0))
        self.assertEqual([type(cmd) for cmd in outline],
                         [MoveTo, LineTo, LineTo, LineTo, ClosePath])
        self.assertEqual(outline.on_curve_points(),
                         [Point(0, -2), Point(10, -1), Point(10, 1), Point(0, 2)])

    def test_width_follows_weights(self):
        outline = line(wp(0, 0, 6.0), wp(0, 20, 2.0))
        a_start, b_start, b_end, a_end = outline.on_curve_points()
        self.assertAlmostEqual(a_start.distance_to(a_end), 6.0)
        self.assertAlmostEqual(b_start.distance_to(b_end), 2.0)

    def test_coincident_points_degenerate(self):
        """Two identical points give a zero-area outline instead of failing."""
        outline = line(wp(5, 5, 3.0), wp(5, 5, 3.0))
        self.assertEqual(set(outline.on_curve_points()), {Point(5, 5)})


class TestQuadCurve(unittest.TestCase):
    """Tests for quad_curve function."""

    def test_straight_quad(self):
        outline = quad_curve(wp(0, 0, 2.0), wp(10, 0, 2.0), wp(20, 0, 2.0))
        cmds = outline.commands
        self.assertEqual([type(cmd) for cmd in cmds],
                         [MoveTo, QuadTo, LineTo, QuadTo, ClosePath])
        self.assertEqual(cmds[0].point, Point(0, -1))
        self.assertEqual(cmds[1].control, Point(10, -1))
        self.assertEqual(cmds[1].point, Point(20, -1))
        self.assertEqual(cmds[2].point, Point(20, 1))
        self.assertEqual(cmds[3].control, Point(10, 1))
        self.assertEqual(cmds[3].point, Point(0, 1))

    def test_middle_perpendicular_is_averaged(self):
        """At a right-angle corner the middle control sits on the diagonal."""
        outline = quad_curve(wp(0, 0, 2.0), wp(10, 0, 2.0), wp(10, 10, 2.0))
        control = outline.commands[1].control
        # Average of (10, -1) from a->b and (11, 0) from b->c
        self.assertAlmostEqual(control.x, 10.5)
        self.assertAlmostEqual(control.y, -0.5)


class TestBezierCurve(unittest.TestCase):
    """Tests for bezier_curve function."""

    def test_straight_cubic(self):
        outline = bezier_curve(wp(0, 0, 2.0), wp(10, 0, 2.0), wp(20, 0, 2.0), wp(30, 0, 2.0))
        cmds = outline.commands
        self.assertEqual([type(cmd) for cmd in cmds],
                         [MoveTo, CubicTo, LineTo, CubicTo, ClosePath])
        self.assertEqual(cmds[0].point, Point(0, -1))
        self.assertEqual((cmds[1].control1, cmds[1].control2, cmds[1].point),
                         (Point(10, -1), Point(20, -1), Point(30, -1)))
        self.assertEqual(cmds[2].point, Point(30, 1))
        self.assertEqual((cmds[3].control1, cmds[3].control2, cmds[3].point),
                         (Point(20, 1), Point(10, 1), Point(0, 1)))

    def test_end_widths(self):
        outline = bezier_curve(wp(0, 0, 3.0), wp(10, 5, 6.0), wp(20, 0, 6.0), wp(40, 0, 5.0))
        a_start, d_start, d_end, a_end = outline.on_curve_points()
        self.assertAlmostEqual(a_start.distance_to(a_end), 3.0)
        self.assertAlmostEqual(d_start.distance_to(d_end), 5.0)

    def test_deterministic(self):
        args = (wp(0, 0, 3.0), wp(7, 3, 5.0), wp(15, 1, 4.0), wp(22, 8, 2.5))
        self.assertEqual(bezier_curve(*args), bezier_curve(*args))


class TestOutlineForWindow(unittest.TestCase):
    """Tests for outline_for_window function."""

    def setUp(self):
        self.window = [wp(0, 0, 3.0), wp(10, 0, 6.0), wp(20, 0, 6.0), wp(30, 0, 6.0)]

    def test_index_selects_shape(self):
        self.assertEqual(outline_for_window(self.window, 0), dot(self.window[0]))
        self.assertEqual(outline_for_window(self.window, 1), line(*self.window[:2]))
        self.assertEqual(outline_for_window(self.window, 2), quad_curve(*self.window[:3]))
        self.assertEqual(outline_for_window(self.window, 3), bezier_curve(*self.window))

    def test_out_of_range_index(self):
        self.assertIsNone(outline_for_window(self.window, -1))
        self.assertIsNone(outline_for_window(self.window, 4))


if __name__ == '__main__':
    unittest.main()
