"""Stroke segment controller.

Consumes touch points one at a time and turns them into outline events.
Points are collected in a four-slot window that describes one cubic bezier
segment under construction:

    empty (0) -> dot (1) -> line (2) -> quad (3) -> cubic (4)

After every accepted point a TemporaryOutline for the open segment is
emitted. When a fifth point arrives at a full window, the segment is
finalized (a FinalizedOutline is emitted) and a new window starts from the
finalized segment's last point, so consecutive segments always share their
join point exactly.

Typical usage example:

    from signature_lib.drawing.provider import SegmentController

    events = []
    controller = SegmentController(listener=events.append)
    for x in range(0, 100, 10):
        controller.add_point((x, 0))
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Union

from ..config import POINTS_PER_SEGMENT, StrokeConfig
from ..domain.events import FinalizedOutline, OutlineEvent, OutlineListener, TemporaryOutline
from ..domain.geometry import Point, WeightedPoint
from .outliner import outline_for_window

logger = logging.getLogger(__name__)

PointLike = Union[Point, Sequence[float]]

_DEFAULT_CONFIG = StrokeConfig()


def weight_for_segment(a: Point, b: Point, config: StrokeConfig = _DEFAULT_CONFIG) -> float:
    """Stroke weight for the line between two consecutive points.

    Longer (faster) segments produce thinner strokes. With the default
    config the weight falls linearly from 7 at length 0 to 2 at length 50
    and stays at 2 beyond that.
    """
    length = a.distance_to(b)
    inversed_length = max(0.0, config.max_length_range - length)
    return inversed_length * config.weight_gradient + config.min_weight


def as_point(position: PointLike) -> Point:
    """Accept a Point or any (x, y) pair."""
    if isinstance(position, Point):
        return position
    return Point.from_tuple(position)


class SegmentController:
    """Sliding-window state machine that emits outline events.

    Forms one continuous line. Call reset() to start a new, unconnected
    line with the next point.

    Attributes:
        listener: Callable receiving each OutlineEvent, or None.
        config: Stroke tuning values.
    """

    def __init__(self, listener: Optional[OutlineListener] = None,
                 config: Optional[StrokeConfig] = None):
        self.listener = listener
        self.config = config or _DEFAULT_CONFIG
        self._points: List[WeightedPoint] = [WeightedPoint.zero()] * POINTS_PER_SEGMENT
        self._next_index = 0

    @property
    def next_index(self) -> int:
        """Number of populated window slots (4 means the window is full)."""
        return self._next_index

    @property
    def window(self) -> Tuple[WeightedPoint, ...]:
        """Snapshot of all four window slots."""
        return tuple(self._points)

    def add_point(self, position: PointLike) -> bool:
        """Add a point to the line.

        Returns:
            True if the point was accepted, False if it was discarded for
            being too close to the previous point.
        """
        point = as_point(position)

        if self._next_index == 0:
            self._start_new_line(WeightedPoint(point, self.config.dot_weight))
        else:
            previous = self._points[self._next_index - 1].point
            if previous.distance_to(point) < self.config.touch_distance_threshold:
                return False

            if self._next_index >= POINTS_PER_SEGMENT:
                self._finalize(point)
                self._start_new_line(self._points[3])

            weight = weight_for_segment(previous, point, self.config)
            self._append(WeightedPoint(point, weight))

        self._emit(TemporaryOutline(outline_for_window(self._points, self._next_index - 1)))
        return True

    def reset(self) -> None:
        """Discard the open segment; the next point starts a new line."""
        self._next_index = 0
        self._emit(TemporaryOutline(None))

    def _start_new_line(self, weighted_point: WeightedPoint) -> None:
        self._points[0] = weighted_point
        self._next_index = 1

    def _append(self, weighted_point: WeightedPoint) -> None:
        self._points[self._next_index] = weighted_point
        self._next_index += 1

    def _finalize(self, next_line_start: Point) -> None:
        # Move the last point halfway towards the next line's start
        touch_point_2 = self._points[2].point
        new_touch_point_3 = touch_point_2.average(next_line_start)
        self._points[3] = WeightedPoint(
            new_touch_point_3,
            weight_for_segment(touch_point_2, new_touch_point_3, self.config),
        )

        outline = outline_for_window(self._points, 3)
        if outline is None:
            return
        logger.debug("Finalized segment ending at (%.1f, %.1f)",
                     new_touch_point_3.x, new_touch_point_3.y)
        self._emit(FinalizedOutline(outline))

    def _emit(self, event: OutlineEvent) -> None:
        if self.listener is not None:
            self.listener(event)
