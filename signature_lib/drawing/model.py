"""Signature raster model.

Keeps the signature as two layers:

    committed_image  - bitmap holding every finalized segment
    pending_outline  - vector outline of the segment still being drawn

The pending outline changes on every point (it grows from a dot to a line
to a quad curve to a cubic curve), so it is never drawn into the bitmap
until its segment is finalized. Finalized segments are merged into the
bitmap once per four-point segment instead of once per point, which keeps
the per-point cost flat no matter how long the signature gets.

The visible signature is always committed_image plus the rasterized
pending_outline; the two are never stored pre-merged.

The model is synchronous and not thread-safe. Use AsyncSignatureModel to
drive it from a UI thread.

Typical usage example:

    from signature_lib.drawing.model import SignatureRasterModel

    model = SignatureRasterModel(canvas_size=(400, 150))
    for point in [(10, 50), (30, 60), (50, 55), (70, 40), (90, 45)]:
        model.add_point(point)
    model.end_continuous_line()
    model.current_full_image().save('signature.png')
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from PIL import Image

from ..config import CanvasConfig, RGBA, StrokeConfig
from ..domain.events import FinalizedOutline, OutlineEvent, TemporaryOutline
from ..domain.outline import Outline
from ..utils.rendering import RasterizationError, compose_image, parse_color
from .provider import PointLike, SegmentController

logger = logging.getLogger(__name__)

Size = Tuple[int, int]
ColorLike = Union[str, Sequence[int]]


@dataclass(frozen=True)
class ModelOutput:
    """Consistent snapshot of both layers.

    Attributes:
        committed_image: Bitmap of all finalized geometry, or None.
        pending_outline: Outline of the open segment, or None.
    """
    committed_image: Optional[Image.Image]
    pending_outline: Optional[Outline]

    @property
    def is_empty(self) -> bool:
        return self.committed_image is None and self.pending_outline is None


def as_size(size: Sequence[float]) -> Size:
    """Validate a (width, height) pair and convert it to ints."""
    width, height = int(size[0]), int(size[1])
    if width < 0 or height < 0:
        raise ValueError(f"Canvas size must not be negative, got {tuple(size)}")
    return (width, height)


class SignatureRasterModel:
    """Committed bitmap plus one pending outline.

    Attributes:
        committed_image: Bitmap of finalized geometry; None until there is
            something to show.
        pending_outline: Outline of the open segment, or None.
    """

    def __init__(self,
                 canvas_size: Sequence[float] = (0, 0),
                 color: Optional[ColorLike] = None,
                 stroke_config: Optional[StrokeConfig] = None,
                 canvas_config: Optional[CanvasConfig] = None):
        self._canvas_config = canvas_config or CanvasConfig()
        self._color: RGBA = parse_color(color) if color is not None else self._canvas_config.color
        self._canvas_size: Size = (0, 0)
        self.committed_image: Optional[Image.Image] = None
        self.pending_outline: Optional[Outline] = None
        self._full_image_cache = None
        self._controller = SegmentController(listener=self.handle_event, config=stroke_config)
        self.set_canvas_size(canvas_size)

    # -------- Properties ----------------------------------------------------
    @property
    def canvas_size(self) -> Size:
        return self._canvas_size

    @property
    def color(self) -> RGBA:
        return self._color

    @property
    def controller(self) -> SegmentController:
        return self._controller

    # -------- Drawing -------------------------------------------------------
    def add_point(self, position: PointLike) -> bool:
        """Feed a touch point to the segment controller."""
        return self._controller.add_point(position)

    def handle_event(self, event: OutlineEvent) -> None:
        """Listener for SegmentController events."""
        if isinstance(event, FinalizedOutline):
            self.on_finalized_outline(event.outline)
        elif isinstance(event, TemporaryOutline):
            self.on_temporary_outline(event.outline)

    def on_temporary_outline(self, outline: Optional[Outline]) -> None:
        """Replace the pending outline. Nothing is rasterized."""
        self.pending_outline = outline

    def on_finalized_outline(self, outline: Outline) -> None:
        """Merge a finalized outline into the committed bitmap."""
        self._commit(outline)

    def end_continuous_line(self) -> None:
        """Lift the pen: commit the pending outline and start a new line."""
        if self.pending_outline is not None:
            self._commit(self.pending_outline)
        self.pending_outline = None
        self._controller.reset()

    # -------- Queries -------------------------------------------------------
    def current_full_image(self) -> Optional[Image.Image]:
        """Committed bitmap with the pending outline drawn on top.

        Returns the committed bitmap itself when nothing is pending. The
        composite is cached until either layer or the color changes.
        """
        if self.pending_outline is None:
            return self.committed_image

        key = (self.pending_outline, self.committed_image, self._color, self._canvas_size)
        cached = self._full_image_cache
        if cached is not None and all(a is b for a, b in zip(cached[0], key)):
            return cached[1]

        try:
            image = self._compose(base=self.committed_image, outline=self.pending_outline)
        except RasterizationError as e:
            logger.warning("Full signature image unavailable: %s", e)
            return None
        self._full_image_cache = (key, image)
        return image

    def pending_layer(self) -> Optional[Image.Image]:
        """The pending outline alone, rasterized on a transparent canvas."""
        if self.pending_outline is None:
            return None
        try:
            return self._compose(outline=self.pending_outline)
        except RasterizationError as e:
            logger.warning("Pending layer unavailable: %s", e)
            return None

    def output(self) -> ModelOutput:
        """Snapshot of the committed bitmap and pending outline."""
        return ModelOutput(self.committed_image, self.pending_outline)

    # -------- Canvas --------------------------------------------------------
    def set_canvas_size(self, size: Sequence[float]) -> None:
        """Resize the canvas, keeping content anchored at the top left.

        The pending outline is committed at the old size first. Content
        outside the new bounds is cropped; new area is transparent.
        """
        new_size = as_size(size)
        if new_size == self._canvas_size:
            return

        self.end_continuous_line()
        old_size = self._canvas_size
        self._canvas_size = new_size
        try:
            self.committed_image = self._compose(base=self.committed_image)
        except RasterizationError as e:
            logger.warning("Could not resize committed image: %s", e)
        logger.debug("Canvas resized from %s to %s", old_size, new_size)

    def set_color(self, color: ColorLike) -> None:
        """Color used for outlines rasterized from now on."""
        self._color = parse_color(color)

    def seed_with_image(self, image: Image.Image) -> None:
        """Composite a previously saved signature over the committed bitmap.

        Call before drawing so the image acts as a base layer. The image
        is scaled to the canvas size.
        """
        if not isinstance(image, Image.Image):
            raise TypeError(f"Expected a PIL image, got {type(image).__name__}")
        try:
            self.committed_image = self._compose(base=self.committed_image, overlay=image)
        except RasterizationError as e:
            logger.warning("Could not seed signature image: %s", e)
            return
        logger.debug("Seeded signature with %dx%d image", image.width, image.height)

    def reset(self) -> None:
        """Clear the whole signature."""
        self.committed_image = None
        self.pending_outline = None
        self._full_image_cache = None
        self._controller.reset()

    # -------- Internal helpers ---------------------------------------------
    def _compose(self, base=None, overlay=None, outline=None) -> Optional[Image.Image]:
        return compose_image(
            self._canvas_size,
            base=base,
            overlay=overlay,
            outline=outline,
            color=self._color,
            supersample=self._canvas_config.supersample,
            tolerance=self._canvas_config.flatten_tolerance,
        )

    def _commit(self, outline: Outline) -> None:
        try:
            image = self._compose(base=self.committed_image, outline=outline)
        except RasterizationError as e:
            logger.warning("Segment not committed, image unavailable: %s", e)
            return
        self.committed_image = image
