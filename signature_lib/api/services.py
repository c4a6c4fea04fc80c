"""Service layer for signature capture.

This module provides the high-level SignatureSession class, which sits
between a UI toolkit's touch or mouse events and the background signature
model. It translates touch phases into model operations, pushes updated
layers to an output sink only when they actually change, and tracks
whether the signature is empty.

The session never touches a toolkit directly. A UI provides:
    - an OutputSink that shows the committed bitmap (one raster layer)
      and the pending outline (one vector overlay layer)
    - optionally a dispatch function that runs a callable on the UI
      thread, so sink calls happen where the toolkit expects them

Example usage:
    Driving a session from pointer events::

        from signature_lib.api.services import SignatureSession

        session = SignatureSession(canvas_size=(600, 200), sink=my_canvas,
                                   dispatch=lambda fn: root.after(0, fn))
        session.touch_began((12, 80))
        session.touch_moved((30, 72))
        session.touch_moved((52, 70))
        session.touch_ended()
        png_bytes = session.export_png()

    Starting from a saved signature::

        session = SignatureSession(canvas_size=(600, 200), image='saved.png')
"""

from __future__ import annotations
import logging
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence, Union

from PIL import Image

from ..config import CanvasConfig, RGBA, StrokeConfig
from ..domain.outline import Outline
from ..drawing.async_model import AsyncSignatureModel, Dispatch
from ..drawing.model import ColorLike, ModelOutput, as_size
from ..drawing.provider import PointLike
from ..utils.rendering import encode_png, is_positive_size, load_image

# Logger for service errors
_logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, Image.Image]


class OutputSink(Protocol):
    """Display surface for the two signature layers."""

    def show_image(self, image: Optional[Image.Image]) -> None:
        """Show the committed bitmap (None clears the raster layer)."""

    def show_outline(self, outline: Optional[Outline]) -> None:
        """Show the pending outline (None clears the vector layer)."""


class SignatureSession:
    """Touch-driven signature capture on top of AsyncSignatureModel.

    Touch phases map onto model operations the way a finger on a screen
    behaves: a new touch ends the previous line, so the last segment of a
    line stays pending (and visible) until the next touch begins or the
    image is requested.

    Attributes:
        sink: OutputSink receiving layer updates, or None.
        on_empty_change: Called with (session, is_empty) when the
            signature goes from empty to non-empty or back.
    """

    def __init__(self,
                 canvas_size: Sequence[float] = (0, 0),
                 color: Optional[ColorLike] = None,
                 image: Optional[ImageSource] = None,
                 sink: Optional[OutputSink] = None,
                 on_empty_change: Optional[Callable[[SignatureSession, bool], None]] = None,
                 dispatch: Optional[Dispatch] = None,
                 stroke_config: Optional[StrokeConfig] = None,
                 canvas_config: Optional[CanvasConfig] = None,
                 model: Optional[AsyncSignatureModel] = None):
        """Initialize the session.

        Args:
            canvas_size: Initial (width, height) of the drawing surface.
                May be (0, 0) until the surface has been laid out.
            color: Signature color; defaults to the canvas config color.
            image: Optional saved signature to start from. It is seeded
                into the model on the first resize to a positive size.
            sink: Optional OutputSink for layer updates.
            on_empty_change: Optional empty-state callback.
            dispatch: Optional function scheduling callables on the UI
                thread. Without it, sink and callbacks run on the worker.
            stroke_config: Stroke tuning values.
            canvas_config: Rendering values.
            model: Existing AsyncSignatureModel to drive instead of
                creating one.
        """
        self._model = model or AsyncSignatureModel(
            canvas_size=canvas_size,
            color=color,
            stroke_config=stroke_config,
            canvas_config=canvas_config,
        )
        self.sink = sink
        self.on_empty_change = on_empty_change
        self._dispatch = dispatch
        self._preset_image = load_image(image) if image is not None else None
        self._shown_image: Optional[Image.Image] = None
        self._shown_outline: Optional[Outline] = None
        self._is_empty = True

        if self._preset_image is not None and is_positive_size(as_size(canvas_size)):
            self._apply_preset_image()
            self.refresh()

    # -------- State ---------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        """Whether neither layer has content, as of the last refresh."""
        return self._is_empty

    @property
    def color(self) -> RGBA:
        return self._model.color

    @property
    def canvas_size(self):
        return self._model.canvas_size

    # -------- Touch input ---------------------------------------------------
    def touch_began(self, point: PointLike) -> None:
        """Start a new line at a point."""
        self._model.end_continuous_line()
        self._model.add_point(point)
        self.refresh()

    def touch_moved(self, point: PointLike) -> None:
        """Extend the current line."""
        self._model.add_point(point)
        self.refresh()

    def touch_ended(self) -> None:
        """Finish a touch. The line stays open until the next touch."""
        self.refresh()

    # -------- Surface -------------------------------------------------------
    def resize(self, size: Sequence[float]) -> None:
        """Match the canvas to the drawing surface's new size."""
        self._model.set_canvas_size(size)
        if self._preset_image is not None and is_positive_size(as_size(size)):
            self._apply_preset_image()
        self.refresh()

    def set_color(self, color: ColorLike) -> None:
        """Color for everything drawn from now on."""
        self._model.set_color(color)

    def reset(self) -> None:
        """Clear the signature."""
        self._model.reset()
        self.refresh()

    def refresh(self) -> Future:
        """Push the current layers to the sink and update is_empty."""
        return self._model.get_output(self._apply_output, self._dispatch)

    # -------- Export --------------------------------------------------------
    def full_image(self) -> Optional[Image.Image]:
        """Signature image with a transparent background, or None."""
        return self._model.full_image()

    def export_png(self) -> Optional[bytes]:
        """Signature as PNG bytes, or None if nothing has been drawn."""
        image = self.full_image()
        if image is None:
            return None
        return encode_png(image)

    def save_png(self, path: Union[str, Path]) -> bool:
        """Write the signature to a PNG file.

        Returns:
            True if a file was written, False if the signature is empty.
        """
        image = self.full_image()
        if image is None:
            _logger.info("Signature is empty, nothing saved to %s", path)
            return False
        image.save(path, format='PNG')
        _logger.info("Saved %dx%d signature to %s", image.width, image.height, path)
        return True

    # -------- Lifecycle -----------------------------------------------------
    def close(self) -> None:
        self._model.close()

    def __enter__(self) -> SignatureSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------- Internal helpers ---------------------------------------------
    def _apply_preset_image(self) -> None:
        self._model.seed_with_image(self._preset_image)
        self._preset_image = None

    def _apply_output(self, output: ModelOutput) -> None:
        if output.committed_image is not self._shown_image:
            self._shown_image = output.committed_image
            if self.sink is not None:
                self.sink.show_image(output.committed_image)
        if output.pending_outline is not self._shown_outline:
            self._shown_outline = output.pending_outline
            if self.sink is not None:
                self.sink.show_outline(output.pending_outline)

        if output.is_empty != self._is_empty:
            self._is_empty = output.is_empty
            if self.on_empty_change is not None:
                self.on_empty_change(self, output.is_empty)
