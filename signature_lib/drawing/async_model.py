"""Serialized background wrapper around SignatureRasterModel.

Rasterizing segments is too expensive for a UI thread that has to keep up
with touch sampling, so every model operation is queued onto a single
worker thread and executed strictly in submission order. Only one task
touches the model at a time, so the model itself needs no locks.

Reads are queued onto the same worker, so they always observe a
consistent model. Their results come back as futures, or through a
callback that can be dispatched onto the caller's own event loop.

Architecture:
    UI thread                      worker thread (max 1)
    ---------                      ---------------------
    add_point(p)        ----->     model.add_point(p)
    get_output(cb)      ----->     snapshot = model.output()
    cb(snapshot)        <-----     dispatch(cb, snapshot)

reset() cancels everything still queued before clearing the model: tasks
are tagged with a generation number and any task from before the reset
that could not be cancelled is skipped when it reaches the worker.

Usage:
    from signature_lib.drawing.async_model import AsyncSignatureModel

    with AsyncSignatureModel(canvas_size=(400, 150)) as model:
        model.add_point((10, 10))
        model.add_point((40, 20))
        model.get_output(lambda output: print(output.pending_outline))
        image = model.full_image()
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Sequence

from PIL import Image

from ..config import CanvasConfig, RGBA, StrokeConfig
from .model import ColorLike, ModelOutput, Size, SignatureRasterModel
from .provider import PointLike

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], Any]


class AsyncSignatureModel:
    """Runs a SignatureRasterModel on one background worker.

    Mutating methods return immediately with a Future. The synchronous
    accessors (full_image, canvas_size, color) block until every task
    queued before them has run.
    """

    def __init__(self,
                 canvas_size: Sequence[float] = (0, 0),
                 color: Optional[ColorLike] = None,
                 stroke_config: Optional[StrokeConfig] = None,
                 canvas_config: Optional[CanvasConfig] = None,
                 model: Optional[SignatureRasterModel] = None):
        self._model = model or SignatureRasterModel(
            canvas_size=canvas_size,
            color=color,
            stroke_config=stroke_config,
            canvas_config=canvas_config,
        )
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='signature-model')
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: set[Future] = set()
        self._worker_thread: Optional[threading.Thread] = None

    # -------- Async ---------------------------------------------------------
    def add_point(self, position: PointLike) -> Future:
        """Queue a new touch point."""
        return self._submit(self._model.add_point, position)

    def end_continuous_line(self) -> Future:
        """Queue the end of the current line (pen lifted)."""
        return self._submit(self._model.end_continuous_line)

    def set_canvas_size(self, size: Sequence[float]) -> Future:
        return self._submit(self._model.set_canvas_size, size)

    def set_color(self, color: ColorLike) -> Future:
        return self._submit(self._model.set_color, color)

    def seed_with_image(self, image: Image.Image) -> Future:
        """Queue compositing of a previously saved signature image."""
        return self._submit(self._model.seed_with_image, image)

    def get_output(self, callback: Callable[[ModelOutput], None],
                   dispatch: Optional[Dispatch] = None) -> Future:
        """Deliver a consistent snapshot of both layers to a callback.

        Args:
            callback: Receives the ModelOutput.
            dispatch: Optional function that schedules a zero-argument
                callable on the caller's thread (for example a wrapper
                around Tk's ``after(0, ...)``). Without it the callback
                runs on the worker thread.

        Returns:
            Future resolving to the same ModelOutput.
        """
        def deliver() -> ModelOutput:
            output = self._model.output()
            if dispatch is None:
                callback(output)
            else:
                dispatch(lambda: callback(output))
            return output

        return self._submit(deliver)

    def reset(self, wait: bool = True) -> Future:
        """Cancel all queued work and clear the signature.

        Args:
            wait: Block until the model has been reset.
        """
        on_worker = threading.current_thread() is self._worker_thread
        future = None
        with self._lock:
            self._generation += 1
            stale = list(self._pending)
            self._pending.clear()
            # Queued with the new generation before any other thread can submit
            if not on_worker:
                future = self._enqueue(self._model.reset)

        cancelled = sum(1 for f in stale if f.cancel())
        if cancelled:
            logger.debug("Reset cancelled %d queued signature tasks", cancelled)

        if on_worker:
            self._model.reset()
            future = Future()
            future.set_result(None)
            return future

        future.add_done_callback(self._forget)
        if wait:
            future.result()
        return future

    # -------- Sync ----------------------------------------------------------
    def full_image(self) -> Optional[Image.Image]:
        """Committed bitmap plus the pending outline (blocking)."""
        return self._call_sync(self._model.current_full_image)

    @property
    def canvas_size(self) -> Size:
        return self._call_sync(lambda: self._model.canvas_size)

    @property
    def color(self) -> RGBA:
        return self._call_sync(lambda: self._model.color)

    def wait(self) -> None:
        """Block until every task queued so far has run."""
        self._call_sync(lambda: None)

    # -------- Lifecycle -----------------------------------------------------
    def close(self) -> None:
        """Finish queued work and stop the worker."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> AsyncSignatureModel:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------- Internal helpers ---------------------------------------------
    def _submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        with self._lock:
            future = self._enqueue(fn, *args)
        future.add_done_callback(self._forget)
        return future

    def _enqueue(self, fn: Callable[..., Any], *args: Any) -> Future:
        # Caller holds self._lock
        future = self._executor.submit(self._run, self._generation, fn, *args)
        self._pending.add(future)
        return future

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _run(self, generation: int, fn: Callable[..., Any], *args: Any) -> Any:
        self._worker_thread = threading.current_thread()
        if generation != self._generation:
            logger.debug("Skipping %s queued before reset", getattr(fn, '__name__', fn))
            return None
        try:
            return fn(*args)
        except Exception:
            logger.exception("Signature task %s failed", getattr(fn, '__name__', fn))
            raise

    def _call_sync(self, fn: Callable[[], Any]) -> Any:
        # Already on the worker (e.g. inside a get_output callback)
        if threading.current_thread() is self._worker_thread:
            return fn()
        return self._submit(fn).result()
