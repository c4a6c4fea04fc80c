"""Signature rendering utilities.

This module is the rasterization primitive behind the signature raster
model: it fills outline shapes into RGBA bitmaps and composites bitmaps
together. Every image it returns is a new object; inputs are never
modified, so a failed render can never corrupt an image the caller holds.

The module provides the following functions:
    is_positive_size: Check that both canvas dimensions are > 0.
    new_canvas: Create a transparent RGBA canvas.
    rasterize_outline: Fill an outline on top of an optional base image.
    compose_image: Build a canvas from a base image, an overlay image and
        an outline, in that order.
    parse_color: Normalize a color string or tuple to RGBA.
    encode_png / load_image: PNG bytes in and out.

Example usage:
    Rendering a single outline::

        from signature_lib.drawing.outliner import dot
        from signature_lib.domain import Point, WeightedPoint
        from signature_lib.utils.rendering import rasterize_outline

        outline = dot(WeightedPoint(Point(20, 20), 3.0))
        image = rasterize_outline(outline, (40, 40), (0, 0, 0, 255))
        image.save('dot.png')
"""

from __future__ import annotations

import io
import math
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from PIL import Image, ImageColor, ImageDraw

from ..config import DEFAULT_SUPERSAMPLE, FLATTEN_TOLERANCE, RGBA
from ..domain.outline import Outline
from .geometry import flatten_outline

Size = Tuple[int, int]


class RasterizationError(RuntimeError):
    """The imaging backend failed to produce an image."""


def is_positive_size(size: Sequence[float]) -> bool:
    """True when both dimensions are strictly positive."""
    return size[0] > 0 and size[1] > 0


def new_canvas(size: Size) -> Image.Image:
    """Transparent RGBA canvas of the given size."""
    return Image.new('RGBA', (int(size[0]), int(size[1])), (0, 0, 0, 0))


def parse_color(color: Union[str, Sequence[int]]) -> RGBA:
    """Normalize a color to an (r, g, b, a) tuple.

    Args:
        color: A Pillow color string ('#1a1a1a', 'navy', 'rgb(0,0,0)') or
            an RGB/RGBA sequence of ints in 0..255.

    Returns:
        RGBA tuple. RGB inputs get full opacity.

    Raises:
        ValueError: If the color cannot be interpreted.
    """
    if isinstance(color, str):
        rgb = ImageColor.getrgb(color)
    else:
        rgb = tuple(int(c) for c in color)
    if len(rgb) == 3:
        rgb = rgb + (255,)
    if len(rgb) != 4 or any(c < 0 or c > 255 for c in rgb):
        raise ValueError(f"Invalid color: {color!r}")
    return rgb


def _fill_polygon(canvas: Image.Image, polygon, color: RGBA, supersample: int) -> None:
    xs = [p[0] for p in polygon]
    ys = [p[1] for p in polygon]
    box = (
        max(0, math.floor(min(xs))),
        max(0, math.floor(min(ys))),
        min(canvas.width, math.ceil(max(xs)) + 1),
        min(canvas.height, math.ceil(max(ys)) + 1),
    )
    width = box[2] - box[0]
    height = box[3] - box[1]
    if width <= 0 or height <= 0:
        return

    s = supersample
    mask = Image.new('L', (width * s, height * s), 0)
    draw = ImageDraw.Draw(mask)
    draw.polygon([((x - box[0]) * s, (y - box[1]) * s) for x, y in polygon], fill=255)
    if s > 1:
        mask = mask.resize((width, height), Image.Resampling.BOX)

    r, g, b, a = color
    if a < 255:
        mask = mask.point(lambda v: v * a // 255)
    layer = Image.new('RGBA', (width, height), (r, g, b, 0))
    layer.putalpha(mask)

    region = Image.alpha_composite(canvas.crop(box), layer)
    canvas.paste(region, box[:2])


def rasterize_outline(outline: Outline,
                      size: Size,
                      color: RGBA,
                      base: Optional[Image.Image] = None,
                      supersample: int = DEFAULT_SUPERSAMPLE,
                      tolerance: float = FLATTEN_TOLERANCE) -> Optional[Image.Image]:
    """Fill an outline with a color.

    Only the outline's bounding box (clipped to the canvas) is rendered.
    The coverage mask is drawn at ``supersample`` times the resolution and
    box-filtered down, which anti-aliases the edges.

    Args:
        outline: Closed outline to fill.
        size: Canvas size as (width, height).
        color: RGBA fill color.
        base: Optional image to draw on top of. It is copied, never
            modified, and is anchored at the origin.
        supersample: Mask supersampling factor (>= 1).
        tolerance: Curve flattening tolerance in canvas units.

    Returns:
        New RGBA image of the given size, or None if the size is not
        positive.

    Raises:
        RasterizationError: If the imaging backend fails.
    """
    if not is_positive_size(size):
        return None
    try:
        canvas = _canvas_from_base(size, base)
        polygon = flatten_outline(outline, tolerance)
        if len(polygon) >= 2:
            _fill_polygon(canvas, polygon, color, supersample)
        return canvas
    except (ValueError, MemoryError, OSError) as e:
        raise RasterizationError(f"Failed to rasterize outline: {e}") from e


def _canvas_from_base(size: Size, base: Optional[Image.Image]) -> Image.Image:
    if base is not None and base.mode == 'RGBA' and base.size == tuple(size):
        return base.copy()
    canvas = new_canvas(size)
    if base is not None:
        src = base if base.mode == 'RGBA' else base.convert('RGBA')
        # Top/left anchored, never scaled
        src = src.crop((0, 0, min(src.width, canvas.width), min(src.height, canvas.height)))
        canvas.paste(src, (0, 0))
    return canvas


def compose_image(size: Size,
                  base: Optional[Image.Image] = None,
                  overlay: Optional[Image.Image] = None,
                  outline: Optional[Outline] = None,
                  color: RGBA = (0, 0, 0, 255),
                  supersample: int = DEFAULT_SUPERSAMPLE,
                  tolerance: float = FLATTEN_TOLERANCE) -> Optional[Image.Image]:
    """Composite a base image, an overlay image and an outline.

    The layers are drawn bottom to top:
        1. ``base`` at the origin, at its own pixel size (cropped, not scaled)
        2. ``overlay`` scaled to fill the canvas
        3. ``outline`` filled with ``color``

    Args:
        size: Canvas size as (width, height).
        base: Optional base layer, typically the committed bitmap.
        overlay: Optional image composited over the base, typically a
            previously saved signature.
        outline: Optional outline filled on top.
        color: RGBA fill color for the outline.
        supersample: Mask supersampling factor (>= 1).
        tolerance: Curve flattening tolerance in canvas units.

    Returns:
        New RGBA image, or None when the size is not positive or when
        there is nothing to draw.

    Raises:
        RasterizationError: If the imaging backend fails.
    """
    if not is_positive_size(size) or (base is None and overlay is None and outline is None):
        return None
    try:
        canvas = _canvas_from_base(size, base)
        if overlay is not None:
            layer = overlay if overlay.mode == 'RGBA' else overlay.convert('RGBA')
            if layer.size != canvas.size:
                layer = layer.resize(canvas.size, Image.Resampling.LANCZOS)
            canvas = Image.alpha_composite(canvas, layer)
    except (ValueError, MemoryError, OSError) as e:
        raise RasterizationError(f"Failed to compose image: {e}") from e

    if outline is not None:
        return rasterize_outline(outline, size, color, base=canvas,
                                 supersample=supersample, tolerance=tolerance)
    return canvas


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()


def load_image(source: Union[str, Path, bytes, Image.Image]) -> Image.Image:
    """Load an image from a path, PNG/JPEG bytes or an existing image.

    Returns:
        RGBA copy of the image, fully loaded into memory.

    Raises:
        TypeError: If the source type is not supported.
        OSError: If the file cannot be read or decoded.
    """
    if isinstance(source, Image.Image):
        return source.convert('RGBA')
    if isinstance(source, (bytes, bytearray)):
        with Image.open(io.BytesIO(source)) as img:
            return img.convert('RGBA')
    if isinstance(source, (str, Path)):
        with Image.open(source) as img:
            return img.convert('RGBA')
    raise TypeError(f"Unsupported image source: {type(source).__name__}")
