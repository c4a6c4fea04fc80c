"""Utility functions for signature rendering.

This module provides the curve flattening and Pillow-based rasterization
used by the raster model.

Submodules:
    geometry: Bezier sampling and outline flattening.
    rendering: Outline filling, image compositing, PNG helpers.

Example usage:
    Rasterizing an outline::

        from signature_lib.utils import rasterize_outline

        image = rasterize_outline(outline, (200, 80), (0, 0, 0, 255))
        if image is not None:
            image.save('segment.png')
"""

from .geometry import bezier_points, curve_sample_count, flatten_outline
from .rendering import (
    RasterizationError,
    compose_image,
    encode_png,
    is_positive_size,
    load_image,
    new_canvas,
    parse_color,
    rasterize_outline,
)

__all__ = [
    'bezier_points', 'curve_sample_count', 'flatten_outline',
    'RasterizationError', 'compose_image', 'rasterize_outline',
    'is_positive_size', 'new_canvas', 'parse_color', 'encode_png', 'load_image',
]
