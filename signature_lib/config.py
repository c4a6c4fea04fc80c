"""Shared configuration for signature stroke generation.

This module centralizes the tuning values used by:
    - drawing.provider (point filtering and stroke weight)
    - drawing.outliner (dot radius)
    - drawing.model and utils.rendering (canvas, color, anti-aliasing)

The stroke constants were tuned for typical touchscreen DPI. They are
defaults, not invariants: pass a StrokeConfig to retarget a different
input resolution.

Typical usage example:

    from signature_lib.config import StrokeConfig, load_config

    config = StrokeConfig(touch_distance_threshold=1.0)
    stroke_config, canvas_config = load_config('signature.json')
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Tuple

# Weight of the very first point of a line (radius of a single tap dot)
DOT_WEIGHT = 3.0

# Points closer than this to the previous point are dropped as noise
TOUCH_DISTANCE_THRESHOLD = 2.0

# Segment lengths above this all produce MIN_WEIGHT
MAX_LENGTH_RANGE = 50.0

# weight = max(0, MAX_LENGTH_RANGE - length) * WEIGHT_GRADIENT + MIN_WEIGHT
WEIGHT_GRADIENT = 0.1
MIN_WEIGHT = 2.0

# One cubic bezier per window
POINTS_PER_SEGMENT = 4

# Opaque black
DEFAULT_COLOR = (0, 0, 0, 255)

# Mask supersampling factor used for anti-aliased fills
DEFAULT_SUPERSAMPLE = 3

# Maximum distance (in canvas units) between a flattened curve and its samples
FLATTEN_TOLERANCE = 0.5

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class StrokeConfig:
    """Tuning values for the stroke segment controller.

    Attributes:
        dot_weight: Weight given to the first point of a line.
        touch_distance_threshold: Minimum distance from the previous
            accepted point for a new point to be accepted.
        max_length_range: Segment length at which the weight bottoms out.
        weight_gradient: Weight gained per unit of length below
            max_length_range.
        min_weight: Weight of a segment at or above max_length_range.
    """
    dot_weight: float = DOT_WEIGHT
    touch_distance_threshold: float = TOUCH_DISTANCE_THRESHOLD
    max_length_range: float = MAX_LENGTH_RANGE
    weight_gradient: float = WEIGHT_GRADIENT
    min_weight: float = MIN_WEIGHT

    @property
    def max_weight(self) -> float:
        """Weight of a zero-length segment."""
        return self.max_length_range * self.weight_gradient + self.min_weight


@dataclass(frozen=True)
class CanvasConfig:
    """Rendering values for the signature raster model.

    Attributes:
        color: RGBA fill color of the signature.
        supersample: Mask supersampling factor (1 disables anti-aliasing).
        flatten_tolerance: Curve flattening tolerance in canvas units.
    """
    color: RGBA = DEFAULT_COLOR
    supersample: int = DEFAULT_SUPERSAMPLE
    flatten_tolerance: float = FLATTEN_TOLERANCE

    def __post_init__(self):
        if self.supersample < 1:
            raise ValueError(f"supersample must be >= 1, got {self.supersample}")
        if self.flatten_tolerance <= 0:
            raise ValueError(f"flatten_tolerance must be > 0, got {self.flatten_tolerance}")


def _apply_overrides(base: Any, overrides: dict[str, Any], section: str) -> Any:
    known = {f.name for f in fields(base)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown {section} config keys: {sorted(unknown)}")
    if 'color' in overrides:
        overrides = dict(overrides, color=tuple(overrides['color']))
    return replace(base, **overrides)


def config_from_dict(data: dict[str, Any]) -> tuple[StrokeConfig, CanvasConfig]:
    """Build configs from a dictionary with optional 'stroke'/'canvas' keys.

    Args:
        data: Mapping such as ``{"stroke": {"dot_weight": 4}, "canvas": {"supersample": 1}}``.

    Returns:
        Tuple of (StrokeConfig, CanvasConfig) with overrides applied on top
        of the module defaults.

    Raises:
        ValueError: If a section or key is not recognized.
    """
    unknown = set(data) - {'stroke', 'canvas'}
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")
    stroke = _apply_overrides(StrokeConfig(), data.get('stroke') or {}, 'stroke')
    canvas = _apply_overrides(CanvasConfig(), data.get('canvas') or {}, 'canvas')
    return stroke, canvas


def load_config(path: str | Path) -> tuple[StrokeConfig, CanvasConfig]:
    """Load stroke and canvas configuration from a JSON file."""
    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return config_from_dict(data)
