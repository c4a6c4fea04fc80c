#!/usr/bin/env python3
"""Command-line interface for rendering recorded signatures.

Replays recorded touch strokes through the signature model and writes the
resulting image as a PNG with a transparent background.

The input is JSON, either an object with a "strokes" key or a bare list of
strokes, where each stroke is a list of [x, y] points:

    {"strokes": [[[10, 40], [22, 35], [40, 31]], [[60, 20], [61, 50]]]}

Usage:
    signature-render strokes.json -o signature.png
    signature-render strokes.json -o signature.png --width 800 --height 300 --color navy
    signature-render strokes.json -o signature.png --seed previous.png --config tuning.json

Or run via the module:
    python -m signature_lib.cli strokes.json -o signature.png
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from .config import CanvasConfig, StrokeConfig, load_config
from .drawing.model import SignatureRasterModel
from .utils.rendering import load_image

logger = logging.getLogger(__name__)

Stroke = List[Tuple[float, float]]


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Set up the root logger for the signature-render command.

    Replaces any existing root handlers, so repeated calls do not
    duplicate output. PIL is held at WARNING.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
        log_file: Optional path to log file. If None, logs to stderr only.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('PIL').setLevel(logging.WARNING)

    logger.debug("Logging configured: level=%s, file=%s", level, log_file or 'stderr')


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        description='Render recorded signature strokes to a PNG'
    )
    parser.add_argument('input', type=str,
                        help='JSON file with recorded strokes')
    parser.add_argument('--output', '-o', type=str, required=True,
                        help='Output PNG path')
    parser.add_argument('--width', type=int, default=600,
                        help='Canvas width (default: 600)')
    parser.add_argument('--height', type=int, default=200,
                        help='Canvas height (default: 200)')
    parser.add_argument('--color', '-c', type=str, default=None,
                        help='Signature color, e.g. black or "#1a237e"')
    parser.add_argument('--supersample', type=int, default=None,
                        help='Anti-aliasing supersample factor (1 disables)')
    parser.add_argument('--config', type=str, default=None,
                        help='JSON file with "stroke"/"canvas" overrides')
    parser.add_argument('--seed', type=str, default=None,
                        help='Saved signature image to draw on top of')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        help='Log level (default: WARNING)')
    return parser


def read_strokes(path: str | Path) -> List[Stroke]:
    """Read recorded strokes from a JSON file.

    Raises:
        ValueError: If the file does not contain a list of point lists.
    """
    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('strokes')
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of strokes")

    strokes: List[Stroke] = []
    for i, stroke in enumerate(data):
        try:
            strokes.append([(float(p[0]), float(p[1])) for p in stroke])
        except (TypeError, IndexError, ValueError) as e:
            raise ValueError(f"{path}: stroke {i} is not a list of [x, y] points") from e
    return strokes


def render_strokes(strokes: Sequence[Stroke],
                   size: Tuple[int, int],
                   color: Optional[str] = None,
                   stroke_config: Optional[StrokeConfig] = None,
                   canvas_config: Optional[CanvasConfig] = None,
                   seed: Optional[Image.Image] = None) -> Optional[Image.Image]:
    """Replay strokes through a signature model.

    Each stroke is one continuous line, as if the pen were lifted between
    strokes.

    Returns:
        The rendered image, or None if nothing was drawn.
    """
    model = SignatureRasterModel(
        canvas_size=size,
        color=color,
        stroke_config=stroke_config,
        canvas_config=canvas_config,
    )
    if seed is not None:
        model.seed_with_image(seed)

    for stroke in strokes:
        for point in stroke:
            model.add_point(point)
        model.end_continuous_line()

    logger.info("Rendered %d strokes (%d points)",
                len(strokes), sum(len(s) for s in strokes))
    return model.current_full_image()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the signature-render command."""
    args = _create_argument_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        stroke_config, canvas_config = (
            load_config(args.config) if args.config else (StrokeConfig(), CanvasConfig())
        )
        if args.supersample is not None:
            canvas_config = CanvasConfig(
                color=canvas_config.color,
                supersample=args.supersample,
                flatten_tolerance=canvas_config.flatten_tolerance,
            )
        strokes = read_strokes(args.input)
        seed = load_image(args.seed) if args.seed else None
        image = render_strokes(
            strokes,
            (args.width, args.height),
            color=args.color,
            stroke_config=stroke_config,
            canvas_config=canvas_config,
            seed=seed,
        )
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if image is None:
        print("Error: nothing to render", file=sys.stderr)
        return 1

    image.save(args.output, format='PNG')
    print(f"Saved {image.width}x{image.height} signature to {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
