"""Signature stroke package.

Renders a natural-looking, variable-width signature from a sparse,
irregularly-timed stream of touch points, cheaply enough to keep up with
touch sampling.

Architecture Overview:
    Points flow one way through the package:

    touch point -> SegmentController -> outline event -> SignatureRasterModel -> bitmap

    - drawing.outliner turns 1-4 weighted points into a closed, fillable
      outline whose thickness varies per point
    - drawing.provider keeps a 4-point sliding window and emits temporary
      and finalized outlines
    - drawing.model merges finalized outlines into a committed bitmap and
      keeps the one in-progress outline as vector data
    - drawing.async_model runs the model on a single background worker
    - api.services maps UI touch phases onto the async model

The package is organized into the following modules:
    config: Tuning constants and config dataclasses.
    domain: Value objects (Point, WeightedPoint, Outline) and events.
    drawing: Outliner, segment controller and raster models.
    utils: Curve flattening and Pillow rasterization.
    api: SignatureSession for UI integration.
    cli: signature-render command.

Example usage:
    Drawing without a UI::

        from signature_lib import SignatureRasterModel

        model = SignatureRasterModel(canvas_size=(300, 100))
        for point in [(10, 50), (40, 40), (70, 45), (100, 60), (130, 50)]:
            model.add_point(point)
        model.end_continuous_line()
        model.current_full_image().save('signature.png')

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .api import OutputSink, SignatureSession
from .config import CanvasConfig, StrokeConfig
from .domain import FinalizedOutline, Outline, Point, TemporaryOutline, WeightedPoint
from .drawing import (
    AsyncSignatureModel,
    ModelOutput,
    SegmentController,
    SignatureRasterModel,
    weight_for_segment,
)

__all__ = [
    # Domain objects
    'Point', 'WeightedPoint', 'Outline', 'TemporaryOutline', 'FinalizedOutline',
    # Drawing
    'SegmentController', 'weight_for_segment',
    'SignatureRasterModel', 'AsyncSignatureModel', 'ModelOutput',
    # Services
    'SignatureSession', 'OutputSink',
    # Config
    'StrokeConfig', 'CanvasConfig',
]

__version__ = '1.0.0'
