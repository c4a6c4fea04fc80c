"""Signature drawing pipeline.

Data flows one way through three layers, leaf to root:

    outliner     weighted points -> closed outline shapes (pure functions)
    provider     touch points -> TemporaryOutline / FinalizedOutline events
    model        events -> committed bitmap + pending outline

AsyncSignatureModel runs the model on a single background worker.
"""

from .async_model import AsyncSignatureModel
from .model import ModelOutput, SignatureRasterModel
from .outliner import bezier_curve, dot, line, outline_for_window, quad_curve
from .provider import SegmentController, weight_for_segment

__all__ = [
    'dot', 'line', 'quad_curve', 'bezier_curve', 'outline_for_window',
    'SegmentController', 'weight_for_segment',
    'SignatureRasterModel', 'ModelOutput',
    'AsyncSignatureModel',
]
