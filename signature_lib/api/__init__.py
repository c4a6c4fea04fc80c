"""API layer for signature capture.

This module provides the UI-facing service classes.

Classes:
    SignatureSession: Maps touch phases onto the background signature
        model and pushes layer updates to an OutputSink.
    OutputSink: Protocol for the display surface.

Example usage:
    Using SignatureSession::

        from signature_lib.api import SignatureSession

        with SignatureSession(canvas_size=(400, 150)) as session:
            session.touch_began((10, 40))
            session.touch_moved((40, 60))
            png = session.export_png()
"""

from .services import OutputSink, SignatureSession

__all__ = ['SignatureSession', 'OutputSink']
