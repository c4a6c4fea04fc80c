"""Events emitted by the stroke segment controller."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .outline import Outline


@dataclass(frozen=True)
class TemporaryOutline:
    """Outline of the still-open segment; replaces any previous one.

    ``outline`` is None when the open segment has been discarded.
    """
    outline: Optional[Outline]


@dataclass(frozen=True)
class FinalizedOutline:
    """Outline of a completed segment, to be committed permanently."""
    outline: Outline


OutlineEvent = Union[TemporaryOutline, FinalizedOutline]
OutlineListener = Callable[[OutlineEvent], None]
