"""
TrackPlan Core API

High-level API for editing a track layout.

Modules:
- actions: Atomic edits (place, attach to a connector, remove)
- session: Pointer-driven placement with snapping and undo/redo
"""

from .actions import LayoutActions, ActionResult
from .session import LayoutSession

__all__ = [
    "LayoutActions",
    "ActionResult",
    "LayoutSession",
]
