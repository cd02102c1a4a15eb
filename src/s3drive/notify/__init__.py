"""Change notification exports for s3drive."""

from __future__ import annotations

from .events import ChangeEvent, ChangeKind, SwitchEvent
from .signal import Signal

__all__ = ["Signal", "ChangeEvent", "ChangeKind", "SwitchEvent"]
