"""Persisted drive state exports for s3drive."""

from __future__ import annotations

from .store import DriveState, DriveStateStore, JsonFileStateStore, MemoryStateStore

__all__ = ["DriveState", "DriveStateStore", "JsonFileStateStore", "MemoryStateStore"]
