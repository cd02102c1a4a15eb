"""Public model exports for s3drive."""

from __future__ import annotations

from .content import (
    DIRECTORY_TYPE,
    CheckpointModel,
    ContentEntry,
    DriveIdentity,
    Target,
    TargetKind,
)
from .object_info import ListingPage, ObjectInfo, StoredObject
from .options import CreateOptions, SaveOptions

__all__ = [
    "DIRECTORY_TYPE",
    "ContentEntry",
    "CheckpointModel",
    "DriveIdentity",
    "Target",
    "TargetKind",
    "ObjectInfo",
    "StoredObject",
    "ListingPage",
    "CreateOptions",
    "SaveOptions",
]
