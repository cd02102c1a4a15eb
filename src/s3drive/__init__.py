"""s3drive public API."""

from __future__ import annotations

import logging

from s3drive.auth import AuthInfo, S3ClientFactory
from s3drive.controller import S3Controller
from s3drive.drive import DriveStatus, S3Drive
from s3drive.errors import (
    ApiError,
    AuthError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ReadOnlyError,
    S3DriveError,
    map_http_error,
)
from s3drive.filetypes import ExtensionRegistry, FileTypeInfo, default_registry
from s3drive.models import (
    CheckpointModel,
    ContentEntry,
    CreateOptions,
    DriveIdentity,
    SaveOptions,
    Target,
    TargetKind,
)
from s3drive.notify import ChangeEvent, Signal, SwitchEvent
from s3drive.state import DriveState, JsonFileStateStore, MemoryStateStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # High-level
    "S3Drive",
    "DriveStatus",
    "S3Controller",
    # Auth / config
    "AuthInfo",
    "S3ClientFactory",
    "DriveState",
    "JsonFileStateStore",
    "MemoryStateStore",
    # Models
    "ContentEntry",
    "CreateOptions",
    "SaveOptions",
    "CheckpointModel",
    "DriveIdentity",
    "Target",
    "TargetKind",
    "ExtensionRegistry",
    "FileTypeInfo",
    "default_registry",
    # Notifications
    "Signal",
    "ChangeEvent",
    "SwitchEvent",
    # Errors
    "S3DriveError",
    "InvalidStateError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "NetworkError",
    "ApiError",
    "ReadOnlyError",
    "HttpErrorInfo",
    "map_http_error",
]
