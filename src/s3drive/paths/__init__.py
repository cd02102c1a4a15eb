"""Path/root resolution exports for s3drive."""

from __future__ import annotations

from .location import DriveLocation
from .resolver import (
    SEP,
    basename,
    dirname,
    format_root,
    join,
    normalize_path,
    relative_to_root,
    resolve,
    split_ext,
    strip_drive_name,
)

__all__ = [
    "SEP",
    "DriveLocation",
    "normalize_path",
    "join",
    "basename",
    "dirname",
    "split_ext",
    "strip_drive_name",
    "resolve",
    "relative_to_root",
    "format_root",
]
