"""Content models handed to drive callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from s3drive.util.time import format_timestamp

DIRECTORY_TYPE: str = "directory"


@dataclass(slots=True)
class ContentEntry:
    """
    A file or directory as seen through the drive.

    Notes:
        - `path` is relative to the drive root (never includes the root prefix).
        - For directories, `content` is the list of immediate children when
          fetched, or None when not fetched.
        - For files, `content` is None unless the body was explicitly fetched.
        - `created` is only known for entries this drive just wrote.
    """

    name: str
    path: str
    type: str
    format: Optional[str] = None
    mimetype: str = ""
    content: Any = None
    size: Optional[int] = None
    last_modified: Optional[datetime] = None
    created: Optional[datetime] = None
    writable: bool = True

    @property
    def is_directory(self) -> bool:
        return self.type == DIRECTORY_TYPE

    @property
    def children(self) -> list[ContentEntry]:
        """Immediate children of a fetched directory ([] otherwise)."""
        if self.is_directory and isinstance(self.content, list):
            return list(self.content)
        return []

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready contents model."""
        content = self.content
        if self.is_directory and isinstance(content, list):
            content = [child.to_dict() for child in content]

        return {
            "name": self.name,
            "path": self.path,
            "last_modified": format_timestamp(self.last_modified),
            "created": format_timestamp(self.created),
            "content": content,
            "format": self.format,
            "mimetype": self.mimetype,
            "size": self.size,
            "writable": self.writable,
            "type": self.type,
        }


class TargetKind(str, Enum):
    """Whether a path resolved to a single object or to a key prefix."""

    FILE = "FILE"
    DIRECTORY = "DIRECTORY"


@dataclass(frozen=True, slots=True)
class Target:
    """
    A resolved path: its kind is decided once and passed along explicitly.

    `key` never carries a trailing "/"; `prefix` is what a fan-out lists.
    """

    kind: TargetKind
    key: str

    @property
    def is_directory(self) -> bool:
        return self.kind is TargetKind.DIRECTORY

    @property
    def prefix(self) -> str:
        return self.key + "/" if self.is_directory else self.key

    @property
    def marker_key(self) -> str:
        """Primary key: the directory marker for directories, the key for files."""
        return self.prefix


@dataclass(slots=True)
class CheckpointModel:
    """Checkpoint placeholder. The drive keeps no versions."""

    id: str = ""
    last_modified: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "last_modified": self.last_modified}


@dataclass(slots=True)
class DriveIdentity:
    """Identity of a mounted drive (owned by S3Drive)."""

    name: str
    root: str = ""
    region: str = ""
    provider: str = "S3"
    creation_date: str = ""
