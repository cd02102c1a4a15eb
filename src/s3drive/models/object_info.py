"""Data model for raw store objects and listing pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class ObjectInfo:
    """
    Represents a single object as reported by list/head.

    Notes:
        - `key` is the fully-qualified store key (root prefix included).
        - A key ending in "/" is a directory marker.
    """

    key: str
    size: Optional[int] = None
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None

    @property
    def is_directory_marker(self) -> bool:
        return self.key.endswith("/")


@dataclass(slots=True)
class StoredObject:
    """Object metadata plus its raw body, as returned by get."""

    info: ObjectInfo
    body: bytes
    content_type: Optional[str] = None


@dataclass(slots=True)
class ListingPage:
    """One page of a prefix listing."""

    items: list[ObjectInfo] = field(default_factory=list)
    is_truncated: bool = False
    continuation_token: Optional[str] = None
