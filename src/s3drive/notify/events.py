"""Event payloads delivered by S3Drive signals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

from s3drive.models import ContentEntry

ChangeKind = Literal["new", "rename", "save", "delete"]

# Either a full entry or a path-only reference such as {"path": "a/b.txt"}.
ChangeValue = Optional[Union[ContentEntry, dict[str, Any]]]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A completed mutation. Emitted only after the store accepted it."""

    kind: ChangeKind
    old_value: ChangeValue = None
    new_value: ChangeValue = None


@dataclass(frozen=True, slots=True)
class SwitchEvent:
    """The drive now points at a different bucket and/or root."""

    bucket: str
    root: str
    region: str = ""
