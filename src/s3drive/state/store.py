"""Persistence of the last selected bucket/root across sessions."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol

from s3drive.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DriveState:
    """What the host remembers about the mounted drive."""

    bucket: str
    root: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"bucket": self.bucket, "root": self.root}


class DriveStateStore(Protocol):
    """Read/write pair for the persisted drive state."""

    def load(self) -> Optional[DriveState]: ...

    def save(self, state: DriveState) -> None: ...


class MemoryStateStore:
    """In-process state store (nothing survives the process)."""

    def __init__(self, state: Optional[DriveState] = None) -> None:
        self._state = state

    def load(self) -> Optional[DriveState]:
        return self._state

    def save(self, state: DriveState) -> None:
        self._state = state


class JsonFileStateStore:
    """
    State store backed by a small JSON file.

    A missing or unreadable file loads as None; the drive then falls back to
    its configured bucket and root.
    """

    def __init__(self, path: str) -> None:
        if not path or not isinstance(path, str):
            raise InvalidArgumentError("state file path must be a non-empty string")
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> Optional[DriveState]:
        if not os.path.exists(self._path):
            return None

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable drive state file %s: %s", self._path, exc)
            return None

        if not isinstance(payload, dict):
            return None
        bucket = payload.get("bucket")
        root = payload.get("root") or ""
        if not isinstance(bucket, str) or not bucket or not isinstance(root, str):
            return None
        return DriveState(bucket=bucket, root=root)

    def save(self, state: DriveState) -> None:
        state_dir = os.path.dirname(self._path)
        if state_dir:
            os.makedirs(state_dir, exist_ok=True)

        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f)
