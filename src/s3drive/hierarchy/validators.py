"""Argument validation helpers for hierarchy operations."""

from __future__ import annotations

from s3drive.errors import InvalidArgumentError
from s3drive.paths import SEP


def validate_not_root(path: str, action: str) -> None:
    if not path:
        raise InvalidArgumentError(f"Drive root is protected: cannot {action} root")


def validate_distinct(old_path: str, new_path: str) -> None:
    if old_path == new_path:
        raise InvalidArgumentError(
            "Source and destination are the same path",
            details={"path": old_path},
        )


def validate_not_into_self(source_key: str, dest_key: str, action: str) -> None:
    """Reject placing a directory inside its own subtree."""
    if dest_key.startswith(source_key + SEP):
        raise InvalidArgumentError(
            f"Cannot {action} a directory into itself",
            details={"source": source_key, "destination": dest_key},
        )
