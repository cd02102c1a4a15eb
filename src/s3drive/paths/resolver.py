"""Path normalization and root-prefix resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from s3drive.controller import S3Controller

logger = logging.getLogger(__name__)

SEP: str = "/"


def normalize_path(path: Optional[str]) -> str:
    """Collapse duplicate separators and strip leading/trailing ones."""
    if not path:
        return ""
    return SEP.join(part for part in path.split(SEP) if part)


def join(*parts: Optional[str]) -> str:
    """Join path segments with a single separator, skipping empty ones."""
    return normalize_path(SEP.join(p for p in parts if p))


def basename(path: str) -> str:
    return normalize_path(path).rpartition(SEP)[2]


def dirname(path: str) -> str:
    return normalize_path(path).rpartition(SEP)[0]


def split_ext(name: str) -> tuple[str, str]:
    """
    Split a name into (stem, extension) with the extension carrying no dot.

    The last dot wins ("a.tar.gz" -> ("a.tar", "gz")). A leading dot starts an
    extension too, so dotfiles are files (".env" -> ("", "env")).
    """
    stem, dot, ext = name.rpartition(".")
    if not dot:
        return name, ""
    return stem, ext


def strip_drive_name(path: str, drive_name: Optional[str]) -> str:
    """
    Remove a drive qualifier callers sometimes prepend.

    Accepts "<drive>:<path>", "<drive>/<path>" and the bare drive name (which
    addresses the drive root).
    """
    if not path:
        return ""
    stripped = path.lstrip(SEP)
    if not drive_name:
        return stripped

    for qualifier in (drive_name + ":", drive_name + SEP):
        if stripped.startswith(qualifier):
            return stripped[len(qualifier):]
    if stripped == drive_name:
        return ""
    return stripped


def resolve(root: str, path: Optional[str], drive_name: Optional[str] = None) -> str:
    """Return the store key for path under root ("root/path", root omitted if empty)."""
    relative = normalize_path(strip_drive_name(path or "", drive_name))
    return join(normalize_path(root), relative)


def relative_to_root(root: str, key: str) -> str:
    """Inverse of resolve(): drop the root prefix from a store key."""
    key = normalize_path(key)
    norm_root = normalize_path(root)
    if not norm_root:
        return key
    if key == norm_root:
        return ""
    if key.startswith(norm_root + SEP):
        return key[len(norm_root) + 1:]
    return key


def format_root(controller: S3Controller, bucket: str, candidate: Optional[str]) -> str:
    """
    Validate a candidate root against the bucket.

    Returns the normalized candidate when a directory marker or any object
    exists under it, otherwise "" (the bucket top level). Not-found never
    escapes; transport and auth errors do.

    Note:
        This is a check-then-use lookup; a concurrent delete can still remove
        the root right after it was accepted.
    """
    root = normalize_path(candidate)
    if not root:
        return ""

    prefix = root + SEP
    if controller.exists(bucket, prefix) or controller.has_prefix(bucket, prefix):
        return root

    logger.warning("root %r does not exist in bucket %s; using bucket top level", root, bucket)
    return ""
