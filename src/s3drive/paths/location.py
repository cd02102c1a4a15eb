"""Per-operation snapshot of the drive's bucket and root."""

from __future__ import annotations

from dataclasses import dataclass

from .resolver import SEP, normalize_path, relative_to_root, resolve


@dataclass(frozen=True, slots=True)
class DriveLocation:
    """
    Bucket + root captured once at the start of an operation.

    Every key an operation touches is derived from the same snapshot, so a
    bucket/root switch mid-operation cannot split it across two locations.
    """

    bucket: str
    root: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", normalize_path(self.root))

    def key_for(self, path: str) -> str:
        return resolve(self.root, path)

    def dir_prefix(self, path: str) -> str:
        """Listing prefix for a directory path ("" lists the bucket top level)."""
        key = self.key_for(path)
        return key + SEP if key else ""

    def relative(self, key: str) -> str:
        return relative_to_root(self.root, key)
