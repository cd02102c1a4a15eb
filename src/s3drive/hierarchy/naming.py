"""Collision-free name generation for untitled items, renames and copies."""

from __future__ import annotations

from typing import Iterable, Optional

from s3drive.filetypes import NOTEBOOK_EXTENSION, normalize_extension
from s3drive.paths import split_ext

UNTITLED_FILE_BASE: str = "untitled"
UNTITLED_NOTEBOOK_BASE: str = "Untitled"
UNTITLED_FOLDER_BASE: str = "Untitled Folder"
DEFAULT_FILE_EXTENSION: str = "txt"
COPY_MARKER: str = "-Copy"


def increment_name(
    base: str,
    ext: str,
    sibling_names: Iterable[str],
    *,
    separator: str = "",
) -> str:
    """
    Return a name for base(.ext) that is free among sibling_names.

    Counts siblings whose name starts with base (and ends with .ext for files),
    appends that count (no suffix for zero), and keeps counting up while the
    candidate is still taken. Only as good as the snapshot it is given.
    """
    suffix = "." + ext if ext else ""
    taken = set(sibling_names)
    count = sum(1 for name in taken if name.startswith(base) and name.endswith(suffix))

    while True:
        counter = f"{separator}{count}" if count else ""
        candidate = f"{base}{counter}{suffix}"
        if candidate not in taken:
            return candidate
        count += 1


def untitled_name(
    kind: str,
    sibling_names: Iterable[str],
    *,
    ext: Optional[str] = None,
) -> str:
    """
    Name for a new untitled item.

    - "directory": "Untitled Folder", "Untitled Folder 1", ...
    - "notebook":  "Untitled.ipynb", "Untitled1.ipynb", ...
    - "file":      "untitled.txt", "untitled1.txt", ... (ext overrides txt)
    """
    if kind == "directory":
        return increment_name(UNTITLED_FOLDER_BASE, "", sibling_names, separator=" ")
    if kind == "notebook":
        return increment_name(UNTITLED_NOTEBOOK_BASE, NOTEBOOK_EXTENSION, sibling_names)
    file_ext = normalize_extension(ext) or DEFAULT_FILE_EXTENSION
    return increment_name(UNTITLED_FILE_BASE, file_ext, sibling_names)


def collision_free_name(
    name: str,
    is_directory: bool,
    sibling_names: Iterable[str],
) -> str:
    """Rename destination: "b.txt" -> "b1.txt" when "b.txt" is taken."""
    if is_directory:
        return increment_name(name, "", sibling_names)
    stem, ext = split_ext(name)
    return increment_name(stem, ext, sibling_names)


def copy_name(
    name: str,
    is_directory: bool,
    sibling_names: Iterable[str],
) -> str:
    """Copy destination: "x.txt" -> "x-Copy.txt", then "x-Copy1.txt", ..."""
    if is_directory:
        return increment_name(name + COPY_MARKER, "", sibling_names)
    stem, ext = split_ext(name)
    return increment_name(stem + COPY_MARKER, ext, sibling_names)
