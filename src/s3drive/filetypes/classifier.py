from __future__ import annotations

from typing import Optional

from s3drive.paths import split_ext

from .registry import (
    DIRECTORY_FILE_TYPE,
    TEXT_FILE_TYPE,
    ExtensionRegistry,
    FileTypeInfo,
    normalize_extension,
)

NOTEBOOK_EXTENSION: str = "ipynb"
BINARY_FORMAT: str = "base64"


def classify(extension: Optional[str], registry: ExtensionRegistry) -> FileTypeInfo:
    """
    Classify an extension against the registry.

    - Unregistered extensions fall back to plain text.
    - The empty extension (directories) uses the registry's empty entry.
    - Notebooks always round-trip as raw text, whatever the registry says.
    """
    ext = normalize_extension(extension)
    info = registry.lookup(ext)
    if info is None:
        info = DIRECTORY_FILE_TYPE if not ext else TEXT_FILE_TYPE

    if ext == NOTEBOOK_EXTENSION and info.format != "text":
        info = FileTypeInfo(info.type, info.mimetypes, "text")
    return info


def classify_name(name: str, registry: ExtensionRegistry) -> FileTypeInfo:
    """Classify a file or directory name by its extension."""
    _, ext = split_ext(name)
    return classify(ext, registry)


def is_binary(info: FileTypeInfo) -> bool:
    """
    Returns True if bodies of this type travel as base64 text.

    PDFs are binary even when a host registry declares them as text.
    """
    return info.format == BINARY_FORMAT or info.type == "PDF"
