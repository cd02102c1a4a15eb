"""Extension registry: extension -> (logical type, MIME types, format)."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

DIRECTORY_MIME: str = "text/directory"


@dataclass(frozen=True, slots=True)
class FileTypeInfo:
    """Classification of a name: logical type, MIME types (first is canonical), format."""

    type: str
    mimetypes: tuple[str, ...]
    format: str

    @property
    def mimetype(self) -> str:
        return self.mimetypes[0] if self.mimetypes else ""


TEXT_FILE_TYPE = FileTypeInfo("text", ("text/plain",), "text")
DIRECTORY_FILE_TYPE = FileTypeInfo("directory", (DIRECTORY_MIME,), "json")


def normalize_extension(extension: Optional[str]) -> str:
    """Registry keys carry no leading dot: "txt" and ".txt" are the same key."""
    if not extension:
        return ""
    return extension.strip().lstrip(".")


class ExtensionRegistry(Mapping[str, FileTypeInfo]):
    """
    Read-only extension registry.

    Populated once (from the host's file-type registry or the built-in
    table) and never mutated afterwards. The empty extension is the
    directory entry.
    """

    def __init__(self, entries: Optional[Mapping[str, FileTypeInfo]] = None) -> None:
        table: dict[str, FileTypeInfo] = {}
        for ext, info in (entries or {}).items():
            table[normalize_extension(ext)] = info
        table.setdefault("", DIRECTORY_FILE_TYPE)
        self._entries = MappingProxyType(table)

    @classmethod
    def from_file_types(cls, file_types: Iterable[Mapping[str, Any]]) -> ExtensionRegistry:
        """
        Build a registry from host file-type records.

        Each record looks like:
            {"name": "markdown", "extensions": [".md"],
             "mimeTypes": ["text/markdown"], "fileFormat": "text"}

        Later records do not override an extension already registered.
        """
        entries: dict[str, FileTypeInfo] = {}
        for record in file_types:
            name = record.get("name")
            if not isinstance(name, str) or not name:
                continue
            mimetypes = tuple(m for m in record.get("mimeTypes") or () if isinstance(m, str))
            file_format = record.get("fileFormat") or "text"
            info = FileTypeInfo(name, mimetypes or ("text/plain",), str(file_format))
            for ext in record.get("extensions") or ():
                if not isinstance(ext, str):
                    continue
                entries.setdefault(normalize_extension(ext), info)
        return cls(entries)

    def lookup(self, extension: Optional[str]) -> Optional[FileTypeInfo]:
        return self._entries.get(normalize_extension(extension))

    def __getitem__(self, extension: str) -> FileTypeInfo:
        return self._entries[normalize_extension(extension)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, extension: object) -> bool:
        if not isinstance(extension, str):
            return False
        return normalize_extension(extension) in self._entries


_BUILTIN_FILE_TYPES: dict[str, FileTypeInfo] = {
    "txt": FileTypeInfo("text", ("text/plain",), "text"),
    "ipynb": FileTypeInfo("notebook", ("application/x-ipynb+json",), "json"),
    "md": FileTypeInfo("markdown", ("text/markdown",), "text"),
    "pdf": FileTypeInfo("PDF", ("application/pdf",), "base64"),
    "py": FileTypeInfo("python", ("text/x-python",), "text"),
    "json": FileTypeInfo("json", ("application/json",), "text"),
    "jsonl": FileTypeInfo("jsonl", ("text/jsonl",), "text"),
    "ndjson": FileTypeInfo("jsonl", ("application/jsonl",), "text"),
    "jl": FileTypeInfo("julia", ("text/x-julia",), "text"),
    "csv": FileTypeInfo("csv", ("text/csv",), "text"),
    "tsv": FileTypeInfo("tsv", ("text/csv",), "text"),
    "R": FileTypeInfo("r", ("text/x-rsrc",), "text"),
    "yaml": FileTypeInfo("yaml", ("text/x-yaml",), "text"),
    "yml": FileTypeInfo("yaml", ("text/x-yaml",), "text"),
    "svg": FileTypeInfo("svg", ("image/svg+xml",), "base64"),
    "tif": FileTypeInfo("tiff", ("image/tiff",), "base64"),
    "tiff": FileTypeInfo("tiff", ("image/tiff",), "base64"),
    "jpg": FileTypeInfo("jpeg", ("image/jpeg",), "base64"),
    "jpeg": FileTypeInfo("jpeg", ("image/jpeg",), "base64"),
    "gif": FileTypeInfo("gif", ("image/gif",), "base64"),
    "png": FileTypeInfo("png", ("image/png",), "base64"),
    "bmp": FileTypeInfo("bmp", ("image/bmp",), "base64"),
    "webp": FileTypeInfo("webp", ("image/webp",), "base64"),
    "html": FileTypeInfo("html", ("text/html",), "text"),
    "": DIRECTORY_FILE_TYPE,
}


def default_registry() -> ExtensionRegistry:
    """Registry used when the host does not supply one."""
    return ExtensionRegistry(_BUILTIN_FILE_TYPES)
