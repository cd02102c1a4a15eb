from .classifier import BINARY_FORMAT, NOTEBOOK_EXTENSION, classify, classify_name, is_binary
from .registry import (
    DIRECTORY_FILE_TYPE,
    DIRECTORY_MIME,
    TEXT_FILE_TYPE,
    ExtensionRegistry,
    FileTypeInfo,
    default_registry,
    normalize_extension,
)

__all__ = [
    "FileTypeInfo",
    "ExtensionRegistry",
    "default_registry",
    "normalize_extension",
    "DIRECTORY_MIME",
    "DIRECTORY_FILE_TYPE",
    "TEXT_FILE_TYPE",
    "NOTEBOOK_EXTENSION",
    "BINARY_FORMAT",
    "classify",
    "classify_name",
    "is_binary",
]
