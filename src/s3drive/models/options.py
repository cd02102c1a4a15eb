"""Request models for create/save (explicit fields; no options dict)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from s3drive.errors import InvalidArgumentError

CREATE_TYPES: tuple[str, ...] = ("file", "notebook", "directory")
SAVE_FORMATS: tuple[str, ...] = ("text", "json", "base64")


@dataclass(slots=True)
class CreateOptions:
    """
    Options for S3Drive.new_untitled().

    Attributes:
        path: Directory (relative to the drive root) to create the item in.
        type: "file", "notebook" or "directory".
        ext: File extension for type "file" (default "txt"). Ignored otherwise;
            notebooks always use "ipynb".
    """

    path: str = ""
    type: str = "file"
    ext: Optional[str] = None

    def validate(self) -> None:
        """Raise InvalidArgumentError when the options cannot be honored."""
        if self.type not in CREATE_TYPES:
            raise InvalidArgumentError(
                "Unsupported type for new item",
                details={"type": self.type, "allowed": list(CREATE_TYPES)},
            )
        if self.ext is not None and not self.ext.strip(". "):
            raise InvalidArgumentError("ext must not be blank when given")


@dataclass(slots=True)
class SaveOptions:
    """
    Options for S3Drive.save().

    Attributes:
        content: Body to store. A JSON-compatible value for format "json",
            base64 text for format "base64", plain text otherwise.
        format: "text", "json" or "base64" (None means text).
        type: Logical type of the target; "directory" writes a marker only.
    """

    content: Any = None
    format: Optional[str] = None
    type: Optional[str] = None

    def validate(self) -> None:
        """Raise InvalidArgumentError when the options cannot be honored."""
        if self.format is not None and self.format not in SAVE_FORMATS:
            raise InvalidArgumentError(
                "Unsupported format for save",
                details={"format": self.format, "allowed": list(SAVE_FORMATS)},
            )
        if self.type == "directory":
            return
        if self.content is None and self.format != "json":
            raise InvalidArgumentError("content is required to save a file")
        if self.format == "base64" and not isinstance(self.content, str):
            raise InvalidArgumentError("base64 content must be a string")
