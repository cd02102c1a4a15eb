"""Conversion between caller-facing content and stored object bodies."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from s3drive.errors import InvalidArgumentError
from s3drive.filetypes import BINARY_FORMAT, FileTypeInfo, is_binary

BASE64_CHUNK_CHARS: int = 512

EMPTY_NOTEBOOK: dict[str, Any] = {
    "cells": [],
    "metadata": {},
    "nbformat": 4,
    "nbformat_minor": 5,
}


def empty_notebook_body() -> bytes:
    return json.dumps(EMPTY_NOTEBOOK, indent=2).encode("utf-8")


def decode_base64_chunked(text: str) -> bytes:
    """
    Decode base64 text in fixed-size slices.

    The slice size is a multiple of 4, so padding can only occur in the last
    slice and the concatenation equals a single-shot decode.
    """
    data = "".join(text.split())
    out = bytearray()
    try:
        for offset in range(0, len(data), BASE64_CHUNK_CHARS):
            out += base64.b64decode(data[offset:offset + BASE64_CHUNK_CHARS], validate=True)
    except binascii.Error as exc:
        raise InvalidArgumentError("content is not valid base64", cause=exc) from exc
    return bytes(out)


def encode_body(content: Any, fmt: str | None, info: FileTypeInfo) -> bytes:
    """
    Turn save() content into the bytes to store.

    - "json", or a json-classified target given a non-text value: serialized
      with indent=2.
    - "base64", or a binary target saved without a format: base64 text
      decoded to raw bytes.
    - otherwise content is text and is stored UTF-8 encoded.
    """
    if fmt == "json" or (
        fmt is None and info.format == "json" and not isinstance(content, (str, bytes))
    ):
        return json.dumps(content, indent=2).encode("utf-8")
    if fmt == BINARY_FORMAT or (fmt is None and is_binary(info) and isinstance(content, str)):
        return decode_base64_chunked(content)
    if isinstance(content, bytes):
        return content
    if not isinstance(content, str):
        raise InvalidArgumentError(
            "text content must be a string",
            details={"content_type": type(content).__name__},
        )
    return content.encode("utf-8")


def decode_body(body: bytes, info: FileTypeInfo) -> tuple[Any, str]:
    """
    Turn a stored body into (content, format) for get().

    Binary types come back as base64 text. Text that is not valid UTF-8 is
    returned as base64 as well; json-classified text that does not parse is
    returned as plain text.
    """
    if is_binary(info):
        return base64.b64encode(body).decode("ascii"), BINARY_FORMAT

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return base64.b64encode(body).decode("ascii"), BINARY_FORMAT

    if info.format == "json":
        try:
            return json.loads(text), "json"
        except ValueError:
            return text, "text"
    return text, "text"
