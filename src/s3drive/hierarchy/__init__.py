"""Directory emulation over flat object keys."""

from __future__ import annotations

from .body import EMPTY_NOTEBOOK, decode_base64_chunked, decode_body, encode_body
from .emulator import HierarchyEmulator
from .fanout import DEFAULT_MAX_WORKERS, run_fanout
from .naming import collision_free_name, copy_name, increment_name, untitled_name

__all__ = [
    "HierarchyEmulator",
    "DEFAULT_MAX_WORKERS",
    "run_fanout",
    "increment_name",
    "untitled_name",
    "collision_free_name",
    "copy_name",
    "EMPTY_NOTEBOOK",
    "encode_body",
    "decode_body",
    "decode_base64_chunked",
]
