"""Fixed request parameters for S3 calls."""

from __future__ import annotations

DEFAULT_REGION: str = "us-east-1"

SAVE_CACHE_CONTROL: str = "no-cache"

DOWNLOAD_DISPOSITION: str = "attachment"
DOWNLOAD_CONTENT_TYPE: str = "application/octet-stream"

NOT_FOUND_CODES: frozenset[str] = frozenset({"NoSuchKey", "NoSuchBucket", "NotFound"})
