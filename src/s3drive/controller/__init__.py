"""Internal controller exports for s3drive."""

from __future__ import annotations

from .s3_controller import S3Controller

__all__ = ["S3Controller"]
