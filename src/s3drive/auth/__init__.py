"""Public auth exports for s3drive."""

from __future__ import annotations

from .auth_info import AuthInfo
from .client_factory import S3ClientFactory

__all__ = ["AuthInfo", "S3ClientFactory"]
