"""Connection and credential information for s3drive."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX: str = "S3DRIVE_"


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Bucket and credential information handed to the client factory.

    `bucket` is required. When `access_key_id`/`secret_access_key` are omitted,
    boto3's default credential chain (env, shared config, instance role) is used.
    `root` is the initial sub-tree mount point within the bucket.
    """

    bucket: str
    root: str = ""
    endpoint: Optional[str] = None
    region: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    force_path_style: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.bucket, str) or not self.bucket.strip():
            raise ValueError("AuthInfo.bucket must be a non-empty string")

        if not isinstance(self.root, str):
            raise TypeError("AuthInfo.root must be a string")

        if bool(self.access_key_id) != bool(self.secret_access_key):
            raise ValueError(
                "AuthInfo.access_key_id and AuthInfo.secret_access_key "
                "must be given together"
            )

        if self.endpoint is not None and not self.endpoint.startswith(
            ("http://", "https://")
        ):
            raise ValueError("AuthInfo.endpoint must be an http(s) URL")

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> AuthInfo:
        """
        Build AuthInfo from S3DRIVE_* environment variables.

        Reads BUCKET, ROOT, ENDPOINT, REGION, ACCESS_KEY_ID, SECRET_ACCESS_KEY,
        SESSION_TOKEN and FORCE_PATH_STYLE ("0"/"false" disables it).
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name, "").strip()
            return value or None

        path_style = (_get("FORCE_PATH_STYLE") or "true").lower()
        return cls(
            bucket=_get("BUCKET") or "",
            root=_get("ROOT") or "",
            endpoint=_get("ENDPOINT"),
            region=_get("REGION"),
            access_key_id=_get("ACCESS_KEY_ID"),
            secret_access_key=_get("SECRET_ACCESS_KEY"),
            session_token=_get("SESSION_TOKEN"),
            force_path_style=path_style not in ("0", "false", "no"),
        )
