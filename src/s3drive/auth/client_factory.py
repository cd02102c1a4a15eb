"""boto3 client construction for s3drive."""

from __future__ import annotations

from typing import Any

from s3drive.errors import AuthError

from .auth_info import AuthInfo


class S3ClientFactory:
    """Create boto3 S3 clients from AuthInfo."""

    def __init__(self, auth_info: AuthInfo) -> None:
        self._auth_info = auth_info

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments passed to `Session.client("s3", ...)`."""
        info = self._auth_info
        kwargs: dict[str, Any] = {}
        if info.endpoint:
            kwargs["endpoint_url"] = info.endpoint
        if info.region:
            kwargs["region_name"] = info.region
        if info.has_static_credentials:
            kwargs["aws_access_key_id"] = info.access_key_id
            kwargs["aws_secret_access_key"] = info.secret_access_key
            if info.session_token:
                kwargs["aws_session_token"] = info.session_token
        return kwargs

    def build_client(self):
        """
        Build an S3 client.

        Returns:
            botocore.client.S3

        Raises:
            AuthError: if boto3 is unavailable or the client cannot be built.
        """
        try:
            import boto3
            from botocore.config import Config
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "boto3 is not available",
                details={"hint": "Install boto3"},
                cause=exc,
            ) from exc

        addressing = "path" if self._auth_info.force_path_style else "auto"
        config = Config(s3={"addressing_style": addressing})

        try:
            session = boto3.session.Session()
            return session.client("s3", config=config, **self.client_kwargs())
        except Exception as exc:
            raise AuthError(
                "Failed to build S3 client",
                details={
                    "bucket": self._auth_info.bucket,
                    "endpoint": self._auth_info.endpoint,
                },
                cause=exc,
            ) from exc
