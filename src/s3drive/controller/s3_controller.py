"""S3 primitive operation controller (internal use only)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    NoCredentialsError,
    PartialCredentialsError,
    ReadTimeoutError,
)

from s3drive.auth import AuthInfo, S3ClientFactory
from s3drive.errors import (
    ApiError,
    AuthError,
    HttpErrorInfo,
    NetworkError,
    NotFoundError,
    RateLimitError,
    map_http_error,
)
from s3drive.models import ListingPage, ObjectInfo, StoredObject

from .params import (
    DEFAULT_REGION,
    DOWNLOAD_CONTENT_TYPE,
    DOWNLOAD_DISPOSITION,
    NOT_FOUND_CODES,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 0
    initial_delay_sec: float = 1.0


class S3Controller:
    """
    Object-store primitive operations (internal only).

    Notes:
        - The boto3 client is NOT exposed.
        - No hierarchy semantics live here: keys are opaque strings.
        - Failed calls are not retried unless `max_retries` is raised.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        max_retries: int = 0,
    ) -> None:
        self._retry_policy = _RetryPolicy(max_retries=max_retries)
        self._client = S3ClientFactory(auth_info).build_client()

    @classmethod
    def from_client(
        cls,
        client: Any,
        *,
        max_retries: int = 0,
    ) -> "S3Controller":
        """Create controller from a pre-built S3 client (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy(max_retries=max_retries)
        obj._client = client
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def list_objects(
        self,
        bucket: str,
        prefix: str,
        *,
        continuation_token: Optional[str] = None,
        max_keys: Optional[int] = None,
    ) -> ListingPage:
        """Fetch a single page of keys starting with prefix."""
        kwargs: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix}
        if continuation_token:
            kwargs["ContinuationToken"] = continuation_token
        if max_keys is not None:
            kwargs["MaxKeys"] = max_keys

        logger.debug("list_objects bucket=%s prefix=%r", bucket, prefix)
        data = self._execute(lambda: self._client.list_objects_v2(**kwargs))
        items = [_object_dict_to_info(c) for c in data.get("Contents", []) or []]
        return ListingPage(
            items=items,
            is_truncated=bool(data.get("IsTruncated", False)),
            continuation_token=data.get("NextContinuationToken"),
        )

    def list_all(self, bucket: str, prefix: str) -> list[ObjectInfo]:
        """List every key under prefix, following continuation tokens."""
        all_items: list[ObjectInfo] = []
        token: Optional[str] = None

        while True:
            page = self.list_objects(bucket, prefix, continuation_token=token)
            all_items.extend(page.items)

            token = page.continuation_token
            if not page.is_truncated or not token:
                break

        return all_items

    def has_prefix(self, bucket: str, prefix: str) -> bool:
        """Return True if at least one key starts with prefix."""
        page = self.list_objects(bucket, prefix, max_keys=1)
        return bool(page.items)

    def get_object(self, bucket: str, key: str) -> StoredObject:
        logger.debug("get_object bucket=%s key=%r", bucket, key)
        data = self._execute(
            lambda: self._client.get_object(Bucket=bucket, Key=key)
        )
        body_stream = data.get("Body")
        body = self._execute(body_stream.read) if body_stream is not None else b""
        info = _object_dict_to_info(data, key=key)
        if info.size is None:
            info.size = len(body)
        return StoredObject(info=info, body=body, content_type=data.get("ContentType"))

    def head_object(self, bucket: str, key: str) -> ObjectInfo:
        """
        Return metadata for key.

        Raises:
            NotFoundError: if the key does not exist.
        """
        logger.debug("head_object bucket=%s key=%r", bucket, key)
        data = self._execute(
            lambda: self._client.head_object(Bucket=bucket, Key=key)
        )
        return _object_dict_to_info(data, key=key)

    def exists(self, bucket: str, key: str) -> bool:
        """Existence check: not-found is an answer here, not an error."""
        try:
            self.head_object(bucket, key)
        except NotFoundError:
            return False
        return True

    def put_object(
        self,
        bucket: str,
        key: str,
        body: bytes | str,
        *,
        cache_control: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")

        kwargs: dict[str, Any] = {"Bucket": bucket, "Key": key, "Body": body}
        if cache_control:
            kwargs["CacheControl"] = cache_control
        if content_type:
            kwargs["ContentType"] = content_type

        logger.debug("put_object bucket=%s key=%r size=%d", bucket, key, len(body))
        self._execute(lambda: self._client.put_object(**kwargs))

    def delete_object(self, bucket: str, key: str) -> None:
        logger.debug("delete_object bucket=%s key=%r", bucket, key)
        self._execute(lambda: self._client.delete_object(Bucket=bucket, Key=key))

    def copy_object(
        self,
        bucket: str,
        source_key: str,
        dest_key: str,
        *,
        dest_bucket: Optional[str] = None,
    ) -> None:
        """Server-side copy of bucket/source_key to dest_bucket/dest_key."""
        target_bucket = dest_bucket or bucket
        logger.debug(
            "copy_object %s/%r -> %s/%r", bucket, source_key, target_bucket, dest_key
        )
        self._execute(
            lambda: self._client.copy_object(
                Bucket=target_bucket,
                CopySource={"Bucket": bucket, "Key": source_key},
                Key=dest_key,
            )
        )

    def bucket_region(self, bucket: str) -> str:
        data = self._execute(
            lambda: self._client.get_bucket_location(Bucket=bucket)
        )
        # us-east-1 buckets report a null location constraint.
        return data.get("LocationConstraint") or DEFAULT_REGION

    def presigned_url(self, bucket: str, key: str, *, expires_in: int) -> str:
        """Return a time-limited signed GET URL that downloads key as a file."""
        return self._execute(
            lambda: self._client.generate_presigned_url(
                "get_object",
                Params={
                    "Bucket": bucket,
                    "Key": key,
                    "ResponseContentDisposition": DOWNLOAD_DISPOSITION,
                    "ResponseContentType": DOWNLOAD_CONTENT_TYPE,
                },
                ExpiresIn=expires_in,
            )
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.debug("retrying after %s (attempt %d)", type(mapped).__name__, attempt + 1)
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, ClientError):
            info = _client_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (NoCredentialsError, PartialCredentialsError)):
            return AuthError("S3 credentials are missing or incomplete", cause=exc)

        if isinstance(
            exc,
            (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError, OSError, TimeoutError),
        ):
            return NetworkError("Network error", cause=exc)

        if isinstance(exc, BotoCoreError):
            return ApiError("S3 client error", cause=exc)

        return ApiError("S3 API error", cause=exc)


def _object_dict_to_info(data: dict[str, Any], *, key: Optional[str] = None) -> ObjectInfo:
    """Convert a list entry or a head/get response into ObjectInfo."""
    obj_key = data.get("Key", key)

    size = data.get("Size", data.get("ContentLength"))
    if not isinstance(size, int):
        size = None

    last_modified = data.get("LastModified")
    if last_modified is not None and getattr(last_modified, "tzinfo", None) is None:
        last_modified = None

    etag = data.get("ETag")
    return ObjectInfo(
        key=obj_key if isinstance(obj_key, str) else "",
        size=size,
        last_modified=last_modified,
        etag=etag.strip('"') if isinstance(etag, str) else None,
    )


def _client_error_to_info(exc: ClientError) -> HttpErrorInfo:
    response = getattr(exc, "response", None) or {}
    error = response.get("Error", {}) or {}
    meta = response.get("ResponseMetadata", {}) or {}

    status_code = meta.get("HTTPStatusCode")
    code = error.get("Code")
    if not isinstance(status_code, int) and isinstance(code, str) and code.isdigit():
        # head_object errors carry the status as the code ("404").
        status_code = int(code)
    if not isinstance(status_code, int):
        status_code = 404 if code in NOT_FOUND_CODES else 0

    details: dict[str, Any] = {"operation": getattr(exc, "operation_name", None)}
    request_id = meta.get("RequestId")
    if request_id:
        details["request_id"] = request_id

    return HttpErrorInfo(
        status_code=status_code,
        reason=code if isinstance(code, str) else None,
        message=error.get("Message") or None,
        details=details,
    )
