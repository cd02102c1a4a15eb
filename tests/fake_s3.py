"""In-memory stand-in for a boto3 S3 client, shared by the unit tests."""

import io
import threading
from datetime import datetime, timezone

from botocore.exceptions import ClientError

DT = datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def client_error(code: str, status: int, operation: str, message: str = "") -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": message or code},
            "ResponseMetadata": {"HTTPStatusCode": status, "RequestId": "req-1"},
        },
        operation,
    )


class FakeS3Client:
    """
    Thread-safe subset of the S3 client API used by S3Controller.

    Listings are sorted by key and paginated with `page_size` keys per page.
    Every call is recorded in `calls` as (operation, kwargs).
    """

    def __init__(self, buckets=("bucket",), *, page_size: int = 1000, region=None) -> None:
        self._lock = threading.Lock()
        self.objects = {name: {} for name in buckets}
        self.page_size = page_size
        self.region = region
        self.calls = []
        self.fail_on = {}

    # ----------------------------
    # Test helpers
    # ----------------------------
    def add(self, bucket: str, key: str, body=b"", *, content_type=None) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.objects.setdefault(bucket, {})[key] = {
            "Body": body,
            "LastModified": DT,
            "ContentType": content_type,
            "CacheControl": None,
        }

    def keys(self, bucket: str = "bucket"):
        return sorted(self.objects.get(bucket, {}))

    def body(self, bucket: str, key: str) -> bytes:
        return self.objects[bucket][key]["Body"]

    def stored(self, bucket: str, key: str):
        return self.objects[bucket][key]

    def ops(self, name: str):
        return [kwargs for op, kwargs in self.calls if op == name]

    def _record(self, op: str, kwargs) -> None:
        with self._lock:
            self.calls.append((op, kwargs))
        failure = self.fail_on.get(op)
        if failure is not None and failure[0](kwargs):
            raise failure[1]

    def _bucket(self, name: str, op: str):
        if name not in self.objects:
            raise client_error("NoSuchBucket", 404, op, "The specified bucket does not exist")
        return self.objects[name]

    # ----------------------------
    # S3 API subset
    # ----------------------------
    def list_objects_v2(self, **kwargs):
        self._record("list_objects_v2", kwargs)
        bucket = self._bucket(kwargs["Bucket"], "ListObjectsV2")
        prefix = kwargs.get("Prefix", "")

        with self._lock:
            snapshot = {k: dict(v) for k, v in bucket.items() if k.startswith(prefix)}
        keys = sorted(snapshot)
        start = int(kwargs.get("ContinuationToken") or 0)
        limit = min(kwargs.get("MaxKeys") or self.page_size, self.page_size)
        page = keys[start:start + limit]
        truncated = start + limit < len(keys)

        resp = {"KeyCount": len(page), "IsTruncated": truncated}
        if page:
            resp["Contents"] = [
                {
                    "Key": k,
                    "Size": len(snapshot[k]["Body"]),
                    "LastModified": snapshot[k]["LastModified"],
                    "ETag": '"etag"',
                }
                for k in page
            ]
        if truncated:
            resp["NextContinuationToken"] = str(start + limit)
        return resp

    def get_object(self, **kwargs):
        self._record("get_object", kwargs)
        bucket = self._bucket(kwargs["Bucket"], "GetObject")
        obj = bucket.get(kwargs["Key"])
        if obj is None:
            raise client_error("NoSuchKey", 404, "GetObject", "The specified key does not exist.")
        return {
            "Body": io.BytesIO(obj["Body"]),
            "ContentLength": len(obj["Body"]),
            "LastModified": obj["LastModified"],
            "ETag": '"etag"',
            "ContentType": obj["ContentType"],
        }

    def head_object(self, **kwargs):
        self._record("head_object", kwargs)
        bucket = self._bucket(kwargs["Bucket"], "HeadObject")
        obj = bucket.get(kwargs["Key"])
        if obj is None:
            raise client_error("404", 404, "HeadObject", "Not Found")
        return {
            "ContentLength": len(obj["Body"]),
            "LastModified": obj["LastModified"],
            "ETag": '"etag"',
            "ContentType": obj["ContentType"],
        }

    def put_object(self, **kwargs):
        self._record("put_object", kwargs)
        bucket = self._bucket(kwargs["Bucket"], "PutObject")
        body = kwargs.get("Body", b"")
        with self._lock:
            bucket[kwargs["Key"]] = {
                "Body": bytes(body),
                "LastModified": DT,
                "ContentType": kwargs.get("ContentType"),
                "CacheControl": kwargs.get("CacheControl"),
            }
        return {"ETag": '"etag"'}

    def delete_object(self, **kwargs):
        self._record("delete_object", kwargs)
        bucket = self._bucket(kwargs["Bucket"], "DeleteObject")
        with self._lock:
            bucket.pop(kwargs["Key"], None)
        return {}

    def copy_object(self, **kwargs):
        self._record("copy_object", kwargs)
        source = kwargs["CopySource"]
        src_bucket = self._bucket(source["Bucket"], "CopyObject")
        dest_bucket = self._bucket(kwargs["Bucket"], "CopyObject")
        with self._lock:
            obj = src_bucket.get(source["Key"])
            if obj is None:
                raise client_error("NoSuchKey", 404, "CopyObject", "The specified key does not exist.")
            dest_bucket[kwargs["Key"]] = dict(obj)
        return {"CopyObjectResult": {"ETag": '"etag"'}}

    def get_bucket_location(self, **kwargs):
        self._record("get_bucket_location", kwargs)
        self._bucket(kwargs["Bucket"], "GetBucketLocation")
        return {"LocationConstraint": self.region}

    def generate_presigned_url(self, ClientMethod, Params=None, ExpiresIn=3600, HttpMethod=None):
        self._record("generate_presigned_url", {"ClientMethod": ClientMethod, "Params": Params, "ExpiresIn": ExpiresIn})
        return f"https://{Params['Bucket']}.s3.example.com/{Params['Key']}?X-Amz-Expires={ExpiresIn}"
