import unittest
from datetime import datetime
from unittest.mock import Mock, patch

from botocore.exceptions import EndpointConnectionError, NoCredentialsError

from fake_s3 import DT, FakeS3Client, client_error
from s3drive.controller.s3_controller import (
    S3Controller,
    _client_error_to_info,
    _object_dict_to_info,
)
from s3drive.errors import (
    ApiError,
    AuthError,
    NetworkError,
    NotFoundError,
    PermissionError,
    RateLimitError,
)


class TestS3ControllerHelpers(unittest.TestCase):
    def test_object_dict_to_info_from_listing(self) -> None:
        info = _object_dict_to_info(
            {"Key": "a/b.txt", "Size": 12, "LastModified": DT, "ETag": '"abc"'}
        )
        self.assertEqual(info.key, "a/b.txt")
        self.assertEqual(info.size, 12)
        self.assertEqual(info.last_modified, DT)
        self.assertEqual(info.etag, "abc")
        self.assertFalse(info.is_directory_marker)

    def test_object_dict_to_info_from_head_uses_key_argument(self) -> None:
        info = _object_dict_to_info({"ContentLength": 3}, key="dir/")
        self.assertEqual(info.key, "dir/")
        self.assertEqual(info.size, 3)
        self.assertTrue(info.is_directory_marker)

    def test_object_dict_to_info_drops_naive_datetime(self) -> None:
        info = _object_dict_to_info({"Key": "k", "LastModified": datetime(2025, 1, 1)})
        self.assertIsNone(info.last_modified)

    def test_client_error_to_info(self) -> None:
        info = _client_error_to_info(client_error("NoSuchKey", 404, "GetObject", "missing"))
        self.assertEqual(info.status_code, 404)
        self.assertEqual(info.reason, "NoSuchKey")
        self.assertEqual(info.message, "missing")
        self.assertEqual(info.details["operation"], "GetObject")
        self.assertEqual(info.details["request_id"], "req-1")

    def test_client_error_to_info_numeric_code_without_status(self) -> None:
        from botocore.exceptions import ClientError

        err = ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        self.assertEqual(_client_error_to_info(err).status_code, 404)


class TestS3ControllerWithFakeClient(unittest.TestCase):
    def setUp(self) -> None:
        self.client = FakeS3Client(page_size=2)
        for key in ("a/1.txt", "a/2.txt", "a/3.txt", "b.txt"):
            self.client.add("bucket", key, key)
        self.controller = S3Controller.from_client(self.client)

    def test_list_objects_single_page(self) -> None:
        page = self.controller.list_objects("bucket", "a/")
        self.assertEqual([o.key for o in page.items], ["a/1.txt", "a/2.txt"])
        self.assertTrue(page.is_truncated)
        self.assertEqual(page.continuation_token, "2")

    def test_list_all_follows_continuation_tokens(self) -> None:
        items = self.controller.list_all("bucket", "a/")
        self.assertEqual([o.key for o in items], ["a/1.txt", "a/2.txt", "a/3.txt"])
        self.assertEqual(len(self.client.ops("list_objects_v2")), 2)

    def test_has_prefix(self) -> None:
        self.assertTrue(self.controller.has_prefix("bucket", "a/"))
        self.assertFalse(self.controller.has_prefix("bucket", "zzz/"))
        self.assertEqual(self.client.ops("list_objects_v2")[0]["MaxKeys"], 1)

    def test_get_object_reads_body(self) -> None:
        stored = self.controller.get_object("bucket", "b.txt")
        self.assertEqual(stored.body, b"b.txt")
        self.assertEqual(stored.info.key, "b.txt")
        self.assertEqual(stored.info.size, 5)

    def test_get_missing_maps_to_not_found(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.get_object("bucket", "nope.txt")
        self.assertEqual(ctx.exception.details["reason"], "NoSuchKey")

    def test_exists(self) -> None:
        self.assertTrue(self.controller.exists("bucket", "b.txt"))
        self.assertFalse(self.controller.exists("bucket", "nope.txt"))

    def test_put_object_encodes_text_and_passes_headers(self) -> None:
        self.controller.put_object(
            "bucket", "c.txt", "héllo", cache_control="no-cache", content_type="text/plain"
        )
        stored = self.client.stored("bucket", "c.txt")
        self.assertEqual(stored["Body"], "héllo".encode("utf-8"))
        self.assertEqual(stored["CacheControl"], "no-cache")
        self.assertEqual(stored["ContentType"], "text/plain")

    def test_copy_object_same_and_cross_bucket(self) -> None:
        self.client.objects["other"] = {}
        self.controller.copy_object("bucket", "b.txt", "c.txt")
        self.controller.copy_object("bucket", "b.txt", "x/b.txt", dest_bucket="other")

        self.assertEqual(self.client.body("bucket", "c.txt"), b"b.txt")
        self.assertEqual(self.client.body("other", "x/b.txt"), b"b.txt")
        self.assertEqual(
            self.client.ops("copy_object")[1]["CopySource"],
            {"Bucket": "bucket", "Key": "b.txt"},
        )

    def test_delete_object(self) -> None:
        self.controller.delete_object("bucket", "b.txt")
        self.assertNotIn("b.txt", self.client.keys("bucket"))

    def test_bucket_region_defaults_to_us_east_1(self) -> None:
        self.assertEqual(self.controller.bucket_region("bucket"), "us-east-1")
        self.client.region = "eu-central-1"
        self.assertEqual(self.controller.bucket_region("bucket"), "eu-central-1")

    def test_unknown_bucket_maps_to_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            self.controller.list_objects("missing", "")

    def test_presigned_url_forces_download(self) -> None:
        url = self.controller.presigned_url("bucket", "b.txt", expires_in=60)
        self.assertIn("X-Amz-Expires=60", url)

        call = self.client.ops("generate_presigned_url")[0]
        self.assertEqual(call["ClientMethod"], "get_object")
        self.assertEqual(call["Params"]["ResponseContentDisposition"], "attachment")
        self.assertEqual(call["Params"]["ResponseContentType"], "application/octet-stream")


class TestS3ControllerErrorMapping(unittest.TestCase):
    def test_no_retry_by_default(self) -> None:
        client = Mock()
        client.head_object.side_effect = client_error("SlowDown", 503, "HeadObject")
        controller = S3Controller.from_client(client)

        with patch("time.sleep", return_value=None):
            with self.assertRaises(RateLimitError):
                controller.head_object("bucket", "k")
        self.assertEqual(client.head_object.call_count, 1)

    def test_retry_when_enabled(self) -> None:
        client = Mock()
        err = client_error("SlowDown", 503, "HeadObject")
        # Fail twice, then succeed.
        client.head_object.side_effect = [err, err, {"ContentLength": 1, "LastModified": DT}]
        controller = S3Controller.from_client(client, max_retries=3)

        with patch("time.sleep", return_value=None):
            info = controller.head_object("bucket", "k")

        self.assertEqual(info.size, 1)
        self.assertEqual(client.head_object.call_count, 3)

    def test_4xx_is_not_retried(self) -> None:
        client = Mock()
        client.get_object.side_effect = client_error("AccessDenied", 403, "GetObject")
        controller = S3Controller.from_client(client, max_retries=3)

        with patch("time.sleep", return_value=None):
            with self.assertRaises(PermissionError):
                controller.get_object("bucket", "k")
        self.assertEqual(client.get_object.call_count, 1)

    def test_credential_errors_map_to_auth_error(self) -> None:
        client = Mock()
        client.list_objects_v2.side_effect = NoCredentialsError()
        controller = S3Controller.from_client(client)

        with self.assertRaises(AuthError):
            controller.list_objects("bucket", "")

    def test_connection_errors_map_to_network_error(self) -> None:
        client = Mock()
        client.delete_object.side_effect = EndpointConnectionError(endpoint_url="http://x")
        controller = S3Controller.from_client(client)

        with self.assertRaises(NetworkError):
            controller.delete_object("bucket", "k")

    def test_unexpected_errors_map_to_api_error(self) -> None:
        client = Mock()
        client.put_object.side_effect = RuntimeError("boom")
        controller = S3Controller.from_client(client)

        with self.assertRaises(ApiError) as ctx:
            controller.put_object("bucket", "k", b"")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)


if __name__ == "__main__":
    unittest.main()
