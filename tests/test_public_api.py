import logging
import unittest

import s3drive


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(s3drive, "S3Drive"))
        self.assertTrue(hasattr(s3drive, "AuthInfo"))
        self.assertTrue(hasattr(s3drive, "S3ClientFactory"))

        self.assertTrue(hasattr(s3drive, "ContentEntry"))
        self.assertTrue(hasattr(s3drive, "CreateOptions"))
        self.assertTrue(hasattr(s3drive, "SaveOptions"))
        self.assertTrue(hasattr(s3drive, "ChangeEvent"))

        self.assertTrue(hasattr(s3drive, "S3DriveError"))
        self.assertTrue(hasattr(s3drive, "ReadOnlyError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(s3drive, "__all__"))
        self.assertIn("S3Drive", s3drive.__all__)
        self.assertIn("S3DriveError", s3drive.__all__)
        for name in s3drive.__all__:
            self.assertTrue(hasattr(s3drive, name), name)

    def test_library_logger_has_null_handler(self) -> None:
        handlers = logging.getLogger("s3drive").handlers
        self.assertTrue(any(isinstance(h, logging.NullHandler) for h in handlers))


if __name__ == "__main__":
    unittest.main()
