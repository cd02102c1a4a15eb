import unittest

from s3drive.errors import InvalidArgumentError
from s3drive.models import CreateOptions, SaveOptions


class TestCreateOptions(unittest.TestCase):
    def test_defaults_are_valid(self) -> None:
        opts = CreateOptions()
        opts.validate()
        self.assertEqual(opts.type, "file")
        self.assertEqual(opts.path, "")

    def test_unknown_type_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            CreateOptions(type="symlink").validate()

    def test_blank_ext_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            CreateOptions(ext=" . ").validate()


class TestSaveOptions(unittest.TestCase):
    def test_directory_needs_no_content(self) -> None:
        SaveOptions(type="directory").validate()

    def test_content_required_for_files(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            SaveOptions(format="text").validate()

    def test_json_null_is_valid_content(self) -> None:
        SaveOptions(content=None, format="json").validate()

    def test_unknown_format_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            SaveOptions(content="x", format="xml").validate()

    def test_base64_content_must_be_text(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            SaveOptions(content=b"\x00", format="base64").validate()


if __name__ == "__main__":
    unittest.main()
