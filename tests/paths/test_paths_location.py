import unittest

from s3drive.paths import DriveLocation


class TestDriveLocation(unittest.TestCase):
    def test_root_is_normalized(self) -> None:
        loc = DriveLocation(bucket="b", root="/team//a/")
        self.assertEqual(loc.root, "team/a")

    def test_key_for_and_dir_prefix(self) -> None:
        loc = DriveLocation(bucket="b", root="team")
        self.assertEqual(loc.key_for("x/y.txt"), "team/x/y.txt")
        self.assertEqual(loc.dir_prefix("x"), "team/x/")
        self.assertEqual(loc.dir_prefix(""), "team/")

    def test_top_level_prefix_is_empty(self) -> None:
        loc = DriveLocation(bucket="b")
        self.assertEqual(loc.dir_prefix(""), "")
        self.assertEqual(loc.key_for("a.txt"), "a.txt")

    def test_relative(self) -> None:
        loc = DriveLocation(bucket="b", root="team")
        self.assertEqual(loc.relative("team/x/y.txt"), "x/y.txt")

    def test_is_immutable(self) -> None:
        loc = DriveLocation(bucket="b")
        with self.assertRaises(AttributeError):
            loc.bucket = "c"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
