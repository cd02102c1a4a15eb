import unittest

from s3drive.hierarchy import collision_free_name, copy_name, increment_name, untitled_name


class TestIncrementName(unittest.TestCase):
    def test_zero_matches_has_no_suffix(self) -> None:
        self.assertEqual(increment_name("b", "txt", []), "b.txt")

    def test_count_of_matches_is_appended(self) -> None:
        self.assertEqual(increment_name("b", "txt", ["b.txt"]), "b1.txt")
        self.assertEqual(increment_name("b", "txt", ["b.txt", "b1.txt"]), "b2.txt")

    def test_keeps_incrementing_until_free(self) -> None:
        # One match, but "b1.txt" is already taken.
        self.assertEqual(increment_name("b", "txt", ["b1.txt"]), "b2.txt")

    def test_other_extensions_do_not_count(self) -> None:
        self.assertEqual(increment_name("b", "txt", ["b.md", "b.txt"]), "b1.txt")

    def test_separator(self) -> None:
        self.assertEqual(
            increment_name("Untitled Folder", "", ["Untitled Folder"], separator=" "),
            "Untitled Folder 1",
        )


class TestUntitledName(unittest.TestCase):
    def test_notebooks(self) -> None:
        names = []
        for _ in range(3):
            names.append(untitled_name("notebook", names))
        self.assertEqual(names, ["Untitled.ipynb", "Untitled1.ipynb", "Untitled2.ipynb"])

    def test_text_files_default_to_txt(self) -> None:
        self.assertEqual(untitled_name("file", []), "untitled.txt")
        self.assertEqual(untitled_name("file", ["untitled.txt"]), "untitled1.txt")

    def test_text_files_with_extension(self) -> None:
        self.assertEqual(untitled_name("file", ["untitled.txt"], ext=".md"), "untitled.md")

    def test_folders(self) -> None:
        self.assertEqual(untitled_name("directory", ["a.txt"]), "Untitled Folder")
        self.assertEqual(untitled_name("directory", ["Untitled Folder"]), "Untitled Folder 1")


class TestRenameAndCopyNames(unittest.TestCase):
    def test_rename_collision(self) -> None:
        self.assertEqual(collision_free_name("b.txt", False, ["a.txt", "b.txt"]), "b1.txt")

    def test_rename_directory_collision(self) -> None:
        self.assertEqual(collision_free_name("docs", True, ["docs"]), "docs1")

    def test_copy_names_continue_counting(self) -> None:
        siblings = ["x.txt"]
        first = copy_name("x.txt", False, siblings)
        siblings.append(first)
        second = copy_name("x.txt", False, siblings)
        self.assertEqual((first, second), ("x-Copy.txt", "x-Copy1.txt"))

    def test_copy_directory(self) -> None:
        self.assertEqual(copy_name("docs", True, ["docs"]), "docs-Copy")


if __name__ == "__main__":
    unittest.main()
