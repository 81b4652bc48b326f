import unittest

from dbxsync.util.path import basename, join


class TestUtilPath(unittest.TestCase):
    def test_join_single(self) -> None:
        self.assertEqual(join(["path"]), "path")

    def test_join_clean_segments(self) -> None:
        self.assertEqual(join(["a", "b", "c"]), "a/b/c")
        self.assertEqual(join(["path", "to", "file"]), "path/to/file")

    def test_join_collapses_double_slash(self) -> None:
        self.assertEqual(join(["a/b", "/c"]), "a/b/c")
        self.assertEqual(join(["Jane Doe", "/Projects/a.txt"]), "Jane Doe/Projects/a.txt")

    def test_join_empty(self) -> None:
        self.assertEqual(join([]), "")

    def test_basename(self) -> None:
        self.assertEqual(basename("/Projects/a.txt"), "a.txt")
        self.assertEqual(basename("/Projects/"), "Projects")
        self.assertEqual(basename(""), "")


if __name__ == "__main__":
    unittest.main()
