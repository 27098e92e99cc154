import unittest
from pathlib import Path

from pgp_encrypt.errors import InvalidInputError, PipelineIOError
from pgp_encrypt.path_mapper import ensure_parent_dirs, map_destination
from tests.test_support import temp_directory


class TestMapDestination(unittest.TestCase):
    def test_nested_structure_is_mirrored(self) -> None:
        dest = map_destination(Path("/in"), Path("/out"), Path("/in/a/b/c.txt"))
        self.assertEqual(dest, Path("/out/a/b/c.txt"))

    def test_top_level_file(self) -> None:
        dest = map_destination("/in", "/out", "/in/notes.txt")
        self.assertEqual(dest, Path("/out/notes.txt"))

    def test_mapping_is_idempotent(self) -> None:
        first = map_destination("/in", "/out", "/in/sub/deep.txt")
        second = map_destination("/in", "/out", "/in/sub/deep.txt")
        self.assertEqual(first, second)

    def test_suffix_is_appended_not_substituted(self) -> None:
        dest = map_destination("/in", "/out", "/in/report.tar.gz", suffix=".pgp")
        self.assertEqual(dest, Path("/out/report.tar.gz.pgp"))

    def test_path_outside_input_root_fails(self) -> None:
        with self.assertRaises(InvalidInputError) as ctx:
            map_destination("/in", "/out", "/elsewhere/file.txt")
        self.assertIn("not inside input folder", str(ctx.exception))

    def test_input_root_itself_fails(self) -> None:
        with self.assertRaises(InvalidInputError):
            map_destination("/in", "/out", "/in")


class TestEnsureParentDirs(unittest.TestCase):
    def test_creates_missing_directories(self) -> None:
        with temp_directory() as tmp:
            dest = tmp / "out" / "a" / "b" / "c.txt"
            ensure_parent_dirs(dest)
            self.assertTrue((tmp / "out" / "a" / "b").is_dir())
            self.assertFalse(dest.exists())

    def test_existing_directories_are_not_an_error(self) -> None:
        with temp_directory() as tmp:
            dest = tmp / "a" / "file.txt"
            ensure_parent_dirs(dest)
            ensure_parent_dirs(dest)
            self.assertTrue((tmp / "a").is_dir())

    def test_collision_with_file_is_io_error(self) -> None:
        with temp_directory() as tmp:
            (tmp / "sub").write_bytes(b"not a directory")
            with self.assertRaises(PipelineIOError) as ctx:
                ensure_parent_dirs(tmp / "sub" / "deep.txt")
            self.assertEqual(ctx.exception.path, tmp / "sub")


if __name__ == "__main__":
    unittest.main()
