import unittest
from pathlib import Path

from pgp_encrypt.errors import (
    EncryptionFailure,
    EncryptorError,
    ErrorKind,
    InvalidInputError,
    KeyLoadError,
    PipelineIOError,
    RunResult,
    classify,
    describe,
    kind_of,
)


class TestClassify(unittest.TestCase):
    def test_exit_code_table(self) -> None:
        self.assertEqual(classify(None), 0)
        self.assertEqual(classify(InvalidInputError("bad")), 1)
        self.assertEqual(classify(KeyLoadError("bad key")), 2)
        self.assertEqual(classify(EncryptionFailure("refused")), 3)
        self.assertEqual(classify(PipelineIOError("disk")), 4)

    def test_unclassified_errors_are_coerced(self) -> None:
        self.assertEqual(classify(PermissionError(13, "Permission denied")), 4)
        self.assertEqual(classify(RuntimeError("boom")), 3)
        self.assertEqual(kind_of(ValueError("x")), ErrorKind.ENCRYPTION_FAILURE)

    def test_all_classified_errors_share_base(self) -> None:
        for cls in (InvalidInputError, KeyLoadError, EncryptionFailure, PipelineIOError):
            self.assertTrue(issubclass(cls, EncryptorError))

    def test_kind_labels(self) -> None:
        self.assertEqual(ErrorKind.KEY_ERROR.label, "KeyError")
        self.assertEqual(ErrorKind.IO_ERROR.label, "IOError")


class TestDescribe(unittest.TestCase):
    def test_names_kind_and_file(self) -> None:
        error = EncryptionFailure("engine refused", Path("/in/notes.txt"))
        self.assertEqual(describe(error), "[EncryptionFailure] /in/notes.txt: engine refused")

    def test_path_not_repeated_when_already_in_message(self) -> None:
        error = PipelineIOError("Failed to read /in/a.txt: denied", Path("/in/a.txt"))
        self.assertEqual(describe(error), "[IOError] Failed to read /in/a.txt: denied")

    def test_without_path(self) -> None:
        self.assertEqual(describe(InvalidInputError("missing")), "[InvalidInput] missing")


class TestRunResult(unittest.TestCase):
    def test_success(self) -> None:
        result = RunResult.success(3)
        self.assertTrue(result.ok)
        self.assertIsNone(result.kind)
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.files_written, 3)

    def test_failure(self) -> None:
        error = KeyLoadError("no key")
        result = RunResult.failure(error, 2)
        self.assertFalse(result.ok)
        self.assertIs(result.error, error)
        self.assertEqual(result.kind, ErrorKind.KEY_ERROR)
        self.assertEqual(result.exit_code, 2)
        self.assertIn("no key", result.message)


if __name__ == "__main__":
    unittest.main()
