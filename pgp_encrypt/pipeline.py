"""
Batch encryption orchestration.

This module ties the other components together:
- validates the input and output roots
- walks the input tree (FileScanner)
- mirrors each file's path under the output root (path_mapper)
- encrypts each file for the recipient (OpenPGPEngine)
- writes the ciphertext

Processing is fail-fast: the first failure ends the run, files after it
are never touched, and files written before it are left in place.
"""

from __future__ import annotations

import contextlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple

from .engine import OpenPGPEngine, PGPyEngine
from .errors import (
    EncryptorError,
    InvalidInputError,
    KeyLoadError,
    PipelineIOError,
    RunResult,
)
from .file_scanner import FileScanner
from .keys import RecipientKey
from .path_mapper import ensure_parent_dirs, map_destination
from .rules import RuleEngine
from .settings import Settings


@dataclass(frozen=True)
class FileTask:
    source: Path
    destination: Path


# ---------------------------------------------------------------------------
# Root validation
# ---------------------------------------------------------------------------


def validate_roots(input_root: str | Path, output_root: str | Path) -> Tuple[Path, Path]:
    """
    Check both roots and create the output root if it is absent.

    Raises:
        InvalidInputError: input missing or not a directory, output is a
            non-directory, or one root lies inside the other
        PipelineIOError: the output root cannot be created

    Returns:
        (input_root, output_root) as absolute paths
    """

    input_root = Path(os.path.abspath(input_root))
    output_root = Path(os.path.abspath(output_root))

    if not input_root.exists() or not input_root.is_dir():
        raise InvalidInputError(
            f"Input folder '{input_root}' does not exist or is not a directory", input_root
        )

    if output_root.exists() and not output_root.is_dir():
        raise InvalidInputError(f"Output path '{output_root}' is not a directory", output_root)

    resolved_in = input_root.resolve()
    resolved_out = output_root.resolve()
    if resolved_out == resolved_in or resolved_in in resolved_out.parents:
        raise InvalidInputError(
            f"Output folder '{output_root}' must not be inside input folder '{input_root}'",
            output_root,
        )
    if resolved_out in resolved_in.parents:
        raise InvalidInputError(
            f"Input folder '{input_root}' must not be inside output folder '{output_root}'",
            input_root,
        )

    try:
        output_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PipelineIOError(
            f"Failed to create output directory: {exc.strerror or exc}", output_root
        ) from exc

    return input_root, output_root


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class EncryptionPipeline:
    def __init__(
        self,
        recipient_key: RecipientKey,
        engine: Optional[OpenPGPEngine] = None,
        settings: Optional[Settings] = None,
        on_encrypted: Optional[Callable[[FileTask], None]] = None,
    ):
        self.recipient_key = recipient_key
        self.engine = engine or PGPyEngine()
        self.settings = settings or Settings()
        self.on_encrypted = on_encrypted

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def plan(self, input_root: str | Path, output_root: str | Path) -> Iterator[FileTask]:
        """
        Lazily pair every file under `input_root` with its destination.

        Nothing is written; directories are not created.
        """

        input_root = Path(os.path.abspath(input_root))
        output_root = Path(os.path.abspath(output_root))
        scanner = FileScanner(input_root, RuleEngine(self.settings.exclude))

        for source in scanner.scan():
            yield FileTask(
                source=source,
                destination=map_destination(
                    input_root, output_root, source, self.settings.suffix
                ),
            )

    def run(self, input_root: str | Path, output_root: str | Path) -> RunResult:
        """
        Encrypt every file under `input_root` into `output_root`.

        Returns:
            RunResult: success with the number of files written, or the
            first failure encountered
        """

        written = 0
        try:
            if not isinstance(self.recipient_key, RecipientKey):
                raise KeyLoadError("No recipient key loaded")

            input_root, output_root = validate_roots(input_root, output_root)

            for task in self.plan(input_root, output_root):
                self.process(task)
                written += 1
                if self.on_encrypted is not None:
                    self.on_encrypted(task)

        except Exception as exc:
            # Unclassified failures are coerced by the exit model.
            return RunResult.failure(exc, written)

        return RunResult.success(written)

    def process(self, task: FileTask) -> None:
        """
        Encrypt one source file to its destination.

        Raises:
            PipelineIOError: reading the source or writing the destination failed
            EncryptionFailure: the engine failed
        """

        ensure_parent_dirs(task.destination)

        try:
            plaintext = task.source.read_bytes()
        except OSError as exc:
            raise PipelineIOError(
                f"Failed to read {task.source}: {exc.strerror or exc}", task.source
            ) from exc

        try:
            ciphertext = self.engine.encrypt(
                self.recipient_key.handle, plaintext, armor=self.settings.armor
            )
        except EncryptorError as exc:
            exc.path = task.source
            raise

        _write_output(task.destination, ciphertext)


def _write_output(destination: Path, data: bytes) -> None:
    opened = False
    try:
        with destination.open("wb") as fh:
            opened = True
            fh.write(data)
    except OSError as exc:
        if opened:
            # A truncated file must not pass for complete output.
            with contextlib.suppress(OSError):
                destination.unlink()
        raise PipelineIOError(
            f"Failed to write encrypted file {destination}: {exc.strerror or exc}", destination
        ) from exc
