"""
Filesystem scanning.

This module is responsible for:
- walking the input tree
- applying exclusion rules to files
- yielding the regular files that should be encrypted

This module does NOT:
- encrypt data
- create or modify files
- load settings or keys

Traversal policy:
- entries are visited in name order, a directory's files before its
  subdirectories, so the order is stable for a given tree
- symlinks to regular files are followed; symlinked directories are not
  descended into
- special files, broken symlinks and entries whose metadata cannot be
  read are skipped silently
- a directory that cannot be listed fails the whole scan
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterator, Optional

from .errors import PipelineIOError
from .rules import RuleEngine


class FileScanner:
    def __init__(self, root: str | Path, rule_engine: Optional[RuleEngine] = None):
        self.root = Path(os.path.abspath(root))
        self.rule_engine = rule_engine or RuleEngine()

    def scan(self) -> Iterator[Path]:
        """
        Return a lazy iterator over absolute paths of regular files.

        The root is checked before the iterator is returned, so a missing
        root fails here rather than on the first `next()`. Each call walks
        the tree again from scratch.

        Raises:
            PipelineIOError: if the root is missing or not a directory
        """

        if not self.root.exists():
            raise PipelineIOError(f"Input folder does not exist: {self.root}", self.root)
        if not self.root.is_dir():
            raise PipelineIOError(f"Input path is not a directory: {self.root}", self.root)

        return self._walk()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _walk(self) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=_raise_listing_error):
            dirnames.sort()

            for name in sorted(filenames):
                path = Path(dirpath) / name

                if not _is_regular_file(path):
                    continue

                if self.rule_engine:
                    decision = self.rule_engine.evaluate(path.relative_to(self.root))
                    if decision.excluded:
                        continue

                yield path


def _is_regular_file(path: Path) -> bool:
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode)


def _raise_listing_error(exc: OSError) -> None:
    target = exc.filename or "<unknown>"
    raise PipelineIOError(
        f"Failed to list directory {target}: {exc.strerror or exc}",
        Path(target) if exc.filename else None,
    ) from exc
