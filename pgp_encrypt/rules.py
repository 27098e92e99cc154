"""
Exclusion rule evaluation.

Given a file path relative to the input root and a list of fnmatch
patterns, this module decides whether the file is left out of the run.
A pattern matches either the full POSIX relative path or the base name,
so `*.pgp` excludes at every depth and `drafts/*` only under `drafts/`.

Rules DO NOT perform actions. They only return decisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import fnmatch


@dataclass(frozen=True)
class RuleDecision:
    excluded: bool
    pattern: Optional[str] = None


def matches_pattern(path: str | Path, pattern: str) -> bool:
    path = Path(path)
    return fnmatch.fnmatchcase(path.as_posix(), pattern) or fnmatch.fnmatchcase(path.name, pattern)


class RuleEngine:
    def __init__(self, exclude: Optional[List[str]] = None):
        self.exclude = list(exclude or [])

    def __bool__(self) -> bool:
        return bool(self.exclude)

    def evaluate(self, rel_path: str | Path) -> RuleDecision:
        for pattern in self.exclude:
            if matches_pattern(rel_path, pattern):
                return RuleDecision(excluded=True, pattern=pattern)

        return RuleDecision(excluded=False)
