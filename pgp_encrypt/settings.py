"""
Settings file loading, validation, and normalization.

This module answers one question:
    "How does the user want outputs to look?"

Responsibilities:
- Load the optional YAML settings file
- Validate structure and version
- Normalize defaults
- Expose a clean Python representation

This module does NOT:
- Walk the filesystem
- Load keys or encrypt data
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config import (
    DEFAULT_ARMOR,
    DEFAULT_CONFIG_FILE,
    DEFAULT_SUFFIX,
    SUPPORTED_SETTINGS_VERSION,
)
from .errors import InvalidInputError


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    version: int = SUPPORTED_SETTINGS_VERSION
    suffix: str = DEFAULT_SUFFIX
    armor: bool = DEFAULT_ARMOR
    exclude: List[str] = field(default_factory=list)
    source: Optional[Path] = None

    # ------------------------------------------------------------------
    # Loading API
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        """
        Load and validate a settings file.

        Args:
            path: Path to the settings YAML file

        Raises:
            InvalidInputError: if the file is missing or invalid

        Returns:
            Settings
        """

        path = Path(path)
        if not path.is_file():
            raise InvalidInputError(f"Settings file not found: {path}", path)

        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise InvalidInputError(f"Settings file is not valid YAML: {exc}", path) from exc
        except OSError as exc:
            raise InvalidInputError(f"Cannot read settings file: {exc}", path) from exc

        if not isinstance(raw, dict):
            raise InvalidInputError("Settings file must contain a mapping", path)

        return replace(cls._from_dict(raw, path), source=path)

    @classmethod
    def discover(cls, explicit: Optional[str | Path] = None, cwd: Optional[Path] = None) -> "Settings":
        """
        Resolve the settings for a run.

        An explicit path must exist. Without one, the default file in the
        working directory is used if present, otherwise built-in defaults.
        """

        if explicit is not None:
            return cls.load(explicit)

        candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILE
        if candidate.is_file():
            return cls.load(candidate)
        return cls()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @classmethod
    def _from_dict(cls, data: Dict[str, Any], path: Path) -> "Settings":
        version = data.get("version", SUPPORTED_SETTINGS_VERSION)
        if version != SUPPORTED_SETTINGS_VERSION:
            raise InvalidInputError(f"Unsupported settings version: {version}", path)

        suffix = data.get("suffix", DEFAULT_SUFFIX)
        if suffix is None:
            suffix = ""
        if not _valid_suffix(suffix):
            raise InvalidInputError(f"Invalid output suffix: {suffix!r}", path)

        armor = data.get("armor", DEFAULT_ARMOR)
        if not isinstance(armor, bool):
            raise InvalidInputError("'armor' must be true or false", path)

        exclude = data.get("exclude", [])
        if isinstance(exclude, str):
            exclude = [exclude]
        if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
            raise InvalidInputError("'exclude' must be a list of patterns", path)

        return cls(
            version=version,
            suffix=suffix,
            armor=armor,
            exclude=list(exclude),
        )

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def with_overrides(
        self,
        suffix: Optional[str] = None,
        armor: Optional[bool] = None,
        exclude: Optional[List[str]] = None,
    ) -> "Settings":
        """
        Return a copy with command-line values applied on top.
        """

        if suffix is not None and not _valid_suffix(suffix):
            raise InvalidInputError(f"Invalid output suffix: {suffix!r}")

        return replace(
            self,
            suffix=self.suffix if suffix is None else suffix,
            armor=self.armor if armor is None else armor,
            exclude=self.exclude + list(exclude or []),
        )


def _valid_suffix(suffix: Any) -> bool:
    # Appended to a file name, so it must not add path components.
    return isinstance(suffix, str) and not any(c in suffix for c in ("/", "\\", "\0"))
