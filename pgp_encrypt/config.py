"""
Global configuration and environment handling.

This module is responsible for:
- Defining global constants and defaults
- Naming the environment variables the tool reads
- Resolving the public key path from the environment

Nothing in this file should depend on:
- the filesystem layout of the input tree
- the OpenPGP engine
- CLI arguments
"""

from __future__ import annotations

import os
from typing import Final, Optional

# ---------------------------------------------------------------------------
# Tool / format versioning
# ---------------------------------------------------------------------------

TOOL_VERSION: Final[str] = "0.1.0"
SUPPORTED_SETTINGS_VERSION: Final[int] = 1

# ---------------------------------------------------------------------------
# Default behavior
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_FILE: Final[str] = "pgp-encrypt.yml"
DEFAULT_SUFFIX: Final[str] = ""
DEFAULT_ARMOR: Final[bool] = False

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: Final[int] = 0
EXIT_INVALID_INPUT: Final[int] = 1
EXIT_KEY_ERROR: Final[int] = 2
EXIT_ENCRYPTION_ERROR: Final[int] = 3
EXIT_IO_ERROR: Final[int] = 4
EXIT_INTERRUPTED: Final[int] = 130

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_PUBLIC_KEY: Final[str] = "PGP_ENCRYPT_KEY"

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def public_key_from_env() -> Optional[str]:
    """
    Return the public key file path configured in the environment.

    Returns:
        str | None: the path, or None when the variable is unset or empty
    """

    raw = os.getenv(ENV_PUBLIC_KEY)
    if not raw:
        return None
    return raw.strip()
