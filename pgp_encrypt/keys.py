"""
Recipient key loading.

A RecipientKey can only be obtained through `load_recipient_key`, which
reads the key file, lets the engine parse it and proves the key can
encrypt before handing it out. Failure at any step raises KeyLoadError;
no partial or default key is ever returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .engine import OpenPGPEngine, PGPyEngine
from .errors import EncryptionFailure, KeyLoadError

_PROBE_PLAINTEXT = b"\x00"


@dataclass(frozen=True)
class RecipientKey:
    handle: Any
    path: Path
    fingerprint: str


def load_recipient_key(path: str | Path, engine: Optional[OpenPGPEngine] = None) -> RecipientKey:
    """
    Load and validate the recipient's public key.

    Args:
        path: key file, armored or binary
        engine: OpenPGP engine, PGPy by default

    Raises:
        KeyLoadError: if the file is missing, unreadable, not key material,
            or holds no key usable for encryption

    Returns:
        RecipientKey
    """

    engine = engine or PGPyEngine()
    path = Path(path)

    if not path.is_file():
        raise KeyLoadError(f"Public key file not found: {path}", path)

    try:
        material = path.read_bytes()
    except OSError as exc:
        raise KeyLoadError(f"Failed to read public key: {exc.strerror or exc}", path) from exc

    try:
        handle = engine.parse_public_key(material)
    except KeyLoadError as exc:
        raise KeyLoadError(exc.message, path) from exc

    try:
        engine.encrypt(handle, _PROBE_PLAINTEXT)
    except EncryptionFailure as exc:
        raise KeyLoadError(f"No valid encryption key found: {exc.message}", path) from exc

    return RecipientKey(handle=handle, path=path, fingerprint=engine.fingerprint(handle))
