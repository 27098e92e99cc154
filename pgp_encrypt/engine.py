"""
OpenPGP engine adapter.

The pipeline only needs two capabilities from an OpenPGP library:

    parse_public_key(bytes) -> handle
    encrypt(handle, bytes) -> bytes

`OpenPGPEngine` names that interface and `PGPyEngine` implements it with
PGPy. This module translates library exceptions into the tool's error
kinds and is intentionally dumb about files and directories.
"""

from __future__ import annotations

from typing import Any

from pgpy import PGPKey, PGPMessage
from pgpy.constants import CompressionAlgorithm

from .errors import EncryptionFailure, KeyLoadError


class OpenPGPEngine:
    """Capability interface for an OpenPGP implementation."""

    name = "abstract"

    def parse_public_key(self, material: bytes) -> Any:
        """
        Parse armored or binary public-key material.

        Raises:
            KeyLoadError: if the material is not a usable public key
        """
        raise NotImplementedError

    def fingerprint(self, handle: Any) -> str:
        raise NotImplementedError

    def encrypt(self, handle: Any, plaintext: bytes, armor: bool = False) -> bytes:
        """
        Encrypt plaintext for the recipient behind `handle`.

        Raises:
            EncryptionFailure: if the engine refuses or fails
        """
        raise NotImplementedError


class PGPyEngine(OpenPGPEngine):
    name = "pgpy"

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def parse_public_key(self, material: bytes) -> PGPKey:
        if not material or not material.strip():
            raise KeyLoadError("Key file is empty")

        try:
            key, _ = PGPKey.from_blob(bytes(material))
            # A transferable secret key also carries the public half.
            if not key.is_public:
                key = key.pubkey
            expired = key.is_expired
        except Exception as exc:
            raise KeyLoadError(f"Invalid public key: {exc}") from exc

        if expired:
            raise KeyLoadError(f"Key {key.fingerprint} has expired")

        return key

    def fingerprint(self, handle: PGPKey) -> str:
        return str(handle.fingerprint)

    # ------------------------------------------------------------------
    # Encryption
    # ------------------------------------------------------------------

    def encrypt(self, handle: PGPKey, plaintext: bytes, armor: bool = False) -> bytes:
        try:
            message = PGPMessage.new(
                bytes(plaintext),
                format="b",
                compression=CompressionAlgorithm.Uncompressed,
            )
            encrypted = handle.encrypt(message)
        except Exception as exc:
            raise EncryptionFailure(f"Encryption failed: {exc}") from exc

        if armor:
            return str(encrypted).encode("ascii")
        return bytes(encrypted)
