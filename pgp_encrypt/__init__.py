"""
pgp-encrypt

Batch OpenPGP encryption of a directory tree for a single recipient,
mirroring the input folder's structure under an output folder.
"""

__version__ = "0.1.0"

from .errors import (
    ErrorKind,
    EncryptorError,
    InvalidInputError,
    KeyLoadError,
    EncryptionFailure,
    PipelineIOError,
    RunResult,
    classify,
)
from .engine import OpenPGPEngine, PGPyEngine
from .keys import RecipientKey, load_recipient_key
from .pipeline import EncryptionPipeline, FileTask, validate_roots
from .settings import Settings

__all__ = [
    "ErrorKind",
    "EncryptorError",
    "InvalidInputError",
    "KeyLoadError",
    "EncryptionFailure",
    "PipelineIOError",
    "RunResult",
    "classify",
    "OpenPGPEngine",
    "PGPyEngine",
    "RecipientKey",
    "load_recipient_key",
    "EncryptionPipeline",
    "FileTask",
    "validate_roots",
    "Settings",
]
