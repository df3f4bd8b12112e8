"""
Domain models for gpg-ops.

These are immutable (frozen) dataclasses.
"""

from gpg_ops.models.keys import KeyCapability, PublicKey
from gpg_ops.models.requests import (
    DecryptRequest,
    EncryptRequest,
    FileDecryptRequest,
    FileEncryptRequest,
    PassphraseEntry,
    Request,
)

__all__ = [
    # Keys
    "KeyCapability",
    "PublicKey",
    # Requests
    "EncryptRequest",
    "DecryptRequest",
    "FileEncryptRequest",
    "FileDecryptRequest",
    "PassphraseEntry",
    "Request",
]
