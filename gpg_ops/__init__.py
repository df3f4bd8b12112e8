"""
gpg-ops: OpenPGP operations over the gpg command line.

Lists keys, encrypts and decrypts text and files, clear-signs and verifies,
parsing the backend's machine-readable key listing into typed records.

Example:
    ```python
    from gpg_ops import GpgClient

    client = GpgClient()

    for key in await client.list_keys():
        print(key.label, key.detail, key.name)

    armored = await client.encrypt("attack at dawn", "jane@example.com")
    plain = await client.decrypt(armored, "correct horse")

    await client.encrypt_file("report.pdf", "report.pdf.asc", "jane@example.com")
    ```
"""

from gpg_ops.client import GpgClient
from gpg_ops.config import GpgConfig
from gpg_ops.exceptions import (
    BackendError,
    BackendNotFoundError,
    BackendTimeoutError,
    GpgOpsError,
    InvalidInputError,
    ParseError,
)
from gpg_ops.listing import parse_key_listing
from gpg_ops.models.keys import PublicKey
from gpg_ops.models.requests import (
    DecryptRequest,
    EncryptRequest,
    FileDecryptRequest,
    FileEncryptRequest,
    PassphraseEntry,
)
from gpg_ops.passphrases import PassphraseStore
from gpg_ops.paths import decrypted_path_for, encrypted_path_for

__version__ = "0.1.0"

__all__ = [
    # Main client
    "GpgClient",
    "GpgConfig",
    # Parsing
    "parse_key_listing",
    # Models
    "PublicKey",
    "EncryptRequest",
    "DecryptRequest",
    "FileEncryptRequest",
    "FileDecryptRequest",
    "PassphraseEntry",
    "PassphraseStore",
    # Paths
    "encrypted_path_for",
    "decrypted_path_for",
    # Exceptions
    "GpgOpsError",
    "InvalidInputError",
    "BackendError",
    "BackendTimeoutError",
    "BackendNotFoundError",
    "ParseError",
]
