"""
One-shot request models consumed by a single client call.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class EncryptRequest:
    """Encrypt text for a single recipient."""

    text: str
    recipient_email: str


@dataclass(frozen=True, kw_only=True)
class DecryptRequest:
    """Decrypt armored text with a passphrase."""

    text: str
    passphrase: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class FileEncryptRequest:
    """Encrypt a file into a destination path."""

    source: Path
    destination: Path
    recipient_email: str
    armored: bool = True


@dataclass(frozen=True, kw_only=True)
class FileDecryptRequest:
    """Decrypt a file into a destination path."""

    source: Path
    destination: Path
    passphrase: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class PassphraseEntry:
    """
    A saved passphrase.

    Attributes:
        email: Email of the key the passphrase unlocks.
        passphrase: The passphrase itself.
        description: Optional free text shown next to the email.
    """

    email: str
    passphrase: str = field(repr=False)
    description: str | None = None

    @property
    def label(self) -> str:
        return f"<{self.email}>"

    @property
    def detail(self) -> str:
        return f"({self.description})" if self.description else ""


Request = EncryptRequest | DecryptRequest | FileEncryptRequest | FileDecryptRequest
