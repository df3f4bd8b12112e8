"""
Saved passphrase lookup.

Built from the stored `passphrases` setting: a list of entries shaped
`{"email": ..., "passphrase": ..., "description": ...}` with an optional description.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from gpg_ops.models.requests import PassphraseEntry


class PassphraseStore:
    """Ordered, read-only collection of saved passphrases keyed by email."""

    def __init__(self, entries: Iterable[PassphraseEntry] = ()) -> None:
        self._entries = list(entries)

    @classmethod
    def from_settings(cls, settings: Iterable[Mapping[str, Any]] | None) -> "PassphraseStore":
        """
        Build a store from raw setting records.

        Records without an email or passphrase are skipped.

        Args:
            settings: Raw records, or None when nothing is stored.

        Returns:
            A store holding the usable entries in their original order.
        """
        entries = [
            PassphraseEntry(
                email=record["email"],
                passphrase=record["passphrase"],
                description=record.get("description") or None,
            )
            for record in settings or ()
            if record.get("email") and record.get("passphrase")
        ]
        return cls(entries)

    def lookup(self, email: str) -> str | None:
        """Return the first passphrase saved for the email, or None."""
        for entry in self._entries:
            if entry.email == email:
                return entry.passphrase
        return None

    def as_mapping(self) -> dict[str, str]:
        """Email to passphrase. The first entry wins on duplicate emails."""
        mapping: dict[str, str] = {}
        for entry in self._entries:
            mapping.setdefault(entry.email, entry.passphrase)
        return mapping

    def __iter__(self) -> Iterator[PassphraseEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
