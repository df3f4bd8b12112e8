"""
Key domain models.
"""

from dataclasses import dataclass
from enum import StrEnum


class KeyCapability(StrEnum):
    """Capability letters from the key-listing capability field."""

    ENCRYPT = "e"
    SIGN = "s"
    CERTIFY = "c"
    AUTHENTICATE = "a"

    def present_in(self, field: str) -> bool:
        """Whether the letter appears in either case (primary key or whole key)."""
        return self.value in field.lower()


@dataclass(frozen=True, kw_only=True)
class PublicKey:
    """
    A public key as reported by one key listing.

    Attributes:
        key_id: Short key identifier, unique within one listing.
        fingerprint: Full fingerprint, if a matching fingerprint line was seen.
        name: Display name from the first `Name <email>` user id.
        email: Email from the same user id.
        creation_date: Creation field, copied verbatim.
        expiration_date: Expiration field, copied verbatim (empty if none).
        encrypt: Encryption capability.
        sign: Signing capability.
    """

    key_id: str
    fingerprint: str | None = None
    name: str | None = None
    email: str | None = None
    creation_date: str = ""
    expiration_date: str = ""
    encrypt: bool = False
    sign: bool = False

    @property
    def label(self) -> str:
        """Recipient picker label. Falls back to the key id when no user id matched."""
        if self.email is None:
            return self.key_id
        return f"<{self.email}>"

    @property
    def detail(self) -> str:
        return f"({self.key_id})"
