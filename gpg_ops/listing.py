"""
Parser for the backend's machine-readable key listing.

Consumes the output of `gpg --list-keys --fixed-list-mode --fingerprint --with-colons`.
Format reference: https://github.com/gpg/gnupg/blob/master/doc/DETAILS
"""

import re
from dataclasses import replace

import structlog

from gpg_ops.exceptions import ParseError
from gpg_ops.models.keys import KeyCapability, PublicKey

logger = structlog.get_logger(__name__)

_PUB_KEY_ID = 4
_PUB_CREATED = 5
_PUB_EXPIRES = 6
_PUB_CAPABILITIES = 11
_FPR_FINGERPRINT = 9
_UID_USER_ID = 9

_MIN_FIELDS = {
    "pub": _PUB_CAPABILITIES + 1,
    "fpr": _FPR_FINGERPRINT + 1,
    "uid": _UID_USER_ID + 1,
}

_NAME_EMAIL = re.compile(r"(.+)\s+<(.+)>")
_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")


def parse_key_listing(raw: str) -> list[PublicKey]:
    """
    Parse a colon-delimited key listing into public keys.

    One key is returned per distinct `pub` record, in the order first seen.
    `sub` records and unknown record types are skipped.

    Args:
        raw: Backend standard output.

    Returns:
        Parsed keys. Empty input gives an empty list.

    Raises:
        ParseError: If a pub, fpr or uid line has too few fields.
    """
    keys: dict[str, PublicKey] = {}
    current: str | None = None

    for line_number, line in enumerate(raw.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        fields = line.split(":")
        record = fields[0]
        if record not in _MIN_FIELDS:
            continue
        _check_field_count(fields, line_number, line)

        match record:
            case "pub":
                current = fields[_PUB_KEY_ID]
                if current not in keys:
                    keys[current] = _parse_pub(fields)
            case "fpr" if current is not None:
                fingerprint = fields[_FPR_FINGERPRINT]
                if current in fingerprint and keys[current].fingerprint is None:
                    keys[current] = replace(keys[current], fingerprint=fingerprint)
            case "uid" if current is not None:
                if keys[current].email is None:
                    keys[current] = _apply_user_id(keys[current], fields[_UID_USER_ID])

    logger.debug("Parsed key listing", keys=len(keys))
    return list(keys.values())


def _check_field_count(fields: list[str], line_number: int, line: str) -> None:
    expected = _MIN_FIELDS[fields[0]]
    if len(fields) >= expected:
        return
    msg = f"'{fields[0]}' record has {len(fields)} fields, expected at least {expected}"
    raise ParseError(msg, line_number=line_number, line=line)


def _parse_pub(fields: list[str]) -> PublicKey:
    capabilities = fields[_PUB_CAPABILITIES]
    return PublicKey(
        key_id=fields[_PUB_KEY_ID],
        creation_date=fields[_PUB_CREATED],
        expiration_date=fields[_PUB_EXPIRES],
        encrypt=KeyCapability.ENCRYPT.present_in(capabilities),
        sign=KeyCapability.SIGN.present_in(capabilities),
    )


def _apply_user_id(key: PublicKey, user_id: str) -> PublicKey:
    match = _NAME_EMAIL.match(_unescape(user_id))
    if match is None:
        return key
    return replace(key, name=match.group(1), email=match.group(2))


def _unescape(value: str) -> str:
    return _ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), value)
