"""Destination path helpers for file encryption and decryption."""

import re
from pathlib import Path

_ENCRYPTED_SUFFIX = re.compile(r"(\.gpg)?(\.asc)?$")


def encrypted_path_for(source: Path | str, suffix: str = "asc") -> Path:
    """`report.txt` -> `report.txt.asc`."""
    return Path(f"{source}.{suffix}")


def decrypted_path_for(source: Path | str) -> Path:
    """
    Strip a trailing `.gpg`, `.asc` or `.gpg.asc` from the source path.

    A path without any of these suffixes is returned unchanged, so callers must
    check that the result differs from the source before writing to it.
    """
    return Path(_ENCRYPTED_SUFFIX.sub("", str(source), count=1))
