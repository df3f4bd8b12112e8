"""Secret staging: passphrase delivery and short-lived files for backend input."""

import ctypes
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Self

import structlog

logger = structlog.get_logger(__name__)

_STAGED_PREFIX = "gpg_ops_"


def _secure_zero(data: bytearray) -> None:
    if len(data) == 0:
        return
    try:
        address = ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data))
        ctypes.memset(address, 0, len(data))
    except (TypeError, ValueError, BufferError):
        data[:] = bytes(len(data))


class Passphrase:
    """
    Passphrase container that zeroes its buffer when cleared.

    The secret only leaves this object through `as_stdin()`, which produces the
    line the backend reads from `--passphrase-fd 0`. Use as context manager for
    guaranteed cleanup.
    """

    __slots__ = ("_data", "_cleared")

    def __init__(self, secret: str, encoding: str = "utf-8") -> None:
        self._data = bytearray(secret, encoding)
        self._cleared = False
        if not self._data:
            msg = "Passphrase must not be empty"
            raise ValueError(msg)

    def __del__(self) -> None:
        if hasattr(self, "_cleared"):
            self.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.clear()

    def __repr__(self) -> str:
        if self._cleared:
            return "Passphrase(<cleared>)"
        return f"Passphrase(<{len(self._data)} bytes>)"

    def __len__(self) -> int:
        return len(self._data)

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def clear(self) -> None:
        """Zero memory. Idempotent."""
        if self._cleared:
            return
        _secure_zero(self._data)
        self._cleared = True

    def as_stdin(self) -> bytes:
        """Warning: the returned bytes are an unmanaged copy."""
        if self._cleared:
            raise RuntimeError("Passphrase has been cleared")
        return bytes(self._data) + b"\n"


@contextmanager
def staged_file(data: bytes, *, directory: Path | None = None) -> Iterator[Path]:
    """
    Write data to a private temporary file for the duration of the block.

    The file has a unique name and owner-only permissions. It is fully written
    and closed before the path is yielded, and removed on every exit path.

    Args:
        data: Content to stage.
        directory: Where to create the file. System default if None.

    Yields:
        Path of the staged file.
    """
    fd, name = tempfile.mkstemp(prefix=_STAGED_PREFIX, dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        logger.debug("Staged file", path=str(path), size=len(data))
        yield path
    finally:
        _remove(path)


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove staged file", path=str(path), error=str(e))
