"""
gpg-ops exception hierarchy.

All exceptions inherit from GpgOpsError for easy catching.
"""

from typing import Any


class GpgOpsError(Exception):
    """Base exception for all gpg_ops errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class InvalidInputError(GpgOpsError):
    """A required input is missing, empty or malformed."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message, field=field)
        self.field = field


class BackendError(GpgOpsError):
    """The OpenPGP backend process reported a failure."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, operation=operation, returncode=returncode)
        self.operation = operation
        self.returncode = returncode
        self.stderr = stderr


class BackendTimeoutError(BackendError):
    """Backend process exceeded the configured timeout and was killed."""


class BackendNotFoundError(BackendError):
    """Backend executable could not be started."""


class ParseError(GpgOpsError):
    """Key-listing output did not match the colon-delimited format."""

    def __init__(self, message: str, *, line_number: int, line: str) -> None:
        super().__init__(message, line_number=line_number)
        self.line_number = line_number
        self.line = line
