"""
Process runner protocol definition.

This defines the boundary between argument building and process execution, so the
invoker can be exercised with a fake runner and the real runner swapped for another
execution model without changing the rest of the codebase.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, kw_only=True)
class ProcessResult:
    """
    Outcome of one backend process.

    Attributes:
        returncode: Process exit status.
        stdout: Captured standard output.
        stderr: Captured standard error (backend diagnostics).
    """

    returncode: int
    stdout: bytes = b""
    stderr: bytes = field(default=b"", repr=False)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class ProcessRunner(Protocol):
    """
    Abstract interface for running the backend executable.
    """

    async def run(
        self,
        argv: Sequence[str],
        *,
        stdin: bytes | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        """
        Run a process to completion.

        Args:
            argv: Full argument vector, executable first.
            stdin: Bytes written to standard input, then closed.
            timeout: Seconds to wait before killing the process.

        Returns:
            The exit status and captured output.

        Raises:
            FileNotFoundError: If the executable cannot be found.
            TimeoutError: If the timeout expires. The process is killed first.
        """
        ...
