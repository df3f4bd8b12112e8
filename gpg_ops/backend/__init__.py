"""
OpenPGP backend layer.

This module provides:
- Argument vectors and calls for each backend operation
- Asyncio subprocess execution
- Passphrase delivery and staged temporary files
"""

from gpg_ops.backend.invoker import BackendInvoker, Operation
from gpg_ops.backend.process import AsyncProcessRunner
from gpg_ops.backend.protocol import ProcessResult, ProcessRunner
from gpg_ops.backend.staging import Passphrase, staged_file

__all__ = [
    "BackendInvoker",
    "Operation",
    "AsyncProcessRunner",
    "ProcessRunner",
    "ProcessResult",
    "Passphrase",
    "staged_file",
]
