"""
Asyncio subprocess runner for the backend executable.
"""

import asyncio
from collections.abc import Sequence

import structlog

from gpg_ops.backend.protocol import ProcessResult

logger = structlog.get_logger(__name__)


class AsyncProcessRunner:
    """
    Runs one backend process per call without blocking the event loop.

    No state is shared between calls, so concurrent runs are independent.

    Example:
        runner = AsyncProcessRunner()
        result = await runner.run(["gpg", "--version"])
    """

    def __init__(self, env: dict[str, str] | None = None) -> None:
        """
        Args:
            env: Environment for the child process. Inherits the current one if None.
        """
        self._env = env

    async def run(
        self,
        argv: Sequence[str],
        *,
        stdin: bytes | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=self._env,
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(stdin), timeout)
        except (TimeoutError, asyncio.CancelledError):
            await self._kill(process)
            raise

        logger.debug("Process exited", executable=argv[0], returncode=process.returncode)
        return ProcessResult(returncode=process.returncode, stdout=stdout, stderr=stderr)

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()
        logger.warning("Process killed", pid=process.pid)
