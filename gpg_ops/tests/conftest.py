from collections.abc import Callable
from unittest.mock import AsyncMock, Mock

import pytest

from gpg_ops.backend.protocol import ProcessResult
from gpg_ops.client import GpgClient
from gpg_ops.config import GpgConfig


@pytest.fixture
def make_result() -> Callable[..., ProcessResult]:
    def _make(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> ProcessResult:
        return ProcessResult(returncode=returncode, stdout=stdout, stderr=stderr)

    return _make


@pytest.fixture
def mock_runner() -> Mock:
    runner = Mock()
    runner.run = AsyncMock(return_value=ProcessResult(returncode=0))
    return runner


@pytest.fixture
def config() -> GpgConfig:
    return GpgConfig()


@pytest.fixture
def client(config: GpgConfig, mock_runner: Mock) -> GpgClient:
    return GpgClient(config, runner=mock_runner)
