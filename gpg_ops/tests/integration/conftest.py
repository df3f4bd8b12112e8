import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from gpg_ops.client import GpgClient
from gpg_ops.config import GpgConfig
from gpg_ops.tests.constants import INTEGRATION_EMAIL, INTEGRATION_NAME, INTEGRATION_PASSPHRASE


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    if shutil.which("gpg") is not None:
        return
    skip = pytest.mark.skip(reason="gpg executable not found")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip)


@pytest.fixture(scope="module")
def gpg_home() -> Iterator[Path]:
    gnupg = pytest.importorskip("gnupg")
    home = Path(tempfile.mkdtemp(prefix="gpgops_"))
    # Zero cache so every call has to present its own passphrase.
    (home / "gpg-agent.conf").write_text("default-cache-ttl 0\nmax-cache-ttl 0\n")
    gpg = gnupg.GPG(gnupghome=str(home))
    key_input = gpg.gen_key_input(
        name_real=INTEGRATION_NAME,
        name_email=INTEGRATION_EMAIL,
        passphrase=INTEGRATION_PASSPHRASE,
        key_type="EDDSA",
        key_curve="ed25519",
        key_usage="sign",
        subkey_type="ECDH",
        subkey_curve="cv25519",
        subkey_usage="encrypt",
    )
    key = gpg.gen_key(key_input)
    if not key.fingerprint:
        shutil.rmtree(home, ignore_errors=True)
        pytest.skip(f"gpg could not generate a test key: {key.stderr}")
    try:
        yield home
    finally:
        shutil.rmtree(home, ignore_errors=True)


@pytest.fixture
def gpg_client(gpg_home: Path, tmp_path: Path) -> GpgClient:
    return GpgClient(GpgConfig(homedir=gpg_home, temp_dir=tmp_path, timeout=60.0))
