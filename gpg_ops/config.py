"""
gpg-ops backend configuration.
"""

from dataclasses import dataclass
from pathlib import Path

# Forces the backend to accept any key in the keyring without a web-of-trust
# check. Non-interactive use depends on it; trust verification is lost.
TRUST_MODEL_ALWAYS = "always"


@dataclass(frozen=True, kw_only=True)
class GpgConfig:
    """
    Attributes:
        gpg_binary: Backend executable name or path.
        homedir: Optional backend home directory (keyring location).
        trust_model: Trust model passed to every trust-sensitive operation.
        good_signature_marker: Text searched in backend diagnostics to accept a signature.
            Depends on backend version and locale.
        encrypted_file_suffix: Suffix appended to encrypted file names, without the dot.
        timeout: Seconds before a backend process is killed. None waits forever.
        encoding: Encoding of text sent to and read from the backend.
        temp_dir: Directory for staged files. None uses the system default.
    """

    gpg_binary: str = "gpg"
    homedir: Path | None = None
    trust_model: str = TRUST_MODEL_ALWAYS
    good_signature_marker: str = "good signature"
    encrypted_file_suffix: str = "asc"
    timeout: float | None = None
    encoding: str = "utf-8"
    temp_dir: Path | None = None

    def __post_init__(self) -> None:
        if not self.gpg_binary:
            msg = "gpg_binary must not be empty"
            raise ValueError(msg)
        if not self.trust_model:
            msg = "trust_model must not be empty"
            raise ValueError(msg)
        if not self.good_signature_marker:
            msg = "good_signature_marker must not be empty"
            raise ValueError(msg)
        if not self.encrypted_file_suffix or self.encrypted_file_suffix.startswith("."):
            msg = "encrypted_file_suffix must be non-empty and must not start with a dot"
            raise ValueError(msg)
        if self.timeout is not None and self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
