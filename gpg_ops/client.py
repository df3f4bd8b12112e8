"""
gpg-ops client facade.

This is the main entry point for callers. It validates already-resolved inputs,
hands them to the backend invoker and returns results or typed errors. No
prompting happens here and no state is kept between calls.
"""

from pathlib import Path

import structlog

from gpg_ops.backend.invoker import BackendInvoker
from gpg_ops.backend.protocol import ProcessRunner
from gpg_ops.backend.staging import Passphrase
from gpg_ops.config import GpgConfig
from gpg_ops.exceptions import BackendError, InvalidInputError
from gpg_ops.listing import parse_key_listing
from gpg_ops.models.keys import PublicKey
from gpg_ops.models.requests import (
    DecryptRequest,
    EncryptRequest,
    FileDecryptRequest,
    FileEncryptRequest,
    Request,
)
from gpg_ops.paths import encrypted_path_for

logger = structlog.get_logger(__name__)


class GpgClient:
    """
    Async client for the OpenPGP command-line backend.

    Each operation runs one backend process to completion. Operations never
    retry; calling again with the same inputs gives an equivalent result.

    Example:
        ```python
        client = GpgClient()

        keys = await client.list_keys()
        armored = await client.encrypt("hello", keys[0].email)
        plain = await client.decrypt(armored, "passphrase")

        if await client.verify_signature(signed_text):
            ...
        ```

    Args:
        config: Backend configuration. Uses defaults if not provided.
        runner: Optional process runner for testing.
    """

    def __init__(
        self,
        config: GpgConfig | None = None,
        *,
        runner: ProcessRunner | None = None,
    ) -> None:
        self._config = config or GpgConfig()
        self._invoker = BackendInvoker(self._config, runner)

    @property
    def config(self) -> GpgConfig:
        return self._config

    async def list_keys(self) -> list[PublicKey]:
        """
        List public keys available for encryption.

        Returns:
            Keys in the order the backend lists them.

        Raises:
            BackendError: If the backend fails.
            ParseError: If the listing is malformed.
        """
        return parse_key_listing(await self._invoker.list_keys())

    async def encrypt(self, text: str, recipient_email: str) -> str:
        """
        Encrypt text for a single recipient.

        Args:
            text: Plaintext.
            recipient_email: Recipient key email.

        Returns:
            ASCII-armored ciphertext.

        Raises:
            InvalidInputError: If text or recipient is empty, or text is not encodable.
            BackendError: If the backend fails.
        """
        _require(text, "text")
        _require(recipient_email, "recipient_email")
        return await self._invoker.encrypt(text, recipient_email)

    async def decrypt(self, text: str, passphrase: str) -> str:
        """
        Decrypt text with a passphrase.

        Args:
            text: ASCII-armored ciphertext.
            passphrase: Passphrase of the recipient key.

        Returns:
            Plaintext.

        Raises:
            InvalidInputError: If text or passphrase is empty or not encodable.
            BackendError: If the backend fails (wrong passphrase, no key, ...).
        """
        _require(text, "text")
        _require(passphrase, "passphrase")
        with self._passphrase(passphrase) as secret:
            return await self._invoker.decrypt(text, secret)

    async def encrypt_file(
        self,
        source: Path | str,
        destination: Path | str | None,
        recipient_email: str,
        armored: bool = True,
    ) -> Path:
        """
        Encrypt a file for a single recipient.

        The caller is responsible for confirming an existing destination may be
        overwritten.

        Args:
            source: File to encrypt.
            destination: Output path. Defaults to the source with the configured suffix.
            recipient_email: Recipient key email.
            armored: ASCII-armored output if True, binary otherwise.

        Returns:
            The destination path, confirmed to exist.

        Raises:
            InvalidInputError: If a path or the recipient is invalid.
            BackendError: If the backend fails or writes no output.
        """
        source = _require_source(source)
        if destination is None:
            destination = encrypted_path_for(source, self._config.encrypted_file_suffix)
        destination = _require_destination(source, destination)
        _require(recipient_email, "recipient_email")

        await self._invoker.encrypt_file(source, destination, recipient_email, armored=armored)
        return _confirm_written(destination, "encrypt_file")

    async def decrypt_file(
        self, source: Path | str, destination: Path | str, passphrase: str
    ) -> Path:
        """
        Decrypt a file with a passphrase.

        Args:
            source: Encrypted file.
            destination: Output path.
            passphrase: Passphrase of the recipient key.

        Returns:
            The destination path, confirmed to exist.

        Raises:
            InvalidInputError: If a path or the passphrase is invalid.
            BackendError: If the backend fails or writes no output.
        """
        source = _require_source(source)
        destination = _require_destination(source, destination)
        _require(passphrase, "passphrase")

        with self._passphrase(passphrase) as secret:
            await self._invoker.decrypt_file(source, destination, secret)
        return _confirm_written(destination, "decrypt_file")

    async def clear_sign(
        self, text: str, signing_key_id: str, passphrase: str | None = None
    ) -> str:
        """
        Clear-sign text with the signer's own key.

        Args:
            text: Text to sign.
            signing_key_id: Key id (or email) of the signing key.
            passphrase: Signing key passphrase. If None the backend agent is asked.

        Returns:
            Clear-signed text.

        Raises:
            InvalidInputError: If text, key id or a given passphrase is empty.
            BackendError: If the backend fails.
        """
        _require(text, "text")
        _require(signing_key_id, "signing_key_id")
        if passphrase is None:
            return await self._invoker.clear_sign(text, signing_key_id)
        _require(passphrase, "passphrase")
        with self._passphrase(passphrase) as secret:
            return await self._invoker.clear_sign(text, signing_key_id, secret)

    async def verify_signature(self, text: str) -> bool:
        """
        Check a clear-signed text.

        "Cannot verify" and "verification failed" are the same outcome here:
        this never raises and only a good signature gives True.
        """
        if not text:
            return False
        return await self._invoker.verify_signature(text)

    async def execute(self, request: Request) -> str | Path:
        """
        Run the operation matching a request record.

        Raises:
            InvalidInputError: For an unknown request type or invalid fields.
        """
        match request:
            case EncryptRequest():
                return await self.encrypt(request.text, request.recipient_email)
            case DecryptRequest():
                return await self.decrypt(request.text, request.passphrase)
            case FileEncryptRequest():
                return await self.encrypt_file(
                    request.source,
                    request.destination,
                    request.recipient_email,
                    armored=request.armored,
                )
            case FileDecryptRequest():
                return await self.decrypt_file(
                    request.source, request.destination, request.passphrase
                )
            case _:
                msg = f"Unsupported request: {type(request).__name__}"
                raise InvalidInputError(msg, field="request")

    def _passphrase(self, value: str) -> Passphrase:
        try:
            return Passphrase(value, self._config.encoding)
        except UnicodeEncodeError as e:
            msg = f"passphrase is not encodable as {self._config.encoding}"
            raise InvalidInputError(msg, field="passphrase") from e


def _require(value: str | None, field: str) -> None:
    if value:
        return
    msg = f"{field} must not be empty"
    raise InvalidInputError(msg, field=field)


def _require_source(source: Path | str | None) -> Path:
    if not source:
        msg = "source must not be empty"
        raise InvalidInputError(msg, field="source")
    path = Path(source)
    if not path.is_file():
        msg = f"Invalid file: {path}"
        raise InvalidInputError(msg, field="source")
    return path


def _require_destination(source: Path, destination: Path | str | None) -> Path:
    if not destination:
        msg = "destination must not be empty"
        raise InvalidInputError(msg, field="destination")
    path = Path(destination)
    if path.is_dir():
        msg = f"Destination is a directory: {path}"
        raise InvalidInputError(msg, field="destination")
    if path.resolve() == source.resolve():
        msg = f"Destination is the source file: {path}"
        raise InvalidInputError(msg, field="destination")
    return path


def _confirm_written(destination: Path, operation: str) -> Path:
    """
    Check that the destination exists after a successful backend call.

    Only existence is checked. A destination that existed before a confirmed
    overwrite passes even if the backend left it untouched.
    """
    if not destination.exists():
        msg = f"Backend reported success but wrote no output: {destination}"
        raise BackendError(msg, operation=operation)
    logger.info("File written", operation=operation, destination=str(destination))
    return destination
