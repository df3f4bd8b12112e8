"""
Backend invoker: argument vectors and process calls for each OpenPGP operation.

Argument vectors are built by pure methods so the exact contract with the backend
can be inspected without running it. Every trust-sensitive operation passes the
configured trust model; with the default `always` the backend never stops to ask
whether a key belongs to its user id, and no web-of-trust check happens.
"""

from enum import StrEnum
from pathlib import Path

import structlog

from gpg_ops.backend.process import AsyncProcessRunner
from gpg_ops.backend.protocol import ProcessResult, ProcessRunner
from gpg_ops.backend.staging import Passphrase, staged_file
from gpg_ops.config import GpgConfig
from gpg_ops.exceptions import (
    BackendError,
    BackendNotFoundError,
    BackendTimeoutError,
    InvalidInputError,
)

logger = structlog.get_logger(__name__)

_PASSPHRASE_ARGS = ("--passphrase-fd", "0", "--pinentry-mode", "loopback")


class Operation(StrEnum):
    """Backend operations, used to label logs and errors."""

    LIST_KEYS = "list_keys"
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    ENCRYPT_FILE = "encrypt_file"
    DECRYPT_FILE = "decrypt_file"
    CLEAR_SIGN = "clear_sign"
    VERIFY_SIGNATURE = "verify_signature"


class BackendInvoker:
    """
    Drives the OpenPGP command-line backend.

    Holds only the configuration and the process runner; calls are independent.

    Example:
        invoker = BackendInvoker(GpgConfig())
        listing = await invoker.list_keys()
    """

    def __init__(self, config: GpgConfig, runner: ProcessRunner | None = None) -> None:
        """
        Args:
            config: Backend configuration, including the forced trust model.
            runner: Process runner. Defaults to an asyncio subprocess runner.
        """
        self._config = config
        self._runner = runner or AsyncProcessRunner()

    @property
    def config(self) -> GpgConfig:
        return self._config

    # Argument vectors

    def base_args(self) -> list[str]:
        args = [self._config.gpg_binary, "--batch", "--no-tty"]
        if self._config.homedir is not None:
            args += ["--homedir", str(self._config.homedir)]
        return args

    def trust_args(self) -> list[str]:
        return ["--trust-model", self._config.trust_model]

    def list_keys_args(self) -> list[str]:
        return [
            *self.base_args(),
            "--list-keys",
            "--fixed-list-mode",
            "--fingerprint",
            "--with-colons",
        ]

    def encrypt_args(self, recipient: str) -> list[str]:
        return [
            *self.base_args(),
            *self.trust_args(),
            "--recipient",
            recipient,
            "--armor",
            "--encrypt",
        ]

    def decrypt_args(self, source: Path) -> list[str]:
        return [*self.base_args(), *_PASSPHRASE_ARGS, "--quiet", "--decrypt", str(source)]

    def encrypt_file_args(
        self, source: Path, destination: Path, recipient: str, *, armored: bool = True
    ) -> list[str]:
        args = [*self.base_args(), *self.trust_args(), "--recipient", recipient]
        if armored:
            args.append("--armor")
        return [*args, "--yes", "--output", str(destination), "--encrypt", str(source)]

    def decrypt_file_args(self, source: Path, destination: Path) -> list[str]:
        return [
            *self.base_args(),
            *_PASSPHRASE_ARGS,
            "--quiet",
            "--yes",
            "--output",
            str(destination),
            "--decrypt",
            str(source),
        ]

    def clear_sign_args(self, signing_key_id: str, source: Path | None = None) -> list[str]:
        args = [*self.base_args(), *self.trust_args(), "--default-key", signing_key_id]
        if source is None:
            return [*args, "--clearsign"]
        return [*args, *_PASSPHRASE_ARGS, "--output", "-", "--clearsign", str(source)]

    def verify_args(self) -> list[str]:
        return [*self.base_args(), *self.trust_args(), "--verify"]

    # Operations

    async def list_keys(self) -> str:
        """
        Return the raw colon-delimited key listing.

        Undecodable bytes, such as a legacy user id in another charset, become
        U+FFFD so one key cannot hide the rest of the listing.
        """
        result = await self._call(Operation.LIST_KEYS, self.list_keys_args())
        return self._decode(Operation.LIST_KEYS, result.stdout, errors="replace")

    async def encrypt(self, text: str, recipient: str) -> str:
        """Encrypt text for one recipient, returning ASCII-armored ciphertext."""
        result = await self._call(
            Operation.ENCRYPT, self.encrypt_args(recipient), stdin=self._encode(text)
        )
        return self._decode(Operation.ENCRYPT, result.stdout)

    async def decrypt(self, text: str, passphrase: Passphrase) -> str:
        """
        Decrypt text with a passphrase.

        The passphrase occupies standard input, so the ciphertext is staged into a
        temporary file that is removed when the call ends, whatever the outcome.
        """
        with staged_file(self._encode(text), directory=self._config.temp_dir) as source:
            result = await self._call(
                Operation.DECRYPT, self.decrypt_args(source), stdin=passphrase.as_stdin()
            )
        return self._decode(Operation.DECRYPT, result.stdout)

    async def encrypt_file(
        self, source: Path, destination: Path, recipient: str, *, armored: bool = True
    ) -> Path:
        """Encrypt a file, letting the backend write the destination."""
        args = self.encrypt_file_args(source, destination, recipient, armored=armored)
        await self._call(Operation.ENCRYPT_FILE, args)
        return destination

    async def decrypt_file(self, source: Path, destination: Path, passphrase: Passphrase) -> Path:
        """Decrypt a file, letting the backend write the destination."""
        await self._call(
            Operation.DECRYPT_FILE,
            self.decrypt_file_args(source, destination),
            stdin=passphrase.as_stdin(),
        )
        return destination

    async def clear_sign(
        self, text: str, signing_key_id: str, passphrase: Passphrase | None = None
    ) -> str:
        """
        Clear-sign text with the given key.

        Without a passphrase the backend's agent supplies the key. With one, the
        text is staged to a file so standard input can carry the passphrase.
        """
        if passphrase is None:
            result = await self._call(
                Operation.CLEAR_SIGN, self.clear_sign_args(signing_key_id), stdin=self._encode(text)
            )
            return self._decode(Operation.CLEAR_SIGN, result.stdout)

        with staged_file(self._encode(text), directory=self._config.temp_dir) as source:
            result = await self._call(
                Operation.CLEAR_SIGN,
                self.clear_sign_args(signing_key_id, source),
                stdin=passphrase.as_stdin(),
            )
        return self._decode(Operation.CLEAR_SIGN, result.stdout)

    async def verify_signature(self, text: str) -> bool:
        """
        Verify clear-signed text.

        Success is a text match of the configured marker in the backend
        diagnostics. The marker depends on backend version and locale. Any
        failure, including a backend error, resolves to False.
        """
        try:
            result = await self._run(
                Operation.VERIFY_SIGNATURE, self.verify_args(), stdin=self._encode(text)
            )
        except (BackendError, InvalidInputError) as e:
            logger.debug("Signature not verified", reason=str(e))
            return False
        if not result.ok:
            logger.debug("Signature not verified", returncode=result.returncode)
            return False
        diagnostics = (result.stderr + result.stdout).decode(self._config.encoding, errors="replace")
        return self._config.good_signature_marker.lower() in diagnostics.lower()

    # Internals

    async def _call(
        self, operation: Operation, argv: list[str], *, stdin: bytes | None = None
    ) -> ProcessResult:
        result = await self._run(operation, argv, stdin=stdin)
        if result.ok:
            return result
        stderr = result.stderr.decode(self._config.encoding, errors="replace").strip()
        msg = f"Backend failed to {operation.replace('_', ' ')}"
        raise BackendError(msg, operation=operation.value, returncode=result.returncode, stderr=stderr)

    async def _run(
        self, operation: Operation, argv: list[str], *, stdin: bytes | None = None
    ) -> ProcessResult:
        logger.debug("Invoking backend", operation=str(operation), argv=argv)
        try:
            return await self._runner.run(argv, stdin=stdin, timeout=self._config.timeout)
        except FileNotFoundError as e:
            msg = f"Backend executable not found: {argv[0]}"
            raise BackendNotFoundError(msg, operation=operation.value) from e
        except TimeoutError as e:
            msg = f"Backend timed out after {self._config.timeout}s"
            raise BackendTimeoutError(msg, operation=operation.value) from e
        except OSError as e:
            msg = f"Failed to start backend: {e}"
            raise BackendError(msg, operation=operation.value) from e

    def _encode(self, text: str) -> bytes:
        try:
            return text.encode(self._config.encoding)
        except UnicodeEncodeError as e:
            msg = f"text is not encodable as {self._config.encoding}"
            raise InvalidInputError(msg, field="text") from e

    def _decode(self, operation: Operation, data: bytes, errors: str = "strict") -> str:
        try:
            return data.decode(self._config.encoding, errors=errors)
        except UnicodeDecodeError as e:
            msg = f"Backend output is not valid {self._config.encoding}"
            raise BackendError(msg, operation=operation.value) from e
