from pathlib import Path

from gpg_ops.models.requests import DecryptRequest, FileDecryptRequest, FileEncryptRequest


def test_decrypt_requests_hide_passphrase_in_repr() -> None:
    text_request = DecryptRequest(text="ciphertext", passphrase="hunter2")
    file_request = FileDecryptRequest(
        source=Path("a.gpg"), destination=Path("a"), passphrase="hunter2"
    )

    assert "hunter2" not in repr(text_request)
    assert "hunter2" not in repr(file_request)


def test_file_encrypt_request_defaults_to_armored() -> None:
    request = FileEncryptRequest(
        source=Path("a"), destination=Path("a.asc"), recipient_email="jane@example.com"
    )

    assert request.armored is True
