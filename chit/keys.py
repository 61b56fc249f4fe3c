"""Secrets and the keys derived from them.

A secret is 32 random bytes encoded as URL-safe base64. The first half is
the HMAC signing key and the second half is the AES encryption key.
"""

import secrets
from dataclasses import dataclass

from chit.encoding import urlsafe_b64decode, urlsafe_b64encode
from chit.exceptions import (
    InvalidSecretEncoding,
    InvalidSecretLength,
    SecretGenerationFailed,
)

KEY_SIZE = 16
SECRET_SIZE = 2 * KEY_SIZE


@dataclass(frozen=True, slots=True)
class SecretKeys:
    """Signing and encryption keys split out of a secret."""

    signing_key: bytes
    encryption_key: bytes

    def __repr__(self) -> str:
        return "SecretKeys(<redacted>)"


def derive_keys(secret: str | bytes) -> SecretKeys:
    """Split *secret* into its signing and encryption keys.

    Raises:
        InvalidSecretEncoding: If the secret is not URL-safe base64.
        InvalidSecretLength: If the decoded secret is not 32 bytes.
    """
    try:
        raw = urlsafe_b64decode(secret)
    except ValueError as exc:
        raise InvalidSecretEncoding() from exc

    if len(raw) != SECRET_SIZE:
        raise InvalidSecretLength(len(raw))

    return SecretKeys(
        signing_key=bytes(raw[:KEY_SIZE]),
        encryption_key=bytes(raw[KEY_SIZE:]),
    )


def random_secret() -> str:
    """Generate a new secret suitable for :func:`chit.encrypt`."""
    try:
        raw = secrets.token_bytes(SECRET_SIZE)
    except OSError as exc:
        raise SecretGenerationFailed() from exc
    return urlsafe_b64encode(raw)
