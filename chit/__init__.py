from chit.exceptions import (
    AuthenticationFailed,
    ChitError,
    ClockSkewRejected,
    DecryptionFailed,
    IVGenerationFailed,
    InvalidPadding,
    InvalidSecret,
    InvalidSecretEncoding,
    InvalidSecretLength,
    InvalidToken,
    InvalidTokenEncoding,
    MalformedCiphertext,
    SecretGenerationFailed,
    TokenExpired,
    TokenTooShort,
    UnsupportedVersion,
)
from chit.iv import FixedIV, RandomIV
from chit.keys import SecretKeys, derive_keys, random_secret
from chit.token import MAX_CLOCK_SKEW, VERSION, decrypt, decrypt_text, encrypt

__all__ = [
    "encrypt",
    "decrypt",
    "decrypt_text",
    "random_secret",
    "derive_keys",
    "SecretKeys",
    "FixedIV",
    "RandomIV",
    "VERSION",
    "MAX_CLOCK_SKEW",
    "ChitError",
    "InvalidSecret",
    "InvalidSecretEncoding",
    "InvalidSecretLength",
    "SecretGenerationFailed",
    "IVGenerationFailed",
    "InvalidToken",
    "InvalidTokenEncoding",
    "TokenTooShort",
    "UnsupportedVersion",
    "TokenExpired",
    "ClockSkewRejected",
    "MalformedCiphertext",
    "DecryptionFailed",
    "AuthenticationFailed",
    "InvalidPadding",
]
