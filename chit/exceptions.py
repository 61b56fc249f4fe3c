"""Exception hierarchy for token encoding and decoding.

Every failure is a subclass of :class:`ChitError`, so callers can catch the
whole family at once or pick out a single kind. Authentication and padding
failures share the :class:`DecryptionFailed` base for callers that prefer
not to distinguish between them.
"""


class ChitError(Exception):
    """Base class for all errors raised by chit."""


class InvalidSecret(ChitError):
    """The secret could not be turned into signing and encryption keys."""


class InvalidSecretEncoding(InvalidSecret):
    def __init__(self) -> None:
        super().__init__("secret is not valid URL-safe base64")


class InvalidSecretLength(InvalidSecret):
    def __init__(self, length: int) -> None:
        super().__init__(f"secret must be 32 bytes, got {length}")
        self.length = length


class SecretGenerationFailed(ChitError):
    def __init__(self) -> None:
        super().__init__("failed to read from the random source")


class IVGenerationFailed(ChitError):
    def __init__(self) -> None:
        super().__init__("failed to generate IV")


class InvalidToken(ChitError):
    """The token was rejected."""


class InvalidTokenEncoding(InvalidToken):
    def __init__(self) -> None:
        super().__init__("token is not valid URL-safe base64")


class TokenTooShort(InvalidToken):
    def __init__(self) -> None:
        super().__init__("token is too short")


class UnsupportedVersion(InvalidToken):
    def __init__(self, version: int) -> None:
        super().__init__("wrong version")
        self.version = version


class TokenExpired(InvalidToken):
    def __init__(self) -> None:
        super().__init__("token has expired")


class ClockSkewRejected(InvalidToken):
    def __init__(self) -> None:
        super().__init__("clock skew")


class MalformedCiphertext(InvalidToken):
    def __init__(self) -> None:
        super().__init__("ciphertext is not a multiple of the block size")


class DecryptionFailed(InvalidToken):
    """The token failed authentication or its plaintext could not be recovered."""


class AuthenticationFailed(DecryptionFailed):
    def __init__(self) -> None:
        super().__init__("wrong HMAC")


class InvalidPadding(DecryptionFailed):
    def __init__(self) -> None:
        super().__init__("invalid padding")


class PaddingError(ValueError):
    """Raised by :func:`chit.padding.unpad` when the padding bytes are invalid."""
