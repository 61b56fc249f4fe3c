"""Authenticated, timestamped tokens.

A token is the URL-safe base64 encoding (with padding) of::

    version (1) | timestamp (8) | IV (16) | ciphertext (16 * n) | HMAC (32)

The timestamp is the creation time in Unix seconds, big-endian. The
ciphertext is the PKCS #7 padded message under AES-128-CBC, and the HMAC is
HMAC-SHA256 over every byte that precedes it.
"""

import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from chit.cipher import decrypt_cbc, encrypt_cbc
from chit.encoding import urlsafe_b64decode, urlsafe_b64encode
from chit.exceptions import (
    AuthenticationFailed,
    ClockSkewRejected,
    IVGenerationFailed,
    InvalidPadding,
    InvalidTokenEncoding,
    MalformedCiphertext,
    PaddingError,
    TokenExpired,
    TokenTooShort,
    UnsupportedVersion,
)
from chit.iv import IVSource, random_iv
from chit.keys import derive_keys
from chit.mac import TAG_SIZE, sign, verify
from chit.padding import BLOCK_SIZE, pad, unpad

VERSION = 0x80
TIMESTAMP_OFFSET = 1
TIMESTAMP_SIZE = 8
IV_OFFSET = TIMESTAMP_OFFSET + TIMESTAMP_SIZE
CIPHERTEXT_OFFSET = IV_OFFSET + BLOCK_SIZE
FIXED_SIZE = CIPHERTEXT_OFFSET + TAG_SIZE
MIN_TOKEN_SIZE = FIXED_SIZE + BLOCK_SIZE

MAX_CLOCK_SKEW = timedelta(hours=1)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_TIMESTAMP = struct.Struct(">q")
_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True, slots=True)
class TokenParts:
    """The fields of a decoded token. Nothing here has been authenticated."""

    version: int
    issued_at: int
    iv: bytes
    ciphertext: bytes
    tag: bytes
    signed: bytes


def parse_token(raw: bytes) -> TokenParts:
    """Split raw token bytes into their fields.

    Raises:
        TokenTooShort: If there is no room for at least one ciphertext block.
        UnsupportedVersion: If the version byte is not :data:`VERSION`.
    """
    if len(raw) < MIN_TOKEN_SIZE:
        raise TokenTooShort()
    if raw[0] != VERSION:
        raise UnsupportedVersion(raw[0])

    tag_offset = len(raw) - TAG_SIZE
    (issued_at,) = _TIMESTAMP.unpack_from(raw, TIMESTAMP_OFFSET)
    return TokenParts(
        version=raw[0],
        issued_at=issued_at,
        iv=bytes(raw[IV_OFFSET:CIPHERTEXT_OFFSET]),
        ciphertext=bytes(raw[CIPHERTEXT_OFFSET:tag_offset]),
        tag=bytes(raw[tag_offset:]),
        signed=bytes(raw[:tag_offset]),
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _since_epoch(now: datetime) -> timedelta:
    # Naive datetimes are taken to be UTC.
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - _EPOCH


def _as_timedelta(ttl: timedelta | int | float) -> timedelta:
    if isinstance(ttl, timedelta):
        return ttl
    try:
        return timedelta(seconds=ttl)
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"ttl must be a finite number of seconds, got {ttl!r}") from exc


def _generate_iv(iv_source: IVSource) -> bytes:
    try:
        iv = bytes(iv_source())
    except Exception as exc:
        raise IVGenerationFailed() from exc
    if len(iv) != BLOCK_SIZE:
        raise IVGenerationFailed()
    return iv


def _check_timestamp(issued_at: int, now: datetime, ttl: timedelta) -> None:
    # Integer microseconds: issued_at can be any int64, which overflows timedelta.
    age = _since_epoch(now) // _MICROSECOND - issued_at * 1_000_000
    if age > ttl // _MICROSECOND:
        raise TokenExpired()
    if age < -(MAX_CLOCK_SKEW // _MICROSECOND):
        raise ClockSkewRejected()


def encrypt(
    message: str | bytes,
    secret: str | bytes,
    now: datetime | None = None,
    iv_source: IVSource | None = None,
) -> str:
    """Encrypt and sign *message* with *secret*.

    Args:
        message: The plaintext. Text is encoded as UTF-8.
        secret: URL-safe base64 encoding of 32 bytes, see :func:`chit.random_secret`.
        now: Creation time to stamp into the token. Defaults to the current time.
        iv_source: Callable producing the 16-byte IV. Defaults to :class:`chit.iv.RandomIV`.

    Returns:
        The token as URL-safe base64 text.
    """
    keys = derive_keys(secret)
    if isinstance(message, str):
        message = message.encode("utf-8")
    if now is None:
        now = _utcnow()

    timestamp = _since_epoch(now) // timedelta(seconds=1)
    iv = _generate_iv(iv_source or random_iv)

    header = bytes([VERSION]) + _TIMESTAMP.pack(timestamp) + iv
    ciphertext = encrypt_cbc(keys.encryption_key, iv, pad(message))
    body = header + ciphertext
    return urlsafe_b64encode(body + sign(keys.signing_key, body))


def decrypt(
    token: str | bytes,
    secret: str | bytes,
    ttl: timedelta | int | float,
    now: datetime | None = None,
) -> bytes:
    """Verify *token* and return the original message.

    Args:
        token: A token produced by :func:`encrypt`.
        secret: The secret the token was produced with.
        ttl: Maximum token age, as a timedelta or in seconds.
        now: Verification time. Defaults to the current time.

    Raises:
        InvalidTokenEncoding: The token is not URL-safe base64.
        InvalidSecret: The secret is malformed.
        TokenTooShort, UnsupportedVersion, MalformedCiphertext: The token is malformed.
        TokenExpired: The token is older than *ttl*.
        ClockSkewRejected: The token claims to be from too far in the future.
        AuthenticationFailed: The token was tampered with or uses another secret.
        InvalidPadding: The decrypted message is not correctly padded.
        ValueError: *ttl* is not a finite number of seconds.
    """
    try:
        raw = urlsafe_b64decode(token)
    except ValueError as exc:
        raise InvalidTokenEncoding() from exc

    keys = derive_keys(secret)
    parts = parse_token(raw)
    if now is None:
        now = _utcnow()
    _check_timestamp(parts.issued_at, now, _as_timedelta(ttl))

    if len(parts.ciphertext) % BLOCK_SIZE:
        raise MalformedCiphertext()

    if not verify(keys.signing_key, parts.signed, parts.tag):
        raise AuthenticationFailed()

    plaintext = decrypt_cbc(keys.encryption_key, parts.iv, parts.ciphertext)
    try:
        return unpad(plaintext)
    except PaddingError:
        raise InvalidPadding() from None


def decrypt_text(
    token: str | bytes,
    secret: str | bytes,
    ttl: timedelta | int | float,
    now: datetime | None = None,
) -> str:
    """Like :func:`decrypt`, but decode the message as UTF-8."""
    return decrypt(token, secret, ttl, now).decode("utf-8")
