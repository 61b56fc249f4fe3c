"""Strict URL-safe base64 helpers."""

import base64
import binascii


def urlsafe_b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii")


def urlsafe_b64decode(text: str | bytes) -> bytes:
    """Decode URL-safe base64 with padding, rejecting anything else.

    Unlike :func:`base64.urlsafe_b64decode` this does not silently drop
    characters outside the alphabet, and the standard ``+`` and ``/``
    characters are refused.

    Raises:
        ValueError: If *text* is not valid URL-safe base64.
    """
    data = text.encode("ascii") if isinstance(text, str) else bytes(text)
    if b"+" in data or b"/" in data:
        raise binascii.Error("non-URL-safe base64 character")
    return base64.b64decode(data, altchars=b"-_", validate=True)
