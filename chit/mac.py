"""HMAC-SHA256 tags."""

import hmac

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.hmac import HMAC

TAG_SIZE = 32


def sign(key: bytes, data: bytes) -> bytes:
    """Return the 32-byte HMAC-SHA256 tag of *data* under *key*."""
    h = HMAC(key, hashes.SHA256())
    h.update(data)
    return h.finalize()


def verify(key: bytes, data: bytes, tag: bytes) -> bool:
    """Check *tag* against a freshly computed tag in constant time."""
    return hmac.compare_digest(sign(key, data), tag)
