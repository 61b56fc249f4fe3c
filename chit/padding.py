"""PKCS #7 block padding (RFC 5652, section 6.3)."""

from chit.exceptions import PaddingError

BLOCK_SIZE = 16


def padded_len(n: int) -> int:
    """Return ``len(pad(m))`` for a message of length *n*."""
    return BLOCK_SIZE * (n // BLOCK_SIZE) + BLOCK_SIZE


def pad(message: bytes) -> bytes:
    """Pad *message* to a block boundary.

    Padding is always added, so an already aligned message grows by a full
    block. Each padding byte holds the number of bytes added.
    """
    count = padded_len(len(message)) - len(message)
    return bytes(message) + bytes([count]) * count


def unpad(padded: bytes) -> bytes:
    """Reverse :func:`pad`.

    Raises:
        PaddingError: If the input is empty or the padding bytes are invalid.
    """
    if not padded:
        raise PaddingError("invalid padding")

    count = padded[-1]
    if count == 0 or count > len(padded):
        raise PaddingError("invalid padding")

    if any(b != count for b in padded[-count:]):
        raise PaddingError("invalid padding")

    return padded[:-count]
