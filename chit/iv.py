"""Initialization vector sources.

An IV source is any callable that takes no arguments and returns exactly
one block of bytes. :class:`RandomIV` is used unless the caller passes
something else; :class:`FixedIV` exists for reproducible tokens in tests.
"""

import os
from typing import Protocol

from chit.padding import BLOCK_SIZE


class IVSource(Protocol):
    def __call__(self) -> bytes: ...


class RandomIV:
    """Draws each IV from the operating system's CSPRNG."""

    def __call__(self) -> bytes:
        return os.urandom(BLOCK_SIZE)


class FixedIV:
    """Returns the same IV every time. Never use this outside of tests."""

    def __init__(self, iv: bytes) -> None:
        if len(iv) != BLOCK_SIZE:
            raise ValueError(f"IV must be {BLOCK_SIZE} bytes, got {len(iv)}")
        self.iv = bytes(iv)

    def __call__(self) -> bytes:
        return self.iv


random_iv = RandomIV()
