"""AES-128 in CBC mode.

No padding and no authentication happen here; callers hand in whole blocks
and are responsible for verifying the ciphertext before decrypting it.
"""

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from chit.exceptions import MalformedCiphertext
from chit.padding import BLOCK_SIZE


def _cipher(key: bytes, iv: bytes) -> Cipher:
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def encrypt_cbc(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    """Encrypt *plaintext*, which must already be a whole number of blocks."""
    if not plaintext or len(plaintext) % BLOCK_SIZE:
        raise ValueError("plaintext must be a positive multiple of the block size")
    encryptor = _cipher(key, iv).encryptor()
    return encryptor.update(plaintext) + encryptor.finalize()


def decrypt_cbc(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    """Decrypt *ciphertext*.

    Raises:
        MalformedCiphertext: If the ciphertext is empty or not block aligned.
    """
    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise MalformedCiphertext()
    decryptor = _cipher(key, iv).decryptor()
    return decryptor.update(ciphertext) + decryptor.finalize()
