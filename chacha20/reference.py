# chacha20/reference.py
import logging
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms
from .params import KEY_SIZE, NONCE_SIZE, BLOCK_SIZE, MASK32, MASK64, InvalidKeyLength, InvalidNonceLength
from .state import check_counter
from .keystream import keystream
from .utils import ensure_bytes

logger = logging.getLogger(__name__)

# -----------------------------
# OpenSSL ChaCha20 (20 rounds only)
# -----------------------------
def _openssl_segment(key: bytes, nonce: bytes, length: int, counter: int) -> bytes:
    iv = counter.to_bytes(8, 'little') + nonce
    encryptor = Cipher(algorithms.ChaCha20(key, iv), mode=None).encryptor()
    return encryptor.update(bytes(length)) + encryptor.finalize()

def openssl_keystream(key: bytes, nonce: bytes, length: int, counter: int = 0) -> bytes:
    """
    OpenSSL takes a 16-byte IV loaded straight into state words 12..15, so
    counter (8 bytes LE) || nonce (8 bytes) gives the same matrix. It refuses
    to carry out of word 12, so requests are split at every 2^32-block
    boundary and the carry into word 13 is applied here.
    """
    key = ensure_bytes(key, "key")
    nonce = ensure_bytes(nonce, "nonce")
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key))
    if len(nonce) != NONCE_SIZE:
        raise InvalidNonceLength(len(nonce))
    check_counter(counter)
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    out = []
    remaining = length
    while remaining:
        until_carry = ((MASK32 + 1) - (counter & MASK32)) * BLOCK_SIZE
        size = min(remaining, until_carry)
        out.append(_openssl_segment(key, nonce, size, counter))
        remaining -= size
        counter = (((counter >> 32) + 1) << 32) & MASK64
    return b"".join(out)

def matches_reference(key: bytes, nonce: bytes, blocks: int = 4, counter: int = 0) -> bool:
    length = blocks * BLOCK_SIZE
    ours = keystream(key, nonce, length, counter=counter)
    theirs = openssl_keystream(key, nonce, length, counter=counter)
    if ours != theirs:
        logger.debug("reference mismatch: key=%s nonce=%s counter=%d", key.hex(), nonce.hex(), counter)
    return ours == theirs
