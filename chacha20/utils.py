# chacha20/utils.py
import numpy as np
from .params import MASK32, DTYPE

def add32(a: int, b: int) -> int:
    return (a + b) & MASK32

def sub32(a: int, b: int) -> int:
    return (a - b) & MASK32

def rotl32(x: int, r: int) -> int:
    return ((x << r) & MASK32) | (x >> (32 - r))

def rotr32(x: int, r: int) -> int:
    return (x >> r) | ((x << (32 - r)) & MASK32)

def ensure_bytes(data, name: str) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"{name} must be bytes-like, got {type(data).__name__}")

# -----------------------------
# Little-endian word packing
# -----------------------------
def words_from_bytes(b: bytes) -> np.ndarray:
    """Interpret b as consecutive little-endian 32-bit words (first byte least significant)."""
    if len(b) % 4:
        raise ValueError(f"Byte length must be a multiple of 4, got {len(b)}")
    return np.frombuffer(b, dtype='<u4').astype(DTYPE)

def words_to_bytes(x) -> bytes:
    return np.asarray(x, dtype=np.uint64).astype('<u4').tobytes()

def split_counter(counter: int) -> tuple[int, int]:
    return counter & MASK32, (counter >> 32) & MASK32

def join_counter(low: int, high: int) -> int:
    return (int(high) << 32) | int(low)

# -----------------------------
# Hex helpers
# -----------------------------
def parse_hex(s: str) -> bytes:
    """Accepts plain hex or RFC-style grids ("00 01 02 ..."), with optional 0x prefix."""
    cleaned = "".join(s.split())
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    return bytes.fromhex(cleaned)

def to_hex(b: bytes) -> str:
    return b.hex()
