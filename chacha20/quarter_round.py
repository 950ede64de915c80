# chacha20/quarter_round.py
from .utils import add32, sub32, rotl32, rotr32

# -----------------------------
# Quarter Round
# -----------------------------
def quarter_round(a: int, b: int, c: int, d: int) -> tuple[int, int, int, int]:
    """
    ARX mix of four 32-bit words:

        a += b; d ^= a; d <<<= 16;
        c += d; b ^= c; b <<<= 12;
        a += b; d ^= a; d <<<= 8;
        c += d; b ^= c; b <<<= 7;

    "+" is addition modulo 2^32 and "<<<" a left rotation.
    """
    a = add32(a, b); d ^= a; d = rotl32(d, 16)
    c = add32(c, d); b ^= c; b = rotl32(b, 12)
    a = add32(a, b); d ^= a; d = rotl32(d, 8)
    c = add32(c, d); b ^= c; b = rotl32(b, 7)
    return a, b, c, d

def inverse_quarter_round(a: int, b: int, c: int, d: int) -> tuple[int, int, int, int]:
    """Undo quarter_round step by step, last step first."""
    b = rotr32(b, 7); b ^= c; c = sub32(c, d)
    d = rotr32(d, 8); d ^= a; a = sub32(a, b)
    b = rotr32(b, 12); b ^= c; c = sub32(c, d)
    d = rotr32(d, 16); d ^= a; a = sub32(a, b)
    return a, b, c, d

def quarter_round_on_state(x: list, i: int, j: int, k: int, l: int) -> None:
    x[i], x[j], x[k], x[l] = quarter_round(x[i], x[j], x[k], x[l])
