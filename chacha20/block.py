# chacha20/block.py
import logging
from .params import MASK32, STATE_WORDS, CounterExhausted
from .quarter_round import quarter_round_on_state
from .state import ChaChaState
from .utils import words_to_bytes

logger = logging.getLogger(__name__)

COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))

# -----------------------------
# Permutation
# -----------------------------
def double_round(x: list) -> None:
    for idx in COLUMNS:
        quarter_round_on_state(x, *idx)
    for idx in DIAGONALS:
        quarter_round_on_state(x, *idx)

def permute(words, rounds: int = 20) -> list[int]:
    x = [int(w) for w in words]
    assert len(x) == STATE_WORDS, f"Expected {STATE_WORDS} words, got {len(x)}"
    for _ in range(rounds // 2):
        double_round(x)
    return x

def chacha20_block(words, rounds: int = 20) -> bytes:
    """Keystream block for the given 16 input words. Does not touch any counter."""
    x = permute(words, rounds)
    out = [(xi + int(wi)) & MASK32 for xi, wi in zip(x, words)]
    return words_to_bytes(out)

# -----------------------------
# Counter
# -----------------------------
def advance_counter(state: ChaChaState) -> None:
    low = (int(state.words[12]) + 1) & MASK32
    state.words[12] = low
    if low == 0:
        high = (int(state.words[13]) + 1) & MASK32
        state.words[13] = high
        if high == 0:
            logger.debug("block counter wrapped past 2^64 - 1")
            state.exhausted = True

def check_exhausted(state: ChaChaState) -> None:
    if state.exhausted and state.params.counter_overflow == "raise":
        raise CounterExhausted("Block counter exhausted: 2^64 blocks already produced for this key/nonce")

def next_block(state: ChaChaState) -> bytes:
    check_exhausted(state)
    block = chacha20_block(state.words, state.params.rounds)
    advance_counter(state)
    return block
