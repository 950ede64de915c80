# chacha20/batch.py
import logging
import numpy as np
from .params import DTYPE, MASK32, MASK64, BLOCK_SIZE, CounterExhausted, ChaChaParams
from .block import COLUMNS, DIAGONALS
from .state import ChaChaState, initialize, check_counter

logger = logging.getLogger(__name__)

# -----------------------------
# Vectorized rounds over (16, n) word matrices
# -----------------------------
def _rotl(v: np.ndarray, r: int) -> np.ndarray:
    return (v << DTYPE(r)) | (v >> DTYPE(32 - r))

def _quarter_round_rows(x: np.ndarray, a: int, b: int, c: int, d: int) -> None:
    x[a] += x[b]; x[d] ^= x[a]; x[d] = _rotl(x[d], 16)
    x[c] += x[d]; x[b] ^= x[c]; x[b] = _rotl(x[b], 12)
    x[a] += x[b]; x[d] ^= x[a]; x[d] = _rotl(x[d], 8)
    x[c] += x[d]; x[b] ^= x[c]; x[b] = _rotl(x[b], 7)

def _counter_rows(start: int, count: int) -> tuple[np.ndarray, np.ndarray]:
    counters = np.array([(start + i) & MASK64 for i in range(count)], dtype=np.uint64)
    low = (counters & np.uint64(MASK32)).astype(DTYPE)
    high = (counters >> np.uint64(32)).astype(DTYPE)
    return low, high

def _blocks_from(words: np.ndarray, start: int, count: int, rounds: int) -> bytes:
    init = np.repeat(words.reshape(16, 1), count, axis=1).astype(DTYPE)
    init[12], init[13] = _counter_rows(start, count)
    x = init.copy()
    for _ in range(rounds // 2):
        for idx in COLUMNS:
            _quarter_round_rows(x, *idx)
        for idx in DIAGONALS:
            _quarter_round_rows(x, *idx)
    x += init
    # one row per block, words in index order
    return x.T.astype('<u4').tobytes()

def keystream_blocks(state: ChaChaState, count: int) -> bytes:
    """Same bytes as `count` successive next_block calls, computed in lock-step."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if count == 0:
        return b""
    start = state.counter
    crosses = start + count > MASK64 + 1
    if state.params.counter_overflow == "raise" and (state.exhausted or crosses):
        raise CounterExhausted(f"Cannot produce {count} blocks from counter {start}: block counter would pass 2^64 - 1")
    out = _blocks_from(state.words, start, count, state.params.rounds)
    end = start + count
    if end > MASK64:
        logger.debug("block counter wrapped past 2^64 - 1")
        state.exhausted = True
    end &= MASK64
    state.words[12] = end & MASK32
    state.words[13] = end >> 32
    logger.debug("generated %d blocks from counter %d", count, start)
    return out

def block_at(key, nonce, index: int, params: ChaChaParams = None) -> bytes:
    check_counter(index)
    state = initialize(key, nonce, params, counter=index)
    out = _blocks_from(state.words, index, 1, state.params.rounds)
    assert len(out) == BLOCK_SIZE
    return out
