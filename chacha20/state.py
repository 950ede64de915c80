# chacha20/state.py
import logging
import numpy as np
from dataclasses import dataclass, field
from .params import (
    SIGMA, DTYPE, MASK64, KEY_SIZE, NONCE_SIZE, STATE_WORDS,
    ChaChaParams, InvalidKeyLength, InvalidNonceLength,
)
from .utils import ensure_bytes, words_from_bytes, split_counter, join_counter

logger = logging.getLogger(__name__)

# -----------------------------
# State Matrix
# -----------------------------
#   +------------+------------+------------+------------+
#   | const    0 | const    1 | const    2 | const    3 |
#   | key      4 | key      5 | key      6 | key      7 |
#   | key      8 | key      9 | key     10 | key     11 |
#   | counter 12 | counter 13 | nonce   14 | nonce   15 |
#   +------------+------------+------------+------------+
@dataclass
class ChaChaState:
    words: np.ndarray
    params: ChaChaParams = field(default_factory=ChaChaParams)
    exhausted: bool = False

    def __post_init__(self):
        assert self.words.shape == (STATE_WORDS,), f"Expected state shape {(STATE_WORDS,)}, got {self.words.shape}"
        self.words = self.words.astype(DTYPE)

    def __getitem__(self, index):
        return int(self.words[index])

    @property
    def counter(self) -> int:
        return join_counter(self.words[12], self.words[13])

    @property
    def key_words(self) -> np.ndarray:
        view = self.words[4:12]
        view.flags.writeable = False
        return view

    @property
    def nonce_words(self) -> np.ndarray:
        view = self.words[14:16]
        view.flags.writeable = False
        return view

    def seek(self, counter: int) -> None:
        """Position the state so the next block produced is block `counter`."""
        check_counter(counter)
        self.words[12], self.words[13] = split_counter(counter)
        self.exhausted = False

    def copy(self) -> "ChaChaState":
        return ChaChaState(self.words.copy(), ChaChaParams(self.params.rounds, self.params.counter_overflow), self.exhausted)

def check_counter(counter: int) -> None:
    if isinstance(counter, bool) or not isinstance(counter, int) or not 0 <= counter <= MASK64:
        raise ValueError(f"Counter must be an integer in [0, 2^64), got {counter!r}")

def initialize(key, nonce, params: ChaChaParams = None, counter: int = 0) -> ChaChaState:
    key = ensure_bytes(key, "key")
    nonce = ensure_bytes(nonce, "nonce")
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key))
    if len(nonce) != NONCE_SIZE:
        raise InvalidNonceLength(len(nonce))
    check_counter(counter)
    low, high = split_counter(counter)
    words = np.concatenate([
        np.array(SIGMA, dtype=DTYPE),
        words_from_bytes(key),
        np.array([low, high], dtype=DTYPE),
        words_from_bytes(nonce),
    ])
    params = params or ChaChaParams()
    logger.debug("initialized state: rounds=%d counter=%d", params.rounds, counter)
    return ChaChaState(words, params)
