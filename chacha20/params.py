from dataclasses import dataclass
import numpy as np

# -----------------------------
# CLI Colors
# -----------------------------
class bcolors:
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    GREY = '\033[90m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'

# "expand 32-byte k", little endian
SIGMA = (0x61707865, 0x3320646e, 0x79622d32, 0x6b206574)

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF
DTYPE = np.uint32

KEY_SIZE = 32
NONCE_SIZE = 8
BLOCK_SIZE = 64
STATE_WORDS = 16

COUNTER_POLICIES = ("wrap", "raise")

# -----------------------------
# Errors
# -----------------------------
class InvalidKeyLength(ValueError):
    def __init__(self, length: int):
        super().__init__(f"Key must be {KEY_SIZE} bytes, got {length}")
        self.length = length

class InvalidNonceLength(ValueError):
    def __init__(self, length: int):
        super().__init__(f"Nonce must be {NONCE_SIZE} bytes, got {length}")
        self.length = length

class CounterExhausted(RuntimeError):
    pass

@dataclass
class ChaChaParams:
    rounds: int = 20
    counter_overflow: str = "wrap"  # "wrap" restarts at block 0, "raise" stops

    def __post_init__(self):
        if not isinstance(self.rounds, int) or self.rounds <= 0 or self.rounds % 2:
            raise ValueError(f"rounds must be a positive even integer, got {self.rounds!r}")
        if self.counter_overflow not in COUNTER_POLICIES:
            raise ValueError(f"counter_overflow must be one of {COUNTER_POLICIES}, got {self.counter_overflow!r}")
