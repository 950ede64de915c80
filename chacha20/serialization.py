import os
import json
import numpy as np
from dataclasses import dataclass
from typing import Optional
from .params import SIGMA, DTYPE, MASK32, STATE_WORDS, ChaChaParams
from .state import ChaChaState
from .utils import parse_hex

VECTORS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "vectors.json")

# -----------------------------
# State Snapshots
# -----------------------------
def state_to_dict(state: ChaChaState) -> dict:
    return {
        "words": [int(w) for w in state.words.tolist()],
        "rounds": state.params.rounds,
        "counter_overflow": state.params.counter_overflow,
        "exhausted": state.exhausted,
    }

def state_from_dict(payload: dict) -> ChaChaState:
    words = payload.get("words")
    if not isinstance(words, list) or len(words) != STATE_WORDS:
        raise ValueError(f"State must hold exactly {STATE_WORDS} words")
    if not all(isinstance(w, int) and 0 <= w <= MASK32 for w in words):
        raise ValueError("State words must be integers in [0, 2^32)")
    if tuple(words[:4]) != SIGMA:
        raise ValueError("State constants do not match 'expand 32-byte k'")
    params = ChaChaParams(
        rounds=payload.get("rounds", 20),
        counter_overflow=payload.get("counter_overflow", "wrap"),
    )
    return ChaChaState(np.array(words, dtype=DTYPE), params, bool(payload.get("exhausted", False)))

def write_state_json(path: str, state: ChaChaState):
    with open(path, "w") as f:
        json.dump(state_to_dict(state), f)

def read_state_json(path: str) -> ChaChaState:
    with open(path, "r") as f:
        payload = json.load(f)
    return state_from_dict(payload)

# -----------------------------
# Test Vectors
# -----------------------------
@dataclass
class KeystreamVector:
    name: str
    key: bytes
    nonce: bytes
    blocks: list[bytes]
    counter: int = 0

def load_vectors(path: Optional[str] = None) -> list[KeystreamVector]:
    with open(path or VECTORS_PATH, "r") as f:
        payload = json.load(f)
    return [
        KeystreamVector(
            name=v["name"],
            key=parse_hex(v["key"]),
            nonce=parse_hex(v["nonce"]),
            blocks=[parse_hex(b) for b in v["blocks"]],
            counter=v.get("counter", 0),
        )
        for v in payload["vectors"]
    ]
