# chacha20/__init__.py
from .params import (
    SIGMA, DTYPE, KEY_SIZE, NONCE_SIZE, BLOCK_SIZE, ChaChaParams,
    InvalidKeyLength, InvalidNonceLength, CounterExhausted,
)
from .utils import add32, rotl32, rotr32, words_from_bytes, words_to_bytes, parse_hex, to_hex
from .quarter_round import quarter_round, inverse_quarter_round, quarter_round_on_state
from .state import ChaChaState, initialize
from .block import double_round, permute, chacha20_block, next_block
from .batch import keystream_blocks, block_at
from .keystream import KeystreamGenerator, keystream
from .reference import openssl_keystream, matches_reference
from .serialization import (
    state_to_dict, state_from_dict, write_state_json, read_state_json,
    KeystreamVector, load_vectors,
)
