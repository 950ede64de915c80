# chacha20/keystream.py
from typing import Iterator, Optional
from .params import BLOCK_SIZE, ChaChaParams
from .state import initialize
from .block import next_block
from .batch import keystream_blocks

class KeystreamGenerator:
    """Byte-level view of the keystream for one (key, nonce) pair.

    Blocks are generated lazily; a partially consumed block is kept so that
    consecutive read() calls return contiguous keystream.
    """

    def __init__(self, key: bytes, nonce: bytes, counter: int = 0, params: Optional[ChaChaParams] = None):
        self.state = initialize(key, nonce, params, counter=counter)
        self._buffer = b""
        self._consumed = 0

    @property
    def position(self) -> int:
        return self._consumed

    def blocks(self) -> Iterator[bytes]:
        """Whole blocks from the next block boundary; the rest of a partially read block is skipped."""
        if self._buffer:
            self._consumed += len(self._buffer)
            self._buffer = b""
        while True:
            block = next_block(self.state)
            self._consumed += BLOCK_SIZE
            yield block

    def read(self, n: int) -> bytes:
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {n}")
        out = self._buffer[:n]
        rest_of_buffer = self._buffer[n:]
        missing = n - len(out)
        if missing:
            whole, rest = divmod(missing, BLOCK_SIZE)
            # buffer stays intact if generation raises
            chunk = keystream_blocks(self.state, whole + (1 if rest else 0))
            out += chunk[:missing]
            rest_of_buffer = chunk[missing:]
        self._buffer = rest_of_buffer
        self._consumed += n
        return out

    def __iter__(self) -> Iterator[int]:
        while True:
            for byte in self.read(BLOCK_SIZE):
                yield byte

def keystream(key: bytes, nonce: bytes, length: int, counter: int = 0, params: Optional[ChaChaParams] = None, batch: bool = True) -> bytes:
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    state = initialize(key, nonce, params, counter=counter)
    count = -(-length // BLOCK_SIZE)
    if batch:
        out = keystream_blocks(state, count)
    else:
        out = b"".join(next_block(state) for _ in range(count))
    return out[:length]
