import time
import secrets
from .params import BLOCK_SIZE, bcolors
from .state import initialize
from .block import next_block
from .batch import keystream_blocks
from .reference import openssl_keystream

def _time(fn, repeat: int) -> float:
    total = 0.0
    for _ in range(repeat):
        start = time.perf_counter()
        fn()
        total += time.perf_counter() - start
    return total / repeat

def benchmark_backends(blocks: int = 256, repeat: int = 3) -> dict:
    key = secrets.token_bytes(32)
    nonce = secrets.token_bytes(8)
    length = blocks * BLOCK_SIZE

    def pure():
        state = initialize(key, nonce)
        for _ in range(blocks):
            next_block(state)

    def batch():
        keystream_blocks(initialize(key, nonce), blocks)

    def openssl():
        openssl_keystream(key, nonce, length)

    results = {
        "pure": _time(pure, repeat),
        "batch": _time(batch, repeat),
        "openssl": _time(openssl, repeat),
    }
    return results

def run_benchmarks(blocks: int = 256, repeat: int = 3):
    print(f"{bcolors.OKBLUE}Benchmarking {blocks} blocks ({blocks * BLOCK_SIZE} bytes), {repeat} repeats{bcolors.ENDC}")
    results = benchmark_backends(blocks, repeat)
    for name, seconds in results.items():
        rate = (blocks * BLOCK_SIZE) / seconds / 1e6 if seconds else float("inf")
        print(f"{name:>8}: {seconds:.6f}s  ({rate:.2f} MB/s)")
    print("-" * 60)
    return results

if __name__ == "__main__":
    run_benchmarks()
