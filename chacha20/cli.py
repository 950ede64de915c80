import os
import sys
import logging
import secrets
import argparse
from typing import Optional
from .params import ChaChaParams, BLOCK_SIZE, bcolors
from .state import initialize
from .block import next_block
from .batch import keystream_blocks
from .reference import matches_reference
from .serialization import load_vectors
from .benchmark import run_benchmarks
from .utils import parse_hex, to_hex

# -----------------------------
# Commands
# -----------------------------
def run_vectors(path: Optional[str] = None) -> bool:
    all_passed = True
    for v in load_vectors(path):
        state = initialize(v.key, v.nonce, counter=v.counter)
        got = [next_block(state) for _ in v.blocks]
        ok = got == v.blocks
        all_passed &= ok
        status = f"{bcolors.OKGREEN}PASS{bcolors.ENDC}" if ok else f"{bcolors.FAIL}FAIL{bcolors.ENDC}"
        print(f"{bcolors.BOLD}{v.name}{bcolors.ENDC} [{status}]")
        print(f"key        : {to_hex(v.key)}")
        print(f"nonce      : {to_hex(v.nonce)}")
        for i, g in enumerate(got):
            label = "key-stream : " if i == 0 else "             "
            print(f"{label}{to_hex(g)}")
        for i, e in enumerate(v.blocks):
            label = "Waiting val: " if i == 0 else "             "
            print(f"{bcolors.GREY}{label}{to_hex(e)}{bcolors.ENDC}")
        print("")
    return all_passed

def print_keystream(key: bytes, nonce: bytes, blocks: int, counter: int, params: ChaChaParams, batch: bool = True):
    state = initialize(key, nonce, params, counter=counter)
    if batch:
        data = keystream_blocks(state, blocks)
        out = [data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]
    else:
        out = [next_block(state) for _ in range(blocks)]
    for block in out:
        print(to_hex(block))

def run_verify(trials: int = 8, blocks: int = 4) -> bool:
    all_passed = True
    for t in range(trials):
        key = secrets.token_bytes(32)
        nonce = secrets.token_bytes(8)
        counter = secrets.randbelow(2 ** 31)
        ok = matches_reference(key, nonce, blocks, counter)
        all_passed &= ok
        color = bcolors.OKGREEN if ok else bcolors.FAIL
        print(f"{color}trial {t + 1}: counter={counter} {'match' if ok else 'MISMATCH'}{bcolors.ENDC}")
    return all_passed

# -----------------------------
# CLI Main with Interactive Menu
# -----------------------------
def menu_vectors():
    path = input("Vector file (blank = bundled vectors.json): ").strip() or None
    run_vectors(path)

def menu_keystream():
    key = parse_hex(input("Key (64 hex chars): ").strip())
    nonce = parse_hex(input("Nonce (16 hex chars): ").strip())
    blocks = int(input("Number of blocks (default 1): ").strip() or 1)
    counter = int(input("Starting block counter (default 0): ").strip() or 0)
    rounds = int(input("Rounds (default 20): ").strip() or 20)
    print_keystream(key, nonce, blocks, counter, ChaChaParams(rounds=rounds))

def menu_verify():
    trials = int(input("Number of random trials (default 8): ").strip() or 8)
    blocks = int(input("Blocks per trial (default 4): ").strip() or 4)
    run_verify(trials, blocks)

def menu_benchmark():
    blocks = int(input("Blocks per run (default 256): ").strip() or 256)
    repeat = int(input("Repeats (default 3): ").strip() or 3)
    run_benchmarks(blocks, repeat)

def interactive():
    _=os.system("cls") | os.system("clear")
    while True:
        print(f"{bcolors.OKCYAN}ChaCha20 CLI: keystream blocks from a 256-bit key and 64-bit nonce{bcolors.ENDC}")
        print("")
        print(f"{bcolors.BOLD}1){bcolors.ENDC} Check bundled test vectors")
        print(f"{bcolors.BOLD}2){bcolors.ENDC} Print keystream blocks for a key/nonce")
        print(f"{bcolors.BOLD}3){bcolors.ENDC} Cross-check against OpenSSL")
        print(f"{bcolors.GREY}4) Benchmark backends{bcolors.ENDC}")
        print(f"{bcolors.BOLD}0){bcolors.ENDC} Exit")
        choice = input(f"{bcolors.BOLD}Choice: {bcolors.ENDC}").strip()

        try:
            match choice:
                case "0":
                    break
                case "1":
                    menu_vectors()
                case "2":
                    menu_keystream()
                case "3":
                    menu_verify()
                case "4":
                    menu_benchmark()
                case _:
                    print("Invalid choice")
        except Exception as e:
            print(f"{bcolors.FAIL}ERROR:{bcolors.ENDC}", e)
        _=input(f"{bcolors.OKGREEN}Any Key to Continue{bcolors.ENDC}")
        _=os.system("cls") | os.system("clear")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ChaCha20 keystream generator")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    vectors_parser = subparsers.add_parser("vectors", help="Check keystream against test vectors")
    vectors_parser.add_argument("--file", help="Vector file (JSON)")

    keystream_parser = subparsers.add_parser("keystream", help="Print keystream blocks in hex")
    keystream_parser.add_argument("--key", required=True, help="32-byte key (hex)")
    keystream_parser.add_argument("--nonce", required=True, help="8-byte nonce (hex)")
    keystream_parser.add_argument("--blocks", type=int, default=1, help="Number of blocks")
    keystream_parser.add_argument("--counter", type=int, default=0, help="Starting block counter")
    keystream_parser.add_argument("--rounds", type=int, default=20, help="Number of rounds")
    keystream_parser.add_argument("--no-batch", action="store_true", help="Generate one block at a time")

    verify_parser = subparsers.add_parser("verify", help="Cross-check random keys against OpenSSL")
    verify_parser.add_argument("--trials", type=int, default=8, help="Number of random trials")
    verify_parser.add_argument("--blocks", type=int, default=4, help="Blocks per trial")

    benchmark_parser = subparsers.add_parser("benchmark", help="Time the available backends")
    benchmark_parser.add_argument("--blocks", type=int, default=256, help="Blocks per run")
    benchmark_parser.add_argument("--repeat", type=int, default=3, help="Repeats")
    return parser

def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        match args.command:
            case "vectors":
                return 0 if run_vectors(args.file) else 1
            case "keystream":
                params = ChaChaParams(rounds=args.rounds)
                print_keystream(parse_hex(args.key), parse_hex(args.nonce), args.blocks, args.counter, params, batch=not args.no_batch)
            case "verify":
                return 0 if run_verify(args.trials, args.blocks) else 1
            case "benchmark":
                run_benchmarks(args.blocks, args.repeat)
            case _:
                interactive()
    except Exception as e:
        print(f"{bcolors.FAIL}ERROR:{bcolors.ENDC}", e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
