import secrets
import pytest
from chacha20 import (
    InvalidKeyLength, InvalidNonceLength, openssl_keystream, matches_reference,
    keystream, load_vectors,
)

def test_openssl_reproduces_bundled_vectors():
    for v in load_vectors():
        expected = b"".join(v.blocks)
        assert openssl_keystream(v.key, v.nonce, len(expected), v.counter) == expected, v.name

def test_random_keys_match_openssl():
    for _ in range(10):
        key = secrets.token_bytes(32)
        nonce = secrets.token_bytes(8)
        counter = secrets.randbelow(1000)
        assert matches_reference(key, nonce, blocks=3, counter=counter)

def test_partial_block_lengths_match_openssl():
    key, nonce = secrets.token_bytes(32), secrets.token_bytes(8)
    for length in (1, 63, 65, 200):
        assert keystream(key, nonce, length) == openssl_keystream(key, nonce, length)

def test_openssl_validates_lengths():
    with pytest.raises(InvalidKeyLength):
        openssl_keystream(bytes(16), bytes(8), 64)
    with pytest.raises(InvalidNonceLength):
        openssl_keystream(bytes(32), bytes(12), 64)

def test_openssl_across_low_word_carry():
    key, nonce = secrets.token_bytes(32), secrets.token_bytes(8)
    start = 2 ** 32 - 1
    expected = keystream(key, nonce, 192, counter=start)
    assert openssl_keystream(key, nonce, 192, counter=start) == expected
    assert openssl_keystream(key, nonce, 100, counter=start) == expected[:100]
    assert matches_reference(key, nonce, blocks=3, counter=start)
    assert matches_reference(key, nonce, blocks=2, counter=2 ** 33 - 1)

def test_openssl_across_full_counter_wrap():
    key, nonce = secrets.token_bytes(32), secrets.token_bytes(8)
    assert matches_reference(key, nonce, blocks=2, counter=2 ** 64 - 1)

def test_openssl_rejects_non_bytes():
    with pytest.raises(TypeError):
        openssl_keystream("0" * 32, bytes(8), 64)
    with pytest.raises(TypeError):
        openssl_keystream(bytes(32), "01234567", 64)
    assert openssl_keystream(bytearray(32), memoryview(bytes(8)), 64) == keystream(bytes(32), bytes(8), 64)
