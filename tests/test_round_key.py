import dataclasses
import hashlib
import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from yuslab.cipher import round_key
from yuslab.cipher.field import generate_prime, mod
from yuslab.cipher.round_key import RoundKeyGenerator, add_round_key, round_input, shake128_xof
from yuslab.errors import InvalidInput, PrimitiveFailure

NONCE = bytes([0x01, 0x02, 0x03, 0x04])


def test_generate_round_constant():
    p = generate_prime(17)
    rk_gen = RoundKeyGenerator(NONCE, 5)
    rc = rk_gen.generate_round_constant(0, 0, p)
    assert len(rc) == 36
    assert all(0 < elem < p for elem in rc)


def test_round_constant_is_deterministic():
    p = generate_prime(17)
    a = RoundKeyGenerator(NONCE, 5).generate_round_constant(3, 7, p)
    b = RoundKeyGenerator(list(NONCE), 5).generate_round_constant(3, 7, p)
    assert a == b


def test_round_constant_depends_on_indices_and_nonce():
    p = 65537
    gen = RoundKeyGenerator(NONCE, 5)
    base = gen.generate_round_constant(1, 0, p)
    assert gen.generate_round_constant(0, 1, p) != base
    assert gen.generate_round_constant(2, 0, p) != base
    assert RoundKeyGenerator(b"\x09" * 4, 5).generate_round_constant(1, 0, p) != base


def test_round_input_layout():
    assert round_input(b"\xaa\xbb", 3, 1) == b"\xaa\xbb" + b"\x01\x00\x00\x00" + b"\x03\x00\x00\x00"
    assert round_input(b"", 0, 0x01020304) == b"\x04\x03\x02\x01" + b"\x00" * 4


@pytest.mark.parametrize("i,j", [(-1, 0), (0, 1 << 32)])
def test_round_input_rejects_wide_indices(i, j):
    with pytest.raises(InvalidInput):
        round_input(NONCE, i, j)


def test_round_constant_wire_format():
    p = generate_prime(40)
    raw = hashlib.shake_128(NONCE + (2).to_bytes(4, "little") + (4).to_bytes(4, "little")).digest(288)
    expected = [int.from_bytes(raw[8 * k:8 * k + 8], "big") % p or 1 for k in range(36)]
    assert RoundKeyGenerator(NONCE, 5).generate_round_constant(4, 2, p) == expected


def test_zero_chunks_are_forced_to_one(monkeypatch):
    monkeypatch.setattr(round_key, "shake128_xof", lambda data, n: bytes(n))
    rc = RoundKeyGenerator(NONCE, 5).generate_round_constant(0, 0, 65537)
    assert rc == [1] * 36


def test_hash_failure_is_primitive_failure(monkeypatch):
    def broken():
        raise ValueError("unsupported hash type")

    monkeypatch.setattr(round_key.hashlib, "shake_128", broken)
    with pytest.raises(PrimitiveFailure):
        RoundKeyGenerator(NONCE, 5).generate_round_constant(0, 0, 65537)


def test_xof_rejects_empty_output():
    with pytest.raises(InvalidInput):
        shake128_xof(b"abc", 0)
    assert len(shake128_xof(b"abc", 288)) == 288


@pytest.mark.parametrize("data", ["abc", 5, None])
def test_xof_rejects_non_bytes_input(data):
    with pytest.raises(InvalidInput):
        shake128_xof(data, 16)


@pytest.mark.parametrize("nonce", [8, "01020304"])
def test_generator_rejects_int_and_str_nonce(nonce):
    with pytest.raises(InvalidInput):
        RoundKeyGenerator(nonce, 5)


def test_generator_normalises_nonce_to_bytes():
    assert RoundKeyGenerator([1, 2, 3, 4], 5).nonce == NONCE
    assert RoundKeyGenerator(bytearray(NONCE), 5) == RoundKeyGenerator(NONCE, 5)


def test_generate_round_key():
    p = generate_prime(17)
    rk_gen = RoundKeyGenerator(NONCE, 5)
    master_key = [1] * 36
    rc = rk_gen.generate_round_constant(0, 0, p)
    rk = rk_gen.generate_round_key(master_key, rc, p)
    assert len(rk) == 36
    for i in range(36):
        assert rk[i] == mod(rc[i] * 1, p)


def test_generate_round_key_is_elementwise_product():
    p = generate_prime(61)
    mk = [(k * 7919 + 11) % p for k in range(36)]
    rc = [(k * 104729 + 3) % p for k in range(36)]
    rk = RoundKeyGenerator(NONCE, 5).generate_round_key(mk, rc, p)
    assert rk == [mod(mk[k] * rc[k], p) for k in range(36)]


def test_generate_round_key_rejects_wrong_lengths():
    gen = RoundKeyGenerator(NONCE, 5)
    with pytest.raises(InvalidInput):
        gen.generate_round_key([1] * 35, [1] * 36, 65537)
    with pytest.raises(InvalidInput):
        gen.generate_round_key([1] * 36, [1] * 37, 65537)


def test_add_round_key():
    p = generate_prime(17)
    output = add_round_key([1] * 36, [2] * 36, p)
    assert len(output) == 36
    assert all(elem == mod(3, p) for elem in output)


def test_add_round_key_wraps():
    p = 65537
    state = [p - 1 - k for k in range(36)]
    rk = [k + 5 for k in range(36)]
    assert add_round_key(state, rk, p) == [mod(state[k] + rk[k], p) for k in range(36)]
    assert add_round_key(state, rk, p) == [4] * 36


def test_add_round_key_rejects_wrong_lengths():
    with pytest.raises(InvalidInput):
        add_round_key([1] * 36, [1] * 3, 65537)


def test_schedule_covers_whitening_and_rounds():
    p = 65537
    mk = list(range(1, 37))
    gen = RoundKeyGenerator(NONCE, 6)
    keys = gen.schedule(mk, 2, p)
    assert len(keys) == 7
    for i, key in enumerate(keys):
        assert key == gen.generate_round_key(mk, gen.generate_round_constant(i, 2, p), p)


def test_generator_is_immutable():
    gen = RoundKeyGenerator(NONCE, 5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        gen.rounds = 6
