"""SHAKE128-driven round-key schedule.

Round constant for round i of block j:

    SHAKE128(nonce || u32le(j) || u32le(i), 288 bytes)
      -> 36 big-endian 8-byte chunks -> mod p -> zeros forced to 1

The round key is the elementwise product of the master key and the round
constant. Everything here is a pure function of its arguments.
"""
from __future__ import annotations

import hashlib
import numbers
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from ..errors import InvalidInput, PrimitiveFailure
from .field import STATE_SIZE, bytes_be_to_int, check_vector

CHUNK_BYTES = 8
RC_BYTES = STATE_SIZE * CHUNK_BYTES
INDEX_BYTES = 4


def to_nonce_bytes(nonce: Union[bytes, Iterable[int]]) -> bytes:
    """Normalise a nonce to ``bytes``; ints and strings are refused rather than coerced."""
    if isinstance(nonce, (numbers.Integral, str)):
        raise InvalidInput(f"Nonce must be bytes or an iterable of ints in 0..255, got {type(nonce).__name__}")
    try:
        return bytes(nonce)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Nonce must be bytes or integers in 0..255: {exc}") from exc


def shake128_xof(data: bytes, output_len: int) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInput(f"XOF input must be bytes-like, got {type(data).__name__}")
    if output_len <= 0:
        raise InvalidInput(f"XOF output length must be positive, got {output_len}")
    try:
        xof = hashlib.shake_128()
        xof.update(data)
        return xof.digest(output_len)
    except (ValueError, TypeError, AttributeError) as exc:
        raise PrimitiveFailure(f"SHAKE128 operation failed: {exc}") from exc


def round_input(nonce: bytes, i: int, j: int) -> bytes:
    """Hash input for round ``i`` of block ``j``."""
    for name, v in (("round", i), ("block", j)):
        if not 0 <= v < 1 << (8 * INDEX_BYTES):
            raise InvalidInput(f"{name} index {v} does not fit in {INDEX_BYTES} bytes")
    return bytes(nonce) + j.to_bytes(INDEX_BYTES, "little") + i.to_bytes(INDEX_BYTES, "little")


@dataclass(frozen=True)
class RoundKeyGenerator:
    nonce: bytes
    rounds: int

    def __post_init__(self):
        object.__setattr__(self, "nonce", to_nonce_bytes(self.nonce))

    def generate_round_constant(self, i: int, j: int, p: int) -> List[int]:
        raw = shake128_xof(round_input(self.nonce, i, j), RC_BYTES)
        rc = []
        for k in range(STATE_SIZE):
            v = bytes_be_to_int(raw[k * CHUNK_BYTES:(k + 1) * CHUNK_BYTES]) % p
            rc.append(v or 1)
        return rc

    def generate_round_key(self, master_key: Sequence[int], round_constant: Sequence[int], p: int) -> List[int]:
        mk = check_vector(master_key, STATE_SIZE, "Master key")
        rc = check_vector(round_constant, STATE_SIZE, "Round constant")
        return [(a * b) % p for a, b in zip(mk, rc)]

    def schedule(self, master_key: Sequence[int], j: int, p: int) -> List[List[int]]:
        """Round keys for rounds 0 (whitening) through ``rounds`` of block ``j``."""
        return [
            self.generate_round_key(master_key, self.generate_round_constant(i, j, p), p)
            for i in range(self.rounds + 1)
        ]


def add_round_key(state: Sequence[int], round_key: Sequence[int], p: int) -> List[int]:
    st = check_vector(state, STATE_SIZE, "State")
    rk = check_vector(round_key, STATE_SIZE, "Round key")
    return [(a + b) % p for a, b in zip(st, rk)]
