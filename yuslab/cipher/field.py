"""Prime-field helpers shared by every YuS component.

Elements are plain Python ints; reduction always yields the canonical
representative in [0, p-1].
"""
from __future__ import annotations

import operator
import secrets
from typing import Iterable, List

from ..errors import InvalidInput, InvalidParameter

STATE_SIZE = 36
MIN_PRIME = 1 << 16


def mod(a: int, p: int) -> int:
    if p <= 0:
        raise InvalidParameter(f"modulus must be positive, got {p}")
    return a % p


def is_p_2mod3(p: int) -> bool:
    return p % 3 == 2


def check_vector(values: Iterable[int], length: int = STATE_SIZE, what: str = "state") -> List[int]:
    """Materialise ``values`` as a list of ints and enforce its length."""
    try:
        out = [operator.index(v) for v in values]
    except TypeError as exc:
        raise InvalidInput(f"{what} elements must be integers: {exc}") from exc
    if len(out) != length:
        raise InvalidInput(f"{what} must be {length} elements, got {len(out)}")
    return out


def int_to_bytes_be(n: int) -> bytes:
    if n < 0:
        raise InvalidInput("cannot encode a negative integer")
    return n.to_bytes((n.bit_length() + 7) // 8, "big")


def bytes_be_to_int(b: bytes) -> int:
    return int.from_bytes(b, "big")


def int_to_bytes_be_fixed(n: int, k: int) -> bytes:
    """Big-endian, left-padded with zeros to exactly k bytes."""
    b = int_to_bytes_be(n)
    if len(b) > k:
        raise InvalidInput(f"integer needs {len(b)} bytes, only {k} available")
    return b.rjust(k, b"\x00")


def is_probable_prime(n: int, trials: int = 16) -> bool:
    if n < 2:
        return False
    for small in (2, 3, 5, 7, 11, 13):
        if n == small:
            return True
        if n % small == 0:
            return False
    s, d = 0, n - 1
    while d % 2 == 0:
        s += 1
        d //= 2
    for _ in range(trials):
        a = secrets.randbelow(n - 3) + 2
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = (x * x) % n
            if x == n - 1:
                break
        else:
            return False
    return True


def generate_prime(bits: int) -> int:
    """Random ``bits``-bit prime with p = 2 mod 3 and p > 2^16."""
    if bits < 17:
        raise InvalidParameter(f"need at least 17 bits for p > 2^16, got {bits}")
    while True:
        p = secrets.randbits(bits)
        p |= (1 << (bits - 1)) | 1
        if p <= MIN_PRIME or not is_p_2mod3(p):
            continue
        if is_probable_prime(p):
            return p
