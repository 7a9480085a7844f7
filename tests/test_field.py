import sys
from pathlib import Path

import numpy as np
import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from yuslab.cipher.field import (
    bytes_be_to_int,
    check_vector,
    generate_prime,
    int_to_bytes_be,
    int_to_bytes_be_fixed,
    is_p_2mod3,
    is_probable_prime,
    mod,
)
from yuslab.errors import InvalidInput, InvalidParameter


def test_mod_is_canonical():
    assert mod(-1, 65537) == 65536
    assert mod(65537 * 3 + 4, 65537) == 4
    assert mod(0, 5) == 0


def test_mod_rejects_non_positive_modulus():
    with pytest.raises(InvalidParameter):
        mod(3, 0)


def test_is_p_2mod3():
    assert is_p_2mod3(65537)
    assert is_p_2mod3(5)
    assert not is_p_2mod3(7)
    assert not is_p_2mod3(65539)


def test_byte_conversion():
    assert int_to_bytes_be(0x0102) == b"\x01\x02"
    assert int_to_bytes_be(0) == b""
    assert bytes_be_to_int(b"\x00\x01\x02") == 0x0102
    assert int_to_bytes_be_fixed(1, 4) == b"\x00\x00\x00\x01"
    assert bytes_be_to_int(int_to_bytes_be_fixed(2 ** 63 + 5, 8)) == 2 ** 63 + 5


def test_fixed_width_overflow():
    with pytest.raises(InvalidInput):
        int_to_bytes_be_fixed(1 << 32, 4)
    with pytest.raises(InvalidInput):
        int_to_bytes_be(-1)


@pytest.mark.parametrize("n,expected", [(2, True), (65537, True), (65543, True), (65535, False), (1, False), (561, False)])
def test_is_probable_prime(n, expected):
    assert is_probable_prime(n) is expected


@pytest.mark.parametrize("bits", [17, 24, 64, 128])
def test_generate_prime(bits):
    p = generate_prime(bits)
    assert p.bit_length() == bits
    assert p > 2 ** 16
    assert is_p_2mod3(p)
    assert is_probable_prime(p)


def test_generate_prime_rejects_small_sizes():
    with pytest.raises(InvalidParameter):
        generate_prime(16)


def test_check_vector():
    assert check_vector(range(36)) == list(range(36))
    with pytest.raises(InvalidInput):
        check_vector([1, 2], 3, "SBox input")


def test_check_vector_accepts_numpy_integers():
    assert check_vector(np.arange(3, dtype=np.int64), 3) == [0, 1, 2]


@pytest.mark.parametrize("bad", [[1.9, 2, 3], [1, "2", 3], [1, 2, None]])
def test_check_vector_rejects_non_integers(bad):
    with pytest.raises(InvalidInput):
        check_vector(bad, 3, "Master key")
