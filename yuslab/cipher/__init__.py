"""YuS cipher components: field helpers, S-box, linear layer, key schedule, orchestrator."""

from .field import (
    STATE_SIZE,
    mod,
    is_p_2mod3,
    check_vector,
    int_to_bytes_be,
    int_to_bytes_be_fixed,
    bytes_be_to_int,
    is_probable_prime,
    generate_prime,
)
from .params import SecurityLevel, CipherParams
from .sbox import SBox, get_sbox, apply_sbox_layer
from .linear import LinearLayer, TableEntry, MATRIX_ROWS
from .round_key import RoundKeyGenerator, add_round_key, round_input, shake128_xof, to_nonce_bytes
from .core import YuSCipher

__all__ = [
    "STATE_SIZE",
    "mod",
    "is_p_2mod3",
    "check_vector",
    "int_to_bytes_be",
    "int_to_bytes_be_fixed",
    "bytes_be_to_int",
    "is_probable_prime",
    "generate_prime",
    "SecurityLevel",
    "CipherParams",
    "SBox",
    "get_sbox",
    "apply_sbox_layer",
    "LinearLayer",
    "TableEntry",
    "MATRIX_ROWS",
    "RoundKeyGenerator",
    "add_round_key",
    "round_input",
    "shake128_xof",
    "to_nonce_bytes",
    "YuSCipher",
]
