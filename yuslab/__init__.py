"""YuS: an FHE-friendly stream cipher over F_p (p = 2 mod 3).

Research / education only. Do NOT use in production.
"""

from .errors import YuSError, InvalidParameter, InvalidInput, NotInitialized, PrimitiveFailure
from .cipher import (
    SecurityLevel,
    SBox,
    LinearLayer,
    RoundKeyGenerator,
    YuSCipher,
    add_round_key,
    apply_sbox_layer,
    generate_prime,
    mod,
)

__version__ = "0.1.0"

__all__ = [
    "YuSError",
    "InvalidParameter",
    "InvalidInput",
    "NotInitialized",
    "PrimitiveFailure",
    "SecurityLevel",
    "SBox",
    "LinearLayer",
    "RoundKeyGenerator",
    "YuSCipher",
    "add_round_key",
    "apply_sbox_layer",
    "generate_prime",
    "mod",
]
