"""Quadratic S-box over F_p^3 and the 12-wide substitution layer.

    S(x0, x1, x2) = (x0, x0*x2 + x1, -x0*x1 + x0*x2 + x2)

For a fixed x0 = a the map (x1, x2) -> (y1, y2) is affine with determinant
a^2 + a + 1, so S is a permutation exactly when that polynomial has no
root in F_p, i.e. when -3 is a non-square mod p (p = 2 mod 3).
"""
from __future__ import annotations

import logging
import numbers
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from ..errors import InvalidInput, InvalidParameter
from .field import STATE_SIZE, check_vector, is_p_2mod3

logger = logging.getLogger(__name__)

SBOX_WIDTH = 3
SBOX_COUNT = STATE_SIZE // SBOX_WIDTH
DEFAULT_EXHAUSTIVE_LIMIT = 101


class SBox:
    def __init__(self, p: int):
        if not is_p_2mod3(p):
            raise InvalidParameter("Prime p must satisfy p = 2 mod 3")
        self._p = p

    @property
    def p(self) -> int:
        return self._p

    def apply(self, *inputs) -> Tuple[int, int, int]:
        """Substitute one triple. Accepts ``apply(x0, x1, x2)`` or ``apply((x0, x1, x2))``."""
        if len(inputs) == 1 and not isinstance(inputs[0], numbers.Integral):
            try:
                inputs = tuple(inputs[0])
            except TypeError as exc:
                raise InvalidInput(f"SBox input must be 3 elements (F_p^3): {exc}") from exc
        if len(inputs) != SBOX_WIDTH:
            raise InvalidInput(f"SBox input must be 3 elements (F_p^3), got {len(inputs)}")
        x0, x1, x2 = inputs
        p = self._p
        return (
            x0 % p,
            (x0 * x2 + x1) % p,
            (-x0 * x1 + x0 * x2 + x2) % p,
        )

    def is_permutation(self, exhaustive_limit: int = DEFAULT_EXHAUSTIVE_LIMIT) -> bool:
        p = self._p
        if p > exhaustive_limit:
            # Euler criterion on -3: a^2 + a + 1 has a root iff -3 is a square.
            logger.debug("S-box bijectivity for p=%d via quadratic-character shortcut (not enumerated)", p)
            return pow(-3 % p, (p - 1) // 2, p) == p - 1

        outputs = set()
        for x0 in range(p):
            for x1 in range(p):
                for x2 in range(p):
                    out = self.apply(x0, x1, x2)
                    if out in outputs:
                        return False
                    outputs.add(out)
        return len(outputs) == p ** 3

    def differential_uniformity(self) -> int:
        return self._p * self._p


@lru_cache(maxsize=32)
def get_sbox(p: int) -> SBox:
    """Shared immutable S-box per prime."""
    return SBox(p)


def apply_sbox_layer(state: Sequence[int], p: int, sbox: Optional[SBox] = None) -> List[int]:
    state = check_vector(state, STATE_SIZE, "SBox layer input")
    if sbox is None:
        sbox = get_sbox(p)
    elif sbox.p != p:
        raise InvalidParameter(f"S-box built for p={sbox.p}, layer called with p={p}")

    out: List[int] = [0] * STATE_SIZE
    for i in range(SBOX_COUNT):
        start = i * SBOX_WIDTH
        out[start:start + SBOX_WIDTH] = sbox.apply(state[start], state[start + 1], state[start + 2])
    return out
