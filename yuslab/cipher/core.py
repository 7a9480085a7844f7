from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..errors import InvalidInput, InvalidParameter, NotInitialized
from .field import STATE_SIZE, check_vector, generate_prime
from .linear import LinearLayer
from .round_key import RoundKeyGenerator, add_round_key, to_nonce_bytes
from .sbox import SBox, apply_sbox_layer
from .params import CipherParams, SecurityLevel

logger = logging.getLogger(__name__)


class YuSCipher:
    """YuS keystream generator over F_p^36.

    Per block j the counter vector (1+j, ..., 36+j) is whitened with the
    round-0 key, run through ``rounds`` applications of
    AddKey o Linear o SBoxLayer, diffused once more and truncated.
    """

    def __init__(
        self,
        p: int,
        level: Union[SecurityLevel, str, int] = SecurityLevel.SEC80,
        trunc_m: int = 12,
        *,
        workers: int = 1,
    ):
        try:
            self._params = CipherParams(p=p, level=level, trunc_m=trunc_m, workers=workers)
        except ValidationError as exc:
            raise InvalidParameter(str(exc)) from exc

        self._sbox = SBox(self.p)
        self._linear = LinearLayer()
        self._master_key: Optional[Tuple[int, ...]] = None
        self._rk_gen = RoundKeyGenerator(b"", self._params.rounds)
        logger.info(
            "YuS cipher built: p=%d (%d bits), level=%s, rounds=%d, trunc_m=%d",
            self.p, self.p.bit_length(), self.level.name, self.rounds, self.trunc_m,
        )

    @classmethod
    def from_settings(cls, p: Optional[int] = None, settings=None) -> "YuSCipher":
        """Build from ``Settings``; without ``p`` a fresh ``prime_bits``-bit prime is drawn."""
        from ..config import load_settings

        s = settings or load_settings()
        if p is None:
            p = generate_prime(s.prime_bits)
        return cls(p, s.security_level, s.truncation, workers=s.workers)

    # -- properties ---------------------------------------------------------

    @property
    def p(self) -> int:
        return self._params.p

    @property
    def level(self) -> SecurityLevel:
        return self._params.level

    @property
    def rounds(self) -> int:
        return self._params.rounds

    @property
    def trunc_m(self) -> int:
        return self._params.trunc_m

    @property
    def block_width(self) -> int:
        return self._params.block_width

    @property
    def initialized(self) -> bool:
        return self._master_key is not None

    # -- keying -------------------------------------------------------------

    def init(self, master_key: Sequence[int], nonce: Union[bytes, Iterable[int]]) -> None:
        mk = check_vector(master_key, STATE_SIZE, "Master key")
        nonce_b = to_nonce_bytes(nonce)
        self._master_key = tuple(v % self.p for v in mk)
        self._rk_gen = RoundKeyGenerator(nonce_b, self.rounds)
        logger.info("YuS cipher keyed (nonce %d bytes)", len(nonce_b))

    def _require_key(self) -> Tuple[int, ...]:
        if self._master_key is None:
            raise NotInitialized("YuSCipher not initialized with master key")
        return self._master_key

    # -- round pieces -------------------------------------------------------

    def round_transform(self, state: Sequence[int], round_key: Sequence[int]) -> List[int]:
        # RF = AK o LP o SL
        sbox_out = apply_sbox_layer(state, self.p, self._sbox)
        linear_out = self._linear.apply(sbox_out, self.p)
        return add_round_key(linear_out, round_key, self.p)

    def key_whitening(self, state: Sequence[int], block_index: int) -> List[int]:
        mk = self._require_key()
        rc0 = self._rk_gen.generate_round_constant(0, block_index, self.p)
        rk0 = self._rk_gen.generate_round_key(mk, rc0, self.p)
        return add_round_key(state, rk0, self.p)

    def truncate(self, state: Sequence[int]) -> List[int]:
        state = check_vector(state, STATE_SIZE, "Truncation input")
        return state[self.trunc_m:]

    def counter_vector(self, block_index: int) -> List[int]:
        return [(i + 1 + block_index) % self.p for i in range(STATE_SIZE)]

    # -- keystream ----------------------------------------------------------

    def keystream_block(self, block_index: int) -> List[int]:
        mk = self._require_key()
        if block_index < 0:
            raise InvalidInput(f"block index must be non-negative, got {block_index}")
        round_keys = self._rk_gen.schedule(mk, block_index, self.p)

        state = add_round_key(self.counter_vector(block_index), round_keys[0], self.p)
        for r in range(1, self.rounds + 1):
            state = self.round_transform(state, round_keys[r])

        block = self.truncate(self._linear.apply(state, self.p))
        logger.debug("block %d done (%d elements)", block_index, len(block))
        return block

    def generate_keystream(self, block_count: int) -> List[int]:
        self._require_key()
        if block_count < 0:
            raise InvalidInput(f"block_count must be non-negative, got {block_count}")

        workers = self._params.workers
        if workers > 1 and block_count > 1:
            with ThreadPoolExecutor(max_workers=workers) as ex:
                blocks = list(ex.map(self.keystream_block, range(block_count)))
        else:
            blocks = [self.keystream_block(j) for j in range(block_count)]

        keystream: List[int] = []
        for block in blocks:
            keystream.extend(block)
        logger.info("Generated keystream: %d blocks, %d elements", block_count, len(keystream))
        return keystream

    # -- transciphering -----------------------------------------------------

    def _keystream_for(self, n: int) -> List[int]:
        if self.block_width == 0:
            raise InvalidParameter("trunc_m=36 leaves no keystream elements to encrypt with")
        blocks = -(-n // self.block_width)
        return self.generate_keystream(blocks)[:n]

    def encrypt(self, plaintext: Sequence[int]) -> List[int]:
        """c_k = m_k + z_k mod p."""
        msg = check_vector(plaintext, len(plaintext), "Plaintext")
        ks = self._keystream_for(len(msg))
        return [(m + z) % self.p for m, z in zip(msg, ks)]

    def decrypt(self, ciphertext: Sequence[int]) -> List[int]:
        """m_k = c_k - z_k mod p."""
        ct = check_vector(ciphertext, len(ciphertext), "Ciphertext")
        ks = self._keystream_for(len(ct))
        return [(c - z) % self.p for c, z in zip(ct, ks)]
