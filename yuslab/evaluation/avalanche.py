"""Keystream avalanche over master-key elements and nonce bits.

For each perturbed input position we re-key a fresh cipher and record the
fraction of keystream elements that differ from the baseline. A well
diffused keystream changes almost every element (about (p-1)/p).

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import random
import statistics
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional, Sequence

from yuslab.cipher.core import YuSCipher
from yuslab.cipher.field import STATE_SIZE
from yuslab.cipher.params import SecurityLevel
from yuslab.config import Settings, load_settings


@dataclass
class AvalancheResult:
    """Avalanche measurement for one input type."""
    p: int
    level: str
    input_type: str              # "key" or "nonce"
    block_count: int
    num_positions: int
    per_position_fraction: List[float] = field(default_factory=list)
    mean: float = 0.0
    min_fraction: float = 0.0
    max_fraction: float = 0.0
    seed: Optional[int] = None       # baseline master-key seed

    @property
    def passes(self) -> bool:
        """Heuristic: every perturbation changes at least 90% of the keystream."""
        return self.min_fraction >= 0.9

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes"] = self.passes
        return d

    def summary(self) -> str:
        status = "PASS" if self.passes else "FAIL"
        return (
            f"[{status}] avalanche({self.input_type}): "
            f"mean={self.mean:.4f}, min={self.min_fraction:.4f}, max={self.max_fraction:.4f}"
        )


def _diff_fraction(a: Sequence[int], b: Sequence[int]) -> float:
    if len(a) != len(b):
        raise ValueError("keystream length mismatch")
    if not a:
        return 0.0
    return sum(1 for x, y in zip(a, b) if x != y) / len(a)


def _flip_bit(data: bytes, bit_index: int) -> bytes:
    out = bytearray(data)
    out[bit_index // 8] ^= 1 << (bit_index % 8)
    return bytes(out)


def keystream_avalanche(
    p: int,
    *,
    level: SecurityLevel = SecurityLevel.SEC80,
    trunc_m: int = 12,
    input_type: str = "key",
    block_count: int = 1,
    positions: Optional[Sequence[int]] = None,
    nonce: bytes = bytes(range(1, 9)),
    seed: Optional[int] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    settings: Optional[Settings] = None,
) -> AvalancheResult:
    """Measure how far single-position changes spread through the keystream.

    Args:
        p: Cipher prime.
        level: Security level (round count).
        trunc_m: Truncation parameter.
        input_type: "key" (add 1 to one master-key element) or "nonce"
            (flip one nonce bit).
        block_count: Keystream blocks per evaluation.
        positions: Key element indices or nonce bit indices to perturb;
            defaults to all of them.
        nonce: Baseline nonce.
        seed: Seed for the random baseline master key; defaults to
            ``global_seed`` from settings.
        progress_callback: Optional callback(current, total).
        settings: Overrides ``load_settings()``.

    Returns:
        AvalancheResult with per-position and aggregate fractions.
    """
    if input_type == "key":
        total = STATE_SIZE
    elif input_type == "nonce":
        total = len(nonce) * 8
    else:
        raise ValueError(f"input_type must be 'key' or 'nonce', got '{input_type}'")
    if positions is None:
        positions = range(total)

    if seed is None:
        seed = (settings or load_settings()).global_seed
    rng = random.Random(seed)
    master_key = [rng.randrange(0, p) for _ in range(STATE_SIZE)]

    def run(mk: Sequence[int], n: bytes) -> List[int]:
        cipher = YuSCipher(p, level, trunc_m)
        cipher.init(mk, n)
        return cipher.generate_keystream(block_count)

    baseline = run(master_key, nonce)
    fractions: List[float] = []
    positions = list(positions)
    for idx, pos in enumerate(positions):
        if progress_callback:
            progress_callback(idx, len(positions))
        if input_type == "key":
            mk2 = list(master_key)
            mk2[pos] = (mk2[pos] + 1) % p
            other = run(mk2, nonce)
        else:
            other = run(master_key, _flip_bit(nonce, pos))
        fractions.append(_diff_fraction(baseline, other))

    return AvalancheResult(
        p=p,
        level=SecurityLevel.coerce(level).name,
        input_type=input_type,
        block_count=block_count,
        num_positions=len(positions),
        per_position_fraction=fractions,
        mean=round(statistics.mean(fractions), 6) if fractions else 0.0,
        min_fraction=round(min(fractions), 6) if fractions else 0.0,
        max_fraction=round(max(fractions), 6) if fractions else 0.0,
        seed=seed,
    )
