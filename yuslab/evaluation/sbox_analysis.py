"""S-box bijectivity and differential analysis over F_p^3.

Exhaustive where p is small enough to enumerate; otherwise reports the
algebraic bijectivity criterion and the closed-form uniformity p^2.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from itertools import product
from typing import Any, Dict, Optional

from yuslab.cipher.sbox import SBox
from yuslab.config import Settings, load_settings

logger = logging.getLogger(__name__)

# p^3 * (p^3 - 1) evaluations; keep it to tiny primes
DDT_LIMIT = 11


@dataclass
class SBoxAnalysisResult:
    """Structured result of S-box analysis for one prime."""
    p: int
    is_bijective: bool
    exhaustive: bool                    # bijectivity enumerated rather than derived
    differential_uniformity: int        # closed form, p^2
    measured_uniformity: Optional[int]  # exhaustive DDT max, tiny p only

    @property
    def uniformity_matches(self) -> bool:
        return self.measured_uniformity is None or self.measured_uniformity == self.differential_uniformity

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["uniformity_matches"] = self.uniformity_matches
        return d

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else "NOT bijective"
        how = "enumerated" if self.exhaustive else "algebraic"
        measured = "n/a" if self.measured_uniformity is None else str(self.measured_uniformity)
        return (
            f"SBox(p={self.p}): {bij} ({how}), "
            f"delta={self.differential_uniformity}, measured={measured}"
        )


def ddt_max(sbox: SBox) -> int:
    """Max DDT entry over all non-zero input differences."""
    p = sbox.p
    points = list(product(range(p), repeat=3))
    outputs = {x: sbox.apply(x) for x in points}
    best = 0
    for dx in points:
        if dx == (0, 0, 0):
            continue
        counts: Dict[tuple, int] = {}
        for x in points:
            shifted = ((x[0] + dx[0]) % p, (x[1] + dx[1]) % p, (x[2] + dx[2]) % p)
            a, b = outputs[shifted], outputs[x]
            dy = ((a[0] - b[0]) % p, (a[1] - b[1]) % p, (a[2] - b[2]) % p)
            counts[dy] = counts.get(dy, 0) + 1
        best = max(best, max(counts.values()))
    return best


def analyze_sbox(
    p: int,
    *,
    exhaustive_limit: Optional[int] = None,
    ddt_limit: int = DDT_LIMIT,
    settings: Optional[Settings] = None,
) -> SBoxAnalysisResult:
    """Analyze the YuS S-box for prime ``p``.

    Args:
        p: Prime with p = 2 mod 3 (small test primes are fine).
        exhaustive_limit: Largest p for which bijectivity is enumerated;
            defaults to ``sbox_exhaustive_limit`` from settings.
        ddt_limit: Largest p for which the full DDT is computed.
        settings: Overrides ``load_settings()``.

    Returns:
        SBoxAnalysisResult with bijectivity and uniformity figures.
    """
    if exhaustive_limit is None:
        exhaustive_limit = (settings or load_settings()).sbox_exhaustive_limit
    sbox = SBox(p)
    exhaustive = p <= exhaustive_limit
    measured = ddt_max(sbox) if p <= ddt_limit else None
    if measured is not None:
        logger.debug("DDT for p=%d: max=%d", p, measured)

    return SBoxAnalysisResult(
        p=p,
        is_bijective=sbox.is_permutation(exhaustive_limit),
        exhaustive=exhaustive,
        differential_uniformity=sbox.differential_uniformity(),
        measured_uniformity=measured,
    )
