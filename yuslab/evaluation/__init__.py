"""Keystream and component evaluation.

S-box bijectivity and differential uniformity checks, keystream
avalanche measurements and an aggregating report.

Research / education only. Do NOT use in production.
"""

from .sbox_analysis import SBoxAnalysisResult, analyze_sbox, ddt_max
from .avalanche import AvalancheResult, keystream_avalanche
from .report import EvaluationReport

__all__ = [
    "SBoxAnalysisResult",
    "analyze_sbox",
    "ddt_max",
    "AvalancheResult",
    "keystream_avalanche",
    "EvaluationReport",
]
