"""Structured evaluation report builder.

Aggregates S-box analysis and keystream avalanche results into a single
serializable report for export.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from yuslab.config import Settings, load_settings
from yuslab.utils.repro import make_run_dir, write_json

from .avalanche import AvalancheResult
from .sbox_analysis import SBoxAnalysisResult


@dataclass
class EvaluationReport:
    """Complete evaluation report aggregating all analysis results."""
    timestamp: str = ""
    sbox_results: List[SBoxAnalysisResult] = field(default_factory=list)
    avalanche_results: List[AvalancheResult] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "sbox": [s.to_dict() for s in self.sbox_results],
            "avalanche": [a.to_dict() for a in self.avalanche_results],
            "summary": {
                "sbox_all_bijective": all(s.is_bijective for s in self.sbox_results),
                "avalanche_all_pass": all(a.passes for a in self.avalanche_results),
                "weak_inputs": self.weak_inputs(),
            },
        }

    def to_summary(self) -> str:
        lines = [f"Evaluation Report: {self.timestamp}", "=" * 50]

        if self.sbox_results:
            lines.append(f"\nS-box Analysis: {len(self.sbox_results)} primes")
            for s in self.sbox_results:
                lines.append(f"  {s.summary()}")

        if self.avalanche_results:
            ok = sum(1 for a in self.avalanche_results if a.passes)
            lines.append(f"\nKeystream Avalanche: {ok}/{len(self.avalanche_results)} pass")
            for a in self.avalanche_results:
                lines.append(f"  {a.summary()}")

        return "\n".join(lines)

    def weak_inputs(self) -> List[str]:
        """Input types whose avalanche heuristic failed."""
        return [f"{a.input_type}@p={a.p}" for a in self.avalanche_results if not a.passes]

    def save(self, path: Optional[str | Path] = None, settings: Optional[Settings] = None) -> Path:
        """Write the JSON report; without ``path`` it goes to a fresh run directory under ``runs_dir``."""
        if path is None:
            s = settings or load_settings()
            path = make_run_dir(s.runs_dir, "evaluation") / "report.json"
        path = Path(path)
        write_json(path, self.to_dict())
        return path
