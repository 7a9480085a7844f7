from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Cipher defaults
    prime_bits: int = Field(default=17, ge=17, le=4096, description="Bit length for generated primes")
    security_level: int = Field(default=80, description="80 or 128")
    truncation: int = Field(default=12, ge=0, le=36)
    workers: int = Field(default=1, ge=1, le=64, description="Thread pool size for block-parallel keystreams")

    # Analysis
    sbox_exhaustive_limit: int = Field(default=101, ge=2)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Paths
    runs_dir: str = Field(default="runs")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        prime_bits=int(os.getenv("YUS_PRIME_BITS", "17")),
        security_level=int(os.getenv("YUS_SECURITY_LEVEL", "80")),
        truncation=int(os.getenv("YUS_TRUNCATION", "12")),
        workers=int(os.getenv("YUS_WORKERS", "1")),
        sbox_exhaustive_limit=int(os.getenv("YUS_SBOX_EXHAUSTIVE_LIMIT", "101")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        runs_dir=os.getenv("YUS_RUNS_DIR", "runs"),
    )
