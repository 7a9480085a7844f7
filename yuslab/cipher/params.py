from __future__ import annotations

from enum import IntEnum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .field import MIN_PRIME, STATE_SIZE, is_p_2mod3


class SecurityLevel(IntEnum):
    """Security level; the value is the number of rounds."""

    SEC80 = 5
    SEC128 = 6

    @property
    def bits(self) -> int:
        return 80 if self is SecurityLevel.SEC80 else 128

    @classmethod
    def coerce(cls, value: Union["SecurityLevel", str, int]) -> "SecurityLevel":
        """Accept a member, its name ("SEC80") or its bit count (80/128)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdigit():
                value = int(key)
        if isinstance(value, int):
            for level in cls:
                if level.bits == value:
                    return level
        raise ValueError(f"Unsupported security level: {value!r}")


class CipherParams(BaseModel):
    """Validated construction parameters of a YuS instance."""

    model_config = ConfigDict(frozen=True)

    p: int = Field(..., gt=MIN_PRIME, description="Prime modulus, p = 2 mod 3")
    level: SecurityLevel = Field(default=SecurityLevel.SEC80)
    trunc_m: int = Field(default=12, ge=0, le=STATE_SIZE, description="Leading elements dropped per block")
    workers: int = Field(default=1, ge=1)

    @field_validator("p")
    @classmethod
    def _p_2mod3(cls, v: int) -> int:
        if not is_p_2mod3(v):
            raise ValueError("Prime p must satisfy p = 2 mod 3")
        return v

    @field_validator("level", mode="before")
    @classmethod
    def _level(cls, v):
        return SecurityLevel.coerce(v)

    @property
    def rounds(self) -> int:
        return int(self.level)

    @property
    def block_width(self) -> int:
        return STATE_SIZE - self.trunc_m
