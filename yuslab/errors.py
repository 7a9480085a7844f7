"""Error taxonomy for the YuS keystream generator.

Every error raised by the package derives from ``YuSError``. The concrete
classes also derive from the builtin exception a caller would expect
(``ValueError`` for bad arguments, ``RuntimeError`` for state/primitive
problems) so generic handlers keep working.
"""
from __future__ import annotations


class YuSError(Exception):
    """Base class for all package errors."""


class InvalidParameter(YuSError, ValueError):
    """Construction-time parameter violation (prime, truncation, level)."""


class InvalidInput(YuSError, ValueError):
    """Call-time shape or range violation (vector length, index width)."""


class NotInitialized(YuSError, RuntimeError):
    """Keystream requested before a master key and nonce were set."""


class PrimitiveFailure(YuSError, RuntimeError):
    """The underlying hash primitive failed or is unavailable."""
