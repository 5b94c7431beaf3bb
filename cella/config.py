from __future__ import annotations
import os
from typing import Optional


# Defaults
_DEFAULT_INT_BITS = 32
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_PROMPT = '> '


def int_from_env(var: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_int_bits() -> int:
    bits = int_from_env('CELLA_INT_BITS', _DEFAULT_INT_BITS)
    if bits < 2:
        raise ValueError(f"CELLA_INT_BITS must be at least 2, got {bits}")
    return bits


def get_recursion_limit() -> Optional[int]:
    return int_from_env('CELLA_RECURSION_LIMIT', None)


def get_log_level() -> str:
    return os.environ.get('CELLA_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_prompt() -> str:
    return os.environ.get('CELLA_PROMPT', _DEFAULT_PROMPT)
