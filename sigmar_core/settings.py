from __future__ import annotations

import os
from typing import Optional

from .hashkey import DEFAULT_SEED

_TRUTHY = ('1', 'true', 'yes', 'on')


def debug_enabled() -> bool:
    """True when SIGMAR_DEBUG asks for [solver]/[deal] trace lines."""
    return os.getenv('SIGMAR_DEBUG', '0').lower() in _TRUTHY


def hash_seed_from_env() -> int:
    raw = os.getenv('SIGMAR_SEED')
    if not raw:
        return DEFAULT_SEED
    return int(raw, 0)


def max_nodes_from_env(default: Optional[int] = None) -> Optional[int]:
    """Node budget from SIGMAR_MAX_NODES; 0 or a negative value means unbounded."""
    raw = os.getenv('SIGMAR_MAX_NODES')
    if not raw:
        return default
    value = int(raw, 0)
    return value if value > 0 else None
