"""Numeric limits for tool arguments."""

from typing import Optional

LIST_MAX = 1000
HISTORY_MAX = 100
SEARCH_MAX = 100


def clamp_limit(value: Optional[int], default: int, maximum: int) -> int:
    """Clamp a requested limit into [1, maximum]; missing or <1 uses default."""
    if value is None or value < 1:
        value = default
    return min(value, maximum)
