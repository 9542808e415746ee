from __future__ import annotations

from swapdesk.schemas.token import Token

_HASH_BASE = 31
_UINT32_MASK = 0xFFFFFFFF
_BALANCE_BUCKETS = 9500
_MIN_BALANCE = 1.0


def balance_for(symbol: str) -> float:
    """Deterministic demo balance for a symbol. Not a randomness source."""
    x = 0
    for ch in symbol:
        x = (x * _HASH_BASE + ord(ch)) & _UINT32_MASK
    return max(_MIN_BALANCE, (x % _BALANCE_BUCKETS) / 100)


def balances_for(tokens: list[Token]) -> dict[str, float]:
    return {t.symbol: balance_for(t.symbol) for t in tokens}
