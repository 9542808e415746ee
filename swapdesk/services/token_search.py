from __future__ import annotations

from swapdesk.schemas.token import Token


def filter_tokens(tokens: list[Token], query: str) -> list[Token]:
    q = (query or "").strip().upper()
    if not q:
        return list(tokens)
    return [t for t in tokens if q in t.symbol]
