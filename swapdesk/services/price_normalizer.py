from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote as url_quote

from swapdesk.schemas.token import Token
from swapdesk.services.numbers import coerce_price, is_finite

DEFAULT_ICON_BASE_URL = "https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens"
_ICON_SAFE_CHARS = "!~*'()"


def icon_url(symbol: str, base_url: str = DEFAULT_ICON_BASE_URL) -> str:
    # encodeURIComponent-compatible
    return f"{base_url.rstrip('/')}/{url_quote(symbol, safe=_ICON_SAFE_CHARS)}.svg"


def _collation_key(symbol: str) -> tuple[tuple[int, str], ...]:
    """Locale-style symbol order: punctuation, then digits, then letters."""
    return tuple((0 if not ch.isalnum() else 1 if ch.isdigit() else 2, ch) for ch in symbol)


def _symbol_text(raw: Any) -> str:
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)) or not raw:
        return ""
    return str(raw).strip()


def _iter_candidates(data: Any):
    """Yield (symbol, price) pairs from any of the accepted feed shapes."""
    if isinstance(data, Mapping):
        for key, value in data.items():
            if isinstance(value, Mapping):
                yield key, value.get("price")
            else:
                yield key, value
        return

    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        for row in data:
            if not isinstance(row, Mapping):
                continue
            symbol = row.get("currency")
            if symbol is None:
                symbol = row.get("symbol")
            yield symbol, row.get("price")


def normalize(data: Any, *, icon_base_url: str = DEFAULT_ICON_BASE_URL) -> list[Token]:
    """Turn a raw price feed into a sorted token list with unique uppercase symbols.

    Malformed entries are dropped silently. When a symbol repeats (case-insensitively)
    the last occurrence wins.
    """
    rows: dict[str, float] = {}
    for raw_symbol, raw_price in _iter_candidates(data):
        symbol = _symbol_text(raw_symbol).upper()
        price = coerce_price(raw_price)
        if not symbol or not is_finite(price) or price <= 0:
            continue
        rows[symbol] = price

    return [
        Token(symbol=symbol, price=price, icon_ref=icon_url(symbol, icon_base_url))
        for symbol, price in sorted(rows.items(), key=lambda row: _collation_key(row[0]))
    ]
