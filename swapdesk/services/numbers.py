from __future__ import annotations

import math
from typing import Any

NAN = float("nan")
PLACEHOLDER = "—"


def is_finite(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_float(text: str) -> float:
    # float() also accepts digit separators like "1_000"; plain decimal text only
    if not text or "_" in text:
        return NAN
    try:
        value = float(text)
    except ValueError:
        return NAN
    return value if math.isfinite(value) else NAN


def safe_parse_number(text: str | None) -> float:
    """Parse user-typed amount text. Thousands separators are ignored; failure is NaN, never 0."""
    cleaned = (text or "").replace(",", "").strip()
    return _parse_float(cleaned)


def coerce_price(raw: Any) -> float:
    if isinstance(raw, str):
        stripped = raw.strip()
        # an empty price string counts as zero and is rejected as non-positive downstream
        return 0.0 if not stripped else _parse_float(stripped)
    if is_finite(raw):
        return float(raw)
    return NAN


def max_amount_text(balance: float) -> str:
    if not is_finite(balance):
        return ""
    value = math.floor((balance - 0.000001) * 1e6) / 1e6
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_num(value: float, max_digits: int = 6) -> str:
    if not is_finite(value):
        return ""
    text = f"{value:,.{max_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_usd(value: float) -> str:
    if not is_finite(value):
        return PLACEHOLDER
    text = f"${abs(value):,.2f}"
    return f"-{text}" if value < 0 and text != "$0.00" else text


def format_pct_bps(bps: int) -> str:
    return f"{format_num(bps / 100, 2)}%"
