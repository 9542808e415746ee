from __future__ import annotations

from swapdesk.schemas.quote import NAN, Quote
from swapdesk.schemas.token import Token
from swapdesk.services.numbers import is_finite

_BPS_DENOMINATOR = 10000
_MIN_NETWORK_FEE = 0.001
_NETWORK_FEE_DIVISOR = 50000


def _price(token: Token | None) -> float:
    return token.price if token is not None else NAN


def compute_rate(token_in: Token | None, token_out: Token | None) -> float:
    price_in = _price(token_in)
    price_out = _price(token_out)
    if not is_finite(price_in) or not is_finite(price_out) or price_out <= 0:
        return NAN
    return price_in / price_out


def apply_slippage(amount_out: float, slippage_bps: int) -> float:
    if not is_finite(amount_out):
        return NAN
    return amount_out * (1 - slippage_bps / _BPS_DENOMINATOR)


def quote(
    token_in: Token | None,
    token_out: Token | None,
    amount_in: float,
    slippage_bps: int,
    *,
    live_amount_in: float | None = None,
) -> Quote:
    """Price a swap of ``amount_in`` units of ``token_in`` into ``token_out``.

    Unquotable figures are NaN, never 0. ``live_amount_in`` is the amount as currently
    typed; when given it drives ``input_usd`` while ``amount_in`` (the settled value)
    drives the output side.
    """
    price_in = _price(token_in)
    price_out = _price(token_out)
    rate = compute_rate(token_in, token_out)

    amount_out = NAN
    if is_finite(rate) and is_finite(amount_in) and amount_in > 0:
        amount_out = amount_in * rate

    usd_amount = amount_in if live_amount_in is None else live_amount_in
    input_usd = usd_amount * price_in if is_finite(usd_amount) and is_finite(price_in) else NAN
    output_usd = amount_out * price_out if is_finite(amount_out) and is_finite(price_out) else NAN

    return Quote(
        rate=rate,
        amount_out=amount_out,
        min_received=apply_slippage(amount_out, slippage_bps),
        input_usd=input_usd,
        output_usd=output_usd,
    )


def network_fee(token_in: Token | None) -> float:
    if token_in is None:
        return NAN
    return max(_MIN_NETWORK_FEE, token_in.price / _NETWORK_FEE_DIVISOR)
