from __future__ import annotations

from swapdesk.schemas.swap import ValidationVerdict
from swapdesk.schemas.token import Token
from swapdesk.services.numbers import is_finite

PICK_TOKENS = "pick tokens"
PICK_DIFFERENT_TOKENS = "pick two different tokens"
ENTER_AMOUNT = "enter an amount"
ENTER_VALID_AMOUNT = "enter a valid amount"
INSUFFICIENT_BALANCE = "insufficient balance"
UNABLE_TO_QUOTE = "unable to quote price"


def _fail(reason: str) -> ValidationVerdict:
    return ValidationVerdict(ok=False, reason=reason)


def validate(
    token_in: Token | None,
    token_out: Token | None,
    amount_in_text: str,
    amount_in: float,
    balance_in: float,
    amount_out: float,
) -> ValidationVerdict:
    # order matters: the first failing rule is the one reported
    if token_in is None or token_out is None:
        return _fail(PICK_TOKENS)

    if token_in.symbol == token_out.symbol:
        return _fail(PICK_DIFFERENT_TOKENS)

    if not (amount_in_text or "").strip():
        return _fail(ENTER_AMOUNT)

    if not is_finite(amount_in) or amount_in <= 0:
        return _fail(ENTER_VALID_AMOUNT)

    if amount_in > balance_in:
        return _fail(INSUFFICIENT_BALANCE)

    if not is_finite(amount_out) or amount_out <= 0:
        return _fail(UNABLE_TO_QUOTE)

    return ValidationVerdict(ok=True, reason="")
