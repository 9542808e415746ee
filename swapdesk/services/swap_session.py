from __future__ import annotations

import threading
from typing import Any, Literal

from swapdesk.errors import FeedNotReadyError, SubmissionInProgressError, SwapRejectedError, UnknownTokenError
from swapdesk.schemas.quote import NAN, Quote
from swapdesk.schemas.swap import SwapIntent, SwapReceipt, SwapRequest, ValidationVerdict
from swapdesk.schemas.token import Token
from swapdesk.services.balance_simulator import balance_for
from swapdesk.services.debouncer import Debouncer, Scheduler
from swapdesk.services.numbers import (
    PLACEHOLDER,
    format_num,
    format_pct_bps,
    format_usd,
    is_finite,
    max_amount_text,
    safe_parse_number,
)
from swapdesk.services.quote_engine import network_fee, quote
from swapdesk.services.swap_executor import SimulatedSwapExecutor
from swapdesk.services.swap_validator import validate
from swapdesk.services.token_search import filter_tokens

Side = Literal["in", "out"]

MIN_SLIPPAGE_BPS = 0
MAX_SLIPPAGE_BPS = 200


def _finite_or_none(value: float) -> float | None:
    return value if is_finite(value) else None


class SwapSession:
    """Per-user swap form state: token selection, amount, slippage and search.

    The typed amount and the search query each go through their own debouncer; quotes
    are priced from the settled amount while the input USD estimate follows the live one.
    """

    def __init__(
        self,
        *,
        amount_debounce_ms: int = 150,
        search_debounce_ms: int = 80,
        default_slippage_bps: int = 50,
        executor: SimulatedSwapExecutor | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self.tokens: list[Token] = []
        self.request = SwapRequest()
        self.slippage_bps = default_slippage_bps
        self.search_text = ""
        self.picker_side: Side | None = None
        self.submitting = False
        self.executor = executor or SimulatedSwapExecutor()
        self._amount: Debouncer[float] = Debouncer(NAN, amount_debounce_ms, scheduler=scheduler)
        self._search: Debouncer[str] = Debouncer("", search_debounce_ms, scheduler=scheduler)

    # -- token list / selection

    def load_tokens(self, tokens: list[Token]) -> None:
        with self._lock:
            self.tokens = list(tokens)
            self.request.token_in = self.tokens[0] if self.tokens else None
            if len(self.tokens) > 1:
                self.request.token_out = self.tokens[1]
            else:
                self.request.token_out = self.request.token_in

    def token(self, symbol: str) -> Token:
        wanted = symbol.strip().upper()
        with self._lock:
            if not self.tokens:
                raise FeedNotReadyError("FEED_NOT_READY")
            for t in self.tokens:
                if t.symbol == wanted:
                    return t
        raise UnknownTokenError(wanted)

    def pick_token(self, side: Side, symbol: str) -> Token:
        picked = self.token(symbol)
        with self._lock:
            if side == "in":
                self.request.token_in = picked
            else:
                self.request.token_out = picked
            self.picker_side = None
        return picked

    def open_picker(self, side: Side) -> None:
        with self._lock:
            self.picker_side = side
            self.set_search("")

    def swap_sides(self) -> None:
        with self._lock:
            self.request.token_in, self.request.token_out = self.request.token_out, self.request.token_in

    # -- amount / search / slippage

    def set_amount_text(self, text: str) -> None:
        with self._lock:
            self.request.amount_in_text = text
            self._amount.push(safe_parse_number(text))

    def set_max(self) -> None:
        with self._lock:
            if self.request.token_in is None:
                return
            self.set_amount_text(max_amount_text(self.balance_in))

    def set_search(self, query: str) -> None:
        with self._lock:
            self.search_text = query
            self._search.push(query)

    def set_slippage(self, bps: int) -> None:
        if isinstance(bps, bool) or not isinstance(bps, int):
            raise ValueError("slippage must be an integer number of basis points")
        if not MIN_SLIPPAGE_BPS <= bps <= MAX_SLIPPAGE_BPS:
            raise ValueError(f"slippage must be within [{MIN_SLIPPAGE_BPS}, {MAX_SLIPPAGE_BPS}] bps")
        with self._lock:
            self.slippage_bps = bps
        print(f"[SESSION][slippage_set] bps={bps} pct={format_pct_bps(bps)}", flush=True)

    # -- derived values

    @property
    def live_amount_in(self) -> float:
        return safe_parse_number(self.request.amount_in_text)

    @property
    def settled_amount_in(self) -> float:
        return self._amount.value

    @property
    def settled_search(self) -> str:
        return self._search.value

    @property
    def balance_in(self) -> float:
        token_in = self.request.token_in
        return balance_for(token_in.symbol) if token_in is not None else 0.0

    def current_quote(self) -> Quote:
        with self._lock:
            return quote(
                self.request.token_in,
                self.request.token_out,
                self.settled_amount_in,
                self.slippage_bps,
                live_amount_in=self.live_amount_in,
            )

    def verdict(self, current: Quote | None = None) -> ValidationVerdict:
        with self._lock:
            q = current if current is not None else self.current_quote()
            return validate(
                self.request.token_in,
                self.request.token_out,
                self.request.amount_in_text,
                self.live_amount_in,
                self.balance_in,
                q.amount_out,
            )

    def filtered_tokens(self) -> list[Token]:
        with self._lock:
            return filter_tokens(self.tokens, self.settled_search)

    # -- submission

    def submit(self) -> SwapReceipt:
        with self._lock:
            if self.submitting:
                print("[SWAP][submit_refused] reason=IN_PROGRESS", flush=True)
                raise SubmissionInProgressError("SWAP_IN_PROGRESS")
            current = self.current_quote()
            verdict = self.verdict(current)
            if not verdict.ok:
                print(f"[SWAP][submit_rejected] reason={verdict.reason!r}", flush=True)
                raise SwapRejectedError(verdict.reason)
            # amount_in is the typed value, amount_out the settled quote; they can differ
            # inside the debounce window, as in the form this service backs
            intent = SwapIntent(
                token_in_symbol=self.request.token_in.symbol,
                token_out_symbol=self.request.token_out.symbol,
                amount_in=self.live_amount_in,
                amount_out=current.amount_out,
            )
            self.submitting = True

        print(
            "[SWAP][submit_start] "
            f"token_in={intent.token_in_symbol} token_out={intent.token_out_symbol} "
            f"amount_in={intent.amount_in} amount_out={intent.amount_out}",
            flush=True,
        )
        try:
            receipt = self.executor.execute(intent)
        finally:
            with self._lock:
                self.submitting = False

        self.set_amount_text("")
        print(f"[SWAP][submit_done] swap_id={receipt.swap_id}", flush=True)
        return receipt

    def shutdown(self) -> None:
        self._amount.cancel()
        self._search.cancel()

    # -- views

    def state(self) -> dict[str, Any]:
        with self._lock:
            token_in = self.request.token_in
            token_out = self.request.token_out
            return {
                "token_in": token_in.symbol if token_in else None,
                "token_out": token_out.symbol if token_out else None,
                "amount_in_text": self.request.amount_in_text,
                "slippage_bps": self.slippage_bps,
                "search": self.search_text,
                "picker_side": self.picker_side,
                "submitting": self.submitting,
                "token_count": len(self.tokens),
            }

    def describe_quote(self) -> dict[str, Any]:
        with self._lock:
            token_in = self.request.token_in
            token_out = self.request.token_out
            current = self.current_quote()
            verdict = self.verdict(current)
            fee = network_fee(token_in)
            sym_in = token_in.symbol if token_in else PLACEHOLDER
            sym_out = token_out.symbol if token_out else PLACEHOLDER

            rate_label = PLACEHOLDER
            if is_finite(current.rate) and token_in and token_out:
                rate_label = f"1 {sym_in} ≈ {format_num(current.rate, 6)} {sym_out}"
            min_label = PLACEHOLDER
            if is_finite(current.min_received):
                min_label = f"{format_num(current.min_received, 6)} {sym_out}"

            return {
                "token_in": token_in.symbol if token_in else None,
                "token_out": token_out.symbol if token_out else None,
                "amount_in_text": self.request.amount_in_text,
                "slippage_bps": self.slippage_bps,
                "balance_in": self.balance_in,
                "network_fee": _finite_or_none(fee),
                "quote": current.to_wire(),
                "display": {
                    "input_usd": format_usd(current.input_usd),
                    "output_usd": format_usd(current.output_usd),
                    "amount_out": format_num(current.amount_out, 6) or PLACEHOLDER,
                    "min_received": min_label,
                    "rate": rate_label,
                    "network_fee": f"~ {format_num(fee, 6) or PLACEHOLDER} {sym_in}",
                    "balance_in": format_num(self.balance_in, 4),
                    "slippage": format_pct_bps(self.slippage_bps),
                },
                "verdict": verdict.model_dump(),
                "submitting": self.submitting,
                "can_submit": verdict.ok and not self.submitting,
            }
