from __future__ import annotations

import threading
import time
from typing import Callable

from swapdesk.errors import FeedLoadError
from swapdesk.schemas.feed import FeedState
from swapdesk.schemas.token import Token
from swapdesk.services.price_normalizer import DEFAULT_ICON_BASE_URL, normalize


class PriceFeedLoader:
    """Loads the price feed into a FeedState. Only the most recent load may apply."""

    def __init__(
        self,
        *,
        client,
        icon_base_url: str = DEFAULT_ICON_BASE_URL,
        on_tokens: Callable[[list[Token]], None] | None = None,
    ) -> None:
        self.client = client
        self.icon_base_url = icon_base_url
        self.on_tokens = on_tokens
        self._lock = threading.Lock()
        self._generation = 0
        self._state = FeedState()
        self.loads_superseded = 0

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            self._state.status = "LOADING"
            self._state.error = None
            return self._generation

    def cancel(self) -> None:
        """Supersede any in-flight load so its result is dropped."""
        with self._lock:
            self._generation += 1

    def _fetch(self) -> list[Token]:
        raw = self.client.fetch_prices()
        tokens = normalize(raw, icon_base_url=self.icon_base_url)
        if not tokens:
            raise FeedLoadError("No priced tokens found")
        return tokens

    def load(self) -> FeedState:
        ticket = self.begin()
        print(f"[FEED][load_start] ticket={ticket}", flush=True)
        try:
            tokens = self._fetch()
        except FeedLoadError as exc:
            return self._finish(ticket, error=str(exc) or "Failed to load prices")
        except Exception as exc:
            print(f"[FEED][load_unexpected_error] ticket={ticket} error={exc!r}", flush=True)
            return self._finish(ticket, error=str(exc) or "Failed to load prices")
        return self._finish(ticket, tokens=tokens)

    def _finish(
        self,
        ticket: int,
        *,
        tokens: list[Token] | None = None,
        error: str | None = None,
    ) -> FeedState:
        with self._lock:
            if ticket != self._generation:
                self.loads_superseded += 1
                print(f"[FEED][load_superseded] ticket={ticket} current={self._generation}", flush=True)
                return self._state.model_copy(deep=True)

            if error is not None:
                self._state = FeedState(status="ERROR", tokens=[], error=error)
                print(f"[FEED][load_error] ticket={ticket} error={error}", flush=True)
                # a failed load blocks the form until the next successful one
                if self.on_tokens is not None:
                    self.on_tokens([])
            else:
                self._state = FeedState(status="READY", tokens=tokens or [], loaded_at=int(time.time()))
                print(f"[FEED][load_ok] ticket={ticket} token_count={len(self._state.tokens)}", flush=True)
                if self.on_tokens is not None:
                    self.on_tokens(list(self._state.tokens))
            return self._state.model_copy(deep=True)

    def state(self) -> FeedState:
        with self._lock:
            return self._state.model_copy(deep=True)
