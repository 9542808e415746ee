from __future__ import annotations

from typing import Any, Optional

import requests

from swapdesk.errors import FeedLoadError

DEFAULT_FEED_URL = "https://interview.switcheo.com/prices.json"


class PriceFeedClient:
    """One-shot JSON price feed fetch. No retries; failures surface as FeedLoadError."""

    def __init__(
        self,
        url: str = DEFAULT_FEED_URL,
        timeout: float = 5.0,
        session: Optional[Any] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests

    def fetch_prices(self) -> Any:
        try:
            response = self.session.get(
                self.url,
                headers={"accept": "application/json", "cache-control": "no-store"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise FeedLoadError(f"price feed unreachable: {exc}") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise FeedLoadError(f"HTTP {response.status_code}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise FeedLoadError("price feed returned invalid JSON") from exc
