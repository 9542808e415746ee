from __future__ import annotations

import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI

from swapdesk.api.routes import router
from swapdesk.config.settings import Settings, get_settings
from swapdesk.integrations.price_feed import PriceFeedClient
from swapdesk.services.debouncer import Scheduler
from swapdesk.services.price_feed import PriceFeedLoader
from swapdesk.services.swap_executor import SimulatedSwapExecutor
from swapdesk.services.swap_session import SwapSession


def configure_app_state(
    app: FastAPI,
    settings: Settings,
    *,
    feed_client=None,
    executor: SimulatedSwapExecutor | None = None,
    scheduler: Scheduler | None = None,
) -> None:
    session = SwapSession(
        amount_debounce_ms=settings.AMOUNT_DEBOUNCE_MS,
        search_debounce_ms=settings.SEARCH_DEBOUNCE_MS,
        default_slippage_bps=settings.DEFAULT_SLIPPAGE_BPS,
        executor=executor or SimulatedSwapExecutor(delay_sec=settings.SUBMIT_DELAY_SEC),
        scheduler=scheduler,
    )
    app.state.settings = settings
    app.state.session = session
    app.state.feed_loader = PriceFeedLoader(
        client=feed_client
        or PriceFeedClient(url=settings.PRICE_FEED_URL, timeout=settings.PRICE_FEED_TIMEOUT_SEC),
        icon_base_url=settings.ICON_BASE_URL,
        on_tokens=session.load_tokens,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    loader = app.state.feed_loader
    feed_worker = threading.Thread(target=loader.load, daemon=True, name='price-feed-loader')
    app.state.feed_worker_thread = feed_worker
    print("[FEED][feed_worker_start] thread=price-feed-loader", flush=True)
    feed_worker.start()

    try:
        yield
    finally:
        loader.cancel()
        app.state.session.shutdown()
        feed_worker.join(timeout=1.0)
        print("[FEED][feed_worker_stop] thread=price-feed-loader", flush=True)


app = FastAPI(title="Swapdesk", version="0.1.0", lifespan=lifespan)
app.include_router(router, prefix="/v1")

configure_app_state(app, get_settings())
