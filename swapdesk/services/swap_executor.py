from __future__ import annotations

import time
import uuid
from typing import Callable

from swapdesk.schemas.swap import SwapIntent, SwapReceipt
from swapdesk.services.numbers import format_num


class SimulatedSwapExecutor:
    """Stands in for a swap backend: waits a fixed delay and always succeeds."""

    def __init__(self, delay_sec: float = 1.2, sleep: Callable[[float], None] | None = None) -> None:
        self.delay_sec = delay_sec
        self._sleep = sleep or time.sleep

    def execute(self, intent: SwapIntent) -> SwapReceipt:
        self._sleep(self.delay_sec)
        now = int(time.time())
        return SwapReceipt(
            swap_id=f"swp_{now}_{uuid.uuid4().hex[:8]}",
            title="Swap submitted",
            description=(
                f"{format_num(intent.amount_in, 6)} {intent.token_in_symbol} → "
                f"{format_num(intent.amount_out, 6)} {intent.token_out_symbol}"
            ),
            intent=intent,
            submitted_at=now,
        )
