import os
from functools import lru_cache

from pydantic import BaseModel, field_validator

_DEFAULT_FEED_URL = "https://interview.switcheo.com/prices.json"
_DEFAULT_ICON_BASE_URL = "https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens"


class Settings(BaseModel):
    PRICE_FEED_URL: str = _DEFAULT_FEED_URL
    PRICE_FEED_TIMEOUT_SEC: float = 5.0
    ICON_BASE_URL: str = _DEFAULT_ICON_BASE_URL
    AMOUNT_DEBOUNCE_MS: int = 150
    SEARCH_DEBOUNCE_MS: int = 80
    DEFAULT_SLIPPAGE_BPS: int = 50
    SUBMIT_DELAY_SEC: float = 1.2

    @field_validator("DEFAULT_SLIPPAGE_BPS")
    @classmethod
    def check_slippage_range(cls, value: int) -> int:
        if not 0 <= value <= 200:
            raise ValueError("DEFAULT_SLIPPAGE_BPS must be within [0, 200]")
        return value

    @field_validator("AMOUNT_DEBOUNCE_MS", "SEARCH_DEBOUNCE_MS")
    @classmethod
    def check_delay(cls, value: int) -> int:
        if value < 0:
            raise ValueError("debounce delay must be >= 0")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        raw = {
            "PRICE_FEED_URL": os.getenv("SWAP_PRICE_FEED_URL"),
            "PRICE_FEED_TIMEOUT_SEC": os.getenv("SWAP_PRICE_FEED_TIMEOUT_SEC"),
            "ICON_BASE_URL": os.getenv("SWAP_ICON_BASE_URL"),
            "AMOUNT_DEBOUNCE_MS": os.getenv("SWAP_AMOUNT_DEBOUNCE_MS"),
            "SEARCH_DEBOUNCE_MS": os.getenv("SWAP_SEARCH_DEBOUNCE_MS"),
            "DEFAULT_SLIPPAGE_BPS": os.getenv("SWAP_DEFAULT_SLIPPAGE_BPS"),
            "SUBMIT_DELAY_SEC": os.getenv("SWAP_SUBMIT_DELAY_SEC"),
        }
        # unset env vars fall back to field defaults
        return cls.model_validate({k: v for k, v in raw.items() if v not in (None, "")})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
