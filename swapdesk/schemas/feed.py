from typing import Literal

from pydantic import BaseModel

from swapdesk.schemas.token import Token


class FeedState(BaseModel):
    status: Literal["LOADING", "READY", "ERROR"] = "LOADING"
    tokens: list[Token] = []
    error: str | None = None
    loaded_at: int | None = None
