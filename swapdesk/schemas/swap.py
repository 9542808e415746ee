from typing import Literal

from pydantic import BaseModel, Field

from swapdesk.schemas.token import Token


class SwapRequest(BaseModel):
    token_in: Token | None = None
    token_out: Token | None = None
    amount_in_text: str = ""


class ValidationVerdict(BaseModel):
    ok: bool
    reason: str = ""


class SwapIntent(BaseModel):
    token_in_symbol: str
    token_out_symbol: str
    amount_in: float
    amount_out: float


class SwapReceipt(BaseModel):
    swap_id: str
    title: str
    description: str
    intent: SwapIntent
    submitted_at: int


class TokenPick(BaseModel):
    side: Literal["in", "out"]
    symbol: str


class PickerOpen(BaseModel):
    side: Literal["in", "out"]


class AmountUpdate(BaseModel):
    text: str


class SearchUpdate(BaseModel):
    query: str


class SlippageUpdate(BaseModel):
    bps: int = Field(ge=0, le=200)
