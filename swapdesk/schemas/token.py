from pydantic import BaseModel, ConfigDict


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    price: float
    icon_ref: str

    @property
    def fallback_glyph(self) -> str:
        """Two-letter placeholder shown when the icon cannot be loaded."""
        return self.symbol[:2]
