import math

from pydantic import BaseModel

NAN = float("nan")


class Quote(BaseModel):
    rate: float = NAN
    amount_out: float = NAN
    min_received: float = NAN
    input_usd: float = NAN
    output_usd: float = NAN

    def to_wire(self) -> dict[str, float | None]:
        # JSON has no NaN; unquotable figures go out as null
        return {k: (v if math.isfinite(v) else None) for k, v in self.model_dump().items()}
