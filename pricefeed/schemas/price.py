from pydantic import BaseModel, ConfigDict


class PriceSnapshot(BaseModel):
    # Strict so that a hand-edited file with "1.5" strings or NaN is a parse error.
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    chain_type: str
    price_usd: float
    price_native: float
    market_cap: float
    fdv: float
    last_updated: str


class ErrorResponse(BaseModel):
    error: str
    message: str
