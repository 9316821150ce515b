from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DexScreenerPair(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    chain_id: str = Field(alias="chainId")
    # Prices arrive as decimal strings; numbers are tolerated as well.
    price_native: Optional[Union[str, float]] = Field(default=None, alias="priceNative")
    price_usd: Optional[Union[str, float]] = Field(default=None, alias="priceUsd")
    market_cap: Optional[Union[float, str]] = Field(default=None, alias="marketCap")
    fdv: Optional[Union[float, str]] = None


class DexScreenerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    schema_version: str = Field(alias="schemaVersion")
    pairs: list[DexScreenerPair] = Field(default_factory=list)

    @field_validator("pairs", mode="before")
    @classmethod
    def _null_pairs_as_empty(cls, value):
        # Unknown tokens come back with "pairs": null.
        if value is None:
            return []
        return value
