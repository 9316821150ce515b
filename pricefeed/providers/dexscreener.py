from __future__ import annotations

import datetime
import logging
import math
import re
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from pydantic import ValidationError

from pricefeed.config.settings import Settings
from pricefeed.providers.errors import MalformedResponse, NoPairsFound, ProviderUnreachable
from pricefeed.schemas.price import PriceSnapshot
from pricefeed.schemas.provider import DexScreenerPair, DexScreenerResponse

logger = logging.getLogger(__name__)

_TOKENS_PATH = "/latest/dex/tokens"
_USER_AGENT = "pricefeed/0.1"
# Plain decimal or exponent notation; no whitespace, underscores or hex.
_DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _build_url(settings: Settings) -> str:
    base_url = str(settings.provider_base_url).rstrip("/")
    return f"{base_url}{_TOKENS_PATH}/{quote(settings.token_address, safe=':')}"


def fetch_pairs(settings: Settings) -> DexScreenerResponse:
    url = _build_url(settings)
    try:
        request = Request(url, headers={"Accept": "application/json", "User-Agent": _USER_AGENT})
        with urlopen(request, timeout=settings.request_timeout_seconds) as response:
            body = response.read()
    except HTTPError as exc:
        raise ProviderUnreachable(f"provider returned HTTP {exc.code} for {url}") from exc
    except (URLError, HTTPException, OSError) as exc:
        raise ProviderUnreachable(f"request to {url} failed: {exc}") from exc
    except ValueError as exc:
        raise ProviderUnreachable(f"invalid provider url {url}: {exc}") from exc

    try:
        return DexScreenerResponse.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedResponse(f"unexpected response body from provider: {exc}") from exc


def select_first_pair(response: DexScreenerResponse) -> DexScreenerPair:
    if not response.pairs:
        raise NoPairsFound("No pairs found in response")
    return response.pairs[0]


def _to_float(value: str | float | None, field: str) -> float:
    if value is None:
        logger.warning("%s missing from provider pair, using 0.0", field)
        return 0.0
    if isinstance(value, str) and not _DECIMAL_RE.fullmatch(value):
        logger.warning("%s is not numeric (%r), using 0.0", field, value)
        return 0.0
    number = float(value)
    if not math.isfinite(number):
        logger.warning("%s is not finite (%r), using 0.0", field, value)
        return 0.0
    return number


def build_snapshot(
    pair: DexScreenerPair, now: datetime.datetime | None = None
) -> PriceSnapshot:
    timestamp = now or datetime.datetime.now(datetime.UTC)
    return PriceSnapshot(
        chain_type=pair.chain_id,
        price_usd=_to_float(pair.price_usd, "priceUsd"),
        price_native=_to_float(pair.price_native, "priceNative"),
        market_cap=_to_float(pair.market_cap, "marketCap"),
        fdv=_to_float(pair.fdv, "fdv"),
        last_updated=timestamp.isoformat(),
    )
