import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from pricefeed.config.settings import Settings, get_settings
from pricefeed.schemas.price import ErrorResponse, PriceSnapshot
from pricefeed.storage.snapshot_file import SnapshotFileError, read_snapshot

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
def health() -> dict:
    return {
        "status": "ok",
        "message": "API is running",
        "endpoints": {"health": "/", "prices": "/prices"},
    }


@router.get("/prices", response_model=PriceSnapshot)
def get_prices(settings: Settings = Depends(get_settings)) -> PriceSnapshot:
    # Re-read on every request; the fetcher process owns the file.
    return read_snapshot(settings.prices_file)


async def snapshot_error_handler(request: Request, exc: SnapshotFileError) -> JSONResponse:
    logger.warning("Serving %s for %s: %s", exc.error_code, request.url.path, exc.detail)
    body = ErrorResponse(error=exc.error_code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())
