from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from pricefeed.config.logging_config import configure_logging
from pricefeed.config.settings import Settings, get_settings
from pricefeed.providers.dexscreener import build_snapshot, fetch_pairs, select_first_pair
from pricefeed.providers.errors import FetchError
from pricefeed.schemas.price import PriceSnapshot
from pricefeed.storage.snapshot_file import write_snapshot

logger = logging.getLogger(__name__)


def fetch_and_save(settings: Settings) -> PriceSnapshot:
    response = fetch_pairs(settings)
    pair = select_first_pair(response)
    snapshot = build_snapshot(pair)
    write_snapshot(settings.prices_file, snapshot)
    return snapshot


def run_once(settings: Settings) -> bool:
    """Run a single fetch-and-save tick. Failures are logged, never raised."""
    logger.info("⏰ Fetching price data for %s", settings.token_address)
    try:
        snapshot = fetch_and_save(settings)
    except FetchError as exc:
        logger.error("❌ Price fetch failed [%s]: %s", exc.kind, exc)
        return False
    except OSError as exc:
        logger.error("❌ Could not write %s: %s", settings.prices_file, exc)
        return False

    logger.info(
        "✅ Saved price: $%s on chain %s", snapshot.price_usd, snapshot.chain_type
    )
    return True


async def poll_forever(
    settings: Settings,
    stop_event: asyncio.Event | None = None,
    max_ticks: int | None = None,
) -> int:
    """Call ``run_once`` on a fixed cadence until stopped. Returns the tick count.

    The first tick runs immediately. Ticks missed because an attempt overran
    the interval are skipped, not replayed.
    """
    stop = stop_event or asyncio.Event()
    loop = asyncio.get_running_loop()
    interval = settings.poll_interval_seconds
    started = loop.time()
    ticks = 0

    while not stop.is_set():
        await asyncio.to_thread(run_once, settings)
        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            break

        elapsed_ticks = int((loop.time() - started) // interval)
        delay = started + (elapsed_ticks + 1) * interval - loop.time()
        try:
            await asyncio.wait_for(stop.wait(), timeout=max(delay, 0.0))
        except TimeoutError:
            continue

    return ticks


async def _run(settings: Settings) -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)
    await poll_forever(settings, stop_event=stop)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "🚀 Worker starting: polling every %ss, saving to %s",
        settings.poll_interval_seconds,
        settings.prices_file,
    )
    asyncio.run(_run(settings))
    logger.info("Worker stopped")


if __name__ == "__main__":
    main()
