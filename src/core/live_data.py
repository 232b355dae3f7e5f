# src/core/live_data.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

import requests

from src.config import settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Data model
# ---------------------------------------------------------


@dataclass(slots=True)
class PriceQuote:
    btc_price_usd: float
    source: str
    as_of_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class LiveDataError(RuntimeError):
    """Raised when live data cannot be fetched."""


def _get_json(url: str, params: dict | None = None) -> dict:
    resp = requests.get(
        url,
        params=params,
        headers={"User-Agent": settings.LIVE_DATA_USER_AGENT},
        timeout=settings.LIVE_DATA_REQUEST_TIMEOUT_S,
    )
    resp.raise_for_status()
    return resp.json()


def _fetch_coingecko() -> float:
    data = _get_json(
        settings.COINGECKO_SIMPLE_PRICE_URL,
        params={"ids": "bitcoin", "vs_currencies": "usd"},
    )
    return float(data["bitcoin"]["usd"])


def _fetch_coinbase() -> float:
    data = _get_json(settings.COINBASE_SPOT_PRICE_URL, params={"currency": "USD"})
    return float(data["data"]["amount"])


# ---------------------------------------------------------
# Public API
# ---------------------------------------------------------


def fetch_btc_price_usd() -> PriceQuote:
    """
    Fetch the BTC spot price in USD from CoinGecko, with Coinbase as a
    quick fallback.

    UI code is responsible for caching (st.cache_data) and for falling back
    to static defaults when LiveDataError is raised.
    """
    errors = []
    for source, fetch in (("coingecko", _fetch_coingecko), ("coinbase", _fetch_coinbase)):
        try:
            price = fetch()
        except (requests.RequestException, KeyError, TypeError, ValueError) as exc:
            logger.warning("BTC price fetch from %s failed: %s", source, exc)
            errors.append(f"{source}: {exc}")
            continue
        if price <= 0:
            errors.append(f"{source}: non-positive price {price}")
            continue
        return PriceQuote(btc_price_usd=price, source=source)

    raise LiveDataError(f"Failed to fetch BTC price ({'; '.join(errors)})")


def get_btc_price_or_default() -> tuple[float, bool]:
    """
    Return (price, is_live). Falls back to DEFAULT_BTC_PRICE_USD when every
    live source fails.
    """
    try:
        quote = fetch_btc_price_usd()
    except LiveDataError as exc:
        logger.warning(
            "Using static BTC price %.0f instead of live data (%s)",
            settings.DEFAULT_BTC_PRICE_USD,
            exc,
        )
        return float(settings.DEFAULT_BTC_PRICE_USD), False
    return quote.btc_price_usd, True
