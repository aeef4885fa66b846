from __future__ import annotations

import logging
from typing import Optional

from .presenter import MoonPresenter
from .settings import settings
from .ticker import RefreshTicker


logger = logging.getLogger(__name__)

_presenter: Optional[MoonPresenter] = None
_ticker: Optional[RefreshTicker] = None


def get_presenter() -> MoonPresenter:
    """FastAPI dependency returning the process-wide presenter (rendered once on creation)."""
    global _presenter
    if _presenter is None:
        _presenter = MoonPresenter.from_settings(settings)
        _presenter.render_current()
        logger.info("[MOON] presenter ready (zone=%s)", settings.MOON_TIMEZONE or "local")
    return _presenter


def get_ticker() -> Optional[RefreshTicker]:
    return _ticker


def ticker_running() -> bool:
    return _ticker is not None and _ticker.running


async def ensure_ticker_started() -> Optional[RefreshTicker]:
    global _ticker
    if not settings.START_TICKER:
        logger.info("[TICKER] disabled by START_TICKER")
        return None
    presenter = get_presenter()
    if _ticker is None:
        _ticker = RefreshTicker(presenter.refresh, settings.REFRESH_INTERVAL_SECONDS)
    await _ticker.start()
    return _ticker


async def stop_ticker() -> None:
    ticker = _ticker
    if ticker is not None:
        await ticker.stop()
