from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from app.models import ForecastCardOut, ForecastOut, PanelOut, PhaseReadingOut, TodayOut
from app.presenter import MoonPresenter
from app.runtime import get_presenter
from services.time.calendar import (
    format_age,
    format_long_date,
    format_percent,
    format_timestamp,
)
from services.time.moon import PhaseReading, classify_phase, compute_phase
from services.visuals.moon_icon import DEFAULT_SIZE, build_icon


router = APIRouter(prefix="/v1/moon")

logger = logging.getLogger(__name__)


def _reading_out(reading: PhaseReading) -> PhaseReadingOut:
    return PhaseReadingOut(
        phase_fraction=reading.phase_fraction,
        age_days=reading.age_days,
        illuminated_fraction=reading.illuminated_fraction,
        name=classify_phase(reading.phase_fraction),
    )


def _panel_out(presenter: MoonPresenter) -> PanelOut:
    return PanelOut(
        panel=presenter.state.panel.value,
        expanded=presenter.state.expanded,
        toggle_label=presenter.state.toggle_label,
        cards=len(presenter.surface.cards),
    )


def _ok(model) -> Dict[str, Any]:
    return {"ok": True, "data": model.model_dump(mode="json"), "error": None}


@router.get("/today")
async def moon_today(presenter: MoonPresenter = Depends(get_presenter)) -> Dict[str, Any]:
    now = presenter.now()
    reading = compute_phase(now)
    return _ok(
        TodayOut(
            at=now,
            reading=_reading_out(reading),
            timestamp_text=format_timestamp(now),
            date_text=format_long_date(now),
            illum_text=format_percent(reading.illuminated_fraction),
            age_text=format_age(reading.age_days),
        )
    )


@router.get("/forecast")
async def moon_forecast(presenter: MoonPresenter = Depends(get_presenter)) -> Dict[str, Any]:
    days = [
        ForecastCardOut(
            day=card.day,
            name=card.label,
            date_text=card.date_text,
            illum_text=card.illum_text,
            phase_fraction=card.reading.phase_fraction if card.reading else None,
            illuminated_fraction=card.reading.illuminated_fraction if card.reading else None,
        )
        for card in presenter.forecast_cards()
    ]
    return _ok(ForecastOut(days=days))


@router.get("/phase")
async def moon_phase_at(at: Optional[str] = None, presenter: MoonPresenter = Depends(get_presenter)):
    if at:
        try:
            when = datetime.fromisoformat(at.replace("Z", "+00:00"))
        except ValueError as exc:
            logger.info("[MOON] rejected phase query at=%r", at)
            return JSONResponse(
                status_code=400,
                content={"ok": False, "data": None, "error": f"invalid 'at': {exc}"},
            )
    else:
        when = presenter.now()
    return _ok(_reading_out(compute_phase(when)))


@router.get("/panel")
async def moon_panel(presenter: MoonPresenter = Depends(get_presenter)) -> Dict[str, Any]:
    return _ok(_panel_out(presenter))


@router.post("/toggle")
async def moon_toggle(presenter: MoonPresenter = Depends(get_presenter)) -> Dict[str, Any]:
    presenter.toggle()
    return _ok(_panel_out(presenter))


@router.get("/icon.svg")
async def moon_icon(
    phase: float = Query(..., ge=0.0, lt=1.0),
    size: int = Query(DEFAULT_SIZE, gt=0, le=2048),
) -> Response:
    svg = build_icon(phase, size, scope="api").strip()
    return Response(content=svg, media_type="image/svg+xml")
