from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from app.presenter import MoonPresenter
from app.runtime import get_presenter, ticker_running
from app.settings import settings


router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def moon_page(request: Request, presenter: MoonPresenter = Depends(get_presenter)):
    # without the background ticker each page load is the refresh trigger
    if not ticker_running():
        presenter.refresh()
    surface = presenter.surface
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "regions": surface.regions,
            "today_icon": Markup(surface.get("today_icon")),
            "cards": [(card, Markup(card.icon)) for card in surface.cards],
            "expanded": surface.forecast_visible,
            "refresh_seconds": int(settings.REFRESH_INTERVAL_SECONDS),
        },
    )


@router.post("/toggle", include_in_schema=False)
async def moon_page_toggle(presenter: MoonPresenter = Depends(get_presenter)):
    presenter.toggle()
    return RedirectResponse(url="/", status_code=303)
