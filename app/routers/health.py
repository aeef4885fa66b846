from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from app.presenter import MoonPresenter
from app.runtime import get_presenter, get_ticker


router = APIRouter()


@router.get("/health", include_in_schema=False)
async def service_health(presenter: MoonPresenter = Depends(get_presenter)) -> Dict[str, Any]:
    ticker = get_ticker()
    snapshot: Optional[Dict[str, Any]] = ticker.snapshot() if ticker else None

    response: Dict[str, Any] = {
        "ok": True,
        "service": "moonphase-page",
        "time": datetime.now(timezone.utc).isoformat(),
        "ticker": bool(snapshot.get("running")) if snapshot else False,
        "surface": presenter.surface.snapshot(),
    }

    if snapshot is not None:
        response["monitor"] = snapshot

    return response
