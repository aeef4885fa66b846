import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest
from zoneinfo import ZoneInfo

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.presenter import (
    HIDE_FORECAST_LABEL,
    SHOW_FORECAST_LABEL,
    MoonPresenter,
    PanelState,
)
from app.surface import DisplaySurface, MissingRegionError
from app.ticker import RefreshTicker


NEW_YORK = ZoneInfo("America/New_York")


class _Clock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def _presenter(start: datetime = datetime(2024, 4, 23, 19, 49, tzinfo=NEW_YORK)):
    clock = _Clock(start)
    return MoonPresenter(clock=clock, zone=NEW_YORK), clock


def test_initial_state_is_collapsed() -> None:
    presenter, _ = _presenter()
    assert presenter.state.panel is PanelState.COLLAPSED
    assert presenter.surface.get("toggle") == SHOW_FORECAST_LABEL
    assert presenter.surface.forecast_visible is False
    assert presenter.surface.cards == []


def test_render_current_fills_every_region() -> None:
    presenter, _ = _presenter()
    presenter.render_current()
    surface = presenter.surface
    assert surface.get("now") == "4/23/2024, 7:49:00 PM"
    assert surface.get("today_label") == "Full Moon"
    assert surface.get("today_date") == "Tue, Apr 23, 2024"
    assert surface.get("today_illum").endswith("%")
    assert float(surface.get("today_illum").rstrip("%")) > 99.0
    assert surface.get("today_age").endswith(" days")
    assert surface.get("today_icon").strip().startswith("<svg")
    assert 'width="160"' in surface.get("today_icon")


def test_toggle_expands_and_renders_forecast() -> None:
    presenter, _ = _presenter()
    assert presenter.toggle() is PanelState.EXPANDED
    surface = presenter.surface
    assert surface.forecast_visible is True
    assert surface.get("toggle") == HIDE_FORECAST_LABEL
    assert len(surface.cards) == 7
    assert [c.day for c in surface.cards] == [date(2024, 4, 23) + timedelta(days=i) for i in range(1, 8)]
    first = surface.cards[0]
    assert first.date_text == "Wed, Apr 24"
    assert first.illum_text.endswith("% lit")
    assert 'width="120"' in first.icon


def test_forecast_icons_use_distinct_ids() -> None:
    presenter, _ = _presenter()
    cards = presenter.forecast_cards()
    icons = [c.icon for c in cards]
    assert len(set(icons)) == 7


def test_toggle_twice_restores_state() -> None:
    presenter, _ = _presenter()
    before = (presenter.state.panel, presenter.surface.get("toggle"), presenter.surface.forecast_visible)
    presenter.toggle()
    presenter.toggle()
    after = (presenter.state.panel, presenter.surface.get("toggle"), presenter.surface.forecast_visible)
    assert before == after


def test_forecast_across_dst_uses_calendar_dates() -> None:
    presenter, _ = _presenter(datetime(2024, 3, 8, 15, 0, tzinfo=NEW_YORK))
    presenter.toggle()
    assert [c.day for c in presenter.surface.cards] == [date(2024, 3, d) for d in range(9, 16)]
    assert [c.date_text for c in presenter.surface.cards][:3] == ["Sat, Mar 9", "Sun, Mar 10", "Mon, Mar 11"]


def test_refresh_only_renders_forecast_when_expanded() -> None:
    presenter, clock = _presenter()
    presenter.refresh()
    assert presenter.surface.cards == []

    presenter.toggle()
    clock.advance(days=1)
    presenter.refresh()
    assert presenter.surface.cards[0].day == date(2024, 4, 25)
    assert presenter.surface.get("today_date") == "Wed, Apr 24, 2024"


def test_ticker_drives_refresh_with_simulated_time() -> None:
    presenter, clock = _presenter(datetime(2024, 4, 23, 23, 59, 30, tzinfo=NEW_YORK))
    presenter.render_current()
    ticker = RefreshTicker(presenter.refresh, 60)

    clock.advance(seconds=59)
    assert ticker.advance(59) == 0
    assert presenter.surface.get("today_date") == "Tue, Apr 23, 2024"

    clock.advance(seconds=1)
    assert ticker.advance(1) == 1
    assert presenter.surface.get("today_date") == "Wed, Apr 24, 2024"


def test_missing_region_fails_loudly() -> None:
    surface = DisplaySurface(regions={"now": ""})
    with pytest.raises(MissingRegionError):
        MoonPresenter(surface, clock=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc))


def test_unknown_region_write_raises() -> None:
    surface = DisplaySurface()
    with pytest.raises(KeyError):
        surface.set_text("sidebar", "nope")
