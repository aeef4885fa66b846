from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, List, Optional

from services.time.calendar import (
    following_days,
    format_age,
    format_long_date,
    format_percent,
    format_short_date,
    format_timestamp,
    local_now,
    resolve_zone,
)
from services.time.moon import classify_phase, compute_phase
from services.visuals.moon_icon import build_icon

from .settings import Settings, settings as default_settings
from .surface import DisplaySurface, ForecastCard


logger = logging.getLogger(__name__)

SHOW_FORECAST_LABEL = "▶ Next 7 Days"
HIDE_FORECAST_LABEL = "▼ Hide Next 7 Days"


class PanelState(str, enum.Enum):
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dataclass
class AppState:
    panel: PanelState = PanelState.COLLAPSED
    toggle_label: str = SHOW_FORECAST_LABEL

    @property
    def expanded(self) -> bool:
        return self.panel is PanelState.EXPANDED


class MoonPresenter:
    """Owns the panel state and writes phase readings into a display surface."""

    def __init__(
        self,
        surface: Optional[DisplaySurface] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        zone: Optional[tzinfo] = None,
        today_icon_size: int = 160,
        forecast_icon_size: int = 120,
        forecast_days: int = 7,
    ) -> None:
        self.surface = surface if surface is not None else DisplaySurface()
        self.state = AppState()
        self.zone = zone
        self._clock = clock or (lambda: local_now(self.zone))
        self.today_icon_size = today_icon_size
        self.forecast_icon_size = forecast_icon_size
        self.forecast_days = forecast_days
        self.surface.set_text("toggle", self.state.toggle_label)
        self.surface.forecast_visible = False

    @classmethod
    def from_settings(cls, cfg: Settings = default_settings, **kwargs) -> "MoonPresenter":
        return cls(
            zone=resolve_zone(cfg.MOON_TIMEZONE),
            today_icon_size=cfg.TODAY_ICON_SIZE,
            forecast_icon_size=cfg.FORECAST_ICON_SIZE,
            **kwargs,
        )

    def now(self) -> datetime:
        return self._clock()

    def render_current(self) -> None:
        now = self.now()
        reading = compute_phase(now)
        surface = self.surface
        surface.set_text("now", format_timestamp(now))
        surface.set_markup(
            "today_icon",
            build_icon(reading.phase_fraction, self.today_icon_size, scope="today"),
        )
        surface.set_text("today_label", classify_phase(reading.phase_fraction))
        surface.set_text("today_date", format_long_date(now))
        surface.set_text("today_illum", format_percent(reading.illuminated_fraction))
        surface.set_text("today_age", format_age(reading.age_days))

    def forecast_cards(self) -> List[ForecastCard]:
        cards: List[ForecastCard] = []
        for i, day in enumerate(following_days(self.now(), self.forecast_days, self.zone), start=1):
            reading = compute_phase(day)
            cards.append(
                ForecastCard(
                    day=day.date(),
                    icon=build_icon(reading.phase_fraction, self.forecast_icon_size, scope=f"day{i}"),
                    label=classify_phase(reading.phase_fraction),
                    date_text=format_short_date(day),
                    illum_text=f"{format_percent(reading.illuminated_fraction)} lit",
                    reading=reading,
                )
            )
        return cards

    def render_forecast(self) -> None:
        self.surface.clear_forecast()
        for card in self.forecast_cards():
            self.surface.append_card(card)

    def toggle(self) -> PanelState:
        show = not self.state.expanded
        self.state.panel = PanelState.EXPANDED if show else PanelState.COLLAPSED
        self.state.toggle_label = HIDE_FORECAST_LABEL if show else SHOW_FORECAST_LABEL
        self.surface.forecast_visible = show
        self.surface.set_text("toggle", self.state.toggle_label)
        if show:
            self.render_forecast()
        logger.info("[MOON] forecast panel %s", self.state.panel.value)
        return self.state.panel

    def refresh(self) -> None:
        self.render_current()
        if self.state.expanded:
            self.render_forecast()
