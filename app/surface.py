from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from services.time.moon import PhaseReading


REGIONS = (
    "now",
    "today_icon",
    "today_label",
    "today_date",
    "today_illum",
    "today_age",
    "toggle",
)

# Regions whose value is SVG/HTML markup rather than plain text.
MARKUP_REGIONS = frozenset({"today_icon"})


class MissingRegionError(KeyError):
    """Raised when a render targets a region the surface does not have."""


@dataclass
class ForecastCard:
    day: date
    icon: str
    label: str
    date_text: str
    illum_text: str
    reading: Optional[PhaseReading] = None


@dataclass
class DisplaySurface:
    """Named regions the presenter writes into; the page renders them as-is."""

    regions: Dict[str, str] = field(default_factory=lambda: {name: "" for name in REGIONS})
    forecast_visible: bool = False
    cards: List[ForecastCard] = field(default_factory=list)

    def _require(self, name: str) -> None:
        if name not in self.regions:
            raise MissingRegionError(name)

    def set_text(self, name: str, text: str) -> None:
        self._require(name)
        self.regions[name] = text

    def set_markup(self, name: str, markup: str) -> None:
        self._require(name)
        self.regions[name] = markup

    def get(self, name: str) -> str:
        self._require(name)
        return self.regions[name]

    def clear_forecast(self) -> None:
        self.cards = []

    def append_card(self, card: ForecastCard) -> None:
        self.cards.append(card)

    def snapshot(self) -> Dict[str, object]:
        return {
            "regions": {k: v for k, v in self.regions.items() if k not in MARKUP_REGIONS},
            "forecast_visible": self.forecast_visible,
            "cards": len(self.cards),
        }
