from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PhaseReadingOut(BaseModel):
    phase_fraction: float = Field(ge=0.0, lt=1.0)
    age_days: float
    illuminated_fraction: float = Field(ge=0.0, le=1.0)
    name: str


class TodayOut(BaseModel):
    at: datetime
    reading: PhaseReadingOut
    timestamp_text: str
    date_text: str
    illum_text: str
    age_text: str


class ForecastCardOut(BaseModel):
    day: date
    name: str
    date_text: str
    illum_text: str
    phase_fraction: Optional[float] = None
    illuminated_fraction: Optional[float] = None


class PanelOut(BaseModel):
    panel: str
    expanded: bool
    toggle_label: str
    cards: int


class ForecastOut(BaseModel):
    days: List[ForecastCardOut]
