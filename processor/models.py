"""Data models for hub event conversion."""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class HubSelectors:
    """CSS selectors locating event fields on a hub event page."""
    title: str = '.hub-head-main'
    description: str = '.hub-text'
    time: str = '.hub-event-details__time'
    day: str = '.hub-event-details__day'


@dataclass
class ExtractedFields:
    """Raw text fields scraped from a hub event page."""
    title: str
    description: str
    time_range: str
    day_label: str


@dataclass(frozen=True)
class CalendarEvent:
    """Single calendar event ready to be serialized."""
    uid: str
    summary: str
    description: str
    start: datetime
    end: datetime
    location: str
    status: str
