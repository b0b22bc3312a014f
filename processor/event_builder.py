"""Builds a calendar event from scraped hub fields."""
import hashlib
import logging
import re
from datetime import datetime
from typing import Tuple

from processor.exceptions import DateError, FormatError
from processor.models import CalendarEvent, ExtractedFields

logger = logging.getLogger(__name__)


class EventBuilder:
    """Turns a time range and relative day label into absolute event times."""

    # Day of December on which "Day 0" of the congress falls
    BASE_DAY = 26
    MONTH = 12
    LOCATION = "CCH Hamburg"
    STATUS = "CONFIRMED"
    DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'
    MIN_OFFSET = -128
    MAX_OFFSET = 127
    DAY_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+")
    TIME_PATTERN = re.compile(r"[0-9]{1,2}:[0-9]{2}")

    def build_event(self, fields: ExtractedFields, year: int) -> CalendarEvent:
        """
        Build a calendar event for the given year.

        Args:
            fields: Fields extracted from the event page
            year: Year the congress takes place in

        Returns:
            CalendarEvent with absolute start and end times

        Raises:
            FormatError: If the time range or day label cannot be parsed
            DateError: If the resulting date or time is invalid
        """
        start_time, end_time = self.parse_time_range(fields.time_range)
        offset = self.parse_day_offset(fields.day_label)
        start, end = self.reconstruct_dates(year, offset, start_time, end_time)

        logger.info(
            f"Event '{fields.title}' scheduled {start.isoformat()} to {end.isoformat()}"
        )

        return CalendarEvent(
            uid=self.generate_event_uid(fields.title, start, end),
            summary=fields.title,
            description=fields.description,
            start=start,
            end=end,
            location=self.LOCATION,
            status=self.STATUS
        )

    def parse_time_range(self, time_text: str) -> Tuple[str, str]:
        """
        Parse time range from text.

        Args:
            time_text: Time text (e.g., "14:00 - 15:30")

        Returns:
            Tuple of (start_time, end_time)

        Raises:
            FormatError: If the text does not contain a start and an end time
        """
        parts = [part.strip() for part in time_text.split('-')]
        if len(parts) < 2:
            raise FormatError(f"Time range '{time_text}' is not of the form 'HH:MM - HH:MM'")

        start_time, end_time = parts[0], parts[1]
        if not start_time or not end_time:
            raise FormatError(f"Time range '{time_text}' is missing a start or end time")
        for part in (start_time, end_time):
            if not self.TIME_PATTERN.fullmatch(part):
                raise FormatError(f"Time '{part}' in '{time_text}' is not of the form HH:MM")

        return start_time, end_time

    def parse_day_offset(self, day_label: str) -> int:
        """
        Parse the day offset from the last token of a day label.

        Args:
            day_label: Day text (e.g., "Day 2")

        Returns:
            Integer day offset

        Raises:
            FormatError: If the last token is missing or not a small integer
        """
        tokens = day_label.split()
        if not tokens:
            raise FormatError("Day label is empty")

        if not self.DAY_NUMBER_PATTERN.fullmatch(tokens[-1]):
            raise FormatError(f"Day label '{day_label}' does not end in a day number")
        offset = int(tokens[-1])

        if not self.MIN_OFFSET <= offset <= self.MAX_OFFSET:
            raise FormatError(f"Day offset {offset} in '{day_label}' is out of range")

        return offset

    def reconstruct_dates(
        self, year: int, offset: int, start_time: str, end_time: str
    ) -> Tuple[datetime, datetime]:
        """
        Combine year, day offset and times of day into naive timestamps.

        No rollover into January: a day past the end of December is an error.

        Args:
            year: Year of the event
            offset: Day offset added to BASE_DAY
            start_time: Start time in HH:MM form
            end_time: End time in HH:MM form

        Returns:
            Tuple of (start, end) datetimes

        Raises:
            DateError: If the composed date or either time is invalid
        """
        if year <= 0:
            raise DateError(f"Invalid year: {year}")

        day = self.BASE_DAY + offset
        return (
            self._parse_datetime(year, day, start_time),
            self._parse_datetime(year, day, end_time)
        )

    def _parse_datetime(self, year: int, day: int, time_str: str) -> datetime:
        date_str = f"{year}-{self.MONTH}-{day} {time_str}:00"
        if not date_str.isascii():
            raise DateError(f"Invalid date '{date_str}': non-ASCII characters")
        try:
            return datetime.strptime(date_str, self.DATETIME_FORMAT)
        except ValueError as e:
            raise DateError(f"Invalid date '{date_str}': {e}") from e

    def generate_event_uid(self, title: str, start: datetime, end: datetime) -> str:
        """
        Generate a stable UID from title and times.

        Args:
            title: Event title
            start: Event start
            end: Event end

        Returns:
            SHA256-based UID, identical for identical input
        """
        composite = f"{title}|{start.isoformat()}|{end.isoformat()}"
        hash_obj = hashlib.sha256(composite.encode('utf-8'))
        return f"{hash_obj.hexdigest()}@hub2ical"
