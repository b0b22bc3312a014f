"""Unit tests for IcsWriter."""
from datetime import datetime
from unittest.mock import patch

import pytest
from icalendar import Calendar

from processor.exceptions import OutputError
from processor.models import CalendarEvent
from processor.version import __version__
from storage.ics_writer import IcsWriter


@pytest.fixture
def sample_event():
    """Create a sample calendar event."""
    return CalendarEvent(
        uid='abc123@hub2ical',
        summary='Session: Rust for Systems',
        description='A talk about ownership.',
        start=datetime(2025, 12, 28, 14, 0, 0),
        end=datetime(2025, 12, 28, 15, 30, 0),
        location='CCH Hamburg',
        status='CONFIRMED'
    )


def strip_dtstamp(data: bytes) -> bytes:
    return b"\r\n".join(
        line for line in data.split(b"\r\n") if not line.startswith(b"DTSTAMP")
    )


class TestIcsWriter:
    """Test cases for IcsWriter class."""

    def test_build_calendar_single_event(self, sample_event):
        """Test that the calendar holds exactly one fully populated event."""
        cal = IcsWriter().build_calendar(sample_event)

        events = cal.walk('VEVENT')
        assert len(events) == 1
        ev = events[0]
        assert ev['SUMMARY'] == 'Session: Rust for Systems'
        assert ev['DESCRIPTION'] == 'A talk about ownership.'
        assert ev['LOCATION'] == 'CCH Hamburg'
        assert ev['STATUS'] == 'CONFIRMED'
        assert ev['UID'] == 'abc123@hub2ical'
        assert ev.decoded('DTSTART') == datetime(2025, 12, 28, 14, 0, 0)
        assert ev.decoded('DTEND') == datetime(2025, 12, 28, 15, 30, 0)
        assert 'DTSTAMP' in ev
        assert cal['VERSION'] == '2.0'
        assert cal['PRODID'] == f'-//hub2ical//CCC Hub Event {__version__}//EN'

    def test_write_creates_file(self, sample_event, tmp_path):
        """Test writing the calendar to disk."""
        output = tmp_path / 'event.ics'

        IcsWriter().write(sample_event, str(output))

        data = output.read_bytes()
        assert data.startswith(b"BEGIN:VCALENDAR")
        assert b"DTSTART:20251228T140000" in data
        assert b"DTEND:20251228T153000" in data
        assert b"STATUS:CONFIRMED" in data

        parsed = Calendar.from_ical(data)
        assert len(parsed.walk('VEVENT')) == 1

    def test_write_overwrites_existing_file(self, sample_event, tmp_path):
        """Test that an existing file is replaced."""
        output = tmp_path / 'event.ics'
        output.write_text('stale content that is longer than nothing ' * 100)

        IcsWriter().write(sample_event, str(output))

        data = output.read_bytes()
        assert b"stale content" not in data
        assert data.rstrip().endswith(b"END:VCALENDAR")

    def test_write_is_repeatable(self, sample_event, tmp_path):
        """Test that two writes differ at most in the generation timestamp."""
        first = tmp_path / 'first.ics'
        second = tmp_path / 'second.ics'
        writer = IcsWriter()

        writer.write(sample_event, str(first))
        writer.write(sample_event, str(second))

        assert strip_dtstamp(first.read_bytes()) == strip_dtstamp(second.read_bytes())

    def test_write_empty_description(self, sample_event, tmp_path):
        """Test that an empty description is still emitted."""
        output = tmp_path / 'event.ics'
        event = CalendarEvent(
            uid=sample_event.uid,
            summary=sample_event.summary,
            description='',
            start=sample_event.start,
            end=sample_event.end,
            location=sample_event.location,
            status=sample_event.status
        )

        IcsWriter().write(event, str(output))

        ev = Calendar.from_ical(output.read_bytes()).walk('VEVENT')[0]
        assert ev.get('DESCRIPTION', '') == ''

    def test_write_missing_directory_raises(self, sample_event, tmp_path):
        """Test that an unwritable path raises OutputError."""
        output = tmp_path / 'missing' / 'event.ics'

        with pytest.raises(OutputError):
            IcsWriter().write(sample_event, str(output))

        assert not output.exists()

    def test_write_os_error_raises(self, sample_event, tmp_path):
        """Test that write failures are wrapped in OutputError."""
        output = tmp_path / 'event.ics'

        with patch('builtins.open', side_effect=PermissionError('denied')):
            with pytest.raises(OutputError, match='denied'):
                IcsWriter().write(sample_event, str(output))
