"""iCalendar file writer for converted hub events."""
import logging
from datetime import datetime, timezone

from icalendar import Calendar, Event

from processor.exceptions import OutputError
from processor.models import CalendarEvent
from processor.version import __version__

logger = logging.getLogger(__name__)


class IcsWriter:
    """Serializes a single calendar event to an .ics file."""

    PRODID = f'-//hub2ical//CCC Hub Event {__version__}//EN'
    VERSION = '2.0'

    def build_calendar(self, event: CalendarEvent) -> Calendar:
        """
        Build a calendar containing only the given event.

        Args:
            event: Event to include

        Returns:
            icalendar Calendar with one VEVENT
        """
        cal = Calendar()
        cal.add('prodid', self.PRODID)
        cal.add('version', self.VERSION)

        ev = Event()
        ev.add('uid', event.uid)
        ev.add('dtstamp', datetime.now(timezone.utc))
        ev.add('summary', event.summary)
        ev.add('description', event.description)
        ev.add('dtstart', event.start)
        ev.add('dtend', event.end)
        ev.add('location', event.location)
        ev.add('status', event.status)
        cal.add_component(ev)

        return cal

    def write(self, event: CalendarEvent, path: str) -> None:
        """
        Write the event to path, replacing any existing file.

        Args:
            event: Event to serialize
            path: Destination file path

        Raises:
            OutputError: If the file cannot be created or written
        """
        data = self.build_calendar(event).to_ical()

        logger.info(f"Writing calendar to {path}", extra={'output': path})
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise OutputError(f"Failed to write {path}: {e}") from e

        logger.info(f"Wrote {len(data)} bytes to {path}", extra={'output': path})
