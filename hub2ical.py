"""Command line entry point: convert a CCC hub event page to an iCalendar file."""
import argparse
import json
import logging
import os
import sys
import time
from typing import List, Optional

from scraper.hub_event_page import HubEventScraper
from processor.event_builder import EventBuilder
from processor.exceptions import HubExportError
from processor.version import __version__
from storage.ics_writer import IcsWriter


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    EXTRA_FIELDS = ('url', 'output', 'year', 'error_type', 'duration_seconds')

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter on stderr.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='hub2ical',
        description="Chaos Communication Congress Self Organized Session to iCal Converter"
    )
    parser.add_argument(
        '-u', '--url', required=True,
        help="The URL of the CCC event (e.g., https://events.ccc.de/congress/2025/hub/...)"
    )
    parser.add_argument('-y', '--year', type=int, default=2025, help="Year of the congress")
    parser.add_argument('-o', '--output', default='event.ics', help="Output filename")
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    args = parser.parse_args(argv)

    try:
        args.timeout = int(os.environ.get('TIMEOUT_SECONDS', '30'))
    except ValueError:
        parser.error(f"TIMEOUT_SECONDS must be an integer, got {os.environ['TIMEOUT_SECONDS']!r}")

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """
    Fetch one hub event page and export it as an .ics file.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Process exit status, 0 on success and 1 on any failure
    """
    args = parse_args(argv)
    setup_logging(os.environ.get('LOG_LEVEL', 'INFO'))
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Conversion started",
        extra={'url': args.url, 'output': args.output, 'year': args.year}
    )

    try:
        scraper = HubEventScraper(timeout=args.timeout)
        builder = EventBuilder()
        writer = IcsWriter()

        fields = scraper.fetch_fields(args.url)
        event = builder.build_event(fields, args.year)
        writer.write(event, args.output)

    except HubExportError as e:
        logger.error(
            f"Conversion failed: {e}",
            extra={
                'error_type': type(e).__name__,
                'duration_seconds': round(time.time() - start_time, 2)
            }
        )
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.error(
            f"Unexpected failure: {e}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info(
        "Conversion completed successfully",
        extra={'duration_seconds': round(time.time() - start_time, 2)}
    )
    print(f"Event '{event.summary}' exported to {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
