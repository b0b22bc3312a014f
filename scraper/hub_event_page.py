"""Scraper for a single event page on the CCC congress hub."""
import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from processor.exceptions import FormatError, TransportError
from processor.models import ExtractedFields, HubSelectors

logger = logging.getLogger(__name__)


class HubEventScraper:
    """Fetches a hub event page and pulls out the fields needed for a calendar entry."""

    DEFAULT_TITLE = "Unknown Event"
    TEXT_MEDIA_SUBSTRINGS = ('html', 'xml')

    def __init__(self, timeout: int = 30, selectors: Optional[HubSelectors] = None):
        """
        Initialize the hub event scraper.

        Args:
            timeout: HTTP request timeout in seconds (default: 30)
            selectors: CSS selectors for the page markup (default: current hub layout)
        """
        self.timeout = timeout
        self.selectors = selectors or HubSelectors()

    def fetch_fields(self, url: str) -> ExtractedFields:
        """
        Fetch an event page and extract its fields.

        Args:
            url: Address of the hub event page

        Returns:
            ExtractedFields for the event

        Raises:
            TransportError: If the page cannot be fetched as text
            FormatError: If the time or day element is missing
        """
        html_content = self._fetch_page_html(url)
        return self.parse_fields(html_content)

    def _fetch_page_html(self, url: str) -> str:
        """
        Fetch event page HTML in a single attempt.

        Args:
            url: Address of the hub event page

        Returns:
            HTML content as string

        Raises:
            TransportError: On any request failure, error status or non-text body
        """
        logger.info(f"Fetching event page {url}", extra={'url': url})
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Failed to fetch {url}: {e}") from e

        content_type = response.headers.get('Content-Type', '')
        if content_type and not self._is_text_media_type(content_type):
            raise TransportError(
                f"Expected a text page from {url}, got content type '{content_type}'"
            )

        return response.text

    def _is_text_media_type(self, content_type: str) -> bool:
        media_type = content_type.split(';')[0].strip().lower()
        if media_type.startswith('text/'):
            return True
        return any(part in media_type for part in self.TEXT_MEDIA_SUBSTRINGS)

    def parse_fields(self, html_content: str) -> ExtractedFields:
        """
        Extract event fields from page HTML.

        Title and description fall back to defaults when their elements are
        missing. Time and day are required.

        Args:
            html_content: HTML content of the event page

        Returns:
            ExtractedFields for the event

        Raises:
            FormatError: If the time or day element is missing
        """
        soup = BeautifulSoup(html_content, 'html.parser')

        title = self._select_text(soup, self.selectors.title)
        if title is None:
            title = self.DEFAULT_TITLE
        description = self._select_text(soup, self.selectors.description) or ''

        time_range = self._select_text(soup, self.selectors.time)
        if time_range is None:
            raise FormatError(
                f"Event page has no time element matching '{self.selectors.time}'"
            )

        day_label = self._select_text(soup, self.selectors.day)
        if day_label is None:
            raise FormatError(
                f"Event page has no day element matching '{self.selectors.day}'"
            )

        logger.info(f"Extracted fields for event '{title}'")
        return ExtractedFields(
            title=title,
            description=description,
            time_range=time_range,
            day_label=day_label
        )

    @staticmethod
    def _select_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
        """
        Return whitespace-collapsed text of the first element matching selector.

        Returns:
            Text of the element, or None if nothing matches
        """
        element = soup.select_one(selector)
        if element is None:
            return None
        return ' '.join(element.get_text().split())
