"""Errors raised while converting a hub event page to a calendar file."""


class HubExportError(Exception):
    """Base class for all conversion failures."""


class TransportError(HubExportError):
    """The event page could not be fetched as text."""


class FormatError(HubExportError):
    """A required element is missing or its text has an unexpected shape."""


class DateError(HubExportError):
    """The reconstructed date or time is not a valid calendar timestamp."""


class OutputError(HubExportError):
    """The calendar file could not be written."""
