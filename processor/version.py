"""Release version of hub2ical."""

__version__ = '2025.1'
