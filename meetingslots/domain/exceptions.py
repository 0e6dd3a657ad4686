"""
Domain-specific exception hierarchy for the meeting slot finder.

The slot finder itself never raises; these errors belong to the layers that
build its inputs.
"""


class SlotFinderError(Exception):
    """Base class for all application-level errors."""


class CalendarDataError(SlotFinderError):
    """Raised when calendar events cannot be loaded or validated."""


class InvalidMeetingRequestError(SlotFinderError, ValueError):
    """Raised when a meeting request cannot be built from user input."""


class ConfigurationError(SlotFinderError, ValueError):
    """Raised when the configuration file is missing required data or invalid."""
