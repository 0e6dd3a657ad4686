"""
Adapters layer - External sources of calendar events.
"""

from .calendar_file import CalendarFileClient

__all__ = ["CalendarFileClient"]
