"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import END_OF_DAY, START_OF_DAY, Event, MeetingRequest, TimeRange
from .slot_finder import MeetingSlotFinder, empty_time_ranges, free_slots

__all__ = [
    "END_OF_DAY",
    "START_OF_DAY",
    "Event",
    "MeetingRequest",
    "TimeRange",
    "MeetingSlotFinder",
    "empty_time_ranges",
    "free_slots",
]
