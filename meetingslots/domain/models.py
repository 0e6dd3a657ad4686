"""
Domain models for time-of-day ranges, events and meeting requests.

All times are integer minutes from midnight on a 24-hour clock.
"""

from dataclasses import dataclass, field
from typing import ClassVar, FrozenSet, Iterable

START_OF_DAY = 0
END_OF_DAY = 24 * 60


def get_time_in_minutes(hours: int, minutes: int) -> int:
    """Convert a wall-clock time into minutes from midnight."""
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Render minutes from midnight as HH:MM (1440 renders as 24:00)."""
    hours, rest = divmod(minutes, 60)
    return f"{hours:02d}:{rest:02d}"


@dataclass(frozen=True, order=True)
class TimeRange:
    """
    Represents an immutable range of minutes within a single day.

    Ranges are half-open: ``start`` is contained, ``end`` is not. A range built
    with ``inclusive_end=True`` reaches the day boundary and also contains
    ``end``. The flag does not take part in equality or ordering, which are by
    ``(start, end)`` only.
    """
    start: int
    end: int
    inclusive_end: bool = field(default=False, compare=False)

    WHOLE_DAY: ClassVar["TimeRange"]

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool = False) -> "TimeRange":
        """Create a range from its bounds."""
        return cls(start=start, end=end, inclusive_end=inclusive)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Create a half-open range starting at ``start`` lasting ``duration`` minutes."""
        return cls(start=start, end=start + duration)

    @property
    def duration(self) -> int:
        """Return the length of the range in minutes."""
        return self.end - self.start

    def contains(self, other: "TimeRange | int") -> bool:
        """
        Check whether a point in time or a whole range lies inside this range.
        """
        if isinstance(other, TimeRange):
            if other.start < self.start:
                return False
            if other.inclusive_end and not self.inclusive_end:
                return other.end < self.end
            return other.end <= self.end

        if self.inclusive_end:
            return self.start <= other <= self.end
        return self.start <= other < self.end

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range shares at least one minute with another."""
        return self.start < other.end and other.start < self.end

    @staticmethod
    def ORDER_BY_START(time_range: "TimeRange") -> tuple:
        """Sort key ordering ranges by start, then end."""
        return (time_range.start, time_range.end)

    @staticmethod
    def ORDER_BY_END(time_range: "TimeRange") -> tuple:
        """Sort key ordering ranges by end, then start."""
        return (time_range.end, time_range.start)

    def __str__(self) -> str:
        closing = "]" if self.inclusive_end else ")"
        return f"[{format_minutes(self.start)}-{format_minutes(self.end)}{closing}"


TimeRange.WHOLE_DAY = TimeRange(START_OF_DAY, END_OF_DAY)


def _as_frozenset(values: Iterable[str]) -> FrozenSet[str]:
    # a lone name is one attendee, not a set of characters
    if isinstance(values, str):
        return frozenset([values])
    return values if isinstance(values, frozenset) else frozenset(values)


@dataclass(frozen=True)
class Event:
    """
    An already scheduled event: when it happens and who attends it.
    """
    title: str
    when: TimeRange
    attendees: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "attendees", _as_frozenset(self.attendees))


@dataclass(frozen=True)
class MeetingRequest:
    """
    A request for a meeting slot.

    ``attendees`` must all be free. ``optional_attendees`` are honored only if
    at least one slot exists for everybody.
    """
    attendees: FrozenSet[str]
    duration: int
    optional_attendees: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "attendees", _as_frozenset(self.attendees))
        object.__setattr__(
            self, "optional_attendees", _as_frozenset(self.optional_attendees)
        )

    @property
    def all_attendees(self) -> FrozenSet[str]:
        return self.attendees | self.optional_attendees

    def with_optional_attendee(self, attendee: str) -> "MeetingRequest":
        """Return a copy of the request with one more optional attendee."""
        return MeetingRequest(
            attendees=self.attendees,
            duration=self.duration,
            optional_attendees=self.optional_attendees | {attendee},
        )
