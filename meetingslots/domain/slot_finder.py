"""
Core business logic for finding free meeting slots within a day.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import enum
import logging
from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Tuple

from .models import END_OF_DAY, START_OF_DAY, Event, MeetingRequest, TimeRange

logger = logging.getLogger(__name__)


class PointType(enum.IntEnum):
    # START sorts before END at the same instant
    START = 0
    END = 1


@dataclass(frozen=True, order=True)
class SweepPoint:
    """One end of a busy segment on the time line."""
    time: int
    type: PointType


def event_points(event: Event) -> List[SweepPoint]:
    """Return the START and END points of an event."""
    return [
        SweepPoint(event.when.start, PointType.START),
        SweepPoint(event.when.end, PointType.END),
    ]


def empty_time_ranges(
    points: Iterable[SweepPoint],
    first_point: int,
    last_point: int,
    min_length: int,
) -> List[TimeRange]:
    """
    Find all ranges between ``first_point`` and ``last_point`` that are not
    covered by any segment and are at least ``min_length`` minutes long.

    Each segment is given by its START and END points. Free ranges can only
    begin where a segment ends (or at ``first_point``) and only finish where a
    segment starts (or at ``last_point``), so a single pass over the sorted
    points is enough:

    - keep a counter of currently open segments
    - on START, the range since the previous point was free if no segment was
      open; emit it if it is long enough
    - on END, close one segment

    Points are ordered by time with START before END at equal times, so two
    back-to-back segments never leave a zero-length gap between them.
    The trailing range up to ``last_point`` is emitted with an inclusive end.
    """
    open_segments = 0
    last_time = first_point
    free_ranges: List[TimeRange] = []

    for point in sorted(points):
        if point.type is PointType.START:
            if open_segments == 0 and point.time - last_time >= min_length:
                free_ranges.append(TimeRange.from_start_end(last_time, point.time))
            open_segments += 1
        else:
            open_segments -= 1
        last_time = point.time

    # Free time between the last busy segment and the end of the day
    if last_point - last_time >= min_length:
        free_ranges.append(
            TimeRange.from_start_end(last_time, last_point, inclusive=True)
        )

    return free_ranges


def have_common_attendee(first: Iterable[str], second: AbstractSet[str]) -> bool:
    """Return True as soon as an item of ``first`` is found in ``second``."""
    for attendee in first:
        if attendee in second:
            return True
    return False


def free_slots(
    events: Iterable[Event],
    attendees: AbstractSet[str],
    duration: int,
) -> List[TimeRange]:
    """
    Find every slot of at least ``duration`` minutes in which none of
    ``attendees`` has an event.

    Events that share no attendee with ``attendees`` are ignored.
    """
    points: List[SweepPoint] = []
    relevant = 0

    for event in events:
        if have_common_attendee(event.attendees, attendees):
            points.extend(event_points(event))
            relevant += 1

    logger.debug(
        "Sweeping %d relevant event(s) for %d attendee(s), min length %d",
        relevant,
        len(attendees),
        duration,
    )

    return empty_time_ranges(points, START_OF_DAY, END_OF_DAY, duration)


class MeetingSlotFinder:
    """
    Finds the slots of a day in which a requested meeting can take place.

    Algorithm:
    1. Look for slots where required and optional attendees are all free
    2. If there is at least one, return them
    3. Otherwise drop the optional attendees as a group and look again
    """

    def query(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Find all free slots for the request.

        Args:
            events: Already scheduled events of the day, in any order
            request: Attendees and duration of the meeting

        Returns:
            Free TimeRanges ordered by start time
        """
        slots, _ = self.query_with_policy(events, request)
        return slots

    def query_with_policy(
        self, events: Iterable[Event], request: MeetingRequest
    ) -> Tuple[List[TimeRange], bool]:
        """
        Like ``query``, but also tell whether the optional attendees were kept.
        """
        events = list(events)

        if request.optional_attendees:
            with_optional = free_slots(events, request.all_attendees, request.duration)
            if with_optional:
                return with_optional, True
            logger.debug(
                "No slot fits %d optional attendee(s), retrying with required attendees only",
                len(request.optional_attendees),
            )
            return free_slots(events, request.attendees, request.duration), False

        return free_slots(events, request.attendees, request.duration), True
