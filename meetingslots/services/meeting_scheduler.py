"""
Application services for finding meeting slots on a given day.

The service coordinates loading events via an event source adapter and
delegates the actual slot search to the domain-level ``MeetingSlotFinder``.
This keeps the CLI thin and allows the event source to be stubbed via a
simple protocol in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Protocol, Sequence

from ..domain.exceptions import InvalidMeetingRequestError
from ..domain.models import Event, MeetingRequest, TimeRange
from ..domain.slot_finder import MeetingSlotFinder

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    def get_events(self, day: date, timezone: str) -> List[Event]:
        """Return the events of ``day`` with ranges in minutes from midnight."""


@dataclass(frozen=True)
class SchedulingResult:
    """Slots found for a request and whether optional attendees fit in."""
    request: MeetingRequest
    slots: List[TimeRange]
    optional_attendees_honored: bool


class MeetingSchedulerService:
    """
    Orchestrates event retrieval and slot search.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        slot_finder: MeetingSlotFinder | None = None,
    ) -> None:
        self._event_source = event_source
        self._slot_finder = slot_finder or MeetingSlotFinder()

    @staticmethod
    def build_request(
        required: Sequence[str],
        optional: Sequence[str] = (),
        duration: int = 30,
    ) -> MeetingRequest:
        """
        Validate user input and build a MeetingRequest.

        Identifiers are stripped and lower-cased. Anyone listed as required
        is not also kept as optional.

        Raises:
            InvalidMeetingRequestError: If the duration is negative or nobody
                is invited
        """
        if duration < 0:
            raise InvalidMeetingRequestError(
                f"Meeting duration must not be negative, got {duration}"
            )

        required_set = frozenset(_normalize(required))
        optional_set = frozenset(_normalize(optional)) - required_set

        if not required_set and not optional_set:
            raise InvalidMeetingRequestError("No participants provided.")

        return MeetingRequest(
            attendees=required_set,
            duration=duration,
            optional_attendees=optional_set,
        )

    def find_slots(
        self,
        *,
        day: date,
        timezone: str,
        required: Sequence[str],
        optional: Sequence[str] = (),
        duration: int = 30,
    ) -> SchedulingResult:
        """
        Load the day's events and compute the free slots for the request.
        """
        request = self.build_request(required, optional, duration)
        events = self._event_source.get_events(day, timezone)
        return self.calculate_slots(events=events, request=request)

    def calculate_slots(
        self,
        *,
        events: Sequence[Event],
        request: MeetingRequest,
    ) -> SchedulingResult:
        """Calculate free slots from already loaded events."""
        slots, honored = self._slot_finder.query_with_policy(events, request)

        logger.debug(
            "Found %d slot(s) of %d min, optional attendees honored: %s",
            len(slots),
            request.duration,
            honored,
        )

        return SchedulingResult(
            request=request,
            slots=slots,
            optional_attendees_honored=honored,
        )


def _normalize(identifiers: Sequence[str]) -> List[str]:
    normalized: List[str] = []
    for identifier in identifiers:
        value = identifier.strip().lower()
        if value and value not in normalized:
            normalized.append(value)
    return normalized
