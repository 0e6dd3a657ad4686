"""
Calendar file client: loads scheduled events from a JSON or YAML file.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List

import pendulum
import yaml
from pendulum import DateTime

from ..domain.exceptions import CalendarDataError
from ..domain.models import END_OF_DAY, START_OF_DAY, Event, TimeRange

logger = logging.getLogger(__name__)


class CalendarFileClient:
    """
    Reads events from a calendar file and turns them into domain Events.

    Expected format (JSON or YAML)::

        events:
          - title: Standup
            start: "2024-11-25T09:00:00"
            end: "2024-11-25T09:15:00"
            attendees: [alice@example.com, bob@example.com]

    A bare list of entries is accepted as well. An entry without
    ``attendees`` may name a single ``calendarId`` instead.
    """

    YAML_SUFFIXES = {".yaml", ".yml"}

    def __init__(self, calendar_path: Path):
        """
        Initialize the client.

        Args:
            calendar_path: Path to the calendar file
        """
        self.calendar_path = Path(calendar_path)
        self._entries: List[Dict[str, Any]] | None = None

    def _load_entries(self) -> List[Dict[str, Any]]:
        """Load and cache the raw entries of the calendar file."""
        if self._entries is not None:
            return self._entries

        try:
            with open(self.calendar_path, "r", encoding="utf-8") as f:
                if self.calendar_path.suffix.lower() in self.YAML_SUFFIXES:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except OSError as exc:
            raise CalendarDataError(
                f"Could not read calendar file {self.calendar_path}: {exc}"
            ) from exc
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise CalendarDataError(
                f"Invalid calendar file {self.calendar_path}: {exc}"
            ) from exc

        if data is None:
            data = []
        if isinstance(data, dict):
            data = data.get("events", [])
        if not isinstance(data, list):
            raise CalendarDataError(
                f"Calendar file {self.calendar_path} must contain a list of events."
            )

        self._entries = data
        return self._entries

    def get_events(self, day: date, timezone: str = "Europe/Berlin") -> List[Event]:
        """
        Load the events touching ``day``, clipped to that day.

        Args:
            day: The day to schedule on
            timezone: IANA timezone identifier used for naive datetimes

        Returns:
            List of Event objects with ranges in minutes from midnight

        Raises:
            CalendarDataError: If the file cannot be read or an event ends
                before it starts
        """
        day_start = pendulum.datetime(day.year, day.month, day.day, tz=timezone)
        day_end = day_start.add(days=1)
        events: List[Event] = []

        for index, entry in enumerate(self._load_entries()):
            try:
                title = str(entry.get("title", f"Event {index + 1}"))
                start = self._parse_datetime(entry["start"], timezone)
                end = self._parse_datetime(entry["end"], timezone)
                attendees = self._parse_attendees(entry)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping calendar entry %d: %s", index + 1, e)
                continue

            if end < start:
                raise CalendarDataError(
                    f"Event '{title}' ends ({end}) before it starts ({start})."
                )

            # Only events overlapping the requested day matter
            if not (start < day_end and end > day_start):
                continue

            when_start = START_OF_DAY if start <= day_start else self._minute_of_day(start)
            when_end = END_OF_DAY if end >= day_end else self._minute_of_day(end, round_up=True)

            if when_start >= when_end:
                continue

            events.append(
                Event(
                    title=title,
                    when=TimeRange(start=when_start, end=when_end),
                    attendees=attendees,
                )
            )

        logger.debug(
            "Loaded %d event(s) for %s from %s",
            len(events),
            day.isoformat(),
            self.calendar_path,
        )
        return events

    @staticmethod
    def _parse_attendees(entry: Dict[str, Any]) -> frozenset:
        attendees = entry.get("attendees")
        if attendees is None:
            attendees = [entry["calendarId"]]
        if isinstance(attendees, str):
            attendees = [attendees]
        return frozenset(str(a).strip().lower() for a in attendees)

    @staticmethod
    def _parse_datetime(value: Any, timezone: str) -> DateTime:
        """
        Parse an ISO 8601 string to a pendulum DateTime in the given timezone.

        YAML may already have turned unquoted timestamps into datetimes.
        """
        if isinstance(value, datetime):
            return pendulum.instance(value, tz=timezone).in_timezone(timezone)

        dt = pendulum.parse(str(value), tz=timezone)

        if isinstance(dt, DateTime):
            return dt.in_timezone(timezone)

        raise ValueError(f"Could not parse datetime: {value}")

    @staticmethod
    def _minute_of_day(dt: DateTime, round_up: bool = False) -> int:
        """Minute of the day; a partly used minute counts as busy when rounding up."""
        minute = dt.hour * 60 + dt.minute
        if round_up and (dt.second or dt.microsecond):
            minute += 1
        return minute
