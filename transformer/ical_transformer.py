"""iCalendar transformer for laid-out timetable events."""

import hashlib
from datetime import date, datetime, timedelta
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event, vRecur

from timetable.clock import clock_to_time
from timetable.models import Configs, Event as TimetableEvent, LaidOutEvent

from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that converts timetable events to weekly recurring iCalendar events."""

    DEFAULT_TIMEZONE = "UTC"

    def __init__(self, start_date: date, end_date: date, timezone: str = DEFAULT_TIMEZONE) -> None:
        """Initialize the iCalendar transformer.

        Args:
            start_date: First day of the schedule period.
            end_date: Last day of the schedule period.
            timezone: IANA name of the timezone the event times are in.

        Raises:
            ValueError: If the period is empty.
        """
        if start_date >= end_date:
            raise ValueError("Start date must be before end date")

        self._start_date = start_date
        self._end_date = end_date
        self._timezone_name = timezone
        self._timezone = ZoneInfo(timezone)
        self._calendar: Optional[Calendar] = None

    def _generate_uid(self, event: TimetableEvent, index: int) -> str:
        """Generate a unique identifier for an event.

        Args:
            event: The timetable event.
            index: Position of the event in the layout.

        Returns:
            Unique identifier string.
        """
        unique_string = (
            f"{event.course_id}-{event.section}-{event.day}-"
            f"{event.start_time}-{index}-{self._start_date}"
        )
        return hashlib.md5(unique_string.encode()).hexdigest() + "@timetable-grid"

    def _find_first_occurrence(self, event: TimetableEvent) -> date:
        """Find the first occurrence of an event on or after the start date.

        Args:
            event: The timetable event with its day (1 = Monday).

        Returns:
            Date of the first occurrence.
        """
        days_ahead = (event.day - 1) - self._start_date.weekday()
        if days_ahead < 0:
            days_ahead += 7

        return self._start_date + timedelta(days=days_ahead)

    def transform(self, laid_out: Sequence[LaidOutEvent], configs: Configs) -> Calendar:
        """Transform laid-out events into iCalendar format.

        Args:
            laid_out: Events with their slots and rectangles.
            configs: Grid configs (unused, the calendar has no geometry).

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//Timetable Grid//timetable-grid//EN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", "Timetable")
        self._calendar.add("x-wr-timezone", self._timezone_name)

        for index, item in enumerate(laid_out):
            event = item.event
            first_date = self._find_first_occurrence(event)
            if first_date > self._end_date:
                continue

            ical_event = Event()
            start_datetime = datetime.combine(
                first_date, clock_to_time(event.start_time), tzinfo=self._timezone
            )
            end_datetime = datetime.combine(
                first_date, clock_to_time(event.end_time), tzinfo=self._timezone
            )

            ical_event.add("uid", self._generate_uid(event, index))
            ical_event.add("dtstart", start_datetime)
            ical_event.add("dtend", end_datetime)
            ical_event.add("dtstamp", datetime.now(self._timezone))
            summary = f"{event.label} - {event.title}" if event.title else event.label
            ical_event.add("summary", summary)

            if event.location:
                ical_event.add("location", event.location)

            until_datetime = datetime.combine(
                self._end_date, end_datetime.timetz()
            )
            ical_event.add("rrule", vRecur({"freq": "weekly", "until": until_datetime}))

            self._calendar.add_component(ical_event)

        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
