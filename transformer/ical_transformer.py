"""iCalendar transformer for schedule entries."""

import hashlib
import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event, vRecur

from scheduler.models import MeetingBlock
from scheduler.store import ScheduleEntry
from .base import BaseTransformer

log = logging.getLogger(__name__)


def _minutes_to_time(minutes: int) -> time:
    hours, mins = divmod(minutes, 60)
    return time(hours, mins)


class ICalTransformer(BaseTransformer):
    """Transformer that converts schedule entries to iCalendar format.

    Each scheduled meeting block becomes one weekly recurring event on the
    block's days, from the term start until the term end.
    """

    TIMEZONE = ZoneInfo("America/Vancouver")
    CALENDAR_NAME = "Class Schedule"

    def __init__(self, timezone: Optional[ZoneInfo] = None) -> None:
        """Initialize the iCalendar transformer.

        Args:
            timezone: Timezone the catalog times are expressed in.
        """
        self._calendar: Optional[Calendar] = None
        self._timezone = timezone or self.TIMEZONE

    def _generate_uid(self, entry: ScheduleEntry, block: MeetingBlock, start_date: date) -> str:
        days = "".join(day.ical_code for day in sorted(block.days))
        unique_string = (
            f"{entry.course_code}-{entry.section_label}-{days}-"
            f"{block.start_time}-{start_date}"
        )
        return hashlib.md5(unique_string.encode()).hexdigest() + "@timetable-builder"

    def _find_first_occurrence(self, block: MeetingBlock, start_date: date) -> date:
        """Find the first day on or after start_date the block meets."""
        start_weekday = start_date.weekday()
        days_ahead = min((day - start_weekday) % 7 for day in block.days)
        return start_date + timedelta(days=days_ahead)

    def _summary(self, entry: ScheduleEntry) -> str:
        summary = f"{entry.course_code} {entry.section_label}"
        if entry.section.title:
            summary = f"{summary} - {entry.section.title}"
        return summary

    def transform(
        self,
        entries: Iterable[ScheduleEntry],
        start_date: date,
        end_date: date
    ) -> Calendar:
        """Transform schedule entries into iCalendar format.

        Blocks without days or times are skipped.

        Args:
            entries: Schedule entries to transform.
            start_date: First day of the term.
            end_date: Last day of the term.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//Timetable Builder//timetable-builder//EN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", self.CALENDAR_NAME)
        self._calendar.add("x-wr-timezone", str(self._timezone))

        for entry in entries:
            for block in entry.blocks:
                if not block.is_scheduled:
                    log.debug(
                        "Skipping unscheduled block of %s %s", entry.course_code, entry.section_label
                    )
                    continue

                first_date = self._find_first_occurrence(block, start_date)
                start_datetime = datetime.combine(
                    first_date,
                    _minutes_to_time(block.start_minutes),
                    tzinfo=self._timezone
                )
                end_datetime = datetime.combine(
                    first_date,
                    _minutes_to_time(block.end_minutes),
                    tzinfo=self._timezone
                )

                ical_event = Event()
                ical_event.add("uid", self._generate_uid(entry, block, start_date))
                ical_event.add("dtstart", start_datetime)
                ical_event.add("dtend", end_datetime)
                ical_event.add("dtstamp", datetime.now(self._timezone))
                ical_event.add("summary", self._summary(entry))

                if block.location:
                    ical_event.add("location", block.location)

                if entry.section.instructor:
                    ical_event.add("description", entry.section.instructor)

                until_datetime = datetime.combine(
                    end_date,
                    end_datetime.time(),
                    tzinfo=self._timezone
                )
                rrule = vRecur({
                    "freq": "weekly",
                    "byday": [day.ical_code for day in sorted(block.days)],
                    "until": until_datetime
                })
                ical_event.add("rrule", rrule)

                self._calendar.add_component(ical_event)

        return self._calendar

    def to_ical(self) -> bytes:
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")
        return self._calendar.to_ical()

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        data = self.to_ical()
        with open(output_path, "wb") as f:
            f.write(data)
