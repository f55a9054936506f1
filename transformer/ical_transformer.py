"""iCalendar transformer for schedule entries."""

import hashlib
from datetime import datetime, timezone
from typing import BinaryIO, Optional

from icalendar import Calendar, Event

from scraper.models import ScheduleEntry
from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that converts schedule entries to iCalendar format.

    Every entry becomes one all-day event titled after its venue.
    """

    CALENDAR_NAME = "地方競馬開催日程"
    TIMEZONE_NAME = "Asia/Tokyo"
    SUMMARY_SUFFIX = "競馬"

    def __init__(self) -> None:
        self._calendar: Optional[Calendar] = None

    def _generate_uid(self, entry: ScheduleEntry, position: int) -> str:
        """Generate a stable identifier for an entry's event.

        Args:
            entry: The schedule entry.
            position: Index of the entry in the output. Two rows can resolve
                to the same venue, so venue and date alone are not unique.

        Returns:
            Unique identifier string.
        """
        unique_string = f"{position}-{entry.venue.name}-{entry.date.isoformat()}"
        return hashlib.md5(unique_string.encode()).hexdigest() + "@keiba.go.jp"

    def transform(self, entries: list[ScheduleEntry]) -> Calendar:
        """Transform schedule entries into iCalendar format.

        Args:
            entries: Schedule entries, closed days included.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//NAR Schedule to iCal//nar-schedule-to-ical//JA")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", self.CALENDAR_NAME)
        self._calendar.add("x-wr-timezone", self.TIMEZONE_NAME)

        now = datetime.now(timezone.utc)

        for position, entry in enumerate(entries):
            ical_event = Event()

            ical_event.add("uid", self._generate_uid(entry, position))
            ical_event.add("dtstamp", now)
            ical_event.add("created", now)
            ical_event.add("last-modified", now)

            # All-day event: start and end on the same date
            ical_event.add("dtstart", entry.date)
            ical_event.add("dtend", entry.date)

            ical_event.add("summary", f"{entry.venue.japanese}{self.SUMMARY_SUFFIX}")
            ical_event.add("description", "")
            ical_event.add("status", "CONFIRMED")
            ical_event.add("transp", "OPAQUE")

            if entry.region is not None:
                ical_event.add("categories", [entry.region.japanese])

            self._calendar.add_component(ical_event)

        return self._calendar

    def write(self, stream: BinaryIO) -> None:
        """Write the calendar as UTF-8 encoded iCalendar text.

        Args:
            stream: Binary output stream.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        stream.write(self._calendar.to_ical())
        stream.flush()
