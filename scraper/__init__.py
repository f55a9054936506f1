"""Scraper module for extracting race-meeting schedules from the NAR site."""

from .exceptions import FetchError, ParseError, ScheduleError
from .models import RaceStatus, Region, ScheduleEntry, Venue
from .scraper import ScheduleScraper, parse_schedule_page

__all__ = [
    "FetchError",
    "ParseError",
    "RaceStatus",
    "Region",
    "ScheduleEntry",
    "ScheduleError",
    "ScheduleScraper",
    "Venue",
    "parse_schedule_page",
]
