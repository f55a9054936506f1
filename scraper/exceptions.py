"""Errors raised while collecting schedule pages."""


class ScheduleError(Exception):
    """Base class for schedule collection failures."""


class FetchError(ScheduleError):
    """A monthly page could not be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url


class ParseError(ScheduleError, ValueError):
    """A required element is missing from a schedule page."""
