"""Schedule scraper for the NAR monthly meeting calendar."""

import logging
from collections import Counter
from datetime import date
from typing import Iterator, Optional, Union

import requests
from bs4 import BeautifulSoup, Tag

from .exceptions import FetchError, ParseError
from .models import RaceStatus, Region, ScheduleEntry, Venue

logger = logging.getLogger(__name__)


def _cell_text(cell: Tag) -> str:
    """Return cell text with line breaks removed and surrounding space trimmed."""
    return cell.get_text().replace("\n", "").strip()


def _selected_value(soup: BeautifulSoup, select_name: str) -> int:
    """Read the integer value of the selected option of a <select> control.

    Args:
        soup: Parsed schedule page.
        select_name: Value of the select's name attribute.

    Returns:
        The selected option's value.

    Raises:
        ParseError: If the control, its selected option or a numeric value is missing.
    """
    option = soup.select_one(f'select[name="{select_name}"] option[selected]')
    if option is None:
        raise ParseError(f"No selected option for '{select_name}' in the page")

    value = str(option.get("value", "")).strip()
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"Selected '{select_name}' is not a number: '{value}'")


def _table_rows(table: Tag) -> Iterator[Tag]:
    for child in table.find_all(["tr", "thead", "tbody", "tfoot"], recursive=False):
        if child.name == "tr":
            yield child
        else:
            yield from child.find_all("tr", recursive=False)


def _schedule_rows(soup: BeautifulSoup) -> list[Tag]:
    """Return the venue rows of the schedule table.

    The table is the first child table of a "dbtbl" cell; venue rows are the
    ones holding a "dbitem" name cell.

    Raises:
        ParseError: If the table is missing or has no venue rows.
    """
    tables = []
    for container in soup.find_all("td", class_="dbtbl"):
        table = container.find("table", recursive=False)
        if table is not None:
            tables.append(table)

    if not tables:
        raise ParseError("Schedule table not found in the page")

    rows = [
        row
        for table in tables
        for row in _table_rows(table)
        if row.find("td", class_="dbitem", recursive=False) is not None
    ]
    if not rows:
        raise ParseError("Schedule table has no venue rows")

    return rows


def parse_schedule_page(page: Union[str, bytes]) -> list[ScheduleEntry]:
    """Parse one month's schedule page into schedule entries.

    Year and month are taken from the page's own selectors. Every day cell
    of every recognised venue row produces an entry, closed days included.

    Args:
        page: HTML document. Bytes are decoded using the page's declared charset.

    Returns:
        Entries in row order, then day order.

    Raises:
        ParseError: If the year/month selectors or the schedule table are missing.
    """
    soup = BeautifulSoup(page, "lxml")

    year = _selected_value(soup, "k_year")
    month = _selected_value(soup, "k_month")

    entries: list[ScheduleEntry] = []
    region: Optional[Region] = None

    for row in _schedule_rows(soup):
        # The region cell spans several rows, so only the first row has it
        region_cell = row.find("td", class_="dbtitle", recursive=False)
        if region_cell is not None:
            region = Region.from_name(_cell_text(region_cell))

        name = _cell_text(row.find("td", class_="dbitem", recursive=False))
        venue = Venue.from_name(name)
        if venue is None:
            logger.warning("Skipping unrecognized venue '%s' (%04d-%02d)", name, year, month)
            continue

        cells = row.find_all("td", class_="dbdata", recursive=False)
        for day, cell in enumerate(cells, start=1):
            try:
                entry_date = date(year, month, day)
            except ValueError as e:
                raise ParseError(f"Invalid date {year}-{month}-{day} for {name}: {e}")

            entries.append(ScheduleEntry(
                venue=venue,
                date=entry_date,
                status=RaceStatus.from_glyph(_cell_text(cell)),
                region=region,
            ))

    return entries


class ScheduleScraper:
    """Scraper collecting a year of NAR schedule pages.

    Fetches the monthly calendar page for each month of a year and parses
    it into per-venue, per-day schedule entries.
    """

    BASE_URL = "http://www2.keiba.go.jp/KeibaWeb/MonthlyConveneInfo/MonthlyConveneInfoTop"
    REQUEST_TIMEOUT = 30

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        """Initialize scraper.

        Args:
            session: HTTP session to use. When omitted, a session is opened
                for each collect() call and closed afterwards.
        """
        self._external_session = session
        self._session: Optional[requests.Session] = session

    def build_url(self, year: int, month: int) -> str:
        return f"{self.BASE_URL}?k_year={year}&k_month={month}"

    def fetch_page(self, year: int, month: int) -> bytes:
        """Fetch the schedule page for one month.

        Args:
            year: Target year.
            month: Target month (1-12).

        Returns:
            Raw response body.

        Raises:
            FetchError: On connection failure or an HTTP error status.
        """
        if self._session is None:
            raise RuntimeError("No HTTP session. Call collect() or pass a session.")

        url = self.build_url(year, month)
        try:
            response = self._session.get(url, timeout=self.REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        return response.content

    def collect(self, year: int) -> list[ScheduleEntry]:
        """Collect schedule entries for all twelve months of a year.

        Args:
            year: Target year.

        Returns:
            Entries in month order, then row and day order within a month.
        """
        if self._external_session is None:
            self._session = requests.Session()

        entries: list[ScheduleEntry] = []
        try:
            for month in range(1, 13):
                page = self.fetch_page(year, month)
                month_entries = parse_schedule_page(page)
                logger.info("%04d-%02d: %d entries", year, month, len(month_entries))
                entries.extend(month_entries)
        finally:
            if self._external_session is None and self._session is not None:
                self._session.close()
                self._session = None

        tally = Counter(entry.status for entry in entries)
        for status in RaceStatus:
            logger.info("%s: %d", status.label, tally[status])

        return entries
