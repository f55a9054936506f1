#!/usr/bin/env python3
"""NAR race-meeting schedule to iCalendar converter.

ETL pipeline that scrapes the monthly meeting calendars of the National
Association of Racing for one year and writes an iCalendar document to
standard output.
"""

import argparse
import logging
import sys
from datetime import MAXYEAR, MINYEAR, date
from typing import Optional, Sequence

from scraper import ScheduleError, ScheduleScraper
from transformer import ICalTransformer

logger = logging.getLogger("nar2iCal")


def parse_year(value: Optional[str]) -> int:
    """Parse the year argument, falling back to the current year.

    Returns the current calendar year if value is missing, not an
    integer or outside the range a date can hold.
    """
    try:
        year = int(value) if value is not None else None
    except ValueError:
        year = None

    if year is None or not MINYEAR <= year <= MAXYEAR:
        return date.today().year
    return year


def resolve_year(argv: Optional[Sequence[str]] = None) -> int:
    """Resolve the target year from command line arguments."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("year", nargs="?", default=None)

    args, _ = parser.parse_known_args(argv)
    return parse_year(args.year)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the ETL pipeline."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    year = resolve_year(argv)
    logger.info("Fetching NAR schedule for %d", year)

    try:
        scraper = ScheduleScraper()
        entries = scraper.collect(year)

        logger.info("Found %d schedule entries.", len(entries))

        if not entries:
            logger.warning("No entries found. The calendar will be empty.")

        transformer = ICalTransformer()
        transformer.transform(entries)
        transformer.write(sys.stdout.buffer)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except (ScheduleError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
