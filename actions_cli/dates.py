"""Parsing of the ``since`` cutoff."""

import logging
from datetime import datetime, timezone

log = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def first_of_the_month(now: datetime | None = None) -> datetime:
    """Midnight UTC on the first day of the month of ``now``."""
    now = now or datetime.now(timezone.utc)
    return datetime(now.year, now.month, 1, tzinfo=timezone.utc)


def date_or_first_of_the_month(
    value: str | None, now: datetime | None = None
) -> datetime:
    """Parse a ``yyyy-mm-dd`` date as midnight UTC.

    Absent or unparsable values fall back to the first day of the current
    month.
    """
    if value:
        try:
            return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            log.warning("Ignoring unparsable date %r, expected yyyy-mm-dd", value)
    return first_of_the_month(now)
