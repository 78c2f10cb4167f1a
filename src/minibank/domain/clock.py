"""Clock capability used to timestamp ledger records."""

from datetime import UTC, datetime
from typing import Callable

from minibank.utils.date_parser import as_utc

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """System clock returning the current UTC time."""
    return datetime.now(UTC)


def read_clock(clock: Clock) -> datetime:
    """Call ``clock`` and normalize its result to UTC."""
    return as_utc(clock())
