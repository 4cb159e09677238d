"""Timestamp parsing utilities for CLI date arguments.

Accept raw epoch seconds, raw epoch milliseconds, or the default output of
``date`` under an ``en_US.UTF-8`` locale (``Fri Aug 25 08:47:09 AM CEST 2023``)
and normalise all of them to a UTC ``Timestamp``. Decoders are tried in a
fixed order and the first one that succeeds wins.
"""

import calendar
import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

from cli_helpers.core.exceptions import InvalidTimestampError
from cli_helpers.core.levels import TRACE

logger = logging.getLogger(__name__)

SECONDS_TO_MILLIS_CUTOFF = 1_000_000_000_000

NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MILLI = 1_000_000
_NANOS_PER_MICRO = 1_000

# Proleptic Gregorian years -262144 through 262143.
MIN_EPOCH_SECONDS = -8_334_632_851_200
MAX_EPOCH_SECONDS = 8_210_298_412_799

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MICROSECOND = timedelta(microseconds=1)
_DATETIME_MIN_SECONDS = -62_135_596_800
_DATETIME_MAX_SECONDS = 253_402_300_799
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_LEAP_SECOND = 60

# %d also accepts the space-padded day that %e prints.
_STRPTIME_FORMAT = "%a %b %d %I:%M:%S %p %z %Y"

# Applied in order, every occurrence, with no word-boundary checks.
_ZONE_OFFSETS: tuple[tuple[str, str], ...] = (
    ("CET", "+0100"),
    ("CEST", "+0200"),
)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, order=True)
class Timestamp:
    """An absolute instant parsed from a CLI argument.

    Stored as whole nanoseconds since the Unix epoch, so instants far
    outside the ``datetime`` range keep their exact value. Instances are
    immutable, hashable and totally ordered by instant.
    """

    nanos: int

    def __post_init__(self) -> None:
        """Reject instants outside the supported calendar range."""
        if not MIN_EPOCH_SECONDS <= self.nanos // NANOS_PER_SECOND <= MAX_EPOCH_SECONDS:
            raise ValueError(f"{self.nanos} ns since the epoch is outside the supported range")

    @classmethod
    def parse(cls, value: str) -> "Timestamp":
        """Parse a string into a ``Timestamp``. See ``parse_timestamp``."""
        return parse_timestamp(value)

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        """Wrap an already-known timezone-aware instant."""
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("Timestamp requires a timezone-aware datetime")
        return cls((value - _EPOCH) // _ONE_MICROSECOND * _NANOS_PER_MICRO)

    def to_datetime(self) -> datetime:
        """Return the instant as a UTC ``datetime``, truncated to microseconds.

        Raises:
            OverflowError: If the instant falls outside years 1 to 9999.

        """
        return _EPOCH + timedelta(microseconds=self.nanos // _NANOS_PER_MICRO)

    @property
    def epoch_seconds(self) -> int:
        """Whole seconds since the Unix epoch, rounded towards negative infinity."""
        return self.nanos // NANOS_PER_SECOND

    @property
    def epoch_millis(self) -> int:
        """Whole milliseconds since the Unix epoch, rounded towards negative infinity."""
        return self.nanos // _NANOS_PER_MILLI

    @property
    def subsec_nanos(self) -> int:
        """Nanoseconds past ``epoch_seconds``, from 0 to 999 999 999."""
        return self.nanos % NANOS_PER_SECOND

    def __str__(self) -> str:
        """Format as ISO 8601 with a ``Z`` suffix, e.g. ``2023-08-25T06:47:14.632Z``.

        Instants outside years 1 to 9999 use ``date``'s ``@SECONDS`` notation
        instead, e.g. ``@500000000000``.
        """
        subsec = self.subsec_nanos
        if not _DATETIME_MIN_SECONDS <= self.epoch_seconds <= _DATETIME_MAX_SECONDS:
            fraction = f".{subsec:09d}".rstrip("0") if subsec else ""
            return f"@{self.epoch_seconds}{fraction}"

        if subsec == 0:
            timespec = "seconds"
        elif subsec % _NANOS_PER_MILLI == 0:
            timespec = "milliseconds"
        else:
            timespec = "microseconds"
        return self.to_datetime().isoformat(timespec=timespec).removesuffix("+00:00") + "Z"


def substitute_zone_names(value: str) -> str:
    """Rewrite the ``CET`` and ``CEST`` abbreviations as numeric UTC offsets.

    This is a plain text substitution so that output copied from ``date``
    parses without a timezone database. Any other occurrence of those
    letters is rewritten too.

    Args:
        value: Raw timestamp string.

    Returns:
        The string with every ``CET`` replaced by ``+0100`` and every
        ``CEST`` replaced by ``+0200``.

    """
    for name, offset in _ZONE_OFFSETS:
        value = value.replace(name, offset)
    return value


def _decode_epoch(value: str) -> int | None:
    """Decode a signed integer as epoch seconds or epoch milliseconds.

    Magnitudes below ``SECONDS_TO_MILLIS_CUTOFF`` are seconds, anything
    larger is milliseconds. Return ``None`` when the string is not a
    64-bit integer or the instant falls outside the supported range.
    """
    if _INTEGER_RE.fullmatch(value) is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None

    if abs(number) < SECONDS_TO_MILLIS_CUTOFF:
        seconds, nanos = number, 0
    else:
        seconds, millis = divmod(number, 1000)
        nanos = millis * _NANOS_PER_MILLI
    if not MIN_EPOCH_SECONDS <= seconds <= MAX_EPOCH_SECONDS:
        return None
    return seconds * NANOS_PER_SECOND + nanos


def _decode_calendar(value: str) -> int | None:
    """Decode the ``en_US`` ``date`` format after zone-name substitution.

    The weekday must agree with the date, and a leap second ``:60`` is read
    as the first second of the next minute.
    """
    try:
        parsed = time.strptime(substitute_zone_names(value), _STRPTIME_FORMAT)
    except ValueError:
        return None

    if parsed.tm_sec > _LEAP_SECOND or parsed.tm_gmtoff is None:
        return None
    if date(parsed.tm_year, parsed.tm_mon, parsed.tm_mday).weekday() != parsed.tm_wday:
        return None
    return (calendar.timegm(parsed) - parsed.tm_gmtoff) * NANOS_PER_SECOND


_Decoder = Callable[[str], int | None]

_DECODERS: tuple[tuple[str, _Decoder], ...] = (
    ("epoch", _decode_epoch),
    ("calendar", _decode_calendar),
)


def parse_timestamp(value: str) -> Timestamp:
    """Parse an epoch number or an ``en_US`` ``date`` string into a ``Timestamp``.

    Try each decoder in order: a signed integer (epoch seconds below
    ``SECONDS_TO_MILLIS_CUTOFF`` in magnitude, epoch milliseconds from it
    upwards), then the ``date`` format ``Fri Aug 25 08:47:09 AM CEST 2023``
    with ``CET``/``CEST`` rewritten to numeric offsets.

    Args:
        value: Raw timestamp string, typically a CLI argument.

    Returns:
        The decoded instant, normalised to UTC.

    Raises:
        InvalidTimestampError: If no decoder accepts the value. The error
            carries ``value`` unchanged.

    """
    for name, decode in _DECODERS:
        nanos = decode(value)
        if nanos is not None:
            logger.log(TRACE, "Decoded %r as %s timestamp", value, name)
            return Timestamp(nanos)

    logger.debug("No timestamp format matched %r", value)
    raise InvalidTimestampError(value)
