"""Integer timestamps relative to the Unix and Windows epochs.

Browsers store times as integer counts of some unit since an epoch:
Chrome uses microseconds since 1601-01-01 (the Windows epoch), Firefox
and most JavaScript uses milliseconds since 1970-01-01. Text forms may
carry a fractional remainder after a decimal point, e.g.
``1384634958041.754`` milliseconds.

Python datetimes hold microseconds, so any remainder finer than that is
truncated.
"""

from __future__ import annotations

import enum
import re
from datetime import datetime, timedelta, timezone

from browser_artifacts.exceptions import FormatError


class Epoch(enum.Enum):
    UNIX = datetime(1970, 1, 1, tzinfo=timezone.utc)
    WINDOWS = datetime(1601, 1, 1, tzinfo=timezone.utc)

    def __str__(self) -> str:
        return self.name.lower()


class Unit(enum.IntEnum):
    """Decimal exponent of the unit relative to seconds."""

    SEC = 0
    MILLI = 3
    MICRO = 6
    NANO = 9


_NUMBER_PATTERN = re.compile(r"(\d+)(?:\.(\d+))?", re.ASCII)


def from_int(n: int, nsec: int, unit: Unit, epoch: Epoch) -> datetime:
    """Return the UTC time ``n`` units plus ``nsec`` nanoseconds after epoch."""
    if n < 0:
        raise ValueError(f"negative time: {n}")
    per_unit = 10 ** (Unit.NANO - unit)
    total_ns = n * per_unit + nsec
    return epoch.value + timedelta(microseconds=total_ns // 1000)


def to_int(t: datetime, unit: Unit, epoch: Epoch) -> tuple[int, int]:
    """Return ``(n, nsec)``: whole units since epoch and the remainder in ns."""
    delta = t - epoch.value
    total_us = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    per_unit = 10 ** (Unit.NANO - unit)
    return divmod(total_us * 1000, per_unit)


def parse(text: str, unit: Unit, epoch: Epoch) -> datetime:
    """Parse ``digits[.digits]`` as a count of ``unit`` since ``epoch``."""
    match = _NUMBER_PATTERN.fullmatch(text)
    if not match:
        raise FormatError(f"invalid {epoch} {unit.name.lower()} time: {text!r}")
    whole, frac = match.groups()
    places = Unit.NANO - unit
    nsec = 0
    if frac and places:
        nsec = int((frac + "0" * places)[:places])
    try:
        return from_int(int(whole), nsec, unit, epoch)
    except OverflowError as e:
        raise FormatError(f"{epoch} {unit.name.lower()} time out of range: {text!r}") from e


def format(t: datetime, unit: Unit, epoch: Epoch) -> str:
    """Format ``t`` as a count of ``unit`` since ``epoch``.

    A non-zero remainder is written as a fraction with trailing zeros
    removed, so that ``parse(format(t))`` returns ``t``. Times before the
    epoch raise :class:`FormatError`.
    """
    n, nsec = to_int(t, unit, epoch)
    if n < 0:
        raise FormatError(f"time before {epoch} epoch: {t.isoformat()}")
    if not nsec:
        return str(n)
    places = Unit.NANO - unit
    return f"{n}.{str(nsec).zfill(places).rstrip('0')}"


def truncate(t: datetime, unit: Unit) -> datetime:
    """Truncate ``t`` to a multiple of ``unit`` (at most microseconds)."""
    if unit >= Unit.MICRO:
        return t
    step = 10 ** (Unit.MICRO - unit)
    return t.replace(microsecond=t.microsecond - t.microsecond % step)
