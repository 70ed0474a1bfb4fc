"""Decode History Trends Unlimited export records into visits.

Analysis export ("Export These Results"), 8 columns:

    0: URL                  visited URL
    1: Host*                hostname of visited URL
    2: Domain*              eTLD+1 of the hostname
    3: Visit Time (ms)      UTC milliseconds since 1970, e.g. 1384634958041.754
    4: Visit Time (string)  local time, e.g. 2013-11-16 14:49:18.041
    5: Day of Week          weekday of the local time, 0 for Sunday
    6: Transition Type      core transition name, e.g. link
    7: Page Title*          page title
    * may be blank

Archived export ("Transfer History" / "Auto Backup"), 3 or 4 columns:

    0: URL                  visited URL
    1: Visit Time           U1384634958041.754 (Unix ms) or
                            13149893660345543 (Windows us), may be blank
    2: Transition Type      full transition bitfield, e.g. 805306368
    3: Page Title*          page title; the column itself may be missing
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from urllib.parse import urlsplit

import tldextract

from browser_artifacts import timefmt
from browser_artifacts.chrome.transition import transition_from_string
from browser_artifacts.exceptions import FormatError, ValidationError
from browser_artifacts.historytrends.models import ExportType, Visit
from browser_artifacts.historytrends.title import normalize_title
from browser_artifacts.timefmt import Epoch, Unit

ANALYSIS_FIELDS = 8
ARCHIVED_FIELDS = (3, 4)

LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

WEEKDAYS = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

_INT_PATTERN = re.compile(r"\d+", re.ASCII)
_LOCAL_TIME_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}", re.ASCII
)

# Offline: use the public suffix list snapshot bundled with tldextract.
_extract = tldextract.TLDExtract(suffix_list_urls=(), include_psl_private_domains=True)


def classify_record(fields: list[str]) -> ExportType:
    """Determine the export type of a record from its field count."""
    if len(fields) == ANALYSIS_FIELDS:
        return ExportType.ANALYSIS
    if len(fields) in ARCHIVED_FIELDS:
        return ExportType.ARCHIVED
    raise FormatError(f"record has {len(fields)} fields")


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


def _split_url(url: str):
    try:
        return urlsplit(url)
    except ValueError as e:
        raise FormatError(f"invalid URL {url!r}: {e}") from e


def url_hostname(url: str) -> str:
    return _split_url(url).hostname or ""


def effective_tld_plus_one(host: str) -> str:
    """Return the registrable domain of ``host``, e.g. ``bbc.co.uk``.

    Hosts under a TLD missing from the public suffix list (and IP
    addresses) take their last two labels.
    """
    ext = _extract(host)
    if ext.suffix and ext.domain:
        return f"{ext.domain}.{ext.suffix}"
    labels = host.split(".")
    if not ext.suffix and len(labels) >= 2 and all(labels[-2:]):
        return ".".join(labels[-2:])
    raise ValidationError(f"cannot compute eTLD+1 of {host!r}")


def check_url(url: str, host: str, domain: str) -> None:
    """Check the derived Host and Domain columns against the URL."""
    if host:
        parts = _split_url(url)
        computed = parts.hostname or ""
        # utils.extractHost in the extension returns the segment after an
        # @ in the path, e.g. "user" for
        # https://web.archive.org/save/https://medium.com/@user/article
        if computed != host and "@" not in parts.path:
            raise ValidationError(f"{host!r} differs from computed host {computed!r}")
    if domain:
        computed = effective_tld_plus_one(host)
        if computed != domain:
            raise ValidationError(f"{domain!r} differs from computed eTLD+1 {computed!r}")


# ---------------------------------------------------------------------------
# Times
# ---------------------------------------------------------------------------


def parse_local_time(text: str) -> datetime:
    """Parse a naive local time like ``2013-11-16 14:49:18.041``."""
    if not _LOCAL_TIME_PATTERN.fullmatch(text):
        raise FormatError(f"invalid local time: {text!r}")
    try:
        return datetime.strptime(text, LOCAL_TIME_FORMAT)
    except ValueError as e:
        raise FormatError(f"invalid local time: {text!r}") from e


def format_local_time(t: datetime) -> str:
    return t.strftime("%Y-%m-%d %H:%M:%S.") + f"{t.microsecond // 1000:03d}"


def weekday_number(t: datetime) -> int:
    """Return the weekday of ``t`` with Sunday as 0."""
    return (t.weekday() + 1) % 7


def format_offset(seconds: int) -> str:
    sign = "-" if seconds < 0 else "+"
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if secs:
        return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}"


def parse_times(time_msec: str, time_local: str, weekday: str) -> tuple[datetime, int]:
    """Parse the three time columns of an analysis record.

    Both time columns represent the same instant: the first is UTC with
    sub-millisecond precision and the second is local to the exporting
    machine, truncated to milliseconds. Returns the UTC time and the
    offset in seconds of UTC from local time, e.g. 21600 for US Central
    Standard Time.
    """
    t_utc = timefmt.parse(time_msec, Unit.MILLI, Epoch.UNIX)
    t_local = parse_local_time(time_local)

    diff = timefmt.truncate(t_utc, Unit.MILLI).replace(tzinfo=None) - t_local
    if diff % timedelta(seconds=1):
        raise ValidationError(f"time difference is fractional: {diff}")
    offset = diff // timedelta(seconds=1)

    if not _INT_PATTERN.fullmatch(weekday):
        raise FormatError(f"invalid weekday: {weekday!r}")
    day = int(weekday)
    if day >= len(WEEKDAYS):
        raise FormatError(f"invalid weekday: {weekday!r}")
    local_day = weekday_number(t_local)
    if day != local_day:
        raise ValidationError(
            f"inconsistent weekday: {WEEKDAYS[day]} and {WEEKDAYS[local_day]}"
        )
    return t_utc, offset


def parse_epoch_time(text: str) -> datetime | None:
    """Parse an archived visit time; blank means unknown."""
    if not text:
        return None
    if text[0] == "U":  # >= v1.4.1
        return timefmt.parse(text[1:], Unit.MILLI, Epoch.UNIX)
    return timefmt.parse(text, Unit.MICRO, Epoch.WINDOWS)


def parse_transition_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text) or int(text) > 0xFFFFFFFF:
        raise FormatError(f"invalid transition: {text!r}")
    return int(text)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def parse_analysis_record(fields: list[str]) -> tuple[Visit, int]:
    """Decode an analysis record; returns the visit and its UTC offset."""
    url, host, domain, time_msec, time_local, weekday, transition, title = fields
    check_url(url, host, domain)
    visit_time, offset = parse_times(time_msec, time_local, weekday)
    visit = Visit(
        url=url,
        visit_time=visit_time,
        transition=int(transition_from_string(transition)),
        page_title=normalize_title(title),
    )
    return visit, offset


def parse_archived_record(fields: list[str]) -> Visit:
    url, epoch_time, transition = fields[:3]
    title = fields[3] if len(fields) > 3 else ""
    return Visit(
        url=url,
        visit_time=parse_epoch_time(epoch_time),
        transition=parse_transition_int(transition),
        page_title=normalize_title(title),
    )
