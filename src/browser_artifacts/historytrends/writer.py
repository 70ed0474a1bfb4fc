"""Write History Trends Unlimited browsing history exports."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import IO, Iterable

from dateutil import tz

from browser_artifacts import timefmt
from browser_artifacts.chrome.transition import transition_name
from browser_artifacts.exceptions import HistoryTrendsError, ValidationError
from browser_artifacts.historytrends.models import ExportType, Visit
from browser_artifacts.historytrends.parser import (
    effective_tld_plus_one,
    format_local_time,
    url_hostname,
    weekday_number,
)
from browser_artifacts.timefmt import Epoch, Unit

logger = logging.getLogger(__name__)


class ExportWriter:
    """Write visits as tab-separated, CRLF-terminated export records.

    Fields are never quoted, so a field containing a tab or line break
    corrupts the output. Analysis exports render local times in the zone
    of ``time``, fixed at its UTC offset so that daylight saving time
    cannot give one export two offsets. Archived exports are always
    written in UTC.
    """

    def __init__(self, stream: IO[bytes], export_type: ExportType, time: datetime | None):
        if not isinstance(export_type, ExportType):
            raise ValidationError(f"illegal export type: {export_type!r}")
        self._stream = stream
        self.export_type = export_type
        self.time = time
        self.record = 0

        offset = time.utcoffset() if time is not None else None
        self.zone = tz.tzoffset(None, offset or timedelta(0))

    def write(self, visit: Visit) -> None:
        """Write a single visit."""
        self.record += 1
        try:
            if self.export_type is ExportType.ANALYSIS:
                fields = self._analysis_fields(visit)
            else:
                fields = self._archived_fields(visit)
        except HistoryTrendsError as e:
            raise type(e)(e.message, record=self.record) from e
        self._stream.write(("\t".join(fields) + "\r\n").encode("utf-8"))

    def write_all(self, visits: Iterable[Visit]) -> None:
        for visit in visits:
            self.write(visit)
        logger.debug("Wrote %d %s export records", self.record, self.export_type)

    def flush(self) -> None:
        self._stream.flush()

    def _analysis_fields(self, visit: Visit) -> list[str]:
        if visit.visit_time is None:
            raise ValidationError(f"visit to {visit.url!r} has no time")
        host = url_hostname(visit.url)
        domain = ""
        if host:
            try:
                domain = effective_tld_plus_one(host)
            except ValidationError:
                logger.debug("No eTLD+1 for host %r; leaving domain blank", host)
        local = visit.visit_time.astimezone(self.zone)
        return [
            visit.url,
            host,
            domain,
            timefmt.format(visit.visit_time, Unit.MILLI, Epoch.UNIX),
            format_local_time(local),
            str(weekday_number(local)),
            transition_name(visit.transition),
            visit.page_title,
        ]

    def _archived_fields(self, visit: Visit) -> list[str]:
        visit_time = ""
        if visit.visit_time is not None and visit.visit_time < Epoch.UNIX.value:
            visit_time = timefmt.format(visit.visit_time, Unit.MICRO, Epoch.WINDOWS)
        elif visit.visit_time is not None:
            visit_time = "U" + timefmt.format(visit.visit_time, Unit.MILLI, Epoch.UNIX)
        return [
            visit.url,
            visit_time,
            str(int(visit.transition)),
            visit.page_title,
        ]
