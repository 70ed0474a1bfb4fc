"""Read History Trends Unlimited browsing history exports."""

from __future__ import annotations

import enum
import logging
from datetime import datetime, timedelta, tzinfo
from pathlib import Path
from typing import IO, Iterator

from dateutil import tz

from browser_artifacts.archive import open_single_file_zip
from browser_artifacts.exceptions import FormatError, HistoryTrendsError, ValidationError
from browser_artifacts.historytrends.filename import parse_filename
from browser_artifacts.historytrends.models import Export, ExportType, Visit
from browser_artifacts.historytrends.parser import (
    classify_record,
    format_offset,
    parse_analysis_record,
    parse_archived_record,
)

logger = logging.getLogger(__name__)


class _Zone(enum.Enum):
    UNKNOWN = "unknown"  # analysis export before its first record
    KNOWN = "known"


def open_export(path: str | Path) -> tuple[IO[bytes], str]:
    """Open an export file, unwrapping single-file zips.

    Returns the binary stream and the base name of the export, taken from
    inside the zip when zipped so that renamed archives still resolve.
    """
    path = Path(path)
    ext = path.suffix
    if ext in (".tsv", ".txt"):
        return open(path, "rb"), path.name
    if ext == ".zip":
        stream, name = open_single_file_zip(path)
        return stream, Path(name).name
    raise FormatError(f"bad file extension: {ext!r}")


class ExportReader:
    """Read visits from a History Trends Unlimited export.

    Wraps a binary stream of tab-separated records. When ``export_type``
    is None, the first record's field count fixes it. For analysis
    exports, ``time`` is read as UTC and is adjusted by the export's UTC
    offset once the first record is read.

    Use :meth:`open` to read an export file; that reader owns the file
    and closes it in :meth:`close`.
    """

    def __init__(
        self,
        stream: IO[bytes],
        export_type: ExportType | None = None,
        time: datetime | None = None,
        filename: str = "",
    ):
        self._stream = stream
        self._owns_stream = False
        self.export_type = export_type
        self.time = time
        self.filename = filename
        self.record = 0
        self._zone = _Zone.UNKNOWN
        self._offset = 0

    @classmethod
    def open(cls, path: str | Path) -> ExportReader:
        """Open an export file by name."""
        stream, name = open_export(path)
        try:
            export_type, export_time = parse_filename(name)
        except FormatError:
            stream.close()
            raise
        logger.debug("Opened %s export %s (exported %s)", export_type, name, export_time)
        reader = cls(stream, export_type, export_time, name)
        reader._owns_stream = True
        return reader

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def utc_offset(self) -> int | None:
        """Seconds UTC is ahead of an analysis export's local time, once known.

        US Central Standard Time gives 21600.
        """
        if self._zone is _Zone.KNOWN:
            return self._offset
        return None

    @property
    def local_zone(self) -> tzinfo | None:
        """Fixed zone of the local time column, once known."""
        if self._zone is _Zone.KNOWN:
            return tz.tzoffset(None, -self._offset)
        return None

    def read(self) -> Visit | None:
        """Read the next visit; returns None at the end of the stream."""
        fields = self._read_fields()
        if fields is None:
            return None
        self.record += 1
        try:
            return self._decode(fields)
        except HistoryTrendsError as e:
            raise type(e)(e.message, record=self.record) from e

    def read_all(self) -> Export:
        """Read all remaining visits.

        Errors propagate and the visits read before them are discarded.
        """
        visits = list(self)
        logger.debug("Read %d visits from %s", len(visits), self.filename or "stream")
        return Export(
            filename=self.filename,
            type=self.export_type,
            time=self.time,
            visits=visits,
        )

    def __iter__(self) -> Iterator[Visit]:
        while True:
            visit = self.read()
            if visit is None:
                return
            yield visit

    def close(self) -> None:
        """Close the file opened by :meth:`open`."""
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> ExportReader:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _read_fields(self) -> list[str] | None:
        """Read the next non-blank line split on tabs; quotes are literal."""
        while True:
            line = self._stream.readline()
            if not line:
                return None
            line = line.rstrip(b"\r\n")
            if not line:
                continue
            try:
                text = line.decode("utf-8")
            except UnicodeDecodeError as e:
                self.record += 1
                raise FormatError(f"invalid UTF-8: {e}", record=self.record) from e
            return text.split("\t")

    def _decode(self, fields: list[str]) -> Visit:
        typ = classify_record(fields)
        if self.export_type is None:
            self.export_type = typ
            logger.debug("Inferred %s export from first record", typ)
        elif typ is not self.export_type:
            raise FormatError(
                f"record with {len(fields)} fields in {self.export_type} export"
            )

        if typ is ExportType.ARCHIVED:
            return parse_archived_record(fields)

        visit, offset = parse_analysis_record(fields)
        self._check_offset(offset)
        return visit

    def _check_offset(self, offset: int) -> None:
        if self._zone is _Zone.KNOWN:
            if offset != self._offset:
                raise ValidationError(
                    f"UTC offset {format_offset(offset)} differs from "
                    f"export UTC offset {format_offset(self._offset)}"
                )
            return

        # The filename holds the local time of export, which was read as UTC.
        # The adjusted time keeps that wall clock.
        self._zone = _Zone.KNOWN
        self._offset = offset
        if self.time is not None:
            zone = tz.tzoffset(None, offset)
            self.time = (self.time - timedelta(seconds=offset)).astimezone(zone)
        logger.debug("Export UTC offset is %s", format_offset(offset))
