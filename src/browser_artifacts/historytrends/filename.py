"""Recognize History Trends Unlimited export filenames.

Filenames used up to v1.6 of the extension:

    exported_analysis_history_{YYYYMMDD_HHMMSS}.tsv  (>= v1.5.2)
    exported_analysis_history_{YYYYMMDD}.tsv         (< v1.5.2)
    exported_analysis_history_{YYYYMMDD}.txt         (< v1.4.3)

    exported_archived_history_{YYYYMMDD}.tsv         (>= v1.4.3)
    exported_archived_history_{YYYYMMDD}.txt         (< v1.4.3)

    history_autobackup_{YYYYMMDD}_{full|incremental}.{tsv|zip}  (>= v1.5.2)
    history_autobackup_{YYYYMMDD}_{full|incremental}.{txt|zip}  (>= v1.4.1)

The pattern accepts somewhat more combinations than were exported, plus
a suffix such as `` (1)`` added by browsers for duplicate downloads.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from browser_artifacts.exceptions import FormatError
from browser_artifacts.historytrends.models import ExportType

FILENAME_PATTERN = re.compile(
    r"^(?:exported_(analysis|archived)_history_(\d{8}(?:_\d{6})?)"
    r"|history_autobackup_(\d{8}(?:_\d{6})?)_(full|incremental))"
    r"(?:[^\d].*)?"  # suffix
    r"\.(?:tsv|txt|zip)$",
    re.ASCII | re.DOTALL,
)

_DATE_FORMAT = "%Y%m%d"
_DATETIME_FORMAT = "%Y%m%d_%H%M%S"


def parse_filename(name: str) -> tuple[ExportType, datetime]:
    """Return the export type and UTC export time encoded in a base filename."""
    match = FILENAME_PATTERN.fullmatch(name)
    if not match:
        raise FormatError(f"filename is not an export: {name!r}")
    kind, exported, backed_up, _backup = match.groups()

    stamp = exported or backed_up
    fmt = _DATETIME_FORMAT if len(stamp) > 8 else _DATE_FORMAT
    try:
        t = datetime.strptime(stamp, fmt).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise FormatError(f"invalid time in filename {name!r}: {e}") from e

    if kind == "analysis":
        return ExportType.ANALYSIS, t
    return ExportType.ARCHIVED, t
