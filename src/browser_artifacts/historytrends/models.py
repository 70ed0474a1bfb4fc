"""Data models for History Trends Unlimited exports."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import IO


class ExportType(enum.Enum):
    """Format of an export."""

    ANALYSIS = 1  # "Export These Results", 8 columns
    ARCHIVED = 2  # "Transfer History" / "Auto Backup", 3-4 columns

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class Visit:
    """A page visit in browsing history.

    URL and visit time combined are unique within an export.
    """

    url: str
    visit_time: datetime | None  # UTC; None when the export left it blank
    transition: int = 0  # Chrome page transition bitfield
    page_title: str = ""


@dataclass
class Export:
    """Browsing history exported from History Trends Unlimited."""

    filename: str
    type: ExportType | None  # None for an empty stream of unknown type
    time: datetime | None  # analysis: local time of export; archived: UTC
    visits: list[Visit] = field(default_factory=list)

    def write(self, stream: IO[bytes]) -> None:
        """Write the export to a binary stream."""
        from browser_artifacts.historytrends.writer import ExportWriter

        writer = ExportWriter(stream, self.type, self.time)
        writer.write_all(self.visits)
        writer.flush()
