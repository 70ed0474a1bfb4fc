"""Unified exception hierarchy for browser-artifacts."""

from __future__ import annotations


class BrowserArtifactError(Exception):
    """Base exception for all browser-artifact errors."""


# History Trends Unlimited
class HistoryTrendsError(BrowserArtifactError):
    """Base exception for History Trends export operations.

    ``record`` is the 1-based index of the record being read or written
    when the error occurred, or None when no record was involved.
    """

    def __init__(self, message: str, record: int | None = None):
        super().__init__(message)
        self.message = message
        self.record = record

    def __str__(self) -> str:
        if self.record is None:
            return self.message
        return f"record {self.record}: {self.message}"


class FormatError(HistoryTrendsError):
    """Input that cannot be interpreted at all."""


class ValidationError(HistoryTrendsError):
    """Input that parses but fails a cross-field consistency check."""


# Archives
class ArchiveError(BrowserArtifactError):
    """Failed to open an export container."""


# Firefox
class MozLz4Error(BrowserArtifactError):
    """Malformed mozLz4 data or failed decompression."""
