"""Chromium browsing history exports from the History Trends Unlimited extension."""

from browser_artifacts.historytrends.filename import parse_filename
from browser_artifacts.historytrends.models import Export, ExportType, Visit
from browser_artifacts.historytrends.reader import ExportReader, open_export
from browser_artifacts.historytrends.title import normalize_title
from browser_artifacts.historytrends.writer import ExportWriter

__all__ = [
    "ExportReader",
    "ExportWriter",
    "open_export",
    "parse_filename",
    "normalize_title",
    "Export",
    "ExportType",
    "Visit",
]
