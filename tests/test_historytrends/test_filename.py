"""Tests for export filename recognition."""

from datetime import datetime, timezone

import pytest

from browser_artifacts.exceptions import FormatError
from browser_artifacts.historytrends import ExportType, parse_filename


def test_analysis_with_time():
    typ, t = parse_filename("exported_analysis_history_20131116_144918.tsv")
    assert typ is ExportType.ANALYSIS
    assert t == datetime(2013, 11, 16, 14, 49, 18, tzinfo=timezone.utc)


def test_archived_date_only():
    typ, t = parse_filename("exported_archived_history_20131116.tsv")
    assert typ is ExportType.ARCHIVED
    assert t == datetime(2013, 11, 16, tzinfo=timezone.utc)


@pytest.mark.parametrize("name", [
    "history_autobackup_20200101_full.zip",
    "history_autobackup_20200101_incremental.tsv",
    "history_autobackup_20200101_120000_full.txt",
])
def test_autobackup_is_archived(name):
    typ, t = parse_filename(name)
    assert typ is ExportType.ARCHIVED
    assert t.date() == datetime(2020, 1, 1).date()


@pytest.mark.parametrize("name", [
    "exported_analysis_history_20131116 (1).tsv",
    "exported_analysis_history_20131116_144918 copy.txt",
    "exported_archived_history_20131116-old.zip",
])
def test_suffix_tolerated(name):
    parse_filename(name)


@pytest.mark.parametrize("name", [
    "exported_analysis_history_20131116.csv",
    "exported_analysis_history_2013111.tsv",
    "exported_analysis_history_201311161.tsv",
    "exported_other_history_20131116.tsv",
    "history_autobackup_20200101.zip",
    "exported_archived_history_20131116.tsv\n",
    "notes.txt",
])
def test_rejected(name):
    with pytest.raises(FormatError, match="not an export"):
        parse_filename(name)


def test_invalid_date():
    with pytest.raises(FormatError, match="invalid time"):
        parse_filename("exported_archived_history_20131340.tsv")
