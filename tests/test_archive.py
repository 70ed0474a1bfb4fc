"""Tests for single-file zip archives."""

import zipfile

import pytest

from browser_artifacts.archive import open_single_file_zip
from browser_artifacts.exceptions import ArchiveError


def test_open_single_file_zip(tmp_path):
    path = tmp_path / "export.zip"
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("inner/export.tsv", "line one\r\nline two\r\n")

    stream, name = open_single_file_zip(path)
    with stream:
        assert name == "inner/export.tsv"
        assert stream.readline() == b"line one\r\n"
        assert stream.read() == b"line two\r\n"
    assert stream.closed


def test_empty_zip(tmp_path):
    path = tmp_path / "empty.zip"
    zipfile.ZipFile(path, "w").close()
    with pytest.raises(ArchiveError, match="0 files"):
        open_single_file_zip(path)


def test_not_a_zip(tmp_path):
    path = tmp_path / "bogus.zip"
    path.write_bytes(b"not a zip")
    with pytest.raises(ArchiveError, match="Not a zip"):
        open_single_file_zip(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        open_single_file_zip(tmp_path / "missing.zip")
