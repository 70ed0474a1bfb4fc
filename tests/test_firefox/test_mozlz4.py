"""Tests for mozLz4 containers."""

import json
import struct

import pytest

from browser_artifacts.exceptions import MozLz4Error
from browser_artifacts.firefox.mozlz4 import (
    MOZLZ4_MAGIC,
    compress_mozlz4,
    decompress_mozlz4,
    load_mozlz4_json,
)

lz4 = pytest.importorskip("lz4.block")

DOCUMENT = {"version": 1, "roots": {"toolbar": ["https://example.com/"] * 20}}


def test_round_trip():
    payload = json.dumps(DOCUMENT).encode("utf-8")
    data = compress_mozlz4(payload)
    assert data[:8] == MOZLZ4_MAGIC
    assert struct.unpack("<I", data[8:12]) == (len(payload),)
    assert decompress_mozlz4(data) == payload


def test_load_json_from_bytes_and_path(tmp_path):
    data = compress_mozlz4(json.dumps(DOCUMENT).encode("utf-8"))
    assert load_mozlz4_json(data) == DOCUMENT

    path = tmp_path / "bookmarks-2021-01-01.jsonlz4"
    path.write_bytes(data)
    assert load_mozlz4_json(path) == DOCUMENT


def test_missing_header():
    with pytest.raises(MozLz4Error, match="header"):
        decompress_mozlz4(b"mozLz40\x00")


def test_bad_magic():
    with pytest.raises(MozLz4Error, match="magic"):
        decompress_mozlz4(b"notLz40\x00\x00\x00\x00\x00")


def test_corrupt_block():
    data = MOZLZ4_MAGIC + struct.pack("<I", 100) + b"\xff" * 8
    with pytest.raises(MozLz4Error):
        decompress_mozlz4(data)


def test_not_json():
    with pytest.raises(MozLz4Error, match="JSON"):
        load_mozlz4_json(compress_mozlz4(b"not json"))
