"""Mozilla's mozLz4 container (``.jsonlz4``, ``.mozlz4``, ``.baklz4``).

Layout: the 8-byte magic ``mozLz40\\0``, the decompressed size as a
little-endian uint32, then a single raw LZ4 block.
"""

from __future__ import annotations

import json
import logging
import struct
from pathlib import Path
from typing import Any

from browser_artifacts.exceptions import MozLz4Error

logger = logging.getLogger(__name__)

MOZLZ4_MAGIC = b"mozLz40\x00"
HEADER_SIZE = 12


def _lz4_block():
    try:
        import lz4.block
    except ImportError:
        raise ImportError(
            "lz4 is required for mozLz4 files. "
            "Install with: pip install browser-artifacts[firefox]"
        )
    return lz4.block


def decompress_mozlz4(data: bytes) -> bytes:
    """Decompress a mozLz4 container."""
    if len(data) < HEADER_SIZE:
        raise MozLz4Error("Missing mozLz4 header")
    if data[:8] != MOZLZ4_MAGIC:
        raise MozLz4Error(f"Invalid mozLz4 magic number: {data[:8].hex()}")
    (size,) = struct.unpack("<I", data[8:HEADER_SIZE])

    block = _lz4_block()
    try:
        out = block.decompress(data[HEADER_SIZE:], uncompressed_size=size)
    except block.LZ4BlockError as e:
        raise MozLz4Error(f"mozLz4 decompress: {e}") from e
    if len(out) != size:
        raise MozLz4Error(
            f"Header size {size} and decompressed size {len(out)} differ"
        )
    return out


def compress_mozlz4(data: bytes) -> bytes:
    """Compress ``data`` into a mozLz4 container."""
    block = _lz4_block()
    payload = block.compress(data, store_size=False)
    return MOZLZ4_MAGIC + struct.pack("<I", len(data)) + payload


def load_mozlz4_json(source: str | Path | bytes) -> Any:
    """Decompress and decode a mozLz4-wrapped JSON document.

    ``source`` is either the raw container bytes or a path to read.
    """
    if isinstance(source, bytes):
        data = source
    else:
        data = Path(source).read_bytes()
        logger.debug("Read %d bytes of mozLz4 from %s", len(data), source)
    text = decompress_mozlz4(data)
    try:
        return json.loads(text)
    except ValueError as e:
        raise MozLz4Error(f"mozLz4 payload is not JSON: {e}") from e
