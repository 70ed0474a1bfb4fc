"""Firefox profile artifacts."""

from browser_artifacts.firefox.mozlz4 import (
    compress_mozlz4,
    decompress_mozlz4,
    load_mozlz4_json,
)

__all__ = [
    "compress_mozlz4",
    "decompress_mozlz4",
    "load_mozlz4_json",
]
