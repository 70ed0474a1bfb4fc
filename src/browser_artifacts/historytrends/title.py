"""Page title whitespace normalization."""

from __future__ import annotations

import re
import unicodedata

# utils.formatTitle in the extension replaces /[\t\r\n]/g, then /\s\s+/g
# with ' ', which leaves single non-ASCII spaces alone. Titles are
# normalized here over the Unicode space separators (Zs) instead.
# Zs code points all lie in the BMP.
_SPACE_SEPARATORS = "".join(
    chr(c) for c in range(0x10000) if unicodedata.category(chr(c)) == "Zs"
)
_SPACE_PATTERN = re.compile(f"[\t\r\n{re.escape(_SPACE_SEPARATORS)}]+")


def normalize_title(title: str) -> str:
    """Collapse runs of tabs, line breaks and space separators to one space."""
    return _SPACE_PATTERN.sub(" ", title)
