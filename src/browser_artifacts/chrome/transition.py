"""Chrome page transition types.

A transition is a 32-bit value made of one core type in the low byte and
zero or more qualifier bits above it. See ``ui/base/page_transition_types.h``
in Chromium and
https://developer.chrome.com/docs/extensions/reference/history/#transition-types
"""

from __future__ import annotations

import enum

from browser_artifacts.exceptions import FormatError

CORE_MASK = 0xFF
QUALIFIER_MASK = 0xFFFFFF00
IS_REDIRECT_MASK = 0xC0000000


class CoreTransition(enum.IntEnum):
    LINK = 0
    TYPED = 1
    AUTO_BOOKMARK = 2
    AUTO_SUBFRAME = 3
    MANUAL_SUBFRAME = 4
    GENERATED = 5
    AUTO_TOPLEVEL = 6
    FORM_SUBMIT = 7
    RELOAD = 8
    KEYWORD = 9
    KEYWORD_GENERATED = 10


class TransitionQualifier(enum.IntFlag):
    FROM_API_3 = 0x00200000
    FROM_API_2 = 0x00400000
    BLOCKED = 0x00800000
    FORWARD_BACK = 0x01000000
    FROM_ADDRESS_BAR = 0x02000000
    HOME_PAGE = 0x04000000
    FROM_API = 0x08000000
    CHAIN_START = 0x10000000
    CHAIN_END = 0x20000000
    CLIENT_REDIRECT = 0x40000000
    SERVER_REDIRECT = 0x80000000


_BY_NAME = {t.name.lower(): t for t in CoreTransition}


def transition_from_string(name: str) -> CoreTransition:
    """Return the core transition for a snake_case name like ``auto_bookmark``."""
    transition = _BY_NAME.get(name.lower())
    if transition is None:
        raise FormatError(f"unrecognized transition type: {name!r}")
    return transition


def core_type(transition: int) -> int:
    return transition & CORE_MASK


def qualifiers(transition: int) -> int:
    return transition & QUALIFIER_MASK


def is_redirect(transition: int) -> bool:
    return bool(transition & IS_REDIRECT_MASK)


def transition_name(transition: int) -> str:
    """Return the snake_case name of the core type of ``transition``."""
    core = core_type(transition)
    try:
        return CoreTransition(core).name.lower()
    except ValueError:
        return f"transition_type({core})"
