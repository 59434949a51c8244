"""Named character reference table.

Built once at import time from the WHATWG entity list that ships with the
standard library (``html.entities.html5``). The result is three immutable
views over the same records:

- ``ENTITIES_BY_CODE``: ``(name, code)`` pairs sorted by code, with the
  preferred name (shortest, lowercase before uppercase) first for each code.
- ``ENTITIES_BY_NAME``: the same pairs sorted by name.
- ``NAME_INDEX``: first byte of a name -> ``(start, end)`` slice of
  ``ENTITIES_BY_NAME`` holding every name that starts with that byte.

Names are ASCII ``bytes`` without the surrounding ``&`` and ``;``.
"""

from __future__ import annotations

import html.entities
import logging
from bisect import bisect_left

logger = logging.getLogger(__name__)

# Keys include the trailing semicolon (e.g., "amp;", "lang;"); the legacy
# forms without it are duplicates of the same names.
_HTML5_ENTITIES = html.entities.html5

# Hottest names, consulted before the main table.
FAST_NAMED = {
    b"lt": 0x3C,
    b"LT": 0x3C,
    b"gt": 0x3E,
    b"GT": 0x3E,
    b"amp": 0x26,
    b"AMP": 0x26,
    b"quot": 0x22,
    b"QUOT": 0x22,
    b"apos": 0x27,
    b"nbsp": 0xA0,
}


def _is_entity_name(name: str) -> bool:
    if not name or not name.isascii():
        return False
    return name[0].isalpha() and name.isalnum()


def _preferred_order(record: tuple[bytes, int]) -> tuple[int, int, bytes]:
    name, code = record
    # swapcase() sorts lowercase letters ahead of uppercase at equal length
    return (code, len(name), name.swapcase())


def _build_records() -> list[tuple[bytes, int]]:
    records = []
    for key, value in _HTML5_ENTITIES.items():
        if not key.endswith(";"):
            continue
        name = key[:-1]
        # Multi code point references (e.g. "fjlig") have no single scalar
        if len(value) != 1 or not _is_entity_name(name):
            continue
        records.append((name.encode("ascii"), ord(value)))
    return records


def _build_name_index(by_name: tuple[tuple[bytes, int], ...]) -> dict[int, tuple[int, int]]:
    index: dict[int, tuple[int, int]] = {}
    for position, (name, _code) in enumerate(by_name):
        first = name[0]
        start, _end = index.get(first, (position, position))
        index[first] = (start, position + 1)
    return index


_RECORDS = _build_records()

ENTITIES_BY_CODE: tuple[tuple[bytes, int], ...] = tuple(sorted(_RECORDS, key=_preferred_order))
ENTITIES_BY_NAME: tuple[tuple[bytes, int], ...] = tuple(sorted(_RECORDS))
NAME_INDEX: dict[int, tuple[int, int]] = _build_name_index(ENTITIES_BY_NAME)

# Parallel key columns for bisect
_CODES: tuple[int, ...] = tuple(code for _name, code in ENTITIES_BY_CODE)
_NAMES: tuple[bytes, ...] = tuple(name for name, _code in ENTITIES_BY_NAME)

del _RECORDS

logger.debug(
    "Built entity tables: %d records, %d first-letter buckets",
    len(ENTITIES_BY_CODE),
    len(NAME_INDEX),
)


def name_for_code(code: int) -> bytes | None:
    """Return the preferred entity name for ``code``, or None.

    The leftmost match in ``ENTITIES_BY_CODE`` is the canonical entry:
    shortest name, lowercase preferred when lengths tie.
    """
    position = bisect_left(_CODES, code)
    if position < len(_CODES) and _CODES[position] == code:
        return ENTITIES_BY_CODE[position][0]
    return None


def names_for_code(code: int) -> list[bytes]:
    """Return every entity name for ``code`` in preference order."""
    position = bisect_left(_CODES, code)
    names = []
    while position < len(_CODES) and _CODES[position] == code:
        names.append(ENTITIES_BY_CODE[position][0])
        position += 1
    return names


def code_for_name(name: bytes) -> int | None:
    """Resolve an entity name (no ``&``/``;``) to its code point, or None."""
    code = FAST_NAMED.get(name)
    if code is not None:
        return code
    if not name:
        return None
    bucket = NAME_INDEX.get(name[0])
    if bucket is None:
        return None
    start, end = bucket
    position = bisect_left(_NAMES, name, start, end)
    if position < end and _NAMES[position] == name:
        return ENTITIES_BY_NAME[position][1]
    return None
