"""Decoding: find ``&...;`` runs in a byte stream and resolve them.

The scanner is a two state machine (outside / inside an entity) driven only
by the ``&`` and ``;`` delimiters; every other byte is carried through.
Malformed runs are reported and left untouched, never dropped.
"""

from __future__ import annotations

import re

from .coded import DecodedData, Substitution, as_source
from .constants import AMPERSAND
from .recognizer import recognize
from .tokens import DecodeError, ErrorKind, StrictDecodeError

_DELIMITER_PATTERN = re.compile(rb"[&;]")


def scan(source, visit, report) -> None:
    """Drive ``visit(start, end, code)`` / ``report(kind, start, end)``.

    Ranges are inclusive and start at the ``&`` of the run.
    """
    inside = False
    start = 0
    for match in _DELIMITER_PATTERN.finditer(source):
        index = match.start()
        if source[index] == AMPERSAND:
            if inside:
                # The earlier '&' never got its ';'; restart at this one
                report(ErrorKind.UNENCODED_AMPERSAND, start - 1, index - 1)
            inside = True
            start = index + 1
        elif inside:
            inside = False
            if start == index:
                report(ErrorKind.EMPTY_ENTITY, start - 1, index)
                continue
            code, kind = recognize(bytes(source[start:index]))
            if kind is None:
                visit(start - 1, index, code)
            else:
                report(kind, start - 1, index)
    if inside:
        report(ErrorKind.UNTERMINATED_ENTITY, start - 1, len(source) - 1)


def _reporter(errors, strict):
    def report(kind, start, end):
        error = DecodeError(kind, start, end)
        if strict:
            raise StrictDecodeError(error)
        errors.append(error)

    return report


def decode(data, *, strict=False) -> DecodedData:
    """Decode every named, decimal and hex reference in ``data``.

    >>> decode("&lt;div&gt;").to_string()
    '<div>'

    With ``strict=True`` the first malformed entity raises
    ``StrictDecodeError`` instead of being collected in ``errors``.
    """
    source = as_source(data)
    substitutions: list[Substitution] = []
    errors: list[DecodeError] = []

    def visit(start, end, code):
        ch = chr(code)
        substitutions.append(Substitution(start, end, ch, ch.encode("utf-8")))

    scan(source, visit, _reporter(errors, strict))
    return DecodedData(source, substitutions, errors)


def decode_to(data, out: bytearray, *, strict=False) -> list[DecodeError]:
    """Decode ``data`` straight onto ``out``; returns the collected errors.

    A strict failure leaves ``out`` as it was before the call.
    """
    source = as_source(data)
    errors: list[DecodeError] = []
    cursor = 0

    def visit(start, end, code):
        nonlocal cursor
        if start > cursor:
            out.extend(source[cursor:start])
        out.extend(chr(code).encode("utf-8"))
        cursor = end + 1

    mark = len(out)
    try:
        scan(source, visit, _reporter(errors, strict))
    except StrictDecodeError:
        del out[mark:]
        raise
    if cursor < len(source):
        out.extend(source[cursor:])
    return errors


def decode_chars(chars) -> list[str]:
    """Decode a character sequence (a ``str`` or an iterable of characters)."""
    return decode("".join(chars)).to_chars()


def decode_chars_to(chars, out: list[str]) -> None:
    out.extend(decode_chars(chars))
