"""Resolve the interior of a ``&...;`` token to a code point."""

from __future__ import annotations

from .constants import MAX_DECIMAL_DIGITS, MAX_HEX_DIGITS, NUMBER_SIGN
from .entities import code_for_name
from .smallset import SmallCharSet
from .tokens import ErrorKind

HEX_DIGITS = SmallCharSet("0123456789abcdefABCDEF")


def _is_scalar(code: int) -> bool:
    return code <= 0x10FFFF and not 0xD800 <= code <= 0xDFFF


def decode_numeric_entity(digits: bytes, is_hex: bool = False) -> tuple[int | None, ErrorKind | None]:
    """Decode the digits of a numeric character reference.

    Args:
        digits: The numeric part (without ``&#``/``&#x`` or ``;``)
        is_hex: Whether this is hexadecimal (``&#x``) or decimal (``&#``)

    Returns:
        ``(code, None)`` on success, ``(None, kind)`` otherwise
    """
    if not digits:
        return None, ErrorKind.MALFORMED_NUMBER
    if is_hex:
        for byte in digits:
            if not HEX_DIGITS.contains(byte):
                return None, ErrorKind.MALFORMED_NUMBER
    elif not digits.isdigit():
        return None, ErrorKind.MALFORMED_NUMBER

    significant = digits.lstrip(b"0")
    if not significant:
        return 0, None
    if len(significant) > (MAX_HEX_DIGITS if is_hex else MAX_DECIMAL_DIGITS):
        return None, ErrorKind.OUT_OF_RANGE_SCALAR
    code = int(significant, 16 if is_hex else 10)
    if not _is_scalar(code):
        return None, ErrorKind.OUT_OF_RANGE_SCALAR
    return code, None


def recognize(interior: bytes) -> tuple[int | None, ErrorKind | None]:
    """Classify and resolve the bytes strictly between ``&`` and ``;``.

    - ``name``: first byte ASCII letter, rest ASCII alphanumeric
    - ``#123``: decimal digits
    - ``#x7B`` / ``#X7b``: hex digits, either case
    """
    if not interior:
        return None, ErrorKind.EMPTY_ENTITY

    if interior[0] == NUMBER_SIGN:
        if len(interior) < 2:
            return None, ErrorKind.MALFORMED_NUMBER
        second = interior[1]
        if 0x30 <= second <= 0x39:
            return decode_numeric_entity(interior[1:])
        if second in (0x78, 0x58):  # x X
            return decode_numeric_entity(interior[2:], is_hex=True)
        return None, ErrorKind.MALFORMED_NUMBER

    if not interior[:1].isalpha() or not interior.isalnum():
        return None, ErrorKind.MALFORMED_NAME
    code = code_for_name(interior)
    if code is None:
        return None, ErrorKind.UNKNOWN_NAME
    return code, None
