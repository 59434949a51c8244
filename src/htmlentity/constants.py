"""Shared constants and the defaults used when a caller omits a policy."""

from .charset import CharacterSet, EncodeType

DEFAULT_ENCODE_TYPE = EncodeType.NAMED
DEFAULT_CHARACTER_SET = CharacterSet.SPECIAL_CHARS

AMPERSAND = 0x26  # &
SEMICOLON = 0x3B  # ;
NUMBER_SIGN = 0x23  # #

# Longest digit runs (after leading zeros) that can still be <= 0x10FFFF
MAX_DECIMAL_DIGITS = 7
MAX_HEX_DIGITS = 6
