"""Encoding policies: which characters to encode, and into which form."""

from __future__ import annotations

from enum import Enum, IntFlag

from .smallset import SmallCharSet
from .tokens import CharEntity, EntityForm

_PREFERENCE = (EntityForm.NAMED, EntityForm.HEX, EntityForm.DECIMAL)


class EncodeType(IntFlag):
    """Allowed entity forms, tried in the order Named, Hex, Decimal."""

    NAMED = 1
    HEX = 2
    DECIMAL = 4
    NAMED_OR_HEX = 3
    NAMED_OR_DECIMAL = 5

    def forms(self) -> tuple[EntityForm, ...]:
        return tuple(form for form in _PREFERENCE if self & form)


def check_encode_type(encode_type) -> EncodeType:
    encode_type = EncodeType(encode_type)
    if not encode_type & 7:
        raise ValueError(f"EncodeType {encode_type!r} selects no entity form")
    return encode_type


HTML_CHARS = SmallCharSet("<>&")
SPECIAL_CHARS = HTML_CHARS | SmallCharSet("'\"")

_NAMED_SPECIALS = {
    "<": CharEntity(EntityForm.NAMED, b"lt"),
    ">": CharEntity(EntityForm.NAMED, b"gt"),
    "&": CharEntity(EntityForm.NAMED, b"amp"),
    "'": CharEntity(EntityForm.NAMED, b"apos"),
    '"': CharEntity(EntityForm.NAMED, b"quot"),
}

_KEEP = (False, None)
_ENCODE = (True, None)


class CharacterSet(Enum):
    """Which code points the encoder replaces."""

    ALL = "all"
    NON_ASCII = "non-ascii"
    HTML = "html"
    SPECIAL_CHARS = "special-chars"
    HTML_AND_NON_ASCII = "html-and-non-ascii"
    SPECIAL_CHARS_AND_NON_ASCII = "special-chars-and-non-ascii"

    def contains(self, ch: str) -> bool:
        code = ord(ch)
        if self is CharacterSet.ALL:
            return True
        if self is CharacterSet.NON_ASCII:
            return code > 0xFF
        if self is CharacterSet.HTML:
            return HTML_CHARS.contains(code)
        if self is CharacterSet.SPECIAL_CHARS:
            return SPECIAL_CHARS.contains(code)
        if self is CharacterSet.HTML_AND_NON_ASCII:
            return code > 0xFF or HTML_CHARS.contains(code)
        return code > 0xFF or SPECIAL_CHARS.contains(code)

    def filter(self, ch: str, encode_type: EncodeType) -> tuple[bool, CharEntity | None]:
        """Classify ``ch`` as ``(encode?, precomputed replacement)``.

        The HTML sets hand back their named entity directly when the
        encode type allows Named, so the encoder skips the table lookup.
        """
        if not self.contains(ch):
            return _KEEP
        if self is CharacterSet.ALL or self is CharacterSet.NON_ASCII:
            return _ENCODE
        if encode_type & EncodeType.NAMED:
            entity = _NAMED_SPECIALS.get(ch)
            if entity is not None:
                return (True, entity)
        return _ENCODE
