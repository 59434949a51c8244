"""Encoding: UTF-8 bytes in, character references out.

A single scanner walks the input, decoding UTF-8 inline so that every
replacement is expressed as an inclusive range of source byte offsets. The
scanner hands each ``(start, end, entity)`` decision to a visitor; the view
API records it as a substitution, the buffer API writes it out directly.
"""

from __future__ import annotations

from collections.abc import Callable

from .charset import CharacterSet, EncodeType, check_encode_type
from .coded import EncodedData, Substitution, as_source
from .constants import DEFAULT_CHARACTER_SET, DEFAULT_ENCODE_TYPE
from .entities import name_for_code
from .tokens import CharEntity, EntityForm

Classifier = Callable[[str, EncodeType], tuple[bool, CharEntity | None]]
Visitor = Callable[[int, int, CharEntity], None]

_KEEP = (False, None)
_ENCODE = (True, None)

# Smallest scalar each sequence length may encode; anything lower is overlong.
_MINIMUM = (0, 0x80, 0x800, 0x10000)


def format_entity(code: int, forms) -> CharEntity | None:
    """Render ``code`` in the first of ``forms`` that applies."""
    for form in forms:
        if form is EntityForm.NAMED:
            name = name_for_code(code)
            if name is not None:
                return CharEntity(EntityForm.NAMED, name)
        elif form is EntityForm.HEX:
            return CharEntity(EntityForm.HEX, b"%x" % code)
        else:
            return CharEntity(EntityForm.DECIMAL, b"%d" % code)
    return None


def encode_char(ch, encode_type=DEFAULT_ENCODE_TYPE) -> CharEntity | None:
    """Encode a single character (or integer code point).

    Returns None when no allowed form applies, i.e. Named alone was asked
    for and the code point has no name.
    """
    code = ch if isinstance(ch, int) else ord(ch)
    if code < 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        raise ValueError(f"Not a Unicode scalar value: {code:#x}")
    return format_entity(code, check_encode_type(encode_type).forms())


def scan(source, encode_type: EncodeType, classifier: Classifier, visit: Visitor) -> None:
    forms = encode_type.forms()
    length = len(source)
    index = 0
    pending = 0
    code = 0
    start = 0
    while index < length:
        byte = source[index]
        if pending:
            if byte & 0xC0 == 0x80:
                code = (code << 6) | (byte & 0x3F)
                pending -= 1
                if pending:
                    index += 1
                    continue
                end = index
                index += 1
                if code < _MINIMUM[end - start] or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                    continue
            else:
                # Truncated sequence: its bytes stay, this byte starts afresh
                pending = 0
                continue
        elif byte < 0x80:
            code = byte
            start = end = index
            index += 1
        else:
            if byte & 0xE0 == 0xC0:
                pending = 1
                code = byte & 0x1F
            elif byte & 0xF0 == 0xE0:
                pending = 2
                code = byte & 0x0F
            elif byte & 0xF8 == 0xF0:
                pending = 3
                code = byte & 0x07
            # else: stray continuation or invalid lead byte, passed through
            start = index
            index += 1
            continue

        ch = chr(code)
        should_encode, entity = classifier(ch, encode_type)
        if not should_encode:
            continue
        if entity is None:
            entity = format_entity(code, forms)
            if entity is None:
                continue
        visit(start, end, entity)


def encode_with(data, encode_type, classifier: Classifier) -> EncodedData:
    """Encode ``data`` with a caller supplied classifier.

    ``classifier(ch, encode_type)`` returns ``(encode?, entity)`` where
    ``entity`` is an optional precomputed ``CharEntity``.
    """
    encode_type = check_encode_type(encode_type)
    source = as_source(data)
    substitutions: list[Substitution] = []

    def visit(start, end, entity):
        substitutions.append(Substitution(start, end, entity, entity.to_bytes()))

    scan(source, encode_type, classifier, visit)
    return EncodedData(source, substitutions)


def encode_with_to(data, encode_type, classifier: Classifier, out: bytearray) -> None:
    """Like ``encode_with`` but writes the encoded bytes onto ``out``."""
    encode_type = check_encode_type(encode_type)
    source = as_source(data)
    cursor = 0

    def visit(start, end, entity):
        nonlocal cursor
        if start > cursor:
            out.extend(source[cursor:start])
        entity.write_to(out)
        cursor = end + 1

    scan(source, encode_type, classifier, visit)
    if cursor < len(source):
        out.extend(source[cursor:])


def encode(data, encode_type=DEFAULT_ENCODE_TYPE, charset=DEFAULT_CHARACTER_SET) -> EncodedData:
    """Encode the characters of ``charset`` found in ``data``.

    >>> encode("<div>", EncodeType.NAMED, CharacterSet.SPECIAL_CHARS).to_string()
    '&lt;div&gt;'
    """
    return encode_with(data, encode_type, CharacterSet(charset).filter)


def encode_to(data, encode_type, charset, out: bytearray) -> None:
    encode_with_to(data, encode_type, CharacterSet(charset).filter, out)


def _filter_classifier(accept, exclude_named):
    def classifier(ch, encode_type):
        if not accept(ch):
            return _KEEP
        if exclude_named is not None and exclude_named(ch):
            forms = tuple(form for form in encode_type.forms() if form is not EntityForm.NAMED)
            entity = format_entity(ord(ch), forms)
            if entity is None:
                return _KEEP
            return (True, entity)
        return _ENCODE

    return classifier


def encode_filter(data, accept, encode_type=DEFAULT_ENCODE_TYPE, exclude_named=None) -> EncodedData:
    """Encode every character for which ``accept(ch)`` is true.

    Characters for which ``exclude_named(ch)`` is true never use the named
    form; they fall back to hex or decimal if ``encode_type`` allows one and
    are kept as-is otherwise.
    """
    return encode_with(data, encode_type, _filter_classifier(accept, exclude_named))


def encode_filter_to(data, accept, encode_type, exclude_named, out: bytearray) -> None:
    encode_with_to(data, encode_type, _filter_classifier(accept, exclude_named), out)
