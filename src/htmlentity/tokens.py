"""Value types shared by the encoder, the decoder and the result views."""

from __future__ import annotations

from enum import Enum, IntEnum


class EntityForm(IntEnum):
    """The three textual shapes of a character reference."""

    NAMED = 1
    HEX = 2
    DECIMAL = 4


_PREFIXES = {
    EntityForm.NAMED: b"&",
    EntityForm.HEX: b"&#x",
    EntityForm.DECIMAL: b"&#",
}


class CharEntity:
    """One encoded character: its form plus the entity interior.

    ``payload`` holds only the interior (``lt``, ``3c``, ``60``); the ``&``,
    ``#``/``#x`` prefix and the ``;`` suffix are added by ``to_bytes``.
    """

    __slots__ = ("_data", "form", "payload")

    def __init__(self, form, payload):
        self.form = EntityForm(form)
        self.payload = bytes(payload)
        self._data = None

    def to_bytes(self):
        data = self._data
        if data is None:
            data = self._data = _PREFIXES[self.form] + self.payload + b";"
        return data

    def write_to(self, out):
        out += _PREFIXES[self.form]
        out += self.payload
        out.append(0x3B)

    def __len__(self):
        return len(_PREFIXES[self.form]) + len(self.payload) + 1

    def __repr__(self):
        return f"CharEntity({self.form.name}, {self.payload!r})"

    def __str__(self):
        return self.to_bytes().decode("ascii")

    def __eq__(self, other):
        if not isinstance(other, CharEntity):
            return NotImplemented
        return self.form == other.form and self.payload == other.payload

    def __hash__(self):
        return hash((self.form, self.payload))


class ErrorKind(Enum):
    EMPTY_ENTITY = "empty-entity"
    UNTERMINATED_ENTITY = "unterminated-entity"
    UNENCODED_AMPERSAND = "unencoded-ampersand"
    MALFORMED_NAME = "malformed-name"
    UNKNOWN_NAME = "unknown-name"
    MALFORMED_NUMBER = "malformed-number"
    OUT_OF_RANGE_SCALAR = "out-of-range-scalar"


class DecodeError:
    """A malformed entity left intact by the decoder.

    ``start`` and ``end`` are inclusive byte offsets into the input and
    cover the whole run starting at its ``&``.
    """

    __slots__ = ("end", "kind", "start")

    def __init__(self, kind, start, end):
        self.kind = ErrorKind(kind)
        self.start = start
        self.end = end

    @property
    def code(self):
        return self.kind.value

    @property
    def range(self):
        return range(self.start, self.end + 1)

    def __repr__(self):
        return f"DecodeError({self.code!r}, start={self.start}, end={self.end})"

    def __str__(self):
        return f"({self.start}..{self.end}): {self.code}"

    def __eq__(self, other):
        if not isinstance(other, DecodeError):
            return NotImplemented
        return self.kind == other.kind and self.start == other.start and self.end == other.end

    __hash__ = None  # Unhashable since we define __eq__


class StrictDecodeError(ValueError):
    """Raised by strict decoding on the first malformed entity."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
