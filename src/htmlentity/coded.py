"""Zero-copy result views returned by encode and decode.

A view keeps the original input next to a sorted list of substitutions and
only splices them together when asked to: ``to_bytes``, ``to_string``,
iteration or random access via ``byte(i)``.
"""

from __future__ import annotations

from bisect import bisect_right

from .tokens import DecodeError


def as_source(data):
    """Normalize caller input to something indexable by byte.

    ``bytes`` is used as-is; mutable buffers are wrapped in a memoryview so
    the result borrows them until ``detach()``.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytearray, memoryview)):
        return memoryview(data).cast("B")
    raise TypeError(f"Expected bytes-like object or str, got {type(data).__name__}")


class Substitution:
    """Source bytes ``start..=end`` replaced by ``data``.

    ``value`` is what the bytes stand for: a ``CharEntity`` for encoded data
    and the decoded character for decoded data.
    """

    __slots__ = ("data", "end", "start", "value")

    def __init__(self, start, end, value, data):
        self.start = start
        self.end = end
        self.value = value
        self.data = data

    @property
    def range(self):
        return range(self.start, self.end + 1)

    def __repr__(self):
        return f"Substitution({self.start}..={self.end}, {self.value!r})"

    def __eq__(self, other):
        if not isinstance(other, Substitution):
            return NotImplemented
        return (self.start, self.end, self.value, self.data) == (other.start, other.end, other.value, other.data)

    __hash__ = None


class CodedData:
    __slots__ = ("_length", "_source", "_starts", "substitutions")

    def __init__(self, source, substitutions):
        self._source = source
        self.substitutions = substitutions
        self._starts = None
        length = len(source)
        for sub in substitutions:
            length += len(sub.data) - (sub.end - sub.start + 1)
        self._length = length

    @property
    def source(self):
        return self._source

    @property
    def is_borrowed(self):
        return isinstance(self._source, memoryview)

    def detach(self):
        """Copy the borrowed input so the view no longer references it."""
        source = self._source
        if isinstance(source, memoryview):
            self._source = source.tobytes()
            source.release()
        return self

    def entity_count(self):
        return len(self.substitutions)

    def bytes_len(self):
        return self._length

    def __len__(self):
        return self._length

    def _logical_starts(self):
        starts = self._starts
        if starts is None:
            starts = []
            shift = 0
            for sub in self.substitutions:
                starts.append(sub.start + shift)
                shift += len(sub.data) - (sub.end - sub.start + 1)
            self._starts = starts
        return starts

    def byte(self, index):
        """Return the byte at logical offset ``index`` of the output."""
        if index < 0:
            index += self._length
        if index < 0 or index >= self._length:
            raise IndexError("CodedData index out of range")
        starts = self._logical_starts()
        position = bisect_right(starts, index) - 1
        if position < 0:
            return self._source[index]
        sub = self.substitutions[position]
        offset = index - starts[position]
        if offset < len(sub.data):
            return sub.data[offset]
        return self._source[sub.end + 1 + offset - len(sub.data)]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.to_bytes()[index]
        return self.byte(index)

    def __iter__(self):
        """Yield ``(byte, None)`` for source bytes and ``(byte, (k, offset))``
        for byte ``offset`` of the ``k``-th substitution."""
        source = self._source
        cursor = 0
        for position, sub in enumerate(self.substitutions):
            for value in source[cursor : sub.start]:
                yield value, None
            for offset, value in enumerate(sub.data):
                yield value, (position, offset)
            cursor = sub.end + 1
        for value in source[cursor:]:
            yield value, None

    def into_iter(self):
        return iter(self)

    def write_to(self, out):
        source = self._source
        cursor = 0
        for sub in self.substitutions:
            if sub.start > cursor:
                out += source[cursor : sub.start]
            out += sub.data
            cursor = sub.end + 1
        if cursor < len(source):
            out += source[cursor:]

    def to_bytes(self):
        out = bytearray()
        self.write_to(out)
        return bytes(out)

    __bytes__ = to_bytes

    def to_string(self):
        """Materialize as text; raises UnicodeDecodeError on invalid UTF-8."""
        return self.to_bytes().decode("utf-8")

    def to_chars(self):
        return list(self.to_string())

    def __repr__(self):
        return f"{type(self).__name__}({self.to_bytes()!r}, entities={len(self.substitutions)})"


class EncodedData(CodedData):
    __slots__ = ()

    def entities(self):
        return [sub.value for sub in self.substitutions]


class DecodedData(CodedData):
    __slots__ = ("errors",)

    def __init__(self, source, substitutions, errors: list[DecodeError]):
        super().__init__(source, substitutions)
        self.errors = errors

    def is_ok(self):
        return not self.errors

    def get_errors(self):
        return self.errors

    def chars(self):
        return [sub.value for sub in self.substitutions]
