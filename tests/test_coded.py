from __future__ import annotations

import unittest

from htmlentity import CharacterSet, CharEntity, EncodeType, EntityForm, Substitution, decode, encode


class TestEncodedView(unittest.TestCase):
    def setUp(self) -> None:
        self.result = encode("a<b世", EncodeType.NAMED_OR_HEX, CharacterSet.HTML_AND_NON_ASCII)
        self.expected = b"a&lt;b&#x4e16;"

    def test_materialize(self) -> None:
        assert self.result.to_bytes() == self.expected
        assert bytes(self.result) == self.expected
        assert self.result.to_string() == self.expected.decode()
        assert self.result.to_chars() == list(self.expected.decode())

    def test_length(self) -> None:
        assert self.result.bytes_len() == len(self.expected)
        assert len(self.result) == len(self.expected)

    def test_random_access(self) -> None:
        for index, value in enumerate(self.expected):
            assert self.result.byte(index) == value, index
            assert self.result[index] == value
        assert self.result[-1] == ord(";")
        assert self.result[1:5] == b"&lt;"

    def test_random_access_out_of_range(self) -> None:
        with self.assertRaises(IndexError):
            self.result.byte(len(self.expected))
        with self.assertRaises(IndexError):
            self.result[-len(self.expected) - 1]

    def test_entities(self) -> None:
        assert self.result.entity_count() == 2
        assert self.result.entities() == [
            CharEntity(EntityForm.NAMED, b"lt"),
            CharEntity(EntityForm.HEX, b"4e16"),
        ]

    def test_substitutions(self) -> None:
        first, second = self.result.substitutions
        assert first == Substitution(1, 1, CharEntity(EntityForm.NAMED, b"lt"), b"&lt;")
        assert (second.start, second.end) == (3, 5)

    def test_iteration(self) -> None:
        result = encode("a<b", EncodeType.NAMED, CharacterSet.HTML)
        assert list(result) == [
            (ord("a"), None),
            (ord("&"), (0, 0)),
            (ord("l"), (0, 1)),
            (ord("t"), (0, 2)),
            (ord(";"), (0, 3)),
            (ord("b"), None),
        ]
        assert list(result.into_iter()) == list(result)

    def test_no_substitutions(self) -> None:
        result = encode("abc", EncodeType.NAMED, CharacterSet.HTML)
        assert result.to_bytes() == b"abc"
        assert [value for value, _ in result] == list(b"abc")
        assert result.byte(2) == ord("c")

    def test_empty(self) -> None:
        result = encode(b"")
        assert result.bytes_len() == 0
        assert result.to_bytes() == b""
        assert list(result) == []

    def test_repr(self) -> None:
        assert repr(self.result) == "EncodedData(b'a&lt;b&#x4e16;', entities=2)"


class TestDecodedView(unittest.TestCase):
    def test_random_access_matches_materialized(self) -> None:
        result = decode("x&lt;&#x4e16;y&amp;&bad;")
        expected = result.to_bytes()
        assert expected == "x<世y&&bad;".encode()
        assert result.bytes_len() == len(expected)
        for index, value in enumerate(expected):
            assert result.byte(index) == value

    def test_chars(self) -> None:
        result = decode("&lt;&#x4e16;")
        assert result.chars() == ["<", "世"]
        assert result.to_chars() == ["<", "世"]

    def test_iteration_positions(self) -> None:
        result = decode("&#x4e16;!")
        assert list(result) == [
            (0xE4, (0, 0)),
            (0xB8, (0, 1)),
            (0x96, (0, 2)),
            (ord("!"), None),
        ]

    def test_length_formula(self) -> None:
        source = b"&amp;&#8594;z"
        result = decode(source)
        replaced = sum(sub.end - sub.start + 1 for sub in result.substitutions)
        inserted = sum(len(sub.data) for sub in result.substitutions)
        assert result.bytes_len() == len(source) - replaced + inserted


class TestBorrowing(unittest.TestCase):
    def test_bytes_input_is_shared(self) -> None:
        data = b"&lt;"
        result = decode(data)
        assert result.source is data
        assert not result.is_borrowed

    def test_bytearray_is_borrowed_until_detached(self) -> None:
        buffer = bytearray(b"<p>")
        result = encode(buffer, EncodeType.NAMED, CharacterSet.HTML)
        assert result.is_borrowed
        with self.assertRaises(BufferError):
            buffer.extend(b"!")

        assert result.detach() is result
        assert not result.is_borrowed
        buffer.extend(b"!")
        assert result.to_bytes() == b"&lt;p&gt;"

    def test_borrowed_view_sees_in_place_changes(self) -> None:
        buffer = bytearray(b"a&amp;")
        result = decode(buffer)
        buffer[0] = ord("b")
        assert result.to_bytes() == b"b&"
        result.detach()
        buffer[0] = ord("c")
        assert result.to_bytes() == b"b&"


if __name__ == "__main__":
    unittest.main()
