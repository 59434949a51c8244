from __future__ import annotations

import unittest

from htmlentity import CharacterSet, CharEntity, EncodeType, EntityForm
from htmlentity.charset import check_encode_type
from htmlentity.smallset import SmallCharSet


class TestCharacterSet(unittest.TestCase):
    def test_membership(self) -> None:
        table = {
            CharacterSet.ALL: "<>&'\"aé世\t",
            CharacterSet.NON_ASCII: "Ā世😀",
            CharacterSet.HTML: "<>&",
            CharacterSet.SPECIAL_CHARS: "<>&'\"",
            CharacterSet.HTML_AND_NON_ASCII: "<>&Ā世😀",
            CharacterSet.SPECIAL_CHARS_AND_NON_ASCII: "<>&'\"Ā世😀",
        }
        probes = "<>&'\"aé\xff\tĀ世😀"
        for charset, members in table.items():
            for ch in probes:
                expected = charset is CharacterSet.ALL or ch in members
                assert charset.contains(ch) == expected, (charset, ch)

    def test_non_ascii_boundary(self) -> None:
        assert not CharacterSet.NON_ASCII.contains("\xff")
        assert CharacterSet.NON_ASCII.contains("Ā")

    def test_filter_precomputes_named(self) -> None:
        should_encode, entity = CharacterSet.SPECIAL_CHARS.filter("'", EncodeType.NAMED_OR_HEX)
        assert should_encode
        assert entity == CharEntity(EntityForm.NAMED, b"apos")
        assert CharacterSet.HTML_AND_NON_ASCII.filter("&", EncodeType.NAMED)[1] == CharEntity(EntityForm.NAMED, b"amp")

    def test_filter_without_named_form(self) -> None:
        assert CharacterSet.HTML.filter("<", EncodeType.DECIMAL) == (True, None)
        assert CharacterSet.NON_ASCII.filter("世", EncodeType.NAMED) == (True, None)
        assert CharacterSet.HTML_AND_NON_ASCII.filter("世", EncodeType.NAMED) == (True, None)

    def test_filter_rejects(self) -> None:
        assert CharacterSet.HTML.filter("'", EncodeType.NAMED) == (False, None)
        assert CharacterSet.NON_ASCII.filter("<", EncodeType.HEX) == (False, None)


class TestEncodeType(unittest.TestCase):
    def test_values(self) -> None:
        assert EncodeType.NAMED == 1
        assert EncodeType.HEX == 2
        assert EncodeType.DECIMAL == 4
        assert EncodeType.NAMED_OR_HEX == EncodeType.NAMED | EncodeType.HEX
        assert EncodeType.NAMED_OR_DECIMAL == EncodeType.NAMED | EncodeType.DECIMAL

    def test_forms_in_preference_order(self) -> None:
        assert EncodeType.NAMED_OR_HEX.forms() == (EntityForm.NAMED, EntityForm.HEX)
        assert EncodeType.NAMED_OR_DECIMAL.forms() == (EntityForm.NAMED, EntityForm.DECIMAL)
        assert (EncodeType.HEX | EncodeType.DECIMAL).forms() == (EntityForm.HEX, EntityForm.DECIMAL)
        assert EncodeType.DECIMAL.forms() == (EntityForm.DECIMAL,)

    def test_check_encode_type(self) -> None:
        assert check_encode_type(3) == EncodeType.NAMED_OR_HEX
        with self.assertRaises(ValueError):
            check_encode_type(0)


class TestSmallCharSet(unittest.TestCase):
    def test_contains(self) -> None:
        chars = SmallCharSet("<>")
        assert "<" in chars
        assert "a" not in chars
        assert "世" not in chars
        assert chars.contains(ord(">"))

    def test_union(self) -> None:
        chars = SmallCharSet("<") | SmallCharSet("'")
        assert "<" in chars
        assert "'" in chars

    def test_rejects_non_ascii(self) -> None:
        with self.assertRaises(ValueError):
            SmallCharSet("é")


if __name__ == "__main__":
    unittest.main()
