"""Display width and quoting tests."""

from __future__ import annotations

import unittest

from lazyls.layout import ColumnWidthProfile
from lazyls.render import RenderedRecord, display_width, quote_nonprintable
from lazyls.render.text import pad_to_width


class DisplayWidthTests(unittest.TestCase):
    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(display_width("abc"), 3)
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(display_width("e\u0301"), 1)

    def test_tab_counts_as_one_column_wherever_it_appears(self) -> None:
        self.assertEqual(display_width("\tname"), 5)
        self.assertEqual(display_width("a\tb"), 3)
        self.assertEqual(display_width("abcdefg\t"), 8)

    def test_tab_width_does_not_depend_on_field_position(self) -> None:
        record = RenderedRecord(("12345", "x\ty"))
        self.assertEqual(ColumnWidthProfile.of_record(record).widths, (5, 3))

    def test_padding_counts_tab_as_one_column(self) -> None:
        self.assertEqual(pad_to_width("a\tb", 5), "a\tb  ")


class QuoteTests(unittest.TestCase):
    def test_nonprintable_characters_become_question_marks(self) -> None:
        self.assertEqual(quote_nonprintable("bad\tname\x07"), "bad?name?")
        self.assertEqual(quote_nonprintable("fine"), "fine")


if __name__ == "__main__":
    unittest.main()
