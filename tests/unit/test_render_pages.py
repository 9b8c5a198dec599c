# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.


import unittest

from lookbook.core.errors import LayoutError
from lookbook.render.pages import number_pages, page_label, paginate, total_pages


class TestPaginate(unittest.TestCase):
    def test_chunks_preserve_order_and_cover_everything(self) -> None:
        for count in (1, 9, 10, 11, 23, 100):
            for per_page in (1, 3, 10, 25):
                with self.subTest(count=count, per_page=per_page):
                    items = list(range(count))
                    chunks = paginate(items, per_page)
                    flattened = [value for chunk in chunks for value in chunk]
                    self.assertEqual(flattened, items)
                    self.assertEqual(len(chunks), -(-count // per_page))
                    self.assertTrue(all(0 < len(chunk) <= per_page for chunk in chunks))
                    self.assertTrue(all(len(chunk) == per_page for chunk in chunks[:-1]))

    def test_empty_input_has_no_chunks(self) -> None:
        self.assertEqual(paginate([], 10), [])

    def test_non_positive_page_size_raises(self) -> None:
        for per_page in (0, -1):
            with self.subTest(per_page=per_page):
                with self.assertRaises(LayoutError):
                    paginate([1, 2], per_page)


class TestNumberPages(unittest.TestCase):
    def test_cover_shifts_content_numbers(self) -> None:
        pages = number_pages(paginate(list(range(23)), 10), has_cover=True)
        self.assertEqual([page.number for page in pages], [2, 3, 4])
        self.assertEqual({page.total for page in pages}, {4})
        self.assertEqual([page.label for page in pages], ["page 2 / 4", "page 3 / 4", "page 4 / 4"])
        self.assertEqual([len(page.items) for page in pages], [10, 10, 3])

    def test_without_cover_numbers_start_at_one(self) -> None:
        pages = number_pages(paginate(list(range(30)), 25), has_cover=False)
        self.assertEqual([page.label for page in pages], ["page 1 / 2", "page 2 / 2"])

    def test_total_pages_and_label(self) -> None:
        self.assertEqual(total_pages(3, has_cover=True), 4)
        self.assertEqual(total_pages(3, has_cover=False), 3)
        self.assertEqual(page_label(1, 1), "page 1 / 1")


if __name__ == "__main__":
    unittest.main()
