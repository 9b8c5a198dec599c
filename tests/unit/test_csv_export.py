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


import csv
import io
import unittest

from lookbook.render.csv_export import CSV_HEADER, items_csv, items_csv_filename
from tests.test_support import make_item, make_metadata


class TestItemsCsv(unittest.TestCase):
    def test_bom_header_and_rows(self) -> None:
        data = items_csv(
            [
                make_item(1, dollar_price=12.0, reference_price=12000),
                make_item(2, dollar_price=None, reference_price=None, name='Shirt "slim"'),
            ]
        )
        self.assertTrue(data.startswith(b"\xef\xbb\xbf"))
        rows = list(csv.reader(io.StringIO(data.decode("utf-8-sig"))))
        self.assertEqual(tuple(rows[0]), CSV_HEADER)
        self.assertEqual(rows[1][0], "A-1")
        self.assertEqual(rows[1][5:7], ["12", "12000"])
        self.assertEqual(rows[2][1], 'Shirt "slim"')
        self.assertEqual(rows[2][5:7], ["", ""])

    def test_every_field_is_quoted(self) -> None:
        text = items_csv([make_item()]).decode("utf-8-sig")
        first_line = text.splitlines()[0]
        self.assertTrue(first_line.startswith('"Item No."'))
        self.assertNotIn("\r", text)

    def test_filename(self) -> None:
        self.assertEqual(items_csv_filename(make_metadata(code="EX24")), "EX24_items.csv")


if __name__ == "__main__":
    unittest.main()
