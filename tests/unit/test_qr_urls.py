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

from lookbook.qr.urls import (
    item_scan_url,
    normalize_origin,
    pickup_direct_url,
    pickup_session_url,
)


class TestScanUrls(unittest.TestCase):
    def test_item_scan_url(self) -> None:
        self.assertEqual(
            item_scan_url("https://shop.test/", "item-1", "EX24"),
            "https://shop.test/scan-item/item-1?ex=EX24",
        )

    def test_components_are_escaped(self) -> None:
        self.assertEqual(
            item_scan_url("https://shop.test", "a/b c", "E&X"),
            "https://shop.test/scan-item/a%2Fb%20c?ex=E%26X",
        )

    def test_session_urls(self) -> None:
        self.assertEqual(
            pickup_session_url("http://localhost:8000", "EX24"),
            "http://localhost:8000/pickup-session-start?ex=EX24",
        )
        self.assertEqual(
            pickup_direct_url("https://shop.test", "PK-9"),
            "https://shop.test/pickup-session-direct/PK-9",
        )

    def test_invalid_origin_raises(self) -> None:
        for origin in ("shop.test", "ftp://shop.test", "https://shop.test/?a=1", ""):
            with self.subTest(origin=origin):
                with self.assertRaises(ValueError):
                    normalize_origin(origin)

    def test_empty_component_raises(self) -> None:
        with self.assertRaises(ValueError):
            item_scan_url("https://shop.test", "", "EX")


if __name__ == "__main__":
    unittest.main()
