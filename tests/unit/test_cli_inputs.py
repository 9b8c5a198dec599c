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


import json
import tempfile
import unittest
from pathlib import Path

from lookbook.cli.core.inputs import load_export_input, parse_export_input
from tests.test_support import item_mapping


class TestExportInput(unittest.TestCase):
    def test_load_from_file(self) -> None:
        document = {
            "metadata": {"code": "EX24", "title": "Spring", "start_date": "2024-03-01"},
            "items": [item_mapping(1), item_mapping(2)],
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "export.json"
            path.write_text(json.dumps(document), encoding="utf-8")
            loaded = load_export_input(path)
        self.assertEqual(loaded.metadata.code, "EX24")
        self.assertEqual([item.id for item in loaded.items], ["item-1", "item-2"])

    def test_invalid_documents(self) -> None:
        cases = (
            ([], "expected a JSON object"),
            ({"items": []}, "metadata must be an object"),
            ({"metadata": {"code": "E", "title": "T"}, "items": {}}, "items must be a list"),
            ({"metadata": {"code": "E", "title": "T"}, "items": [1]}, r"items\[0\] must be an object"),
            (
                {"metadata": {"code": "E", "title": "T"}, "items": [item_mapping(code="")]},
                r"items\[0\]: item.code",
            ),
        )
        for raw, message in cases:
            with self.subTest(message=message):
                with self.assertRaisesRegex(ValueError, message):
                    parse_export_input(raw)

    def test_pickups_replace_item_counts(self) -> None:
        document = {
            "metadata": {"code": "EX24", "title": "Spring"},
            "items": [
                item_mapping(1, pickup_count=9),
                item_mapping(2),
                item_mapping(3, pickup_count=4),
            ],
            "pickups": [
                {"pickup_code": "P-1", "customer_name": "Aoki", "item_ids": ["item-1", "item-2"]},
                {"pickup_code": "P-2", "item_ids": ["item-2"]},
            ],
        }
        loaded = parse_export_input(document)
        self.assertEqual([item.pickup_count for item in loaded.items], [1, 2, 0])
        self.assertEqual([pickup.pickup_code for pickup in loaded.pickups], ["P-1", "P-2"])

    def test_item_counts_kept_without_pickups(self) -> None:
        document = {
            "metadata": {"code": "EX24", "title": "Spring"},
            "items": [item_mapping(1, pickup_count=3)],
        }
        loaded = parse_export_input(document)
        self.assertEqual(loaded.items[0].pickup_count, 3)
        self.assertEqual(loaded.pickups, ())

    def test_invalid_pickups(self) -> None:
        base = {"metadata": {"code": "E", "title": "T"}, "items": [item_mapping(1)]}
        cases = (
            ({"pickups": {}}, "pickups must be a list"),
            ({"pickups": ["P-1"]}, r"pickups\[0\] must be an object"),
            ({"pickups": [{"item_ids": ["item-1"]}]}, r"pickups\[0\]: pickup.pickup_code"),
            ({"pickups": [{"pickup_code": "P", "item_ids": "item-1"}]}, r"pickups\[0\]: .*list"),
        )
        for extra, message in cases:
            with self.subTest(message=message):
                with self.assertRaisesRegex(ValueError, message):
                    parse_export_input({**base, **extra})

    def test_bad_json_names_the_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.json"
            path.write_text("{", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "broken.json"):
                load_export_input(path)


if __name__ == "__main__":
    unittest.main()
