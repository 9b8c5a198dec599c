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


import math
import unittest

from lookbook.core.errors import LayoutError
from lookbook.render.layout import (
    CATALOG_PROFILE,
    ITEM_CODE_FLOOR,
    ITEM_CODE_TIERS,
    LABEL_PROFILE,
    CatalogProfile,
    LayoutConfig,
    item_code_font_size,
    item_name_font_size,
    plan_catalog,
    plan_fixed,
    plan_layout,
    step_font_size,
)


class TestPlanLayout(unittest.TestCase):
    def test_a4_labels_fit_five_by_five(self) -> None:
        descriptor = plan_layout(LABEL_PROFILE)
        self.assertEqual(descriptor.columns_per_page, 5)
        self.assertEqual(descriptor.rows_per_page, 5)
        self.assertEqual(descriptor.items_per_page, 25)
        self.assertEqual(descriptor.orientation, "portrait")

    def test_grid_matches_floor_formula(self) -> None:
        cases = (
            LayoutConfig(210, 297, 10, 3, 35, 50),
            LayoutConfig(297, 210, 5, 0, 40, 40),
            LayoutConfig(100, 100, 0, 2.5, 20, 30),
        )
        for config in cases:
            with self.subTest(config=config):
                descriptor = plan_layout(config)
                expected_cols = math.floor(
                    (config.page_width - 2 * config.margin) / (config.cell_width + config.gap)
                )
                expected_rows = math.floor(
                    (config.page_height - 2 * config.margin) / (config.cell_height + config.gap)
                )
                self.assertEqual(descriptor.columns_per_page, expected_cols)
                self.assertEqual(descriptor.rows_per_page, expected_rows)
                self.assertEqual(descriptor.items_per_page, expected_cols * expected_rows)

    def test_cell_larger_than_page_raises(self) -> None:
        with self.assertRaises(LayoutError):
            plan_layout(LayoutConfig(210, 297, 10, 3, 300, 50))

    def test_invalid_geometry_raises(self) -> None:
        cases = (
            LayoutConfig(0, 297, 10, 3, 35, 50),
            LayoutConfig(210, 297, -1, 3, 35, 50),
            LayoutConfig(210, 297, 10, float("nan"), 35, 50),
        )
        for config in cases:
            with self.subTest(config=config):
                with self.assertRaises(LayoutError):
                    plan_layout(config)

    def test_layout_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            plan_layout(LayoutConfig(50, 50, 20, 0, 20, 20))


class TestPlanCatalog(unittest.TestCase):
    def test_default_catalog_is_ten_per_landscape_page(self) -> None:
        descriptor = plan_catalog(CATALOG_PROFILE)
        self.assertEqual(descriptor.items_per_page, 10)
        self.assertEqual(descriptor.columns_per_page, 5)
        self.assertEqual(descriptor.rows_per_page, 2)
        self.assertEqual(descriptor.orientation, "landscape")
        self.assertAlmostEqual(descriptor.content_top, 6.0 + 22.0)

    def test_cells_fill_printable_area(self) -> None:
        descriptor = plan_catalog()
        used_w = 5 * descriptor.cell_width + 4 * descriptor.gap + 2 * descriptor.margin
        used_h = (
            2 * descriptor.cell_height
            + descriptor.gap
            + 2 * descriptor.margin
            + descriptor.header_height
            + descriptor.footer_height
        )
        self.assertAlmostEqual(used_w, descriptor.page_width)
        self.assertAlmostEqual(used_h, descriptor.page_height)

    def test_portrait_profile(self) -> None:
        descriptor = plan_catalog(CatalogProfile(items_per_page=12, columns=3, orientation="portrait"))
        self.assertEqual(descriptor.rows_per_page, 4)
        self.assertEqual(descriptor.orientation, "portrait")

    def test_fixed_grid_rejects_bad_counts(self) -> None:
        cases = ((0, 5), (10, 0), (10, 3))
        for per_page, columns in cases:
            with self.subTest(per_page=per_page, columns=columns):
                with self.assertRaises(LayoutError):
                    plan_fixed(per_page, columns)

    def test_fixed_grid_rejects_oversized_bands(self) -> None:
        with self.assertRaises(LayoutError):
            plan_fixed(10, 5, header_height=150, footer_height=100)

    def test_catalog_orientation_swaps_page_size(self) -> None:
        landscape = plan_catalog()
        portrait = plan_catalog(CatalogProfile(orientation="portrait"))
        self.assertEqual((landscape.page_width, landscape.page_height), (297.0, 210.0))
        self.assertEqual((portrait.page_width, portrait.page_height), (210.0, 297.0))


class TestFontSteps(unittest.TestCase):
    def test_code_tiers_strictly_decrease(self) -> None:
        sizes = [item_code_font_size("X" * length) for length in (10, 13, 18, 30)]
        self.assertEqual(len(set(sizes)), 4)
        self.assertEqual(sizes, sorted(sizes, reverse=True))

    def test_tier_boundaries(self) -> None:
        self.assertEqual(item_code_font_size("X" * 12), ITEM_CODE_TIERS[0][1])
        self.assertEqual(item_code_font_size("X" * 13), ITEM_CODE_TIERS[1][1])
        self.assertEqual(item_code_font_size("X" * 20), ITEM_CODE_TIERS[2][1])
        self.assertEqual(item_code_font_size("X" * 21), ITEM_CODE_FLOOR)

    def test_step_function_is_total_and_monotonic(self) -> None:
        previous = step_font_size(0, ITEM_CODE_TIERS, ITEM_CODE_FLOOR)
        self.assertEqual(step_font_size(-5, ITEM_CODE_TIERS, ITEM_CODE_FLOOR), previous)
        for length in range(1, 200):
            size = step_font_size(length, ITEM_CODE_TIERS, ITEM_CODE_FLOOR)
            self.assertLessEqual(size, previous)
            previous = size
        self.assertEqual(step_font_size(10**6, ITEM_CODE_TIERS, ITEM_CODE_FLOOR), ITEM_CODE_FLOOR)

    def test_name_tiers_are_monotonic(self) -> None:
        sizes = [item_name_font_size("n" * length) for length in range(0, 40)]
        self.assertEqual(sizes, sorted(sizes, reverse=True))


if __name__ == "__main__":
    unittest.main()
