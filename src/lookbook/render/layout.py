#!/usr/bin/env python3
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

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..core.errors import LayoutError
from .geometry import A4_LONG_MM, A4_SHORT_MM, Orientation, a4_size_mm, calc_cells

__all__ = [
    "CATALOG_PROFILE",
    "LABEL_PROFILE",
    "CatalogProfile",
    "LayoutConfig",
    "LayoutDescriptor",
    "item_code_font_size",
    "item_name_font_size",
    "plan_catalog",
    "plan_fixed",
    "plan_layout",
    "step_font_size",
]

# (max_length, size) pairs in ascending length order; lengths past the last tier get the floor.
ITEM_CODE_TIERS: tuple[tuple[int, float], ...] = ((12, 12.0), (15, 10.0), (20, 8.0))
ITEM_CODE_FLOOR = 7.0
ITEM_NAME_TIERS: tuple[tuple[int, float], ...] = ((10, 8.0), (15, 7.0), (20, 6.0))
ITEM_NAME_FLOOR = 5.0


@dataclass(frozen=True)
class LayoutConfig:
    """Physical page/cell geometry in millimeters."""

    page_width: float
    page_height: float
    margin: float
    gap: float
    cell_width: float
    cell_height: float


@dataclass(frozen=True)
class LayoutDescriptor:
    columns_per_page: int
    rows_per_page: int
    items_per_page: int
    cell_width: float
    cell_height: float
    margin: float
    gap: float
    page_width: float
    page_height: float
    header_height: float = 0.0
    footer_height: float = 0.0

    @property
    def content_top(self) -> float:
        return self.margin + self.header_height

    @property
    def orientation(self) -> Orientation:
        return "landscape" if self.page_width > self.page_height else "portrait"


@dataclass(frozen=True)
class CatalogProfile:
    """Fixed-count catalog layout, independent of physical page geometry."""

    items_per_page: int = 10
    columns: int = 5
    orientation: Orientation = "landscape"
    margin: float = 6.0
    gap: float = 1.6
    header_height: float = 22.0
    footer_height: float = 12.0


CATALOG_PROFILE = CatalogProfile()
LABEL_PROFILE = LayoutConfig(
    page_width=A4_SHORT_MM,
    page_height=A4_LONG_MM,
    margin=10.0,
    gap=3.0,
    cell_width=35.0,
    cell_height=50.0,
)


def plan_layout(config: LayoutConfig) -> LayoutDescriptor:
    """Derive the label grid for a physical page.

    ``columns = floor((page_width - 2*margin) / (cell_width + gap))`` and likewise for rows.
    Raises LayoutError when a single cell does not fit.
    """
    _validate_config(config)
    usable_w = config.page_width - 2 * config.margin
    usable_h = config.page_height - 2 * config.margin
    cols = calc_cells(usable_w, config.cell_width, config.gap)
    rows = calc_cells(usable_h, config.cell_height, config.gap)
    if cols <= 0 or rows <= 0:
        raise LayoutError(
            f"cell {config.cell_width}x{config.cell_height}mm with gap {config.gap}mm "
            f"does not fit a {config.page_width}x{config.page_height}mm page "
            f"with {config.margin}mm margins"
        )
    return LayoutDescriptor(
        columns_per_page=cols,
        rows_per_page=rows,
        items_per_page=cols * rows,
        cell_width=config.cell_width,
        cell_height=config.cell_height,
        margin=config.margin,
        gap=config.gap,
        page_width=config.page_width,
        page_height=config.page_height,
    )


def plan_fixed(
    items_per_page: int,
    columns: int,
    *,
    page_width: float = A4_LONG_MM,
    page_height: float = A4_SHORT_MM,
    margin: float = 0.0,
    gap: float = 0.0,
    header_height: float = 0.0,
    footer_height: float = 0.0,
) -> LayoutDescriptor:
    """Fixed-count grid; cell size is whatever fills the printable area."""
    if items_per_page <= 0:
        raise LayoutError("items_per_page must be positive")
    if columns <= 0:
        raise LayoutError("columns must be positive")
    if items_per_page % columns:
        raise LayoutError(
            f"items_per_page ({items_per_page}) must be a multiple of columns ({columns})"
        )
    rows = items_per_page // columns
    usable_w = page_width - 2 * margin
    usable_h = page_height - 2 * margin - header_height - footer_height
    cell_w = (usable_w - (columns - 1) * gap) / columns
    cell_h = (usable_h - (rows - 1) * gap) / rows
    if cell_w <= 0 or cell_h <= 0:
        raise LayoutError(f"{columns}x{rows} grid does not fit the printable area")
    return LayoutDescriptor(
        columns_per_page=columns,
        rows_per_page=rows,
        items_per_page=items_per_page,
        cell_width=cell_w,
        cell_height=cell_h,
        margin=margin,
        gap=gap,
        page_width=page_width,
        page_height=page_height,
        header_height=header_height,
        footer_height=footer_height,
    )


def plan_catalog(profile: CatalogProfile = CATALOG_PROFILE) -> LayoutDescriptor:
    page_w, page_h = a4_size_mm(profile.orientation)
    return plan_fixed(
        profile.items_per_page,
        profile.columns,
        page_width=page_w,
        page_height=page_h,
        margin=profile.margin,
        gap=profile.gap,
        header_height=profile.header_height,
        footer_height=profile.footer_height,
    )


def step_font_size(
    length: int,
    tiers: Sequence[tuple[int, float]],
    floor: float,
) -> float:
    if length < 0:
        length = 0
    for max_length, size in tiers:
        if length <= max_length:
            return size
    return floor


def item_code_font_size(text: str) -> float:
    return step_font_size(len(text), ITEM_CODE_TIERS, ITEM_CODE_FLOOR)


def item_name_font_size(text: str) -> float:
    return step_font_size(len(text), ITEM_NAME_TIERS, ITEM_NAME_FLOOR)


def _validate_config(config: LayoutConfig) -> None:
    for name in ("page_width", "page_height", "cell_width", "cell_height"):
        value = getattr(config, name)
        if not math.isfinite(value) or value <= 0:
            raise LayoutError(f"{name} must be a positive number")
    for name in ("margin", "gap"):
        value = getattr(config, name)
        if not math.isfinite(value) or value < 0:
            raise LayoutError(f"{name} must be >= 0")
