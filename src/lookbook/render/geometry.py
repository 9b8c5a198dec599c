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

from typing import Literal

Orientation = Literal["portrait", "landscape"]

A4_SHORT_MM = 210.0
A4_LONG_MM = 297.0

# The HTML backend always draws on a 96 DPI canvas; never derive it from metric margins.
CSS_DPI = 96
A4_SHORT_PX = 794
A4_LONG_PX = 1123


def a4_size_mm(orientation: Orientation) -> tuple[float, float]:
    if orientation == "landscape":
        return A4_LONG_MM, A4_SHORT_MM
    return A4_SHORT_MM, A4_LONG_MM


def a4_canvas_px(orientation: Orientation) -> tuple[int, int]:
    if orientation == "landscape":
        return A4_LONG_PX, A4_SHORT_PX
    return A4_SHORT_PX, A4_LONG_PX


def calc_cells(usable: float, cell: float, gap: float) -> int:
    """Number of ``cell + gap`` strides that fit in ``usable``."""
    stride = cell + gap
    if stride <= 0:
        return 0
    return max(0, int(usable // stride))


def cell_origin(
    index: int,
    *,
    cols: int,
    margin: float,
    cell_w: float,
    cell_h: float,
    gap: float,
    top: float | None = None,
) -> tuple[float, float]:
    """Top-left corner of the ``index``-th cell, filled row by row."""
    row, col = divmod(index, cols)
    y0 = margin if top is None else top
    return margin + col * (cell_w + gap), y0 + row * (cell_h + gap)
