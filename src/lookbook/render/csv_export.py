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


"""Spreadsheet-friendly item list (UTF-8 with BOM so Excel detects the encoding)."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence

from ..core.models import DocumentMetadata, ItemRecord

CSV_BOM = "\ufeff"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
CSV_HEADER: tuple[str, ...] = (
    "Item No.",
    "Item Name",
    "Fabric No.",
    "Fabric",
    "Composition",
    "USD Price",
    "Reference Price",
    "Factory",
)


def items_csv_filename(metadata: DocumentMetadata) -> str:
    return f"{metadata.code}_items.csv"


def items_csv(items: Sequence[ItemRecord]) -> bytes:
    buf = io.StringIO()
    buf.write(CSV_BOM)
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow(
            (
                item.code,
                item.name,
                item.fabric_no,
                item.fabric_name,
                item.composition,
                _number(item.dollar_price),
                _number(item.reference_price),
                item.factory,
            )
        )
    return buf.getvalue().encode("utf-8")


def _number(value: float | int | None) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
