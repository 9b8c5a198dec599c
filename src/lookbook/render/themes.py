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

"""Closed set of visual variants shared by every render backend.

A theme only decides which item fields are shown and how the document is
branded. Layout and pagination never look at it. A ranked theme additionally
makes the assembler order items by pickup count instead of item code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

CellKind = Literal["card", "tag"]

ItemField = Literal[
    "composition",
    "fabric_no",
    "fabric_name",
    "dollar_price",
    "reference_price",
    "factory",
    "pickup_rate",
    "pickup_count",
]

CATALOG_FIELDS: Final[tuple[ItemField, ...]] = (
    "composition",
    "fabric_no",
    "fabric_name",
    "dollar_price",
    "reference_price",
    "factory",
)

RANKING_FIELDS: Final[tuple[ItemField, ...]] = ("pickup_rate", "pickup_count")

ITEM_FIELDS: Final[tuple[ItemField, ...]] = CATALOG_FIELDS + RANKING_FIELDS

FIELD_LABELS: Final[dict[str, str]] = {
    "composition": "Composition",
    "fabric_no": "Fabric No.",
    "fabric_name": "Fabric",
    "dollar_price": "USD Price",
    "reference_price": "Ref. Price",
    "factory": "Factory",
    "pickup_rate": "Pickup Rate",
    "pickup_count": "Pickups",
}


@dataclass(frozen=True)
class ThemeColors:
    primary: str
    primary_dark: str
    accent: str
    page_background: str
    text: str = "#1e293b"
    muted: str = "#64748b"


@dataclass(frozen=True)
class Theme:
    name: str
    variant_label: str
    document_label: str
    colors: ThemeColors
    company_line: str
    logo_text: str
    visible_fields: frozenset[str]
    badge: str | None = None
    footer_note: str = ""
    item_qr: bool = False
    session_qr: bool = False
    has_cover: bool = True
    cell_kind: CellKind = "card"
    ranked: bool = False

    def shows(self, field: str) -> bool:
        return field in self.visible_fields

    @property
    def fields(self) -> tuple[str, ...]:
        """Visible fields in display order."""
        return tuple(field for field in ITEM_FIELDS if field in self.visible_fields)


COMPANY_LINE: Final = "GOKO Co., Ltd."
LOGO_TEXT: Final = "GOKO"

INTERNAL: Final = Theme(
    name="internal",
    variant_label="internal",
    document_label="Staff Catalog",
    colors=ThemeColors(
        primary="#1e3a8a",
        primary_dark="#0f172a",
        accent="#fbbf24",
        page_background="#f8fafc",
    ),
    company_line=COMPANY_LINE,
    logo_text=LOGO_TEXT,
    visible_fields=frozenset(CATALOG_FIELDS),
    badge="CONFIDENTIAL - Internal Use Only",
    footer_note="Internal (confidential)",
    item_qr=True,
    session_qr=True,
)

CUSTOMER: Final = Theme(
    name="customer",
    variant_label="customer",
    document_label="Collection Catalog",
    colors=ThemeColors(
        primary="#047857",
        primary_dark="#064e3b",
        accent="#2dd4bf",
        page_background="#f0fdf4",
    ),
    company_line=COMPANY_LINE,
    logo_text=LOGO_TEXT,
    visible_fields=frozenset({"composition", "fabric_no", "reference_price"}),
)

PICKUP: Final = Theme(
    name="pickup",
    variant_label="pickup",
    document_label="Pickup List",
    colors=ThemeColors(
        primary="#db2777",
        primary_dark="#831843",
        accent="#f472b6",
        page_background="#fff1f2",
    ),
    company_line=COMPANY_LINE,
    logo_text=LOGO_TEXT,
    visible_fields=frozenset({"composition", "fabric_no", "reference_price"}),
)

RANKING: Final = Theme(
    name="ranking",
    variant_label="ranking",
    document_label="Pickup Ranking Report",
    colors=ThemeColors(
        primary="#0ea5e9",
        primary_dark="#0369a1",
        accent="#38bdf8",
        page_background="#f0f9ff",
    ),
    company_line=COMPANY_LINE,
    logo_text=LOGO_TEXT,
    visible_fields=frozenset(RANKING_FIELDS),
    badge="Pickup Ranking",
    ranked=True,
)

TAGS: Final = Theme(
    name="tags",
    variant_label="tags",
    document_label="Tag Sheet",
    colors=ThemeColors(
        primary="#000000",
        primary_dark="#000000",
        accent="#cccccc",
        page_background="#ffffff",
        text="#000000",
        muted="#333333",
    ),
    company_line=COMPANY_LINE,
    logo_text=LOGO_TEXT,
    visible_fields=frozenset({"fabric_no", "composition", "factory"}),
    has_cover=False,
    cell_kind="tag",
)

THEMES: Final[dict[str, Theme]] = {
    theme.name: theme for theme in (INTERNAL, CUSTOMER, PICKUP, RANKING, TAGS)
}


def theme_by_name(name: str) -> Theme:
    key = name.strip().lower()
    theme = THEMES.get(key)
    if theme is None:
        choices = ", ".join(sorted(theme_names()))
        raise ValueError(f"unknown theme: {name!r} (choose from: {choices})")
    return theme


def theme_names() -> tuple[str, ...]:
    return tuple(THEMES)
