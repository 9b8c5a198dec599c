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

"""Backend-agnostic render plan: numbered pages of resolved items plus theme."""

from __future__ import annotations

import concurrent.futures
import math
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..core.errors import EncodingError, LayoutError
from ..core.models import DocumentMetadata, ItemRecord, split_composition
from ..qr.codec import QrConfig, encode_qr_with_config, png_data_uri
from ..qr.urls import item_scan_url, pickup_session_url
from .assets import Embedded, InlineReport, InlineResult
from .layout import LayoutDescriptor, item_code_font_size, item_name_font_size
from .pages import Page, number_pages, page_label, paginate
from .pages import total_pages as count_pages
from .themes import FIELD_LABELS, Theme

EMPTY_VALUE = "-"
RENDER_JOBS_ENV = "LOOKBOOK_RENDER_JOBS"
_DEFAULT_QR_WORKERS_CAP = 8
_MIN_QR_TASKS_PER_WORKER = 4


@dataclass(frozen=True)
class FieldValue:
    name: str
    label: str
    value: str


@dataclass(frozen=True)
class RankEntry:
    rank: int
    pickup_count: int
    pickup_rate: int

    @property
    def label(self) -> str:
        return f"No.{self.rank}"


@dataclass(frozen=True)
class ResolvedItem:
    item: ItemRecord
    image: InlineResult | None
    fields: tuple[FieldValue, ...]
    composition_lines: tuple[str, ...]
    code_font_size: float
    name_font_size: float
    qr_png: bytes | None = None
    ranking: RankEntry | None = None

    @property
    def image_data_uri(self) -> str | None:
        if isinstance(self.image, Embedded):
            return self.image.data_uri
        return None

    @property
    def has_image(self) -> bool:
        return isinstance(self.image, Embedded)

    @property
    def image_missing(self) -> bool:
        """True when the item references an image that could not be inlined."""
        return self.item.primary_image_url is not None and not self.has_image

    @property
    def qr_data_uri(self) -> str | None:
        return png_data_uri(self.qr_png) if self.qr_png is not None else None

    def field(self, name: str) -> FieldValue | None:
        for entry in self.fields:
            if entry.name == name:
                return entry
        return None


@dataclass(frozen=True)
class RenderPlan:
    metadata: DocumentMetadata
    theme: Theme
    descriptor: LayoutDescriptor
    pages: tuple[Page[ResolvedItem], ...]
    report: InlineReport
    session_qr_png: bytes | None = None

    @property
    def has_cover(self) -> bool:
        return self.theme.has_cover

    @property
    def total_pages(self) -> int:
        return count_pages(len(self.pages), has_cover=self.has_cover)

    @property
    def cover_label(self) -> str:
        return page_label(1, self.total_pages)

    @property
    def session_qr_data_uri(self) -> str | None:
        if self.session_qr_png is None:
            return None
        return png_data_uri(self.session_qr_png)

    @property
    def items(self) -> tuple[ResolvedItem, ...]:
        return tuple(entry for page in self.pages for entry in page.items)


def format_field(item: ItemRecord, name: str, ranking: RankEntry | None = None) -> str:
    if name == "pickup_count":
        return str(ranking.pickup_count if ranking is not None else item.pickup_count)
    if name == "pickup_rate":
        return f"{ranking.pickup_rate}%" if ranking is not None else EMPTY_VALUE
    if name == "dollar_price":
        return format_usd(item.dollar_price)
    if name == "reference_price":
        return format_yen(item.reference_price)
    value = getattr(item, name, "")
    return str(value) if value else EMPTY_VALUE


def format_usd(value: float | None) -> str:
    if value is None:
        return EMPTY_VALUE
    if float(value).is_integer():
        return f"${int(value):,}"
    return f"${value:,.2f}"


def format_yen(value: int | None) -> str:
    if value is None:
        return EMPTY_VALUE
    return f"¥{value:,}"


def resolve_item(
    item: ItemRecord,
    theme: Theme,
    assets: InlineReport,
    qr_png: bytes | None = None,
    ranking: RankEntry | None = None,
) -> ResolvedItem:
    fields = tuple(
        FieldValue(name=name, label=FIELD_LABELS[name], value=format_field(item, name, ranking))
        for name in theme.fields
    )
    return ResolvedItem(
        item=item,
        image=assets.get(item.primary_image_url),
        fields=fields,
        composition_lines=tuple(split_composition(item.composition)),
        code_font_size=item_code_font_size(item.code),
        name_font_size=item_name_font_size(item.name),
        qr_png=qr_png,
        ranking=ranking,
    )


def pickup_rate(count: int, total: int) -> int:
    """Share of all pickups as a whole percent, halves rounded up; 0 with no pickups."""
    if total <= 0:
        return 0
    return math.floor(count / total * 100 + 0.5)


def rank_entries(items: Sequence[ItemRecord]) -> list[RankEntry]:
    """Rank by position in ``items``, which must already be in ranking order.

    Position is global across pages, so page ``p`` (0-based) slot ``i`` holds rank
    ``p * items_per_page + i + 1``.
    """
    total = sum(item.pickup_count for item in items)
    return [
        RankEntry(
            rank=index + 1,
            pickup_count=item.pickup_count,
            pickup_rate=pickup_rate(item.pickup_count, total),
        )
        for index, item in enumerate(items)
    ]


def encode_item_qrs(
    items: Sequence[ItemRecord],
    *,
    origin: str,
    context_id: str,
    config: QrConfig,
) -> dict[str, bytes]:
    """One QR per distinct item id; a failure names the offending item."""
    targets: dict[str, tuple[ItemRecord, str]] = {}
    for item in items:
        if item.id not in targets:
            targets[item.id] = (item, item_scan_url(origin, item.id, context_id))
    if not targets:
        return {}

    def encode(target: tuple[ItemRecord, str]) -> bytes:
        item, url = target
        try:
            return encode_qr_with_config(url, config)
        except EncodingError as exc:
            raise EncodingError(
                f"cannot encode QR for item {item.code}: {exc}", item_id=item.id
            ) from exc

    ordered = list(targets.values())
    workers = resolve_qr_workers(len(ordered))
    if workers <= 1:
        images = [encode(target) for target in ordered]
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            images = list(executor.map(encode, ordered))
    return dict(zip(targets, images))


def resolve_qr_workers(task_count: int) -> int:
    raw = os.environ.get(RENDER_JOBS_ENV, "").strip().lower()
    explicit = False
    requested: int | None = None
    if raw and raw != "auto":
        try:
            parsed = int(raw)
        except ValueError:
            raise ValueError(f"{RENDER_JOBS_ENV} must be a positive integer or 'auto'") from None
        if parsed > 0:
            requested = parsed
            explicit = True

    cpu = os.cpu_count() or 1
    if requested is None:
        requested = min(cpu, _DEFAULT_QR_WORKERS_CAP)
    workers = max(1, min(requested, cpu, task_count))
    if not explicit:
        workers = min(workers, max(1, task_count // _MIN_QR_TASKS_PER_WORKER))
    return workers


def encode_session_qr(*, origin: str, context_id: str, config: QrConfig) -> bytes:
    return encode_qr_with_config(pickup_session_url(origin, context_id), config)


def build_render_plan(
    metadata: DocumentMetadata,
    items: Sequence[ItemRecord],
    *,
    theme: Theme,
    descriptor: LayoutDescriptor,
    assets: InlineReport,
    qr_images: Mapping[str, bytes] | None = None,
    session_qr_png: bytes | None = None,
    allow_cover_only: bool = False,
) -> RenderPlan:
    if not items and not (allow_cover_only and theme.has_cover):
        raise LayoutError("no items to render")
    qr_images = qr_images or {}
    rankings: Sequence[RankEntry | None] = (
        rank_entries(items) if theme.ranked else [None] * len(items)
    )
    resolved = [
        resolve_item(item, theme, assets, qr_images.get(item.id), ranking)
        for item, ranking in zip(items, rankings)
    ]
    chunks = paginate(resolved, descriptor.items_per_page)
    return RenderPlan(
        metadata=metadata,
        theme=theme,
        descriptor=descriptor,
        pages=number_pages(chunks, has_cover=theme.has_cover),
        report=assets,
        session_qr_png=session_qr_png,
    )
