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

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Sequence

from ..config import AppConfig
from ..core.errors import LayoutError
from ..core.models import DocumentMetadata, ItemRecord, rank_items, sort_items_by_code
from ..qr.codec import QrConfig
from .assets import (
    DEFAULT_MAX_BYTES,
    DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT_SEC,
    Fetcher,
    HttpFetcher,
    InlineReport,
    collect_image_urls,
    inline_images,
)
from .csv_export import CSV_MEDIA_TYPE, items_csv, items_csv_filename
from .html_render import HtmlToPdf, render_html_pdf
from .layout import (
    CATALOG_PROFILE,
    CatalogProfile,
    LayoutConfig,
    LayoutDescriptor,
    plan_catalog,
    plan_layout,
)
from .pdf_render import render_vector_pdf
from .plan import RenderPlan, build_render_plan, encode_item_qrs, encode_session_qr
from .screen_render import render_screen
from .themes import RANKING, TAGS, Theme, theme_by_name

Backend = Literal["html-pdf", "vector-pdf", "screen"]
BACKENDS: tuple[str, ...] = ("html-pdf", "vector-pdf", "screen")

PDF_MEDIA_TYPE = "application/pdf"
HTML_MEDIA_TYPE = "text/html; charset=utf-8"


@dataclass(frozen=True)
class ExportRequest:
    metadata: DocumentMetadata
    items: Sequence[ItemRecord]
    theme: Theme
    backend: Backend = "html-pdf"
    layout: CatalogProfile | LayoutConfig = CATALOG_PROFILE
    base_origin: str | None = None
    context_id: str | None = None
    qr: QrConfig = field(default_factory=QrConfig)
    fetch_timeout: float = DEFAULT_TIMEOUT_SEC
    fetch_workers: int = DEFAULT_MAX_WORKERS
    fetch_max_bytes: int = DEFAULT_MAX_BYTES
    font_path: Path | None = None
    sort_by_code: bool = True
    allow_cover_only: bool = False

    @property
    def resolved_context_id(self) -> str:
        return self.context_id or self.metadata.code


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: bytes
    media_type: str
    page_count: int
    report: InlineReport = field(default_factory=InlineReport)


def export_filename(metadata: DocumentMetadata, theme: Theme, backend: Backend) -> str:
    extension = "html" if backend == "screen" else "pdf"
    return f"{metadata.code}_{theme.variant_label}.{extension}"


def resolve_layout(layout: CatalogProfile | LayoutConfig) -> LayoutDescriptor:
    if isinstance(layout, LayoutConfig):
        return plan_layout(layout)
    return plan_catalog(layout)


def plan_document(request: ExportRequest, *, fetcher: Fetcher | None = None) -> RenderPlan:
    """Layout, QR encoding and image inlining for one export, in that order.

    Layout and QR failures are raised before any network access happens.
    """
    if request.backend not in BACKENDS:
        raise ValueError(f"unknown backend: {request.backend}")
    descriptor = resolve_layout(request.layout)
    theme = request.theme
    items = _ordered_items(request)
    if not items and not (request.allow_cover_only and theme.has_cover):
        raise LayoutError("no picked-up items to rank" if theme.ranked else "no items to render")

    qr_images: dict[str, bytes] = {}
    session_qr: bytes | None = None
    if theme.item_qr or theme.session_qr:
        if not request.base_origin:
            raise ValueError(f"theme {theme.name!r} embeds QR codes and needs a base origin")
        context_id = request.resolved_context_id
        if theme.item_qr:
            qr_images = encode_item_qrs(
                items, origin=request.base_origin, context_id=context_id, config=request.qr
            )
        if theme.session_qr:
            session_qr = encode_session_qr(
                origin=request.base_origin, context_id=context_id, config=request.qr
            )

    if fetcher is None:
        http = HttpFetcher(max_bytes=request.fetch_max_bytes)
        try:
            report = _inline(request, items, http)
        finally:
            http.close()
    else:
        report = _inline(request, items, fetcher)

    return build_render_plan(
        request.metadata,
        items,
        theme=theme,
        descriptor=descriptor,
        assets=report,
        qr_images=qr_images,
        session_qr_png=session_qr,
        allow_cover_only=request.allow_cover_only,
    )


def _ordered_items(request: ExportRequest) -> list[ItemRecord]:
    if request.theme.ranked:
        return rank_items(request.items)
    if request.sort_by_code:
        return sort_items_by_code(request.items)
    return list(request.items)


def _inline(request: ExportRequest, items: Sequence[ItemRecord], fetcher: Fetcher) -> InlineReport:
    return inline_images(
        collect_image_urls(items),
        timeout=request.fetch_timeout,
        max_workers=request.fetch_workers,
        fetcher=fetcher,
    )


def assemble(
    request: ExportRequest,
    *,
    fetcher: Fetcher | None = None,
    html_to_pdf: HtmlToPdf | None = None,
) -> ExportArtifact:
    plan = plan_document(request, fetcher=fetcher)
    if request.backend == "screen":
        content = render_screen(plan).encode("utf-8")
        media_type = HTML_MEDIA_TYPE
    elif request.backend == "vector-pdf":
        content = render_vector_pdf(plan, font_path=request.font_path)
        media_type = PDF_MEDIA_TYPE
    else:
        content = render_html_pdf(plan, html_to_pdf=html_to_pdf)
        media_type = PDF_MEDIA_TYPE
    return ExportArtifact(
        filename=export_filename(request.metadata, request.theme, request.backend),
        content=content,
        media_type=media_type,
        page_count=plan.total_pages,
        report=plan.report,
    )


def items_csv_artifact(
    metadata: DocumentMetadata,
    items: Sequence[ItemRecord],
    *,
    sort_by_code: bool = True,
) -> ExportArtifact:
    if not items:
        raise LayoutError("no items to export")
    ordered = sort_items_by_code(items) if sort_by_code else list(items)
    return ExportArtifact(
        filename=items_csv_filename(metadata),
        content=items_csv(ordered),
        media_type=CSV_MEDIA_TYPE,
        page_count=0,
    )


def deliver_artifact(artifact: ExportArtifact, output_dir: str | Path) -> Path:
    """Write ``artifact`` into ``output_dir`` atomically; never leaves a partial file behind."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    dest = directory / artifact.filename
    fd, tmp_name = tempfile.mkstemp(prefix=f".{artifact.filename}.", suffix=".tmp", dir=directory)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(artifact.content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, dest)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return dest


@dataclass(frozen=True)
class ExportService:
    """Builds export requests from the loaded application config."""

    config: AppConfig

    def base_origin(self, override: str | None = None) -> str | None:
        return override or self.config.site.base_origin

    def catalog_request(
        self,
        metadata: DocumentMetadata,
        items: Sequence[ItemRecord],
        *,
        theme: str | None = None,
        backend: Backend | None = None,
        base_origin: str | None = None,
    ) -> ExportRequest:
        catalog = self.config.catalog
        if backend is None:
            backend = "vector-pdf" if catalog.backend == "vector" else "html-pdf"
        return self._request(
            metadata,
            items,
            theme=theme_by_name(theme or catalog.theme),
            backend=backend,
            layout=catalog.profile(),
            base_origin=base_origin,
        )

    def tags_request(
        self,
        metadata: DocumentMetadata,
        items: Sequence[ItemRecord],
        *,
        backend: Backend = "vector-pdf",
    ) -> ExportRequest:
        return self._request(
            metadata,
            items,
            theme=TAGS,
            backend=backend,
            layout=self.config.labels.layout_config(),
            base_origin=None,
        )

    def ranking_request(
        self,
        metadata: DocumentMetadata,
        items: Sequence[ItemRecord],
        *,
        backend: Backend | None = None,
    ) -> ExportRequest:
        if backend is None:
            backend = "vector-pdf" if self.config.catalog.backend == "vector" else "html-pdf"
        return self._request(
            metadata,
            items,
            theme=RANKING,
            backend=backend,
            layout=self.config.catalog.profile(),
            base_origin=None,
        )

    def screen_request(
        self,
        metadata: DocumentMetadata,
        items: Sequence[ItemRecord],
        *,
        theme: str | None = None,
        base_origin: str | None = None,
    ) -> ExportRequest:
        return self._request(
            metadata,
            items,
            theme=theme_by_name(theme or self.config.catalog.theme),
            backend="screen",
            layout=self.config.catalog.profile(),
            base_origin=base_origin,
        )

    def _request(
        self,
        metadata: DocumentMetadata,
        items: Sequence[ItemRecord],
        *,
        theme: Theme,
        backend: Backend,
        layout: CatalogProfile | LayoutConfig,
        base_origin: str | None,
    ) -> ExportRequest:
        images = self.config.images
        return ExportRequest(
            metadata=metadata,
            items=tuple(items),
            theme=theme,
            backend=backend,
            layout=layout,
            base_origin=self.base_origin(base_origin),
            qr=self.config.qr,
            fetch_timeout=images.timeout_sec,
            fetch_workers=images.max_workers,
            fetch_max_bytes=images.max_bytes,
            font_path=self.config.pdf.font_path,
        )
