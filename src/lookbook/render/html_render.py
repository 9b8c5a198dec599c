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

"""Self-contained print HTML for headless rasterization to PDF.

Every page is a fixed pixel canvas (A4 at 96 DPI). Cell boxes come from the
layout descriptor, scaled from millimeters onto that canvas.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from jinja2 import TemplateError

from ..core.errors import RenderError
from .assets import placeholder_data_uri
from .geometry import a4_canvas_px, cell_origin
from .plan import RenderPlan, ResolvedItem
from .templating import PRINT_TEMPLATE, render_template

BACKEND = "html-pdf"

HtmlToPdf = Callable[[str, int, int], bytes]


@dataclass(frozen=True)
class CellBox:
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PrintCell:
    entry: ResolvedItem
    box: CellBox
    image_src: str | None


@dataclass(frozen=True)
class PrintPage:
    number: int
    label: str
    cells: tuple[PrintCell, ...]


def canvas_size(plan: RenderPlan) -> tuple[int, int]:
    return a4_canvas_px(plan.descriptor.orientation)


def build_print_pages(plan: RenderPlan) -> list[PrintPage]:
    descriptor = plan.descriptor
    width_px, _height_px = canvas_size(plan)
    scale = width_px / descriptor.page_width
    placeholder: str | None = None

    pages: list[PrintPage] = []
    for page in plan.pages:
        cells: list[PrintCell] = []
        for index, entry in enumerate(page.items):
            left, top = cell_origin(
                index,
                cols=descriptor.columns_per_page,
                margin=descriptor.margin,
                cell_w=descriptor.cell_width,
                cell_h=descriptor.cell_height,
                gap=descriptor.gap,
                top=descriptor.content_top,
            )
            image_src = entry.image_data_uri
            if image_src is None and entry.image_missing:
                if placeholder is None:
                    placeholder = placeholder_data_uri()
                image_src = placeholder
            cells.append(
                PrintCell(
                    entry=entry,
                    box=CellBox(
                        left=left * scale,
                        top=top * scale,
                        width=descriptor.cell_width * scale,
                        height=descriptor.cell_height * scale,
                    ),
                    image_src=image_src,
                )
            )
        pages.append(PrintPage(number=page.number, label=page.label, cells=tuple(cells)))
    return pages


def build_print_context(plan: RenderPlan) -> dict[str, object]:
    descriptor = plan.descriptor
    width_px, height_px = canvas_size(plan)
    scale = width_px / descriptor.page_width
    return {
        "width_px": width_px,
        "height_px": height_px,
        "margin_px": descriptor.margin * scale,
        "header_px": descriptor.header_height * scale,
        "footer_px": descriptor.footer_height * scale,
        "theme": plan.theme,
        "colors": plan.theme.colors,
        "metadata": plan.metadata,
        "has_cover": plan.has_cover,
        "session_qr": plan.session_qr_data_uri if plan.theme.session_qr else None,
        "pages": build_print_pages(plan),
        "total_pages": plan.total_pages,
    }


def render_print_html(plan: RenderPlan) -> str:
    try:
        return render_template(PRINT_TEMPLATE, build_print_context(plan))
    except (TemplateError, OSError, ValueError) as exc:
        raise RenderError(f"print HTML failed: {exc}", backend=BACKEND) from exc


def render_html_pdf(plan: RenderPlan, *, html_to_pdf: HtmlToPdf | None = None) -> bytes:
    """Emit print HTML and hand it to the headless renderer."""
    html = render_print_html(plan)
    width_px, height_px = canvas_size(plan)
    if html_to_pdf is None:
        from .html_to_pdf import render_html_to_pdf

        html_to_pdf = render_html_to_pdf
    try:
        return html_to_pdf(html, width_px, height_px)
    except RenderError:
        raise
    except (RuntimeError, OSError, ValueError) as exc:
        raise RenderError(f"HTML rasterization failed: {exc}", backend=BACKEND) from exc
