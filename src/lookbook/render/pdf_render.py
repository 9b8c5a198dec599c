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

"""Vector PDF backend drawn directly with fpdf2.

Tag sheets place each label at its absolute descriptor position. Catalogs get a
cover and identical header/footer bands on every content page. All raster data
is already inlined in the plan; nothing is fetched here.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException
from PIL import ImageColor

from ..core.errors import RenderError
from .assets import Embedded, placeholder_image
from .geometry import cell_origin
from .plan import RenderPlan, ResolvedItem
from .text import clamp_lines, ellipsize, font_line_height, latin1_text, wrap_text

BACKEND = "vector-pdf"

_CORE_FONT = "helvetica"
_CUSTOM_FONT = "lookbook"
_BORDER_GRAY = (204, 204, 204)
_FOOTER_GRAY = (153, 153, 153)
_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)
_COVER_BANDS = 48


@dataclass(frozen=True)
class _Box:
    x: float
    y: float
    w: float
    h: float


class _Canvas:
    """FPDF plus the font/color bookkeeping every drawing helper needs."""

    def __init__(self, plan: RenderPlan, font_path: str | Path | None) -> None:
        descriptor = plan.descriptor
        short = min(descriptor.page_width, descriptor.page_height)
        long = max(descriptor.page_width, descriptor.page_height)
        self.pdf = FPDF(
            orientation="L" if descriptor.orientation == "landscape" else "P",
            unit="mm",
            format=(short, long),
        )
        self.pdf.set_auto_page_break(False)
        self.pdf.set_margins(0, 0, 0)
        self.pdf.set_title(plan.metadata.title)
        self.pdf.set_creator("lookbook")
        self.unicode = font_path is not None
        self._placeholder: bytes | None = None
        self.family = _CORE_FONT
        if font_path is not None:
            self.pdf.add_font(_CUSTOM_FONT, "", str(font_path))
            self.pdf.add_font(_CUSTOM_FONT, "B", str(font_path))
            self.family = _CUSTOM_FONT

    def text(self, value: str) -> str:
        return value if self.unicode else latin1_text(value)

    def font(
        self, size: float, *, bold: bool = False, color: tuple[int, int, int] = _BLACK
    ) -> None:
        self.pdf.set_font(self.family, "B" if bold else "", size)
        self.pdf.set_text_color(*color)

    def fill(self, color: tuple[int, int, int]) -> None:
        self.pdf.set_fill_color(*color)

    def line_color(self, color: tuple[int, int, int], width: float = 0.2) -> None:
        self.pdf.set_draw_color(*color)
        self.pdf.set_line_width(width)

    def centered(self, box: _Box, value: str, *, align: str = "C") -> None:
        self.pdf.set_xy(box.x, box.y)
        text = ellipsize(self.pdf, self.text(value), box.w)
        self.pdf.cell(box.w, box.h, text, align=align)

    def lines(self, x: float, y: float, w: float, lines: list[str], line_h: float) -> float:
        for line in lines:
            self.pdf.set_xy(x, y)
            self.pdf.cell(w, line_h, line, align="C")
            y += line_h
        return y

    def image(self, data: bytes, box: _Box) -> None:
        self.pdf.image(io.BytesIO(data), x=box.x, y=box.y, w=box.w, h=box.h, keep_aspect_ratio=True)

    def placeholder(self) -> bytes:
        if self._placeholder is None:
            self._placeholder = placeholder_image()
        return self._placeholder

    def output(self) -> bytes:
        return bytes(self.pdf.output())


def render_vector_pdf(plan: RenderPlan, *, font_path: str | Path | None = None) -> bytes:
    current_page: int | None = None
    try:
        canvas = _Canvas(plan, font_path)
        if plan.has_cover:
            current_page = 1
            canvas.pdf.add_page()
            _draw_cover(canvas, plan)
        for page in plan.pages:
            current_page = page.number
            canvas.pdf.add_page()
            if plan.theme.cell_kind == "tag":
                _draw_tag_page(canvas, plan, page.items, page.label)
            else:
                _draw_catalog_page(canvas, plan, page.items, page.label)
        return canvas.output()
    except RenderError:
        raise
    except (FPDFException, OSError, ValueError, RuntimeError) as exc:
        raise RenderError(f"vector PDF failed: {exc}", backend=BACKEND, page=current_page) from exc


def _rgb(value: str) -> tuple[int, int, int]:
    rgb = ImageColor.getrgb(value)
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


def _mix(
    start: tuple[int, int, int], end: tuple[int, int, int], frac: float
) -> tuple[int, int, int]:
    return (
        round(start[0] + (end[0] - start[0]) * frac),
        round(start[1] + (end[1] - start[1]) * frac),
        round(start[2] + (end[2] - start[2]) * frac),
    )


def _cell_boxes(plan: RenderPlan, count: int) -> list[_Box]:
    descriptor = plan.descriptor
    boxes: list[_Box] = []
    for index in range(count):
        x, y = cell_origin(
            index,
            cols=descriptor.columns_per_page,
            margin=descriptor.margin,
            cell_w=descriptor.cell_width,
            cell_h=descriptor.cell_height,
            gap=descriptor.gap,
            top=descriptor.content_top,
        )
        boxes.append(_Box(x, y, descriptor.cell_width, descriptor.cell_height))
    return boxes


def _draw_cover(canvas: _Canvas, plan: RenderPlan) -> None:
    pdf = canvas.pdf
    theme = plan.theme
    colors = theme.colors
    page_w, page_h = pdf.w, pdf.h
    dark, light = _rgb(colors.primary_dark), _rgb(colors.primary)
    band_h = page_h / _COVER_BANDS
    for band in range(_COVER_BANDS):
        canvas.fill(_mix(dark, light, band / max(1, _COVER_BANDS - 1)))
        pdf.rect(0, band * band_h, page_w, band_h + 0.05, style="F")

    logo_w, logo_h = 60.0, 15.0
    logo = _Box((page_w - logo_w) / 2, page_h * 0.18, logo_w, logo_h)
    canvas.fill(_rgb(colors.accent))
    pdf.rect(logo.x, logo.y, logo.w, logo.h, style="F")
    canvas.font(24, bold=True, color=dark)
    canvas.centered(logo, theme.logo_text)

    y = logo.y + logo.h + 6
    canvas.font(11, color=_WHITE)
    canvas.centered(_Box(0, y, page_w, 6), theme.company_line)
    y += 22
    canvas.font(30, bold=True, color=_WHITE)
    canvas.centered(_Box(10, y, page_w - 20, 14), plan.metadata.title)
    y += 16
    canvas.font(16, color=_WHITE)
    canvas.centered(_Box(10, y, page_w - 20, 9), plan.metadata.subtitle or theme.document_label)
    y += 14
    canvas.font(11, color=_WHITE)
    for info in (plan.metadata.date_range_label, plan.metadata.location):
        if info:
            canvas.centered(_Box(10, y, page_w - 20, 6), info)
            y += 7

    if theme.badge:
        canvas.font(11, bold=True, color=_WHITE)
        badge_w = min(page_w - 40, canvas.pdf.get_string_width(canvas.text(theme.badge)) + 20)
        badge = _Box((page_w - badge_w) / 2, y + 4, badge_w, 10)
        canvas.fill((185, 28, 28))
        canvas.line_color(_WHITE, 0.6)
        pdf.rect(
            badge.x, badge.y, badge.w, badge.h, style="DF", round_corners=True, corner_radius=5
        )
        canvas.centered(badge, theme.badge)
        y = badge.y + badge.h

    if theme.session_qr and plan.session_qr_png is not None:
        size = 26.0
        qr_box = _Box((page_w - size) / 2, min(y + 8, page_h - size - 14), size, size)
        canvas.fill(_WHITE)
        pdf.rect(qr_box.x - 1, qr_box.y - 1, qr_box.w + 2, qr_box.h + 2, style="F")
        canvas.image(plan.session_qr_png, qr_box)


def _draw_catalog_page(
    canvas: _Canvas,
    plan: RenderPlan,
    items: tuple[ResolvedItem, ...],
    label: str,
) -> None:
    pdf = canvas.pdf
    descriptor = plan.descriptor
    theme = plan.theme
    colors = theme.colors
    inner_w = descriptor.page_width - 2 * descriptor.margin

    canvas.fill(_rgb(colors.page_background))
    pdf.rect(0, 0, pdf.w, pdf.h, style="F")

    header = _Box(descriptor.margin, descriptor.margin, inner_w, descriptor.header_height)
    if header.h > 0:
        canvas.fill(_rgb(colors.primary))
        pdf.rect(
            header.x, header.y, header.w, header.h, style="F", round_corners=True, corner_radius=2
        )
        canvas.font(14, bold=True, color=_WHITE)
        canvas.centered(
            _Box(header.x, header.y + 2, header.w, header.h * 0.5),
            f"{plan.metadata.title} - {theme.document_label}",
        )
        subtitle = plan.metadata.date_range_label
        if plan.metadata.location:
            location = plan.metadata.location
            subtitle = f"{subtitle} / {location}" if subtitle else location
        canvas.font(9, color=_WHITE)
        subtitle_box = _Box(header.x, header.y + header.h * 0.5, header.w, header.h * 0.4)
        canvas.centered(subtitle_box, subtitle)

    for entry, box in zip(items, _cell_boxes(plan, len(items))):
        _draw_card(canvas, plan, entry, box)

    footer_h = descriptor.footer_height or descriptor.margin
    footer_y = descriptor.page_height - descriptor.margin - footer_h
    canvas.line_color((221, 221, 221), 0.2)
    pdf.line(descriptor.margin, footer_y + 2, descriptor.margin + inner_w, footer_y + 2)
    canvas.font(8, color=_FOOTER_GRAY)
    footer_box = _Box(descriptor.margin, footer_y + 3, inner_w, footer_h - 3)
    canvas.centered(footer_box, _footer_text(plan, label))


def _draw_card(canvas: _Canvas, plan: RenderPlan, entry: ResolvedItem, box: _Box) -> None:
    pdf = canvas.pdf
    theme = plan.theme
    colors = theme.colors
    pad = 1.5
    inner_w = box.w - 2 * pad

    canvas.fill(_WHITE)
    canvas.line_color((229, 231, 235), 0.2)
    pdf.rect(box.x, box.y, box.w, box.h, style="DF")
    canvas.fill(_rgb(colors.accent))
    pdf.rect(box.x, box.y, box.w, 1.0, style="F")

    image_box = _Box(box.x + pad, box.y + 2.0, inner_w, box.h * 0.45)
    _draw_item_image(canvas, entry, image_box)
    if entry.ranking is not None:
        _draw_rank_badge(canvas, plan, entry.ranking.label, image_box)

    y = image_box.y + image_box.h + 1.5
    canvas.font(entry.code_font_size, bold=True, color=_rgb(colors.primary_dark))
    line_h = font_line_height(entry.code_font_size)
    canvas.centered(_Box(box.x + pad, y, inner_w, line_h), entry.item.code, align="L")
    y += line_h

    canvas.font(entry.name_font_size + 1, bold=True, color=_rgb(colors.primary))
    line_h = font_line_height(entry.name_font_size + 1)
    name_lines = clamp_lines(pdf, wrap_text(pdf, canvas.text(entry.item.name), inner_w), 2, inner_w)
    for line in name_lines:
        pdf.set_xy(box.x + pad, y)
        pdf.cell(inner_w, line_h, line)
        y += line_h
    y += 0.8

    qr_size = min(14.0, box.w * 0.3) if theme.item_qr and entry.qr_png is not None else 0.0
    field_size = 6.5
    line_h = font_line_height(field_size)
    bottom = box.y + box.h - pad
    for field in entry.fields:
        if y + line_h > bottom:
            break
        text_w = inner_w - (qr_size + 1 if y + line_h > bottom - qr_size else 0)
        pdf.set_xy(box.x + pad, y)
        canvas.font(field_size, bold=True, color=_rgb(colors.muted))
        label = canvas.text(f"{field.label}: ")
        label_w = pdf.get_string_width(label)
        pdf.cell(label_w, line_h, label)
        canvas.font(field_size, color=_rgb(colors.text))
        value_w = text_w - label_w
        pdf.cell(max(1.0, value_w), line_h, ellipsize(pdf, canvas.text(field.value), value_w))
        y += line_h

    if qr_size and entry.qr_png is not None:
        qr_box = _Box(box.x + box.w - pad - qr_size, bottom - qr_size, qr_size, qr_size)
        canvas.image(entry.qr_png, qr_box)


def _draw_rank_badge(canvas: _Canvas, plan: RenderPlan, label: str, image_box: _Box) -> None:
    pdf = canvas.pdf
    size = min(9.0, image_box.h * 0.35)
    canvas.font(size * 1.6, bold=True, color=_WHITE)
    badge_w = max(size, pdf.get_string_width(label) + 2.0)
    badge = _Box(image_box.x + image_box.w - badge_w, image_box.y, badge_w, size)
    canvas.fill(_rgb(plan.theme.colors.primary))
    canvas.line_color(_WHITE, 0.5)
    pdf.rect(
        badge.x, badge.y, badge.w, badge.h, style="DF", round_corners=True, corner_radius=size / 2
    )
    canvas.centered(badge, label)


def _draw_tag_page(
    canvas: _Canvas,
    plan: RenderPlan,
    items: tuple[ResolvedItem, ...],
    label: str,
) -> None:
    descriptor = plan.descriptor
    for entry, box in zip(items, _cell_boxes(plan, len(items))):
        _draw_tag(canvas, plan, entry, box)
    canvas.font(7, color=_FOOTER_GRAY)
    inner_w = descriptor.page_width - 2 * descriptor.margin
    footer_y = descriptor.page_height - descriptor.margin + 2
    canvas.centered(_Box(descriptor.margin, footer_y, inner_w, 4), _footer_text(plan, label))


def _draw_tag(canvas: _Canvas, plan: RenderPlan, entry: ResolvedItem, box: _Box) -> None:
    pdf = canvas.pdf
    theme = plan.theme
    item = entry.item
    pad = 1.0
    inner_w = box.w - 2 * pad

    canvas.fill(_WHITE)
    canvas.line_color(_BORDER_GRAY, 0.3)
    pdf.rect(box.x, box.y, box.w, box.h, style="DF")

    header = _Box(box.x, box.y, box.w, box.h * 0.07)
    canvas.font(5, bold=True)
    logo = canvas.text(theme.logo_text)
    logo_w = pdf.get_string_width(logo) + 1
    pdf.set_xy(box.x + pad, header.y)
    pdf.cell(logo_w, header.h, logo)
    canvas.font(4.5)
    title_box = _Box(box.x + pad + logo_w, header.y, inner_w - logo_w, header.h)
    canvas.centered(title_box, plan.metadata.title, align="L")
    canvas.line_color(_BORDER_GRAY, 0.15)
    pdf.line(box.x, header.y + header.h, box.x + box.w, header.y + header.h)

    code_box = _Box(box.x + pad, header.y + header.h, inner_w, box.h * 0.10)
    canvas.font(entry.code_font_size, bold=True)
    canvas.centered(code_box, item.code)

    name_box = _Box(box.x + pad, code_box.y + code_box.h, inner_w, box.h * 0.12)
    canvas.font(entry.name_font_size)
    name_h = font_line_height(entry.name_font_size, 1.1)
    name_lines = clamp_lines(pdf, wrap_text(pdf, canvas.text(item.name), inner_w), 2, inner_w)
    start_y = name_box.y + max(0.0, (name_box.h - name_h * len(name_lines)) / 2)
    canvas.lines(name_box.x, start_y, inner_w, name_lines, name_h)

    info_box = _Box(box.x + pad, name_box.y + name_box.h, inner_w, box.h * 0.15)
    info_size = 5.0
    info_h = font_line_height(info_size, 1.1)
    info_lines: list[str] = []
    if theme.shows("fabric_no"):
        info_lines.append(canvas.text(f"Fabric: {item.fabric_no or '-'}"))
    if theme.shows("composition"):
        info_lines.extend(canvas.text(line) for line in entry.composition_lines)
    max_info = max(1, int(info_box.h // info_h))
    canvas.font(info_size)
    canvas.lines(info_box.x, info_box.y, inner_w, info_lines[:max_info], info_h)

    show_factory = theme.shows("factory") and bool(item.factory)
    factory_h = box.h * 0.10 if show_factory else 0.0
    image_box = _Box(
        box.x + pad,
        info_box.y + info_box.h,
        inner_w,
        box.y + box.h - (info_box.y + info_box.h) - factory_h - pad,
    )
    _draw_item_image(canvas, entry, image_box)

    if show_factory:
        canvas.font(5.0)
        factory_box = _Box(box.x + pad, box.y + box.h - factory_h, inner_w, factory_h)
        canvas.centered(factory_box, item.factory)


def _draw_item_image(canvas: _Canvas, entry: ResolvedItem, box: _Box) -> None:
    if box.w <= 0 or box.h <= 0:
        return
    if isinstance(entry.image, Embedded):
        canvas.image(entry.image.data, box)
        return
    if entry.image_missing:
        canvas.image(canvas.placeholder(), box)
        return
    canvas.font(6, color=_FOOTER_GRAY)
    canvas.centered(box, "No Image")


def _footer_text(plan: RenderPlan, label: str) -> str:
    parts = [plan.theme.company_line, label]
    if plan.theme.footer_note:
        parts.append(plan.theme.footer_note)
    return " | ".join(parts)
