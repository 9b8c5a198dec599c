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

from fpdf import FPDF

PT_TO_MM = 0.3527777778
ELLIPSIS = "..."


def font_line_height(size_pt: float, multiplier: float = 1.2) -> float:
    return float(size_pt) * PT_TO_MM * multiplier


def latin1_text(text: str) -> str:
    """Reduce ``text`` to what the core PDF fonts can encode."""
    return text.encode("latin-1", "replace").decode("latin-1")


def wrap_text(pdf: FPDF, text: str, max_width: float) -> list[str]:
    """Greedy word wrap using the current font; long words are split per character."""
    if not text:
        return []
    wrapped: list[str] = []
    current = ""
    for word in text.split():
        candidate = word if not current else f"{current} {word}"
        if pdf.get_string_width(candidate) <= max_width:
            current = candidate
            continue
        if current:
            wrapped.append(current)
            current = ""
        if pdf.get_string_width(word) <= max_width:
            current = word
            continue
        chunk = ""
        for ch in word:
            next_chunk = f"{chunk}{ch}"
            if chunk and pdf.get_string_width(next_chunk) > max_width:
                wrapped.append(chunk)
                chunk = ch
            else:
                chunk = next_chunk
        current = chunk
    if current:
        wrapped.append(current)
    return wrapped


def clamp_lines(pdf: FPDF, lines: list[str], max_lines: int, max_width: float) -> list[str]:
    if max_lines <= 0:
        return []
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    kept[-1] = ellipsize(pdf, f"{kept[-1]} {lines[max_lines]}", max_width)
    return kept


def ellipsize(pdf: FPDF, text: str, max_width: float) -> str:
    if pdf.get_string_width(text) <= max_width:
        return text
    trimmed = text
    while trimmed and pdf.get_string_width(f"{trimmed}{ELLIPSIS}") > max_width:
        trimmed = trimmed[:-1]
    return f"{trimmed.rstrip()}{ELLIPSIS}" if trimmed else ""
