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

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from ..core.errors import LayoutError

T = TypeVar("T")

COVER_PAGE_NUMBER = 1


@dataclass(frozen=True)
class Page(Generic[T]):
    items: tuple[T, ...]
    number: int
    total: int

    @property
    def label(self) -> str:
        return page_label(self.number, self.total)


def paginate(items: Sequence[T], per_page: int) -> list[tuple[T, ...]]:
    """Split ``items`` into contiguous, order-preserving chunks of at most ``per_page``."""
    if per_page <= 0:
        raise LayoutError("per_page must be positive")
    return [tuple(items[start : start + per_page]) for start in range(0, len(items), per_page)]


def number_pages(chunks: Sequence[tuple[T, ...]], *, has_cover: bool) -> tuple[Page[T], ...]:
    """Attach sequence numbers; with a cover, content starts at page 2."""
    offset = 1 if has_cover else 0
    total = len(chunks) + offset
    return tuple(
        Page(items=chunk, number=idx + 1 + offset, total=total)
        for idx, chunk in enumerate(chunks)
    )


def total_pages(content_pages: int, *, has_cover: bool) -> int:
    return content_pages + (1 if has_cover else 0)


def page_label(number: int, total: int) -> str:
    return f"page {number} / {total}"
