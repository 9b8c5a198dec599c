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


class LookbookError(Exception):
    """Base class for document generation failures."""


class LayoutError(LookbookError, ValueError):
    """The requested page/cell geometry cannot hold a single item."""


class EncodingError(LookbookError, ValueError):
    """A QR payload could not be encoded."""

    def __init__(self, message: str, *, item_id: str | None = None) -> None:
        super().__init__(message)
        self.item_id = item_id


class RenderError(LookbookError, RuntimeError):
    """A backend failed while producing output."""

    def __init__(self, message: str, *, backend: str, page: int | None = None) -> None:
        location = f"{backend}" if page is None else f"{backend}, page {page}"
        super().__init__(f"{message} ({location})")
        self.backend = backend
        self.page = page


__all__ = [
    "EncodingError",
    "LayoutError",
    "LookbookError",
    "RenderError",
]
