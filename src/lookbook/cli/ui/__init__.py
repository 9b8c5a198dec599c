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

from collections.abc import Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table

from .state import DEFAULT_CONTEXT, THEME, UIContext

console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def build_kv_table(rows: Sequence[tuple[str, str]]) -> Table:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="bold", no_wrap=True)
    table.add_column(overflow="fold")
    for key, value in rows:
        table.add_row(key, value)
    return table


def panel(title: str, renderable) -> Panel:
    return Panel(renderable, title=title, title_align="left", border_style="panel", box=box.ROUNDED)


__all__ = [
    "DEFAULT_CONTEXT",
    "THEME",
    "UIContext",
    "build_kv_table",
    "console",
    "console_err",
    "panel",
]
