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
import sys
from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

NO_COLOR_ENV = "NO_COLOR"

THEME = Theme(
    {
        "panel": "magenta",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
        "path": "cyan",
    }
)


@dataclass(frozen=True)
class UIContext:
    console: Console
    console_err: Console


def _stream_is_tty(stream) -> bool:
    try:
        return bool(stream is not None and stream.isatty())
    except (OSError, ValueError, AttributeError):
        return False


def _build_console(*, stderr: bool) -> Console:
    stream = sys.__stderr__ if stderr else sys.__stdout__
    return Console(
        stderr=stderr,
        theme=THEME,
        force_terminal=_stream_is_tty(stream) or None,
        no_color=bool(os.environ.get(NO_COLOR_ENV)),
        highlight=False,
    )


DEFAULT_CONTEXT = UIContext(
    console=_build_console(stderr=False),
    console_err=_build_console(stderr=True),
)
