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

import typer

from ...config import resolve_config_path
from ..core.common import _ctx_value, _run_cli
from ..ui import console

_CONFIG_HELP = (
    "Print the path of the active TOML config.\n\n"
    "Examples:\n"
    "  lookbook config\n"
    "  lookbook --config ./lookbook.toml config\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_CONFIG_HELP)(config)


def config(ctx: typer.Context) -> None:
    config_value = _ctx_value(ctx, "config")
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        console.print(str(resolve_config_path(config_value)), soft_wrap=True)

    _run_cli(_run, debug=debug_value)
