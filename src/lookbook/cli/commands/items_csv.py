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

from pathlib import Path

import typer

from ...config import load_app_config
from ...render.service import items_csv_artifact
from ..core.common import _ctx_value, _resolve_quiet, _run_cli
from ..core.export import write_artifact
from ..core.inputs import load_export_input

_ITEMS_CSV_HELP = (
    "Export the item list as a spreadsheet-friendly CSV (UTF-8 with BOM).\n\n"
    "Examples:\n"
    "  lookbook items-csv exhibition.json -o out/\n"
)


def register(app: typer.Typer) -> None:
    app.command("items-csv", help=_ITEMS_CSV_HELP)(items_csv)


def items_csv(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Exhibition JSON (metadata + items)."),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory to write the CSV into (defaults to the current directory).",
        rich_help_panel="Outputs",
    ),
) -> None:
    config_value = _ctx_value(ctx, "config")
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = load_app_config(config_value)
        quiet_value = _resolve_quiet(ctx, config.ui.quiet)
        source = load_export_input(input_path)
        artifact = items_csv_artifact(source.metadata, source.items)
        write_artifact(artifact, output_dir, quiet=quiet_value)

    _run_cli(_run, debug=debug_value)
