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

from ...render.service import assemble
from ..core.common import _ctx_value, _resolve_quiet, _run_cli
from ..core.export import PdfBackend, load_service, pdf_backend, write_artifact
from ..core.inputs import load_export_input

_RANKING_HELP = (
    "Render the pickup ranking report: items ordered by how many pickup lists\n"
    "named them, with rank, pickup count and share of all pickups.\n\n"
    "Counts come from the input's pickups list, or from each item's pickup_count.\n\n"
    "Examples:\n"
    "  lookbook ranking exhibition.json\n"
    "  lookbook ranking exhibition.json --backend vector -o reports/\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_RANKING_HELP)(ranking)


def ranking(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Exhibition JSON (metadata, items, pickups)."),
    backend: PdfBackend | None = typer.Option(
        None,
        "--backend",
        "-b",
        help="PDF backend: html (browser print) or vector (drawn directly).",
        rich_help_panel="Outputs",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory to write the PDF into (defaults to the current directory).",
        rich_help_panel="Outputs",
    ),
) -> None:
    config_value = _ctx_value(ctx, "config")
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        service, config = load_service(config_value)
        quiet_value = _resolve_quiet(ctx, config.ui.quiet)
        source = load_export_input(input_path)
        request = service.ranking_request(
            source.metadata, source.items, backend=pdf_backend(backend)
        )
        write_artifact(assemble(request), output_dir, quiet=quiet_value)

    _run_cli(_run, debug=debug_value)
