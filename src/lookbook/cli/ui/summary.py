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

from rich.markup import escape

from ...render.service import ExportArtifact
from ..core.log import _warn
from . import build_kv_table, console, panel


def print_export_summary(artifact: ExportArtifact, path: Path, *, quiet: bool) -> None:
    """Print where the artifact went and list any images that could not be embedded."""
    report = artifact.report
    if report.failure_count:
        _warn(
            f"{report.failure_count} image(s) could not be embedded; "
            "placeholders were drawn instead",
            quiet=quiet,
        )
        for url in report.failed_urls:
            _warn(f"  {escape(url)}", quiet=quiet)
    if quiet:
        return
    rows = [("Output", str(path)), ("Type", artifact.media_type)]
    if artifact.page_count:
        rows.append(("Pages", str(artifact.page_count)))
    if report.assets:
        rows.append(("Images", f"{report.embedded_count} embedded, {report.failure_count} missing"))
    console.print(panel("Export summary", build_kv_table(rows)))
