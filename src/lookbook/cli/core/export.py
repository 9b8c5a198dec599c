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
from typing import Literal

from ...config import AppConfig, load_app_config
from ...render.service import Backend, ExportArtifact, ExportService, deliver_artifact
from ..ui.summary import print_export_summary

PdfBackend = Literal["html", "vector"]

_PDF_BACKENDS: dict[str, Backend] = {"html": "html-pdf", "vector": "vector-pdf"}


def load_service(config_path: str | None) -> tuple[ExportService, AppConfig]:
    config = load_app_config(config_path)
    return ExportService(config), config


def pdf_backend(value: str | None) -> Backend | None:
    if value is None:
        return None
    return _PDF_BACKENDS[value]


def write_artifact(artifact: ExportArtifact, output_dir: Path | None, *, quiet: bool) -> Path:
    path = deliver_artifact(artifact, output_dir or Path.cwd())
    print_export_summary(artifact, path, quiet=quiet)
    return path
