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

from jinja2 import TemplateError

from ..core.errors import RenderError
from .plan import RenderPlan
from .templating import SCREEN_TEMPLATE, render_template

BACKEND = "screen"


def build_screen_context(plan: RenderPlan) -> dict[str, object]:
    return {
        "theme": plan.theme,
        "colors": plan.theme.colors,
        "metadata": plan.metadata,
        "columns": plan.descriptor.columns_per_page,
        "pages": plan.pages,
        "has_cover": plan.has_cover,
        "cover_label": plan.cover_label,
        "session_qr": plan.session_qr_data_uri if plan.theme.session_qr else None,
    }


def render_screen(plan: RenderPlan) -> str:
    """Interactive catalog markup: selectable cells with click-to-enlarge images.

    Page breaks are left to the browser; sections only carry the shared page labels.
    """
    try:
        return render_template(SCREEN_TEMPLATE, build_screen_context(plan))
    except (TemplateError, OSError, ValueError) as exc:
        raise RenderError(f"screen markup failed: {exc}", backend=BACKEND) from exc
