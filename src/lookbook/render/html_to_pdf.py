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

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Route, sync_playwright

from ..core.errors import RenderError

BACKEND = "html-pdf"


def render_html_to_pdf(html: str, width_px: int, height_px: int) -> bytes:
    """Rasterize ``html`` with headless Chromium, one PDF page per fixed-size block.

    The browser is started and stopped inside the call. Any request the page
    tries to make is aborted, so only inlined data can reach the output.
    """
    if width_px <= 0 or height_px <= 0:
        raise ValueError("page canvas must be positive")
    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch()
            try:
                page = browser.new_page(viewport={"width": width_px, "height": height_px})
                try:
                    page.route("**/*", _block_network)
                    page.set_content(html, wait_until="load")
                    page.emulate_media(media="print")
                    return page.pdf(
                        width=f"{width_px}px",
                        height=f"{height_px}px",
                        print_background=True,
                        prefer_css_page_size=True,
                        margin={"top": "0px", "right": "0px", "bottom": "0px", "left": "0px"},
                    )
                finally:
                    page.close()
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise RenderError(f"headless Chromium failed: {exc}", backend=BACKEND) from exc


def _block_network(route: Route) -> None:
    if route.request.url.startswith("data:"):
        route.continue_()
        return
    route.abort()
