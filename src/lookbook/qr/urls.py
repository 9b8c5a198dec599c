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

"""Scan-flow target URLs embedded in QR codes."""

from __future__ import annotations

from urllib.parse import quote, urlsplit


def normalize_origin(origin: str) -> str:
    value = origin.strip().rstrip("/")
    parts = urlsplit(value)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError(f"base origin must be an absolute http(s) URL: {origin!r}")
    if parts.query or parts.fragment:
        raise ValueError(f"base origin must not carry a query or fragment: {origin!r}")
    return value


def item_scan_url(origin: str, item_id: str, context_id: str) -> str:
    return f"{normalize_origin(origin)}/scan-item/{_segment(item_id)}?ex={_segment(context_id)}"


def pickup_session_url(origin: str, context_id: str) -> str:
    return f"{normalize_origin(origin)}/pickup-session-start?ex={_segment(context_id)}"


def pickup_direct_url(origin: str, pickup_code: str) -> str:
    return f"{normalize_origin(origin)}/pickup-session-direct/{_segment(pickup_code)}"


def _segment(value: str) -> str:
    if not value:
        raise ValueError("URL component cannot be empty")
    return quote(value, safe="")
