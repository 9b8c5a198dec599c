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

"""Fetch remote item images and turn them into embeddable raster data.

Every distinct URL is fetched once, concurrently, with a bounded timeout. A
failed URL becomes an :class:`Unavailable` entry; nothing here raises for a
single bad image.
"""

from __future__ import annotations

import base64
import io
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from urllib.parse import urlsplit

import requests
from PIL import Image, ImageDraw, ImageFont

from ..core.models import ItemRecord

DEFAULT_TIMEOUT_SEC = 5.0
DEFAULT_MAX_WORKERS = 8
DEFAULT_MAX_BYTES = 20 * 1024 * 1024
USER_AGENT = "lookbook-image-inliner"

_PASSTHROUGH_FORMATS = {"PNG": "image/png", "JPEG": "image/jpeg"}

PLACEHOLDER_TEXT = "No Image"
PLACEHOLDER_STOPS = ("#1e3a8a", "#2563eb", "#3b82f6")


@dataclass(frozen=True)
class FetchedImage:
    content: bytes
    content_type: str | None = None


Fetcher = Callable[[str, float], FetchedImage]


@dataclass(frozen=True)
class Embedded:
    data: bytes
    mime: str

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime};base64,{encoded}"


@dataclass(frozen=True)
class Unavailable:
    reason: str


InlineResult = Embedded | Unavailable


@dataclass(frozen=True)
class InlineReport:
    assets: Mapping[str, InlineResult] = field(default_factory=dict)
    failed_urls: tuple[str, ...] = ()

    @property
    def failure_count(self) -> int:
        return len(self.failed_urls)

    @property
    def embedded_count(self) -> int:
        return sum(1 for result in self.assets.values() if isinstance(result, Embedded))

    def get(self, url: str | None) -> InlineResult | None:
        if url is None:
            return None
        return self.assets.get(url)


class HttpFetcher:
    """Plain GET through one ``requests`` session per inline call."""

    def __init__(self, *, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self._session = requests.Session()
        self._session.headers["User-Agent"] = USER_AGENT
        self._max_bytes = max_bytes

    def __call__(self, url: str, timeout: float) -> FetchedImage:
        response = self._session.get(url, timeout=timeout)
        response.raise_for_status()
        content = response.content
        if len(content) > self._max_bytes:
            raise ValueError(f"image exceeds {self._max_bytes} bytes")
        return FetchedImage(content=content, content_type=response.headers.get("Content-Type"))

    def close(self) -> None:
        self._session.close()


def collect_image_urls(items: Iterable[ItemRecord]) -> list[str]:
    """Distinct primary image URLs in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        url = item.primary_image_url
        if url:
            seen.setdefault(url, None)
    return list(seen)


def inline_images(
    urls: Iterable[str],
    *,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    max_workers: int = DEFAULT_MAX_WORKERS,
    fetcher: Fetcher | None = None,
) -> InlineReport:
    if timeout <= 0:
        raise ValueError("timeout must be positive")
    if max_workers <= 0:
        raise ValueError("max_workers must be positive")
    distinct = list(dict.fromkeys(url for url in urls if url))
    if not distinct:
        return InlineReport()

    owned: HttpFetcher | None = None
    if fetcher is None:
        owned = HttpFetcher()
        fetcher = owned
    try:
        workers = min(max_workers, len(distinct))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_inline_one, url, fetcher, timeout) for url in distinct]
            # Leaving the executor waits for every future; results are read afterwards.
        results = [future.result() for future in futures]
    finally:
        if owned is not None:
            owned.close()

    assets: dict[str, InlineResult] = dict(zip(distinct, results))
    failed = tuple(url for url, result in assets.items() if isinstance(result, Unavailable))
    return InlineReport(assets=assets, failed_urls=failed)


def _inline_one(url: str, fetcher: Fetcher, timeout: float) -> InlineResult:
    scheme = urlsplit(url).scheme.lower()
    if scheme not in {"http", "https"}:
        return Unavailable(f"unsupported URL scheme: {scheme or '(none)'}")
    try:
        fetched = fetcher(url, timeout)
    except requests.Timeout:
        return Unavailable("timed out")
    except requests.RequestException as exc:
        return Unavailable(f"fetch failed: {exc}")
    except (OSError, ValueError) as exc:
        return Unavailable(f"fetch failed: {exc}")

    content_type = (fetched.content_type or "").split(";", 1)[0].strip().lower()
    if content_type and not content_type.startswith("image/"):
        return Unavailable(f"not an image: {content_type}")
    try:
        return to_embedded(fetched.content)
    except Exception as exc:
        # Pillow plugins raise SyntaxError, EOFError, struct.error and others on corrupt data.
        return Unavailable(f"undecodable image: {type(exc).__name__}: {exc}")


def to_embedded(content: bytes) -> Embedded:
    """Verify ``content`` decodes; keep PNG/JPEG bytes, re-encode anything else to PNG."""
    if not content:
        raise ValueError("empty image body")
    with Image.open(io.BytesIO(content)) as opened:
        image_format = opened.format
        opened.verify()
    mime = _PASSTHROUGH_FORMATS.get(image_format or "")
    if mime is not None:
        return Embedded(data=content, mime=mime)

    with Image.open(io.BytesIO(content)) as image:
        image.seek(0)
        mode = "RGBA" if image.mode in {"RGBA", "LA", "P", "PA"} else "RGB"
        converted = image.convert(mode)
    buf = io.BytesIO()
    converted.save(buf, format="PNG")
    return Embedded(data=buf.getvalue(), mime="image/png")


def placeholder_image(width: int = 400, height: int = 400, text: str = PLACEHOLDER_TEXT) -> bytes:
    """Gradient PNG drawn in place of an unavailable image."""
    if width <= 0 or height <= 0:
        raise ValueError("placeholder size must be positive")
    image = Image.new("RGB", (width, height))
    draw = ImageDraw.Draw(image)
    stops = [_hex_rgb(color) for color in PLACEHOLDER_STOPS]
    span = max(1, width + height - 2)
    # Diagonal gradient, drawn as anti-diagonal lines from top-left to bottom-right.
    for offset in range(width + height - 1):
        color = _gradient_at(stops, offset / span)
        draw.line([(offset, 0), (offset - height + 1, height - 1)], fill=color)

    font = ImageFont.load_default()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_x = (width - (right - left)) / 2 - left
    text_y = (height - (bottom - top)) / 2 - top
    draw.text((text_x, text_y), text, fill=(255, 255, 255), font=font)

    buf = io.BytesIO()
    image.save(buf, format="PNG", optimize=False)
    return buf.getvalue()


def placeholder_data_uri(width: int = 400, height: int = 400) -> str:
    return Embedded(data=placeholder_image(width, height), mime="image/png").data_uri


def _gradient_at(stops: list[tuple[int, int, int]], position: float) -> tuple[int, int, int]:
    position = min(1.0, max(0.0, position))
    segments = len(stops) - 1
    scaled = position * segments
    index = min(int(scaled), segments - 1)
    frac = scaled - index
    start, end = stops[index], stops[index + 1]
    return (
        round(start[0] + (end[0] - start[0]) * frac),
        round(start[1] + (end[1] - start[1]) * frac),
        round(start[2] + (end[2] - start[2]) * frac),
    )


def _hex_rgb(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
