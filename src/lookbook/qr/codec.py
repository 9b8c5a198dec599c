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

import base64
import io
from dataclasses import dataclass
from typing import Any

import segno
from PIL import Image, ImageColor

from ..core.errors import EncodingError

Color = str | tuple[int, int, int] | tuple[int, int, int, int]

# Error correction is pinned to medium so identical payloads always yield the same symbol.
QR_ERROR_LEVEL = "M"
DEFAULT_WIDTH_PX = 200
DEFAULT_MARGIN_MODULES = 1
DEFAULT_DARK = "#000000"
DEFAULT_LIGHT = "#ffffff"


@dataclass(frozen=True)
class QrConfig:
    width_px: int = DEFAULT_WIDTH_PX
    margin: int = DEFAULT_MARGIN_MODULES
    dark: Color = DEFAULT_DARK
    light: Color = DEFAULT_LIGHT
    version: int | None = None


def make_qr(data: bytes | str, *, version: int | None = None) -> Any:
    try:
        return segno.make(
            data,
            error=QR_ERROR_LEVEL,
            version=version,
            micro=False,
            boost_error=False,
        )
    except segno.DataOverflowError as exc:
        raise EncodingError(f"QR payload too large for the symbol: {exc}") from exc


def encode_qr(
    payload: str,
    *,
    width_px: int = DEFAULT_WIDTH_PX,
    margin: int = DEFAULT_MARGIN_MODULES,
    dark: Color = DEFAULT_DARK,
    light: Color = DEFAULT_LIGHT,
    version: int | None = None,
) -> bytes:
    """Render ``payload`` as a square PNG exactly ``width_px`` pixels wide."""
    if width_px <= 0:
        raise ValueError("width_px must be positive")
    if margin < 0:
        raise ValueError("margin must be >= 0")
    qr = make_qr(payload, version=version)

    dark_rgb = _color_to_rgb(dark)
    light_rgb = _color_to_rgb(light)
    modules, _ = qr.symbol_size(scale=1, border=margin)
    image = Image.new("RGB", (modules, modules), light_rgb)
    pixels = image.load()
    for row_idx, row in enumerate(qr.matrix_iter(scale=1, border=margin)):
        for col_idx, is_dark in enumerate(row):
            if is_dark:
                pixels[col_idx, row_idx] = dark_rgb

    if modules != width_px:
        image = image.resize((width_px, width_px), resample=Image.Resampling.NEAREST)

    buf = io.BytesIO()
    image.save(buf, format="PNG", optimize=False)
    return buf.getvalue()


def encode_qr_with_config(payload: str, config: QrConfig) -> bytes:
    return encode_qr(
        payload,
        width_px=config.width_px,
        margin=config.margin,
        dark=config.dark,
        light=config.light,
        version=config.version,
    )


def png_data_uri(png: bytes) -> str:
    encoded = base64.b64encode(png).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def _color_to_rgb(value: Color) -> tuple[int, int, int]:
    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value.strip())
        except ValueError as exc:
            raise ValueError(f"unsupported QR color: {value}") from exc
        return (int(rgb[0]), int(rgb[1]), int(rgb[2]))
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        return (int(value[0]), int(value[1]), int(value[2]))
    raise ValueError(f"unsupported QR color: {value!r}")
