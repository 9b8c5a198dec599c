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

import math
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast

from PIL import ImageColor

from ..qr.codec import (
    DEFAULT_DARK,
    DEFAULT_LIGHT,
    DEFAULT_MARGIN_MODULES,
    DEFAULT_WIDTH_PX,
    QrConfig,
)
from ..qr.urls import normalize_origin
from ..render.assets import DEFAULT_MAX_BYTES, DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT_SEC
from ..render.geometry import Orientation
from ..render.layout import CATALOG_PROFILE, LABEL_PROFILE, CatalogProfile, LayoutConfig
from ..render.themes import THEMES
from .installer import resolve_config_path

Backend = Literal["html", "vector"]
BACKENDS: tuple[str, ...] = ("html", "vector")


@dataclass(frozen=True)
class SiteConfig:
    base_origin: str | None = None


@dataclass(frozen=True)
class ImageFetchConfig:
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    max_workers: int = DEFAULT_MAX_WORKERS
    max_bytes: int = DEFAULT_MAX_BYTES


@dataclass(frozen=True)
class CatalogConfig:
    theme: str = "internal"
    backend: Backend = "html"
    items_per_page: int = CATALOG_PROFILE.items_per_page
    columns: int = CATALOG_PROFILE.columns
    orientation: Orientation = CATALOG_PROFILE.orientation
    margin_mm: float = CATALOG_PROFILE.margin
    gap_mm: float = CATALOG_PROFILE.gap
    header_mm: float = CATALOG_PROFILE.header_height
    footer_mm: float = CATALOG_PROFILE.footer_height

    def profile(self) -> CatalogProfile:
        return CatalogProfile(
            items_per_page=self.items_per_page,
            columns=self.columns,
            orientation=self.orientation,
            margin=self.margin_mm,
            gap=self.gap_mm,
            header_height=self.header_mm,
            footer_height=self.footer_mm,
        )


@dataclass(frozen=True)
class LabelConfig:
    page_width_mm: float = LABEL_PROFILE.page_width
    page_height_mm: float = LABEL_PROFILE.page_height
    margin_mm: float = LABEL_PROFILE.margin
    gap_mm: float = LABEL_PROFILE.gap
    cell_width_mm: float = LABEL_PROFILE.cell_width
    cell_height_mm: float = LABEL_PROFILE.cell_height

    def layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            page_width=self.page_width_mm,
            page_height=self.page_height_mm,
            margin=self.margin_mm,
            gap=self.gap_mm,
            cell_width=self.cell_width_mm,
            cell_height=self.cell_height_mm,
        )


@dataclass(frozen=True)
class PdfConfig:
    font_path: Path | None = None


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False


@dataclass(frozen=True)
class AppConfig:
    site: SiteConfig = field(default_factory=SiteConfig)
    images: ImageFetchConfig = field(default_factory=ImageFetchConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)
    pdf: PdfConfig = field(default_factory=PdfConfig)
    qr: QrConfig = field(default_factory=QrConfig)
    ui: UiDefaults = field(default_factory=UiDefaults)
    source_path: Path | None = None


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return AppConfig(
        site=_parse_site(_get_dict(data, "site")),
        images=_parse_images(_get_dict(data, "images")),
        catalog=_parse_catalog(_get_dict(data, "catalog")),
        labels=_parse_labels(_get_dict(data, "labels")),
        pdf=_parse_pdf(_get_dict(data, "pdf"), base_dir=config_path.parent),
        qr=build_qr_config(_get_dict(data, "qr")),
        ui=_parse_ui(_get_dict(data, "ui")),
        source_path=config_path,
    )


def build_qr_config(cfg: dict[str, object] | None = None) -> QrConfig:
    cfg = cfg or {}
    if "error" in cfg:
        raise ValueError("qr.error is fixed at medium and cannot be configured")
    width_px = _parse_positive_int(
        cfg.get("width_px"), field="qr.width_px", default=DEFAULT_WIDTH_PX
    )
    border = _parse_int_strict(cfg.get("border", DEFAULT_MARGIN_MODULES), field="qr.border")
    if border < 0:
        raise ValueError("qr.border must be >= 0")
    version = cfg.get("version")
    return QrConfig(
        width_px=width_px,
        margin=border,
        dark=_parse_color(cfg.get("dark"), field="qr.dark", default=DEFAULT_DARK),
        light=_parse_color(cfg.get("light"), field="qr.light", default=DEFAULT_LIGHT),
        version=None if version is None else _parse_int_strict(version, field="qr.version"),
    )


def _parse_site(cfg: dict[str, object]) -> SiteConfig:
    origin = _parse_optional_str(cfg.get("base_origin"), field="site.base_origin")
    if origin is None:
        return SiteConfig()
    try:
        return SiteConfig(base_origin=normalize_origin(origin))
    except ValueError as exc:
        raise ValueError(f"site.base_origin: {exc}") from exc


def _parse_images(cfg: dict[str, object]) -> ImageFetchConfig:
    return ImageFetchConfig(
        timeout_sec=_parse_positive_float(
            cfg.get("timeout_sec"), field="images.timeout_sec", default=DEFAULT_TIMEOUT_SEC
        ),
        max_workers=_parse_positive_int(
            cfg.get("max_workers"), field="images.max_workers", default=DEFAULT_MAX_WORKERS
        ),
        max_bytes=_parse_positive_int(
            cfg.get("max_bytes"), field="images.max_bytes", default=DEFAULT_MAX_BYTES
        ),
    )


def _parse_catalog(cfg: dict[str, object]) -> CatalogConfig:
    defaults = CatalogConfig()
    theme = _parse_choice(cfg, "theme", section="catalog", default=defaults.theme)
    if theme not in THEMES:
        raise ValueError(f"catalog.theme must be one of: {', '.join(sorted(THEMES))}")
    backend = _parse_choice(cfg, "backend", section="catalog", default=defaults.backend)
    if backend not in BACKENDS:
        raise ValueError("catalog.backend must be 'html' or 'vector'")
    orientation = _parse_choice(
        cfg, "orientation", section="catalog", default=defaults.orientation
    )
    if orientation not in ("portrait", "landscape"):
        raise ValueError("catalog.orientation must be 'portrait' or 'landscape'")

    def count(key: str) -> int:
        return _parse_positive_int(
            cfg.get(key), field=f"catalog.{key}", default=getattr(defaults, key)
        )

    def length(key: str) -> float:
        return _parse_non_negative_float(
            cfg.get(key), field=f"catalog.{key}", default=getattr(defaults, key)
        )

    return CatalogConfig(
        theme=theme,
        backend=cast(Backend, backend),
        items_per_page=count("items_per_page"),
        columns=count("columns"),
        orientation=cast(Orientation, orientation),
        margin_mm=length("margin_mm"),
        gap_mm=length("gap_mm"),
        header_mm=length("header_mm"),
        footer_mm=length("footer_mm"),
    )


def _parse_labels(cfg: dict[str, object]) -> LabelConfig:
    defaults = LabelConfig()

    def size(key: str) -> float:
        return _parse_positive_float(
            cfg.get(key), field=f"labels.{key}", default=getattr(defaults, key)
        )

    def spacing(key: str) -> float:
        return _parse_non_negative_float(
            cfg.get(key), field=f"labels.{key}", default=getattr(defaults, key)
        )

    return LabelConfig(
        page_width_mm=size("page_width_mm"),
        page_height_mm=size("page_height_mm"),
        margin_mm=spacing("margin_mm"),
        gap_mm=spacing("gap_mm"),
        cell_width_mm=size("cell_width_mm"),
        cell_height_mm=size("cell_height_mm"),
    )


def _parse_choice(cfg: dict[str, object], key: str, *, section: str, default: str) -> str:
    value = _parse_optional_str(cfg.get(key), field=f"{section}.{key}")
    return (value or default).lower()


def _parse_ui(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False))


def _parse_pdf(cfg: dict[str, object], *, base_dir: Path) -> PdfConfig:
    font = _parse_optional_str(cfg.get("font_path"), field="pdf.font_path")
    if font is None:
        return PdfConfig()
    font_path = Path(font).expanduser()
    if not font_path.is_absolute():
        font_path = base_dir / font_path
    return PdfConfig(font_path=font_path)


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{field} must be a boolean")


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")


def _parse_positive_int(value: object, *, field: str, default: int) -> int:
    if value is None:
        return default
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return parsed


def _parse_float_strict(value: object, *, field: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be a number") from exc
    else:
        raise ValueError(f"{field} must be a number")
    if not math.isfinite(parsed):
        raise ValueError(f"{field} must be a finite number")
    return parsed


def _parse_positive_float(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    parsed = _parse_float_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be positive")
    return parsed


def _parse_non_negative_float(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    parsed = _parse_float_strict(value, field=field)
    if parsed < 0:
        raise ValueError(f"{field} must be >= 0")
    return parsed


def _parse_color(value: object, *, field: str, default: str) -> str | tuple[int, int, int]:
    if value is None:
        return default
    if isinstance(value, str) and value.strip():
        try:
            ImageColor.getrgb(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be a color string or [r, g, b]") from exc
        return value.strip()
    if isinstance(value, (list, tuple)) and len(value) == 3:
        return (
            _parse_int_strict(value[0], field=field),
            _parse_int_strict(value[1], field=field),
            _parse_int_strict(value[2], field=field),
        )
    raise ValueError(f"{field} must be a color string or [r, g, b]")
