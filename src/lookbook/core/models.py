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

import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, Mapping, Sequence

_NATURAL_SPLIT_RE = re.compile(r"(\d+)")
_COMPOSITION_SPLIT_RE = re.compile(r"[\s\u3000]+")


@dataclass(frozen=True)
class ImageRef:
    url: str
    path: str = ""


@dataclass(frozen=True)
class ItemRecord:
    id: str
    code: str
    name: str
    composition: str = ""
    fabric_no: str = ""
    fabric_name: str = ""
    factory: str = ""
    dollar_price: float | None = None
    reference_price: int | None = None
    images: tuple[ImageRef, ...] = ()
    pickup_count: int = 0

    @property
    def primary_image_url(self) -> str | None:
        if not self.images:
            return None
        return self.images[0].url


@dataclass(frozen=True)
class PickupRecord:
    """One customer pickup list: the items a customer marked during the exhibition."""

    pickup_code: str
    customer_name: str = ""
    item_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class DocumentMetadata:
    code: str
    title: str
    subtitle: str = ""
    start_date: date | None = None
    end_date: date | None = None
    location: str = ""

    @property
    def date_range_label(self) -> str:
        start = format_date(self.start_date)
        end = format_date(self.end_date)
        if start and end:
            return f"{start} - {end}"
        return start or end


def format_date(value: date | None) -> str:
    if value is None:
        return ""
    return value.strftime("%Y/%m/%d")


def split_composition(text: str | None) -> list[str]:
    """Split a composition string such as "COTTON 60%  POLYESTER 40%" into lines."""
    if not text:
        return []
    return [part for part in _COMPOSITION_SPLIT_RE.split(text) if part.strip()]


def natural_key(text: str) -> tuple[object, ...]:
    parts = _NATURAL_SPLIT_RE.split(text.casefold())
    return tuple(int(part) if part.isdigit() else part for part in parts)


def sort_items_by_code(items: Iterable[ItemRecord]) -> list[ItemRecord]:
    return sorted(items, key=lambda item: natural_key(item.code))


def rank_items(items: Iterable[ItemRecord]) -> list[ItemRecord]:
    """Picked-up items, most pickups first; ties keep item code order."""
    picked = [item for item in sort_items_by_code(items) if item.pickup_count > 0]
    return sorted(picked, key=lambda item: -item.pickup_count)


def tally_pickups(pickups: Iterable[PickupRecord]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for pickup in pickups:
        for item_id in pickup.item_ids:
            counts[item_id] = counts.get(item_id, 0) + 1
    return counts


def apply_pickup_counts(
    items: Iterable[ItemRecord], counts: Mapping[str, int]
) -> list[ItemRecord]:
    return [replace(item, pickup_count=counts.get(item.id, 0)) for item in items]


def item_from_mapping(data: Mapping[str, object]) -> ItemRecord:
    images_raw = data.get("images") or ()
    if not isinstance(images_raw, Sequence) or isinstance(images_raw, (str, bytes)):
        raise ValueError("item.images must be a list")
    images: list[ImageRef] = []
    for entry in images_raw:
        if isinstance(entry, str):
            images.append(ImageRef(url=entry))
            continue
        if not isinstance(entry, Mapping) or not isinstance(entry.get("url"), str):
            raise ValueError("item.images entries must have a url")
        images.append(ImageRef(url=str(entry["url"]), path=str(entry.get("path") or "")))

    return ItemRecord(
        id=_required_str(data, "id"),
        code=_required_str(data, "code"),
        name=_required_str(data, "name"),
        composition=_optional_str(data.get("composition")),
        fabric_no=_optional_str(data.get("fabric_no")),
        fabric_name=_optional_str(data.get("fabric_name")),
        factory=_optional_str(data.get("factory")),
        dollar_price=_optional_float(data.get("dollar_price"), field="item.dollar_price"),
        reference_price=_optional_int(data.get("reference_price"), field="item.reference_price"),
        images=tuple(images),
        pickup_count=_optional_count(data.get("pickup_count"), field="item.pickup_count"),
    )


def pickup_from_mapping(data: Mapping[str, object]) -> PickupRecord:
    item_ids_raw = data.get("item_ids") or ()
    if not isinstance(item_ids_raw, Sequence) or isinstance(item_ids_raw, (str, bytes)):
        raise ValueError("pickup.item_ids must be a list")
    item_ids: list[str] = []
    for entry in item_ids_raw:
        if isinstance(entry, bool) or not isinstance(entry, (str, int)) or not str(entry).strip():
            raise ValueError("pickup.item_ids entries must be non-empty strings")
        item_ids.append(str(entry).strip())
    return PickupRecord(
        pickup_code=_required_str(data, "pickup_code", prefix="pickup"),
        customer_name=_optional_str(data.get("customer_name")),
        item_ids=tuple(item_ids),
    )


def metadata_from_mapping(data: Mapping[str, object]) -> DocumentMetadata:
    return DocumentMetadata(
        code=_required_str(data, "code", prefix="metadata"),
        title=_required_str(data, "title", prefix="metadata"),
        subtitle=_optional_str(data.get("subtitle")),
        start_date=_optional_date(data.get("start_date"), field="metadata.start_date"),
        end_date=_optional_date(data.get("end_date"), field="metadata.end_date"),
        location=_optional_str(data.get("location")),
    )


def _required_str(data: Mapping[str, object], key: str, *, prefix: str = "item") -> str:
    value = data.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{prefix}.{key} must be a non-empty string")
    return value.strip()


def _optional_str(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_float(value: object, *, field: str) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be a number") from exc


def _optional_int(value: object, *, field: str) -> int | None:
    parsed = _optional_float(value, field=field)
    if parsed is None:
        return None
    if not parsed.is_integer():
        raise ValueError(f"{field} must be an integer")
    return int(parsed)


def _optional_count(value: object, *, field: str) -> int:
    parsed = _optional_int(value, field=field)
    if parsed is None:
        return 0
    if parsed < 0:
        raise ValueError(f"{field} must be >= 0")
    return parsed


def _optional_date(value: object, *, field: str) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as exc:
            raise ValueError(f"{field} must be an ISO date (YYYY-MM-DD)") from exc
    raise ValueError(f"{field} must be an ISO date (YYYY-MM-DD)")
