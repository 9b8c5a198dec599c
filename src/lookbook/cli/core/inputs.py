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


"""Loading an exhibition export from a JSON document.

The document carries the exhibition header and its item list::

    {
      "metadata": {"code": "EX24", "title": "...", "start_date": "2024-03-01", ...},
      "items": [{"id": "...", "code": "A-1", "name": "...", "images": [...]}, ...],
      "pickups": [{"pickup_code": "P-001", "item_ids": ["..."]}, ...]
    }

``pickups`` is optional. When present, each item's ``pickup_count`` is the number
of pickup lists naming it, replacing any count given on the item itself.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ...core.models import (
    DocumentMetadata,
    ItemRecord,
    PickupRecord,
    apply_pickup_counts,
    item_from_mapping,
    metadata_from_mapping,
    pickup_from_mapping,
    tally_pickups,
)


@dataclass(frozen=True)
class ExportInput:
    metadata: DocumentMetadata
    items: tuple[ItemRecord, ...]
    pickups: tuple[PickupRecord, ...] = ()


def load_export_input(path: str | Path) -> ExportInput:
    source = Path(path).expanduser()
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{source}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return parse_export_input(raw, source=str(source))


def parse_export_input(raw: object, *, source: str = "input") -> ExportInput:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{source}: expected a JSON object with metadata and items")
    metadata_raw = raw.get("metadata")
    if not isinstance(metadata_raw, Mapping):
        raise ValueError(f"{source}: metadata must be an object")
    items_raw = raw.get("items", [])
    if not isinstance(items_raw, list):
        raise ValueError(f"{source}: items must be a list")

    items: list[ItemRecord] = []
    for index, entry in enumerate(items_raw):
        if not isinstance(entry, Mapping):
            raise ValueError(f"{source}: items[{index}] must be an object")
        try:
            items.append(item_from_mapping(entry))
        except ValueError as exc:
            raise ValueError(f"{source}: items[{index}]: {exc}") from exc
    pickups_raw = raw.get("pickups")
    if pickups_raw is None:
        return ExportInput(metadata=metadata_from_mapping(metadata_raw), items=tuple(items))
    if not isinstance(pickups_raw, list):
        raise ValueError(f"{source}: pickups must be a list")
    pickups: list[PickupRecord] = []
    for index, entry in enumerate(pickups_raw):
        if not isinstance(entry, Mapping):
            raise ValueError(f"{source}: pickups[{index}] must be an object")
        try:
            pickups.append(pickup_from_mapping(entry))
        except ValueError as exc:
            raise ValueError(f"{source}: pickups[{index}]: {exc}") from exc
    return ExportInput(
        metadata=metadata_from_mapping(metadata_raw),
        items=tuple(apply_pickup_counts(items, tally_pickups(pickups))),
        pickups=tuple(pickups),
    )
