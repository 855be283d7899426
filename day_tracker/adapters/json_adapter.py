"""JSON adapter for day records."""

from __future__ import annotations

import json

from day_tracker.schema import DayRecord


def _parse_item(item: dict, index: int) -> DayRecord:
    try:
        return DayRecord.from_dict(item)
    except ValueError as exc:
        raise ValueError(f"Item {index}: {exc}") from exc


def parse(file_path: str) -> list[DayRecord]:
    """Parse a JSON list of day objects, or an export holding a ``days`` list."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict) and isinstance(payload.get("days"), list):
        payload = payload["days"]
    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
