"""JSON file backed store for day records, settings and goals."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from day_tracker.goals import Goal, apply_update
from day_tracker.schema import DayRecord, parse_iso_date
from day_tracker.settings import Settings
from day_tracker.templates import materialize_day

logger = logging.getLogger(__name__)


class DayStore:
    """Keyed collection of day records persisted as one JSON document.

    Every operation reads the whole document and every change writes it back
    whole, so two stores on the same path see each other's writes.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError):
            logger.exception("Could not read store %s, starting empty", self.path)
            return {}
        if not isinstance(payload, dict):
            logger.error("Store %s does not hold an object, starting empty", self.path)
            return {}
        return payload

    def _write(self, payload: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, indent=2)
            os.replace(temp_path, self.path)
        except OSError:
            logger.exception("Could not write store %s", self.path)
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def _days(self, payload: dict) -> list[DayRecord]:
        days = []
        for index, item in enumerate(payload.get("days") or [], start=1):
            try:
                days.append(DayRecord.from_dict(item))
            except ValueError:
                logger.exception("Skipping invalid day record %d in %s", index, self.path)
        return sorted(days, key=lambda record: record.date)

    def get_all_days(self) -> list[DayRecord]:
        return self._days(self._load())

    def get_day_entry(self, day: str) -> Optional[DayRecord]:
        return next((record for record in self.get_all_days() if record.date == day), None)

    def get_days_in_range(self, start: str, end: str) -> list[DayRecord]:
        start_day = parse_iso_date(start, "start")
        end_day = parse_iso_date(end, "end")
        return [record for record in self.get_all_days() if start_day <= record.day <= end_day]

    def get_or_materialize(self, day: str) -> DayRecord:
        """Return the saved record for ``day`` or a fresh one from the template."""

        return self.get_day_entry(day) or materialize_day(day, self.get_settings())

    def save_day_entry(self, record: DayRecord) -> None:
        validated = DayRecord.from_dict(record.to_dict())
        payload = self._load()
        others = [day for day in self._days(payload) if day.date != validated.date]
        payload["days"] = [day.to_dict() for day in sorted([*others, validated], key=lambda d: d.date)]
        self._write(payload)
        logger.info("Saved day %s", validated.date)

    def remove_day_entry(self, day: str) -> None:
        payload = self._load()
        days = self._days(payload)
        remaining = [record for record in days if record.date != day]
        if len(remaining) == len(days):
            return
        payload["days"] = [record.to_dict() for record in remaining]
        self._write(payload)
        logger.info("Removed day %s", day)

    def get_settings(self) -> Settings:
        raw = self._load().get("settings")
        if raw is None:
            return Settings()
        try:
            return Settings.from_dict(raw)
        except ValueError:
            logger.exception("Invalid settings in %s, using defaults", self.path)
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        payload = self._load()
        payload["settings"] = settings.validate().to_dict()
        self._write(payload)

    def get_goals(self) -> list[Goal]:
        return [Goal.from_dict(item) for item in self._load().get("goals") or []]

    def save_goal(self, goal: Goal) -> None:
        payload = self._load()
        goals = [item for item in self.get_goals() if item.id != goal.id]
        payload["goals"] = [item.to_dict() for item in [*goals, goal]]
        self._write(payload)

    def update_goal(self, goal_id: str, current: float, timestamp: Optional[str] = None) -> Goal:
        goal = next((item for item in self.get_goals() if item.id == goal_id), None)
        if goal is None:
            raise KeyError(f"Unknown goal '{goal_id}'")
        updated = apply_update(goal, current, timestamp)
        self.save_goal(updated)
        return updated

    def export_data(self) -> str:
        data = {
            "days": [record.to_dict() for record in self.get_all_days()],
            "settings": self.get_settings().to_dict(),
        }
        return json.dumps(data, ensure_ascii=False, indent=2)

    def import_data(self, json_data: str) -> None:
        """Replace settings and days from an export; nothing changes on error."""

        try:
            data = json.loads(json_data)
            if not isinstance(data, dict):
                raise ValueError("Import payload must be an object")
            settings = Settings.from_dict(data["settings"]) if data.get("settings") is not None else None
            days = None
            if isinstance(data.get("days"), list):
                days = [DayRecord.from_dict(item) for item in data["days"]]
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Error importing data: %s", exc)
            raise ValueError("Invalid data format") from exc

        payload = self._load()
        if settings is not None:
            payload["settings"] = settings.to_dict()
        if days is not None:
            payload["days"] = [record.to_dict() for record in sorted(days, key=lambda d: d.date)]
        self._write(payload)
        logger.info("Imported %d days", len(days or []))
