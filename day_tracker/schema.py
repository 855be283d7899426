"""Core data schema for day records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_FLAGS = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False, "": False}

Number = Union[int, float]


class TaskKind(str, Enum):
    CHECKBOX = "checkbox"
    TIME = "time"
    CALORIE = "calorie"
    EXPENSE = "expense"
    EXPENSE_NOTE = "expense_note"


class CategoryKind(str, Enum):
    TIME = "time"
    CALORIE = "calorie"
    CHECKBOX = "checkbox"
    EXPENSE = "expense"
    TASK = "task"


class GroupingMode(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Validate a ``YYYY-MM-DD`` string and return it as a date."""

    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValueError(f"Invalid {field_name} format: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid {field_name}: {value!r}") from exc


def _parse_kind(enum_cls, raw, what: str):
    try:
        return enum_cls(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid {what} '{raw}'") from exc


def _parse_number(raw, what: str) -> Optional[Number]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValueError(f"Invalid {what}: {raw!r}")
    if isinstance(raw, (int, float)):
        return raw
    try:
        number = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {what}: {raw!r}") from exc
    return int(number) if number.is_integer() else number


def _parse_flag(raw, what: str) -> bool:
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str) and raw.strip().lower() in _FLAGS:
        return _FLAGS[raw.strip().lower()]
    raise ValueError(f"Invalid {what}: {raw!r}")


@dataclass
class Task:
    """A single trackable item within a category for one day."""

    id: str
    name: str
    kind: TaskKind
    completed: bool = False
    value: Optional[Number] = None
    text_value: str = ""
    created_at: Optional[str] = None

    @property
    def numeric_value(self) -> Number:
        return self.value if self.value is not None else 0

    @classmethod
    def from_dict(cls, item: dict) -> "Task":
        if not isinstance(item, dict):
            raise ValueError("Task must be an object")
        name = str(item.get("name") or "").strip()
        if not name:
            raise ValueError("Task name is required")
        if item.get("id") in (None, ""):
            raise ValueError(f"Task '{name}': missing id")
        kind = _parse_kind(TaskKind, item.get("type", item.get("kind")), "task type")
        return cls(
            id=str(item["id"]),
            name=name,
            kind=kind,
            completed=_parse_flag(item.get("completed", False), f"completed for task '{name}'"),
            value=_parse_number(item.get("value"), f"value for task '{name}'"),
            text_value=str(item.get("textValue") or item.get("text_value") or ""),
            created_at=item.get("createdAt", item.get("created_at")),
        )

    def to_dict(self) -> dict:
        payload = {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "completed": self.completed,
        }
        if self.value is not None:
            payload["value"] = self.value
        if self.text_value:
            payload["textValue"] = self.text_value
        if self.created_at is not None:
            payload["createdAt"] = self.created_at
        return payload


@dataclass
class Category:
    """A named, emoji-tagged group of tasks within a day."""

    id: str
    name: str
    emoji: str
    kind: CategoryKind
    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, item: dict) -> "Category":
        if not isinstance(item, dict):
            raise ValueError("Category must be an object")
        missing = [key for key in ("id", "name") if item.get(key) in (None, "")]
        if missing:
            raise ValueError(f"Category: missing required fields {missing}")
        kind = _parse_kind(CategoryKind, item.get("type", item.get("kind")), "category type")
        raw_tasks = item.get("tasks") or []
        if not isinstance(raw_tasks, list):
            raise ValueError(f"Category '{item['name']}': tasks must be a list")
        return cls(
            id=str(item["id"]),
            name=str(item["name"]),
            emoji=str(item.get("emoji") or ""),
            kind=kind,
            tasks=[Task.from_dict(task) for task in raw_tasks],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "type": self.kind.value,
            "tasks": [task.to_dict() for task in self.tasks],
        }


@dataclass
class DayRecord:
    """Aggregate root for one calendar date."""

    date: str
    categories: list[Category] = field(default_factory=list)

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date)

    @classmethod
    def from_dict(cls, item: dict) -> "DayRecord":
        if not isinstance(item, dict):
            raise ValueError("Day record must be an object")
        day_str = item.get("date")
        parse_iso_date(day_str)
        raw_categories = item.get("categories") or []
        if not isinstance(raw_categories, list):
            raise ValueError(f"Day {day_str}: categories must be a list")
        return cls(date=day_str, categories=[Category.from_dict(c) for c in raw_categories])

    def to_dict(self) -> dict:
        return {"date": self.date, "categories": [c.to_dict() for c in self.categories]}


@dataclass
class PeriodRow:
    """One bucketed summary row (day, week or month)."""

    key: str
    label: str
    first_date: str
    day_count: int = 0
    total_time: Number = 0
    calorie_total: Number = 0
    calorie_count: int = 0
    total_expenses: Number = 0
    score_sum: int = 0
    scored_days: int = 0

    @property
    def average_calories(self) -> int:
        if not self.calorie_count:
            return 0
        return round_half_up(self.calorie_total / self.calorie_count)

    @property
    def average_score(self) -> int:
        if not self.scored_days:
            return 0
        return round_half_up(self.score_sum / self.scored_days)

    def to_dict(self) -> dict:
        return {
            "period": self.label,
            "key": self.key,
            "day_count": self.day_count,
            "total_time": self.total_time,
            "calorie_total": self.calorie_total,
            "calorie_count": self.calorie_count,
            "average_calories": self.average_calories,
            "total_expenses": self.total_expenses,
            "average_score": self.average_score,
        }


def round_half_up(value: float) -> int:
    """Round halves up (``2.5 -> 3``) instead of to the nearest even integer."""

    return int((value * 2 + 1) // 2)
