"""Tracker settings: targets, tracking period and display preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from day_tracker.schema import TaskKind, parse_iso_date

VIEW_MODES = ("normal", "weekly", "monthly")
TIME_RANGES = ("7", "14", "30")
TASK_KINDS = {kind.value for kind in TaskKind}

DEFAULT_COLORS = {
    "mind": "gray",
    "time": "green",
    "sport": "red",
    "habits": "purple",
    "expenses": "orange",
    "daySuccess": "blue",
}

# settings field -> exported JSON key
_KEYS = {
    "calorie_target": "calorieTarget",
    "time_target": "timeTarget",
    "start_date": "startDate",
    "end_date": "endDate",
    "dark_mode": "darkMode",
    "show_formula": "showFormula",
    "view_mode": "viewMode",
    "time_range": "timeRange",
    "colors": "colors",
    "subcategories": "subcategories",
    "oath": "oath",
}


@dataclass
class Settings:
    """Process-wide tracker configuration, read and written as a whole."""

    calorie_target: float = 2000
    time_target: float = 60
    start_date: str = "2025-02-07"
    end_date: str = "2025-09-09"
    dark_mode: bool = False
    show_formula: bool = False
    view_mode: str = "normal"
    time_range: str = "7"
    colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    subcategories: dict[str, list[dict]] = field(default_factory=dict)
    oath: str = ""

    def validate(self) -> "Settings":
        for name in ("calorie_target", "time_target"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"Invalid {name}: {value!r}")
        start = parse_iso_date(self.start_date, "start_date")
        end = parse_iso_date(self.end_date, "end_date")
        if end < start:
            raise ValueError("end_date must not be before start_date")
        if self.view_mode not in VIEW_MODES:
            raise ValueError(f"Invalid view_mode '{self.view_mode}'")
        if str(self.time_range) not in TIME_RANGES:
            raise ValueError(f"Invalid time_range '{self.time_range}'")
        if not isinstance(self.subcategories, dict):
            raise ValueError("subcategories must map category ids to template lists")
        for category_id, templates in self.subcategories.items():
            if not isinstance(templates, list):
                raise ValueError(f"Subcategory templates for '{category_id}' must be a list")
            for template in templates:
                if not isinstance(template, dict) or not template.get("id") or not template.get("name"):
                    raise ValueError(f"Subcategory template for '{category_id}' needs id and name")
                if template.get("type") and str(template["type"]) not in TASK_KINDS:
                    raise ValueError(f"Invalid task type '{template['type']}' in '{category_id}' templates")
        return self

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Settings":
        if not isinstance(payload, dict):
            raise ValueError("Settings must be an object")
        kwargs = {}
        for attr, key in _KEYS.items():
            if key in payload:
                kwargs[attr] = payload[key]
            elif attr in payload:
                kwargs[attr] = payload[attr]
        if "time_range" in kwargs:
            kwargs["time_range"] = str(kwargs["time_range"])
        if "colors" in kwargs:
            if kwargs["colors"] is not None and not isinstance(kwargs["colors"], dict):
                raise ValueError("colors must be an object")
            kwargs["colors"] = {**DEFAULT_COLORS, **(kwargs["colors"] or {})}
        if "subcategories" in kwargs and kwargs["subcategories"] is None:
            kwargs["subcategories"] = {}
        return cls(**kwargs).validate()

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in _KEYS.items()}
