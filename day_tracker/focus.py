"""Focus timer presets and completed-session summaries."""

from __future__ import annotations

from collections import defaultdict
from copy import deepcopy
from dataclasses import dataclass
from datetime import datetime

from day_tracker.schema import CategoryKind, DayRecord, TaskKind


@dataclass(frozen=True)
class FocusPreset:
    id: str
    name: str
    work_minutes: int
    break_minutes: int


PRESETS = {
    "classic": FocusPreset("classic", "Classic", 25, 5),
    "long": FocusPreset("long", "Long", 50, 10),
    "ultralong": FocusPreset("ultralong", "Ultra", 90, 15),
}


@dataclass
class FocusSession:
    """One finished work interval."""

    task: str
    duration: int
    completed_at: datetime


def get_preset(preset_id: str) -> FocusPreset:
    try:
        return PRESETS[preset_id]
    except KeyError:
        raise KeyError(f"Unknown focus preset '{preset_id}'") from None


def focus_minutes_by_day(sessions: list[FocusSession]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for session in sorted(sessions, key=lambda s: s.completed_at):
        totals[session.completed_at.date().isoformat()] += session.duration
    return dict(totals)


def focus_minutes_by_task(sessions: list[FocusSession]) -> list[tuple[str, int]]:
    totals: dict[str, int] = defaultdict(int)
    for session in sessions:
        totals[session.task] += session.duration
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


def add_focus_time(record: DayRecord, task_id: str, minutes: int) -> DayRecord:
    """Return a copy of ``record`` with ``minutes`` added to a time task.

    Raises ``KeyError`` when no time task with ``task_id`` exists in a time
    category of the record.
    """

    if minutes < 0:
        raise ValueError("minutes must be non-negative")
    updated = deepcopy(record)
    for category in updated.categories:
        if category.kind != CategoryKind.TIME:
            continue
        for task in category.tasks:
            if task.id == task_id and task.kind == TaskKind.TIME:
                task.value = task.numeric_value + minutes
                return updated
    raise KeyError(f"No time task '{task_id}' on {record.date}")
