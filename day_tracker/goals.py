"""Long-running numeric goals and their update history."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional


@dataclass
class GoalHistoryEntry:
    timestamp: str
    delta: float
    value: float

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "delta": self.delta, "value": self.value}


@dataclass
class Goal:
    """A target value tracked independently of day records."""

    id: str
    title: str
    target: float
    current: float = 0
    unit: str = ""
    category: str = ""
    start: Optional[float] = None
    history: list[GoalHistoryEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, item: dict) -> "Goal":
        if not isinstance(item, dict):
            raise ValueError("Goal must be an object")
        missing = [key for key in ("id", "title", "target") if item.get(key) in (None, "")]
        if missing:
            raise ValueError(f"Goal: missing required fields {missing}")
        try:
            target = float(item["target"])
            current = float(item.get("current") or 0)
            start = float(item["start"]) if item.get("start") is not None else None
            history = [
                GoalHistoryEntry(str(entry["timestamp"]), float(entry["delta"]), float(entry["value"]))
                for entry in item.get("history") or []
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Goal '{item['id']}': malformed numeric fields or history") from exc
        return cls(
            id=str(item["id"]),
            title=str(item["title"]),
            target=target,
            current=current,
            unit=str(item.get("unit") or ""),
            category=str(item.get("category") or ""),
            start=start,
            history=history,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "target": self.target,
            "current": self.current,
            "unit": self.unit,
            "category": self.category,
            "start": self.start,
            "history": [entry.to_dict() for entry in self.history],
        }


def goal_progress(goal: Goal) -> float:
    """Percent of the way from the baseline to the target, within ``[0, 100]``."""

    base = goal.start or 0
    span = goal.target - base
    if span == 0:
        return 0.0
    return max(0.0, min(100.0, (goal.current - base) / span * 100.0))


def total_progress(goals: list[Goal]) -> float:
    if not goals:
        return 0.0
    return sum(goal_progress(goal) for goal in goals) / len(goals)


def apply_update(goal: Goal, current: float, timestamp: Optional[str] = None) -> Goal:
    """Return a copy of ``goal`` at ``current`` with the delta recorded in its history."""

    stamp = timestamp or datetime.now(timezone.utc).isoformat()
    entry = GoalHistoryEntry(timestamp=stamp, delta=current - goal.current, value=current)
    return replace(goal, current=current, history=[*goal.history, entry])
