"""Default day template used when a date has no saved record."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from day_tracker.schema import Category, CategoryKind, DayRecord, Task, TaskKind, parse_iso_date
from day_tracker.settings import Settings

# (category id, name, emoji, kind, [(task id, name, kind), ...])
DEFAULT_TEMPLATE = (
    (
        "mind",
        "Mind",
        "🧠",
        CategoryKind.CHECKBOX,
        [
            ("breathing", "🫁 Breathing", TaskKind.CHECKBOX),
            ("tea", "🍵 Tea", TaskKind.CHECKBOX),
            ("cleaning", "🧹 Cleaning", TaskKind.CHECKBOX),
        ],
    ),
    (
        "time",
        "Time",
        "⏱️",
        CategoryKind.TIME,
        [
            ("work", "💼 Work", TaskKind.TIME),
            ("study", "📚 Study", TaskKind.TIME),
            ("project", "🎯 Project", TaskKind.TIME),
        ],
    ),
    (
        "sport",
        "Sport",
        "🏃",
        CategoryKind.CALORIE,
        [
            ("pills", "💊 Pills", TaskKind.CHECKBOX),
            ("training", "🏋️ Training", TaskKind.CHECKBOX),
            ("calories", "🔥 Calories", TaskKind.CALORIE),
        ],
    ),
    (
        "habits",
        "Habits",
        "🚫",
        CategoryKind.CHECKBOX,
        [
            ("no_junk_food", "🍔 No junk food", TaskKind.CHECKBOX),
            ("no_money_waste", "💸 No impulse buys", TaskKind.CHECKBOX),
            ("no_doomscrolling", "📵 No doomscrolling", TaskKind.CHECKBOX),
        ],
    ),
    ("exp1", "Food", "🍽️", CategoryKind.EXPENSE, [("food_expense", "Food", TaskKind.EXPENSE)]),
    ("exp2", "Junk", "💩", CategoryKind.EXPENSE, [("junk_expense", "Junk", TaskKind.EXPENSE)]),
    ("exp3", "City", "🌆", CategoryKind.EXPENSE, [("city_expense", "City", TaskKind.EXPENSE)]),
    ("exp4", "Sport", "🏃", CategoryKind.EXPENSE, [("sport_expense", "Sport", TaskKind.EXPENSE)]),
    ("exp5", "Leisure", "🎮", CategoryKind.EXPENSE, [("leisure_expense", "Leisure", TaskKind.EXPENSE)]),
    ("exp6", "Services", "📱", CategoryKind.EXPENSE, [("apps_expense", "Services", TaskKind.EXPENSE)]),
    ("exp7", "Misc", "📝", CategoryKind.EXPENSE, [("misc_expense", "Misc", TaskKind.EXPENSE)]),
    ("exp8", "Report", "✏️", CategoryKind.EXPENSE, [("description", "Report", TaskKind.EXPENSE_NOTE)]),
)


def _blank_task(task_id: str, name: str, kind: TaskKind, created_at: str) -> Task:
    value = None if kind == TaskKind.CHECKBOX else 0
    return Task(id=task_id, name=name, kind=kind, value=value, created_at=created_at)


def _task_kind_for(category_kind: CategoryKind) -> TaskKind:
    if category_kind == CategoryKind.TIME:
        return TaskKind.TIME
    if category_kind == CategoryKind.EXPENSE:
        return TaskKind.EXPENSE
    return TaskKind.CHECKBOX


def default_template() -> list[Category]:
    """Return a fresh copy of the built-in category layout."""

    created_at = datetime.now(timezone.utc).isoformat()
    return [
        Category(
            id=category_id,
            name=name,
            emoji=emoji,
            kind=kind,
            tasks=[_blank_task(task_id, task_name, task_kind, created_at) for task_id, task_name, task_kind in tasks],
        )
        for category_id, name, emoji, kind, tasks in DEFAULT_TEMPLATE
    ]


def materialize_day(day: str, settings: Optional[Settings] = None) -> DayRecord:
    """Build an unsaved record for ``day`` from the template.

    A category whose id has an entry in ``settings.subcategories`` gets its
    task list from those ``id``/``name``/``emoji`` templates. Templated tasks
    take their kind from the template's ``type`` when given, else from the
    category kind. Calorie tasks already in the category are kept.
    """

    parse_iso_date(day)
    settings = settings or Settings()
    categories = default_template()

    for category in categories:
        templates = settings.subcategories.get(category.id)
        if not templates:
            continue
        created_at = category.tasks[0].created_at if category.tasks else None
        kept = [task for task in category.tasks if task.kind == TaskKind.CALORIE]
        custom = []
        for template in templates:
            kind = TaskKind(str(template["type"])) if template.get("type") else _task_kind_for(category.kind)
            name = f"{template['emoji']} {template['name']}" if template.get("emoji") else template["name"]
            custom.append(_blank_task(str(template["id"]), name, kind, created_at))
        category.tasks = custom + kept

    return DayRecord(date=day, categories=categories)
