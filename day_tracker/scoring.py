"""Category progress and day success scoring."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from day_tracker.schema import Category, CategoryKind, DayRecord, Task, TaskKind, round_half_up
from day_tracker.settings import Settings

# The first categories of a day, by position, are the ones that feed the day score.
ACTIVITY_CATEGORY_COUNT = 4

HIGH_SCORE = 80
MEDIUM_SCORE = 50


def calculate_category_progress(
    tasks: Optional[Iterable[Task]],
    category_kind: Union[CategoryKind, str],
    settings: Optional[Settings] = None,
) -> int:
    """Return a category's progress percentage in ``[0, 100]``.

    Checkbox tasks add their completed count over their task count. Calorie
    tasks add their summed kcal over one flat ``calorie_target``. Time tasks
    add their summed minutes over ``time_target``, but only when the category
    itself is of kind ``time``. Expense and note tasks never count, and a zero
    target removes its bucket.
    """

    settings = settings or Settings()
    checkbox_tasks = []
    calorie_tasks = []
    time_tasks = []
    for task in tasks or []:
        if task.kind == TaskKind.CHECKBOX:
            checkbox_tasks.append(task)
        elif task.kind == TaskKind.CALORIE:
            calorie_tasks.append(task)
        elif task.kind == TaskKind.TIME:
            time_tasks.append(task)

    numerator = 0.0
    denominator = 0.0

    if checkbox_tasks:
        numerator += sum(1 for task in checkbox_tasks if task.completed)
        denominator += len(checkbox_tasks)

    if calorie_tasks and settings.calorie_target > 0:
        numerator += sum(task.numeric_value for task in calorie_tasks)
        denominator += settings.calorie_target

    if time_tasks and category_kind == CategoryKind.TIME and settings.time_target > 0:
        numerator += sum(task.numeric_value for task in time_tasks)
        denominator += settings.time_target

    if denominator <= 0:
        return 0
    return max(0, min(100, round_half_up(100.0 * numerator / denominator)))


def activity_categories(day: Union[DayRecord, Iterable[Category], None]) -> list[Category]:
    """Return the categories that count toward the day score."""

    if day is None:
        return []
    categories = day.categories if isinstance(day, DayRecord) else day
    return list(categories or [])[:ACTIVITY_CATEGORY_COUNT]


def calculate_day_score(
    day: Union[DayRecord, Iterable[Category], None],
    settings: Optional[Settings] = None,
) -> int:
    """Average the progress of the first four categories into one percentage."""

    selected = activity_categories(day)
    if not selected:
        return 0

    settings = settings or Settings()
    scores = [calculate_category_progress(category.tasks, category.kind, settings) for category in selected]
    return min(100, round_half_up(sum(scores) / len(scores)))


def score_band(score: float) -> str:
    if score >= HIGH_SCORE:
        return "high"
    if score >= MEDIUM_SCORE:
        return "medium"
    return "low"
