"""Period bucketing and summary aggregates over day records."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional, Union

from day_tracker.schema import CategoryKind, DayRecord, GroupingMode, PeriodRow, TaskKind
from day_tracker.scoring import calculate_day_score
from day_tracker.settings import Settings

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _short(day: date) -> str:
    return day.strftime("%d.%m")


def period_key(day: date, mode: GroupingMode) -> tuple[str, str]:
    """Return ``(key, label)`` of the period a date belongs to."""

    if mode == GroupingMode.DAILY:
        return day.isoformat(), _short(day)
    if mode == GroupingMode.WEEKLY:
        week = day.isocalendar()[1]
        monday = day - timedelta(days=day.weekday())
        label = f"W{week:02d} {_short(monday)} - {_short(monday + timedelta(days=6))}"
        # no year in the key: the same label in two years shares a bucket
        return label, label
    label = f"{MONTH_NAMES[day.month - 1]} {day.year}"
    return label, label


def _coerce_mode(mode: Union[GroupingMode, str]) -> GroupingMode:
    try:
        return GroupingMode(mode)
    except ValueError as exc:
        raise ValueError(f"Invalid grouping mode '{mode}'") from exc


def _day_totals(record: DayRecord) -> tuple[float, float, int, float]:
    total_time = 0
    calories = 0
    calorie_count = 0
    expenses = 0
    for category in record.categories or []:
        for task in category.tasks or []:
            value = task.numeric_value
            if task.kind == TaskKind.TIME:
                total_time += value
            elif task.kind == TaskKind.CALORIE and value > 0:
                calories += value
                calorie_count += 1
            elif task.kind == TaskKind.EXPENSE and category.kind == CategoryKind.EXPENSE:
                expenses += value
    return total_time, calories, calorie_count, expenses


def aggregate_by_period(
    day_records: Iterable[DayRecord],
    mode: Union[GroupingMode, str] = GroupingMode.DAILY,
    settings: Optional[Settings] = None,
) -> list[PeriodRow]:
    """Fold day records into per-period rows in first-seen bucket order.

    Average scores only count days whose score is above zero, so a day with
    tasks but nothing done is treated the same as a day without data.
    """

    grouping = _coerce_mode(mode)
    settings = settings or Settings()

    rows: dict[str, PeriodRow] = {}
    for record in day_records:
        key, label = period_key(record.day, grouping)
        row = rows.get(key)
        if row is None:
            row = rows[key] = PeriodRow(key=key, label=label, first_date=record.date)
        elif record.date < row.first_date:
            row.first_date = record.date

        total_time, calories, calorie_count, expenses = _day_totals(record)
        row.day_count += 1
        row.total_time += total_time
        row.calorie_total += calories
        row.calorie_count += calorie_count
        row.total_expenses += expenses

        score = calculate_day_score(record, settings)
        if score > 0:
            row.score_sum += score
            row.scored_days += 1

    logger.debug("Aggregated %d periods (%s)", len(rows), grouping.value)
    return list(rows.values())


def sort_rows(rows: Iterable[PeriodRow], descending: bool = False) -> list[PeriodRow]:
    """Order period rows chronologically by their earliest date."""

    return sorted(rows, key=lambda row: (row.first_date, row.key), reverse=descending)


def time_distribution(day_records: Iterable[DayRecord]) -> list[tuple[str, float]]:
    """Minutes per activity name inside time categories, largest first."""

    minutes = defaultdict(float)
    for record in day_records:
        for category in record.categories:
            if category.kind != CategoryKind.TIME:
                continue
            for task in category.tasks:
                if task.kind == TaskKind.TIME and task.numeric_value > 0:
                    minutes[task.name] += task.numeric_value
    return sorted(((name, _tidy(total)) for name, total in minutes.items()), key=lambda item: (-item[1], item[0]))


def expense_distribution(day_records: Iterable[DayRecord]) -> list[dict]:
    """Spending per category name, largest first."""

    amounts: dict[str, dict] = {}
    for record in day_records:
        for category in record.categories:
            for task in category.tasks:
                if task.kind != TaskKind.EXPENSE or task.numeric_value <= 0:
                    continue
                entry = amounts.setdefault(category.name, {"name": category.name, "emoji": category.emoji, "amount": 0})
                entry["amount"] += task.numeric_value
    return sorted(amounts.values(), key=lambda entry: (-entry["amount"], entry["name"]))


def expense_notes(day_records: Iterable[DayRecord]) -> list[tuple[str, str]]:
    """Non-empty free-text expense notes as ``(date, text)`` pairs."""

    notes = []
    for record in day_records:
        for category in record.categories:
            for task in category.tasks:
                if task.kind == TaskKind.EXPENSE_NOTE and task.text_value.strip():
                    notes.append((record.date, task.text_value.strip()))
    return notes


def _tidy(value: float):
    return int(value) if float(value).is_integer() else value
