"""CSV adapter for day records, one task per row."""

from __future__ import annotations

import csv

from day_tracker.schema import Category, DayRecord, Task, parse_iso_date

FIELDS = (
    "date",
    "category_id",
    "category_name",
    "category_emoji",
    "category_kind",
    "task_id",
    "task_name",
    "task_kind",
    "value",
    "text_value",
    "completed",
)
_REQUIRED_FIELDS = {"date", "category_id", "category_name", "category_kind", "task_id", "task_name", "task_kind"}
_TRUE = {"1", "true", "yes", "y", "x"}


def _parse_row(row: dict, row_number: int) -> tuple[str, Category, Task]:
    missing = sorted(field for field in _REQUIRED_FIELDS if not (row.get(field) or "").strip())
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        parse_iso_date(row["date"].strip())
        category = Category.from_dict(
            {
                "id": row["category_id"].strip(),
                "name": row["category_name"].strip(),
                "emoji": (row.get("category_emoji") or "").strip(),
                "type": row["category_kind"],
            }
        )
        task = Task.from_dict(
            {
                "id": row["task_id"].strip(),
                "name": row["task_name"],
                "type": row["task_kind"],
                "value": (row.get("value") or "").strip(),
                "textValue": row.get("text_value") or "",
                "completed": (row.get("completed") or "").strip().lower() in _TRUE,
            }
        )
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: {exc}") from exc

    return row["date"].strip(), category, task


def parse(file_path: str) -> list[DayRecord]:
    """Parse CSV rows into day records, grouped in order of appearance."""

    records: dict[str, DayRecord] = {}
    categories: dict[tuple[str, str], Category] = {}

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        for row_number, row in enumerate(reader, start=2):
            day, category, task = _parse_row(row, row_number)
            record = records.setdefault(day, DayRecord(date=day))
            existing = categories.get((day, category.id))
            if existing is None:
                existing = categories[(day, category.id)] = category
                record.categories.append(existing)
            elif existing.kind != category.kind:
                raise ValueError(f"Row {row_number}: category '{category.id}' changes kind on {day}")
            existing.tasks.append(task)

    return list(records.values())


def write(file_path: str, records: list[DayRecord]) -> None:
    """Write day records in the layout ``parse`` reads."""

    with open(file_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDS)
        writer.writeheader()
        for record in records:
            for category in record.categories:
                for task in category.tasks:
                    writer.writerow(
                        {
                            "date": record.date,
                            "category_id": category.id,
                            "category_name": category.name,
                            "category_emoji": category.emoji,
                            "category_kind": category.kind.value,
                            "task_id": task.id,
                            "task_name": task.name,
                            "task_kind": task.kind.value,
                            "value": "" if task.value is None else task.value,
                            "text_value": task.text_value,
                            "completed": "true" if task.completed else "false",
                        }
                    )
