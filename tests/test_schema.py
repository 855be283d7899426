import pytest

from day_tracker.schema import CategoryKind, DayRecord, Task, TaskKind, round_half_up
from day_tracker.settings import Settings


def test_day_record_from_dict_defaults():
    record = DayRecord.from_dict(
        {
            "date": "2025-03-10",
            "categories": [{"id": "mind", "name": "Mind", "emoji": "🧠", "type": "checkbox", "tasks": [{"id": "a", "name": "Tea", "type": "checkbox"}]}],
        }
    )
    task = record.categories[0].tasks[0]
    assert record.categories[0].kind == CategoryKind.CHECKBOX
    assert task.completed is False
    assert task.numeric_value == 0


def test_missing_categories_are_empty():
    assert DayRecord.from_dict({"date": "2025-03-10"}).categories == []


@pytest.mark.parametrize("day", ["2025-3-10", "2025-02-30", "", None])
def test_invalid_dates_rejected(day):
    with pytest.raises(ValueError):
        DayRecord.from_dict({"date": day})


def test_task_requires_name():
    with pytest.raises(ValueError, match="name"):
        Task.from_dict({"id": "a", "name": "  ", "type": "checkbox"})


def test_task_rejects_non_numeric_value():
    with pytest.raises(ValueError):
        Task.from_dict({"id": "a", "name": "Work", "type": "time", "value": "lots"})


@pytest.mark.parametrize("raw, expected", [("false", False), ("true", True), (" No ", False), ("1", True), (None, False), (True, True), (0, False)])
def test_task_completed_flag_parsing(raw, expected):
    task = Task.from_dict({"id": "a", "name": "Tea", "type": "checkbox", "completed": raw})
    assert task.completed is expected


def test_task_rejects_unknown_completed_flag():
    with pytest.raises(ValueError, match="completed"):
        Task.from_dict({"id": "a", "name": "Tea", "type": "checkbox", "completed": "maybe"})


def test_task_to_dict_uses_export_keys():
    task = Task("d", "Report", TaskKind.EXPENSE_NOTE, text_value="bus", created_at="2025-03-10T08:00:00")
    assert task.to_dict() == {
        "id": "d",
        "name": "Report",
        "type": "expense_note",
        "completed": False,
        "textValue": "bus",
        "createdAt": "2025-03-10T08:00:00",
    }


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12
    assert round_half_up(0) == 0


def test_settings_from_export_keys():
    settings = Settings.from_dict({"calorieTarget": 2500, "timeTarget": 90, "timeRange": 14, "colors": {"time": "teal"}})
    assert settings.calorie_target == 2500
    assert settings.time_target == 90
    assert settings.time_range == "14"
    assert settings.colors["time"] == "teal"
    assert settings.colors["mind"] == "gray"
    assert Settings.from_dict(settings.to_dict()) == settings


@pytest.mark.parametrize(
    "payload",
    [
        {"calorieTarget": -1},
        {"startDate": "2025-09-10", "endDate": "2025-09-01"},
        {"viewMode": "yearly"},
        {"subcategories": {"mind": [{"name": "no id"}]}},
        {"subcategories": []},
        {"subcategories": {"mind": None}},
        {"subcategories": {"mind": [{"id": "x", "name": "X", "type": "bogus"}]}},
        {"colors": ["red"]},
    ],
)
def test_settings_validation(payload):
    with pytest.raises(ValueError):
        Settings.from_dict(payload)


def test_settings_null_subcategories_mean_none():
    assert Settings.from_dict({"subcategories": None}).subcategories == {}
