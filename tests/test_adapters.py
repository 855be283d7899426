import json

import pytest

from day_tracker.adapters.csv_adapter import parse as parse_csv
from day_tracker.adapters.csv_adapter import write as write_csv
from day_tracker.adapters.json_adapter import parse as parse_json
from day_tracker.schema import CategoryKind, TaskKind

HEADER = "date,category_id,category_name,category_emoji,category_kind,task_id,task_name,task_kind,value,text_value,completed\n"


def test_csv_parse_success(tmp_path):
    path = tmp_path / "days.csv"
    path.write_text(
        HEADER
        + "2025-03-10,mind,Mind,🧠,checkbox,tea,Tea,checkbox,,,true\n"
        + "2025-03-10,time,Time,⏱️,time,work,Work,time,30,,\n"
        + "2025-03-10,mind,Mind,🧠,checkbox,walk,Walk,checkbox,,,false\n"
        + "2025-03-11,exp1,Food,🍽️,expense,food,Food,expense,12,,\n",
        encoding="utf-8",
    )
    days = parse_csv(str(path))
    assert [day.date for day in days] == ["2025-03-10", "2025-03-11"]
    mind, time = days[0].categories
    assert [task.completed for task in mind.tasks] == [True, False]
    assert time.kind == CategoryKind.TIME
    assert time.tasks[0].value == 30
    assert days[1].categories[0].tasks[0].kind == TaskKind.EXPENSE


def test_csv_parse_invalid_row(tmp_path):
    path = tmp_path / "days.csv"
    path.write_text(HEADER + "2025-13-40,mind,Mind,,checkbox,tea,Tea,checkbox,,,\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2"):
        parse_csv(str(path))


def test_csv_parse_unknown_kind(tmp_path):
    path = tmp_path / "days.csv"
    path.write_text(HEADER + "2025-03-10,mind,Mind,,checkbox,tea,Tea,steps,5,,\n", encoding="utf-8")
    with pytest.raises(ValueError, match="task type"):
        parse_csv(str(path))


def test_csv_parse_empty_file(tmp_path):
    path = tmp_path / "days.csv"
    path.write_text("", encoding="utf-8")
    assert parse_csv(str(path)) == []


def test_csv_write_then_parse(tmp_path):
    source = tmp_path / "days.json"
    source.write_text(
        json.dumps(
            [
                {
                    "date": "2025-03-10",
                    "categories": [
                        {
                            "id": "exp8",
                            "name": "Report",
                            "emoji": "✏️",
                            "type": "expense",
                            "tasks": [{"id": "d", "name": "Report", "type": "expense_note", "textValue": "bus, lunch"}],
                        }
                    ],
                }
            ]
        ),
        encoding="utf-8",
    )
    days = parse_json(str(source))
    target = tmp_path / "days.csv"
    write_csv(str(target), days)
    assert parse_csv(str(target))[0].categories[0].tasks[0].text_value == "bus, lunch"


def test_json_parse_success(tmp_path):
    path = tmp_path / "days.json"
    payload = [
        {"date": "2025-03-10", "categories": []},
        {
            "date": "2025-03-11",
            "categories": [
                {"id": "time", "name": "Time", "emoji": "⏱️", "type": "time", "tasks": [{"id": "w", "name": "Work", "type": "time", "value": 25}]}
            ],
        },
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    days = parse_json(str(path))
    assert len(days) == 2
    assert days[1].categories[0].tasks[0].value == 25


def test_json_parse_accepts_export_document(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"days": [{"date": "2025-03-10"}], "settings": {}}), encoding="utf-8")
    assert [day.date for day in parse_json(str(path))] == ["2025-03-10"]


def test_json_parse_malformed(tmp_path):
    path = tmp_path / "days.json"
    path.write_text(json.dumps([{"date": "10.03.2025", "categories": []}]), encoding="utf-8")
    with pytest.raises(ValueError, match="Item 1"):
        parse_json(str(path))


def test_json_parse_rejects_non_list(tmp_path):
    path = tmp_path / "days.json"
    path.write_text(json.dumps({"date": "2025-03-10"}), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path))
