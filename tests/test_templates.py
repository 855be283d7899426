import pytest

from day_tracker.schema import CategoryKind, TaskKind
from day_tracker.scoring import ACTIVITY_CATEGORY_COUNT, calculate_day_score
from day_tracker.settings import Settings
from day_tracker.templates import default_template, materialize_day


def test_default_template_layout():
    categories = default_template()
    activity = categories[:ACTIVITY_CATEGORY_COUNT]
    assert [c.id for c in activity] == ["mind", "time", "sport", "habits"]
    assert all(c.kind == CategoryKind.EXPENSE for c in categories[ACTIVITY_CATEGORY_COUNT:])
    assert categories[-1].tasks[0].kind == TaskKind.EXPENSE_NOTE


def test_template_copies_are_independent():
    first = default_template()
    first[0].tasks[0].completed = True
    assert default_template()[0].tasks[0].completed is False


def test_materialized_day_scores_zero():
    record = materialize_day("2025-03-10")
    assert record.date == "2025-03-10"
    assert calculate_day_score(record) == 0


def test_subcategory_templates_replace_tasks():
    settings = Settings(
        subcategories={
            "mind": [{"id": "read", "name": "Read", "emoji": "📖"}],
            "sport": [{"id": "run", "name": "Run"}],
        }
    )
    record = materialize_day("2025-03-10", settings)
    mind = record.categories[0]
    sport = record.categories[2]
    assert [(t.id, t.name, t.kind) for t in mind.tasks] == [("read", "📖 Read", TaskKind.CHECKBOX)]
    assert [t.id for t in sport.tasks] == ["run", "calories"]


def test_materialize_rejects_bad_date():
    with pytest.raises(ValueError):
        materialize_day("2025/03/10")


def test_subcategory_template_keeps_task_type():
    settings = Settings.from_dict({"subcategories": {"time": [{"id": "deep", "name": "Deep work", "type": "time"}]}})
    record = materialize_day("2025-03-10", settings)
    assert [(t.id, t.kind) for t in record.categories[1].tasks] == [("deep", TaskKind.TIME)]
