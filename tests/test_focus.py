from datetime import datetime

import pytest

from day_tracker.focus import FocusSession, add_focus_time, focus_minutes_by_day, focus_minutes_by_task, get_preset
from day_tracker.templates import materialize_day


def sessions():
    return [
        FocusSession("study", 25, datetime(2025, 3, 10, 9, 30)),
        FocusSession("work", 50, datetime(2025, 3, 10, 14, 0)),
        FocusSession("study", 25, datetime(2025, 3, 11, 8, 0)),
    ]


def test_presets():
    assert get_preset("classic").work_minutes == 25
    assert get_preset("ultralong").break_minutes == 15
    with pytest.raises(KeyError):
        get_preset("marathon")


def test_minutes_by_day_and_task():
    assert focus_minutes_by_day(sessions()) == {"2025-03-10": 75, "2025-03-11": 25}
    assert focus_minutes_by_task(sessions()) == [("study", 50), ("work", 50)]


def test_add_focus_time_credits_time_task():
    record = materialize_day("2025-03-10")
    updated = add_focus_time(record, "study", 25)
    study = [t for t in updated.categories[1].tasks if t.id == "study"][0]
    assert study.value == 25
    assert [t for t in record.categories[1].tasks if t.id == "study"][0].value == 0
    with pytest.raises(KeyError):
        add_focus_time(record, "breathing", 5)
