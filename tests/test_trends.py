import numpy as np
import pytest

from day_tracker.schema import Category, CategoryKind, DayRecord, Task, TaskKind
from day_tracker.trends import current_streak, rolling_average, score_series, score_trend


def day_scoring(day, done, total=4):
    tasks = [Task(f"t{i}", f"Task {i}", TaskKind.CHECKBOX, completed=i < done) for i in range(total)]
    return DayRecord(day, [Category("mind", "Mind", "🧠", CategoryKind.CHECKBOX, tasks)])


def test_score_series_is_sorted():
    dates, scores = score_series([day_scoring("2025-03-11", 4), day_scoring("2025-03-10", 2)])
    assert dates == ["2025-03-10", "2025-03-11"]
    assert scores.tolist() == [50.0, 100.0]


def test_rolling_average():
    result = rolling_average([0, 50, 100, 50], 2)
    assert np.allclose(result, [0.0, 25.0, 75.0, 75.0])
    assert rolling_average([], 3).size == 0
    with pytest.raises(ValueError):
        rolling_average([1, 2], 0)


def test_score_trend_rising():
    days = [day_scoring("2025-03-10", 1), day_scoring("2025-03-11", 2), day_scoring("2025-03-13", 4)]
    trend = score_trend(days)
    assert trend["n_days"] == 3
    assert trend["slope_per_day"] == pytest.approx(25.0)
    assert trend["intercept"] == pytest.approx(25.0)
    assert trend["r2"] == pytest.approx(1.0)


def test_score_trend_with_one_day():
    trend = score_trend([day_scoring("2025-03-10", 2)])
    assert trend == {"slope_per_day": 0.0, "intercept": 50.0, "r2": 0.0, "n_days": 1}


def test_current_streak_stops_at_gap_or_low_day():
    days = [
        day_scoring("2025-03-08", 4),
        day_scoring("2025-03-10", 1),
        day_scoring("2025-03-11", 2),
        day_scoring("2025-03-12", 3),
    ]
    assert current_streak(days) == 2
    assert current_streak(days, threshold=25) == 3
    assert current_streak([]) == 0
