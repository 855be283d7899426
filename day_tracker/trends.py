"""Score trends across days."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

import numpy as np
from sklearn.linear_model import LinearRegression

from day_tracker.schema import DayRecord
from day_tracker.scoring import calculate_day_score
from day_tracker.settings import Settings


def score_series(day_records: list[DayRecord], settings: Optional[Settings] = None) -> tuple[list[str], np.ndarray]:
    """Return sorted dates and their day scores."""

    ordered = sorted(day_records, key=lambda record: record.date)
    scores = [calculate_day_score(record, settings) for record in ordered]
    return [record.date for record in ordered], np.asarray(scores, dtype=float)


def rolling_average(values, window: int) -> np.ndarray:
    """Trailing mean; the first ``window - 1`` points average what is available."""

    if window < 1:
        raise ValueError("window must be at least 1")
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return arr
    sums = np.cumsum(arr)
    sums[window:] = sums[window:] - sums[:-window]
    counts = np.minimum(np.arange(1, arr.size + 1), window)
    return sums / counts


def score_trend(day_records: list[DayRecord], settings: Optional[Settings] = None) -> dict:
    """Fit a line through day scores against days since the first record."""

    dates, scores = score_series(day_records, settings)
    if len(dates) < 2:
        return {"slope_per_day": 0.0, "intercept": float(scores[0]) if len(scores) else 0.0, "r2": 0.0, "n_days": len(dates)}

    ordered = sorted(day_records, key=lambda record: record.date)
    first = ordered[0].day
    offsets = np.asarray([[(record.day - first).days] for record in ordered], dtype=float)
    model = LinearRegression()
    model.fit(offsets, scores)
    r2 = float(model.score(offsets, scores)) if np.ptp(scores) > 0 else 0.0
    return {
        "slope_per_day": float(model.coef_[0]),
        "intercept": float(model.intercept_),
        "r2": r2,
        "n_days": len(dates),
    }


def current_streak(
    day_records: list[DayRecord],
    settings: Optional[Settings] = None,
    threshold: int = 50,
) -> int:
    """Consecutive most recent calendar days scoring at least ``threshold``."""

    by_date = {record.day: record for record in day_records}
    if not by_date:
        return 0

    day = max(by_date)
    streak = 0
    while day in by_date and calculate_day_score(by_date[day], settings) >= threshold:
        streak += 1
        day -= timedelta(days=1)
    return streak
