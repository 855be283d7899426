"""Demo script for the day tracker engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from day_tracker.adapters.json_adapter import parse
from day_tracker.aggregation import aggregate_by_period, expense_distribution
from day_tracker.scoring import calculate_day_score
from day_tracker.settings import Settings
from day_tracker.trends import score_trend


def main() -> None:
    days = parse("examples/sample_days.json")
    settings = Settings()
    for day in days:
        print(day.date, "score:", calculate_day_score(day, settings))
    for mode in ("weekly", "monthly"):
        print(mode.capitalize() + ":", [row.to_dict() for row in aggregate_by_period(days, mode, settings)])
    print("Expenses:", expense_distribution(days))
    print("Trend:", score_trend(days, settings))


if __name__ == "__main__":
    main()
