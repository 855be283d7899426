"""Build a period report from a CSV/JSON day-record file or a tracker store."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from day_tracker.adapters import csv_adapter, json_adapter
from day_tracker.aggregation import aggregate_by_period, expense_distribution, time_distribution
from day_tracker.config import load_config, setup_logging
from day_tracker.settings import Settings
from day_tracker.store import DayStore
from day_tracker.trends import current_streak, score_trend

logger = logging.getLogger("run_report")


def _load_days(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def build_report(days, mode: str, settings: Settings) -> dict:
    rows = aggregate_by_period(days, mode, settings)
    return {
        "mode": mode,
        "n_days": len(days),
        "periods": [row.to_dict() for row in rows],
        "time_distribution": [{"name": name, "minutes": minutes} for name, minutes in time_distribution(days)],
        "expense_distribution": expense_distribution(days),
        "trend": score_trend(days, settings),
        "current_streak": current_streak(days, settings),
    }


def main() -> None:
    config = load_config()
    parser = argparse.ArgumentParser(description="Summarize day records by period")
    parser.add_argument("--data", help="CSV/JSON day records; defaults to the tracker store")
    parser.add_argument("--mode", choices=("daily", "weekly", "monthly"), default="weekly")
    parser.add_argument("--calorie-target", type=float)
    parser.add_argument("--time-target", type=float)
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.data:
        days = _load_days(Path(args.data))
        settings = Settings()
    else:
        store = DayStore(config.data_path)
        days = store.get_all_days()
        settings = store.get_settings()
    if args.calorie_target is not None:
        settings.calorie_target = args.calorie_target
    if args.time_target is not None:
        settings.time_target = args.time_target
    settings.validate()

    logger.info("Loaded %d day records", len(days))
    report = build_report(sorted(days, key=lambda d: d.date), args.mode, settings)

    print(json.dumps(report, indent=2, ensure_ascii=False))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "period_report.json"
    out_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Saved period report to {out_path}")


if __name__ == "__main__":
    main()
