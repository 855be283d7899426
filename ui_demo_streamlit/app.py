"""Streamlit dashboard for the day tracker engine."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from day_tracker.adapters import csv_adapter, json_adapter
from day_tracker.aggregation import (
    aggregate_by_period,
    expense_distribution,
    expense_notes,
    sort_rows,
    time_distribution,
)
from day_tracker.scoring import calculate_day_score, score_band
from day_tracker.settings import Settings
from day_tracker.trends import current_streak, rolling_average, score_series, score_trend

MODES = ["daily", "weekly", "monthly"]


def _parse_days_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        return _parse_days_from_path(temp_path)
    finally:
        os.unlink(temp_path)


def _fmt_minutes(minutes: float) -> str:
    minutes = int(minutes)
    return f"{minutes // 60}h {minutes % 60}m"


def run_engine(days: list, mode: str, settings: Settings, window: int = 7) -> dict[str, Any]:
    """Run all engine steps and return a UI-friendly result payload."""

    days = sorted(days, key=lambda record: record.date)
    rows = sort_rows(aggregate_by_period(days, mode, settings), descending=(mode == "monthly"))
    dates, scores = score_series(days, settings)
    return {
        "rows": [row.to_dict() for row in rows],
        "day_scores": [
            {"date": day, "score": int(score), "band": score_band(score)} for day, score in zip(dates, scores)
        ],
        "rolling": [float(value) for value in rolling_average(scores, window)],
        "trend": score_trend(days, settings),
        "streak": current_streak(days, settings),
        "time_distribution": time_distribution(days),
        "expense_distribution": expense_distribution(days),
        "notes": expense_notes(days),
        "latest_score": calculate_day_score(days[-1], settings) if days else 0,
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Day Success Tracker", layout="wide")
    st.title("Day Success Tracker")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload day records", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        mode = st.selectbox("Grouping", options=MODES, index=1)
        calorie_target = st.number_input("Calorie target", min_value=0, max_value=10000, value=2000, step=100)
        time_target = st.number_input("Time target (min/day)", min_value=0, max_value=1440, value=60, step=5)
        window = st.slider("Rolling window (days)", min_value=1, max_value=30, value=7)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            days = json_adapter.parse("examples/sample_days.json")
            data_source = "demo dataset (examples/sample_days.json)"
        elif uploaded is not None:
            days = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        if not days:
            st.error("No day records were found in the selected input.")
            return

        settings = Settings(calorie_target=float(calorie_target), time_target=float(time_target)).validate()
        result = run_engine(days, mode, settings, window)

        st.success(f"Loaded {len(days)} days from {data_source}.")

        st.subheader("A) Overview")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Days", len(days))
        c2.metric("Latest score", f"{result['latest_score']}%")
        c3.metric("Streak (>= 50%)", result["streak"])
        c4.metric("Trend / day", f"{result['trend']['slope_per_day']:+.2f}")

        st.subheader("B) Day scores")
        st.line_chart(
            {
                "score": [row["score"] for row in result["day_scores"]],
                "rolling": result["rolling"],
            }
        )

        st.subheader(f"C) {mode.capitalize()} periods")
        st.table(result["rows"])
        labels = [row["period"] for row in result["rows"]]
        p1, p2 = st.columns(2)
        p1.bar_chart({"total_time": [row["total_time"] for row in result["rows"]]})
        p2.bar_chart({"total_expenses": [row["total_expenses"] for row in result["rows"]]})
        st.caption(" | ".join(labels))

        st.subheader("D) Distributions")
        d1, d2 = st.columns(2)
        d1.write("**Time by activity**")
        d1.table([{"activity": name, "time": _fmt_minutes(minutes)} for name, minutes in result["time_distribution"]])
        d2.write("**Spending by category**")
        d2.table(result["expense_distribution"])

        if result["notes"]:
            st.subheader("E) Expense notes")
            st.table([{"date": day, "note": text} for day, text in result["notes"]])

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the dashboard. Please verify the input format.")


if __name__ == "__main__":
    main()
