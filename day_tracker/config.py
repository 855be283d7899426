"""Runtime configuration and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TrackerConfig:
    data_path: Path = Path("data/day_tracker.json")
    log_level: str = "INFO"


def load_config(environ: Optional[Mapping[str, str]] = None) -> TrackerConfig:
    """Read ``DAY_TRACKER_DATA`` and ``DAY_TRACKER_LOG_LEVEL`` from the environment."""

    env = os.environ if environ is None else environ
    level = env.get("DAY_TRACKER_LOG_LEVEL", "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level '{level}'")
    data_path = Path(env.get("DAY_TRACKER_DATA") or TrackerConfig.data_path)
    return TrackerConfig(data_path=data_path, log_level=level)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
