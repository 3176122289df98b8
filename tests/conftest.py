"""Test configuration ensuring the src package is importable."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from logtime.clock import FixedClock  # noqa: E402

MILLIS_DESCRIPTION = "[year]-[month]-[day] [hour]:[minute]:[second].[subsecond digits:3]"


@pytest.fixture
def late_evening_clock() -> FixedClock:
    """Clock stopped at 2024-01-01T23:30:00.500 UTC."""
    return FixedClock(datetime(2024, 1, 1, 23, 30, 0, 500000, tzinfo=timezone.utc))


@pytest.fixture
def early_morning_clock() -> FixedClock:
    """Clock stopped at 2024-01-01T01:00:00.000 UTC."""
    return FixedClock(datetime(2024, 1, 1, 1, 0, 0, tzinfo=timezone.utc))
