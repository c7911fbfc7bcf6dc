from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from reltime.services.formatter import RelativeTimeFormatter


NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
MINUTE = timedelta(minutes=1)
DAY = timedelta(days=1)


@pytest.fixture
def clock():
    """Frozen clock so deltas do not drift between input and formatting."""

    return lambda: NOW


@pytest.fixture
def formatter(clock) -> RelativeTimeFormatter:
    """Formatter with default options, English default locale and frozen clock."""

    return RelativeTimeFormatter(default_locale="en", clock=clock)
