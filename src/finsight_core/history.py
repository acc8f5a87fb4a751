"""Read-side time windows over a simulated history."""

import math
from collections.abc import Sequence
from decimal import Decimal
from enum import Enum
from typing import Optional

from .models import HistoricalDataPoint


class TimeWindow(str, Enum):
    """Named views over the yearly history samples."""

    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    TEN_YEARS = "10Y"
    TWENTY_FIVE_YEARS = "25Y"
    YEAR_TO_DATE = "YTD"
    ALL = "ALL"

    @property
    def sample_count(self) -> Optional[int]:
        """Number of most recent samples shown, or None for non-count windows."""
        return _SAMPLE_COUNTS.get(self)


_SAMPLE_COUNTS = {
    TimeWindow.ONE_YEAR: 1,
    TimeWindow.FIVE_YEARS: 5,
    TimeWindow.TEN_YEARS: 10,
    TimeWindow.TWENTY_FIVE_YEARS: 25,
}


def window_history(
    history: Sequence[HistoricalDataPoint],
    window: TimeWindow,
    current_age: Decimal,
) -> list[HistoricalDataPoint]:
    """
    Slice a history series for a time window.

    Args:
        history: Samples in ascending age order
        window: The view to produce
        current_age: Simulated age, used by YEAR_TO_DATE

    Returns:
        A new list; the input series is not modified.
    """
    window = TimeWindow(window)
    if window == TimeWindow.ALL:
        return list(history)
    if window == TimeWindow.YEAR_TO_DATE:
        floor_age = math.floor(current_age)
        return [point for point in history if point.age >= floor_age]
    return list(history[-window.sample_count:])
