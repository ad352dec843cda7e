# aggregate.py
# -------------------------------------------------------------
# Per-file totals of valid amounts (cents) by day of the week.
# Exposes: DayOfWeekAggregator
# -------------------------------------------------------------

from collections import defaultdict
from typing import Dict

import pandas as pd

from models import DayOfWeek, InputRecord


class DayOfWeekAggregator:
    """
    Sums amounts (in cents) per day of the week for one file.
    Only validated records should be passed to accumulate().
    """

    def __init__(self):
        self._totals: Dict[DayOfWeek, int] = defaultdict(int)

    def accumulate(self, record: InputRecord) -> None:
        self._totals[DayOfWeek.of(record.timestamp)] += record.amount

    @property
    def totals(self) -> Dict[DayOfWeek, int]:
        """Copy of the buckets, Monday first."""
        return {day: self._totals[day] for day in sorted(self._totals)}

    def to_series(self) -> pd.Series:
        """Cents per day label ("Monday", ...) in week order; absent days are left out."""
        totals = self.totals
        return pd.Series(
            list(totals.values()),
            index=[day.label for day in totals],
            dtype="int64",
            name="cents",
        )

    def __len__(self) -> int:
        return len(self._totals)
