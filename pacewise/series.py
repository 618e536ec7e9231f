"""
Time-series utilities over dated entries.

Every analysis module sorts, windows and buckets through these helpers.
All functions are pure: no I/O, and the caller's sequences are never
reordered in place.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence, TypeVar

import numpy as np
import pandas as pd

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def round_half_up(value: float, digits: int = 1) -> float:
    """
    Round halves toward +inf: 2.25 → 2.3, -0.345 → -0.34.

    Python's round() is banker's rounding, which would report 2.25 as 2.2
    where the app displays 2.3.
    """
    factor = 10 ** digits
    return float(np.floor(value * factor + 0.5) / factor)


# ---------------------------------------------------------------------------
# Ordering / bucketing
# ---------------------------------------------------------------------------

def sort_by_date(entries: Iterable[T]) -> List[T]:
    """Stable ascending sort on `.date`. Returns a new list."""
    return sorted(entries, key=lambda e: e.date)


def bucket_by_date(entries: Iterable[T]) -> Dict[date, List[T]]:
    """Group entries by calendar date, preserving input order within a day."""
    buckets: Dict[date, List[T]] = defaultdict(list)
    for entry in entries:
        buckets[entry.date].append(entry)
    return dict(buckets)


def to_series(entries: Iterable, field: str) -> pd.Series:
    """Date-indexed float Series of `field`, sorted by date."""
    ordered = sort_by_date(entries)
    if not ordered:
        return pd.Series([], dtype=np.float64, index=pd.DatetimeIndex([]))
    index = pd.to_datetime([e.date for e in ordered])
    values = [float(getattr(e, field)) for e in ordered]
    return pd.Series(values, index=index, dtype=np.float64)


# ---------------------------------------------------------------------------
# Window statistics
# ---------------------------------------------------------------------------

def windowed_average(
    entries: Iterable,
    window_days: int,
    today: date,
    field: str = "level",
    default: float = 5.0,
) -> float:
    """
    Mean of `field` over entries dated on or after (today - window_days).

    An empty window yields the neutral `default`. Rounded to one decimal.
    """
    series = to_series(entries, field)
    cutoff = pd.Timestamp(today - timedelta(days=window_days))
    window = series[series.index >= cutoff]

    if window.empty:
        return default

    return round_half_up(float(window.mean()), 1)


def variance(values: Sequence[float]) -> float:
    """Population variance (ddof=0). Empty input → 0.0."""
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=np.float64), ddof=0))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean. Empty input → 0.0."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))
