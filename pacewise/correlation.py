"""
Symptom correlation: pairwise Pearson coefficients across daily severities.

Builds one row per calendar date and one column per symptom key, then
correlates every pair of columns over the dates where both were logged.
All functions are pure transforms with no I/O.
"""

from itertools import combinations
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from pacewise.config import PacingConfig
from pacewise.models import (
    Significance,
    SymptomCorrelation,
    SymptomKey,
    SymptomLog,
    SymptomType,
)
from pacewise.series import round_half_up, sort_by_date


FATIGUE = SymptomKey(SymptomType.FATIGUE)
BRAIN_FOG = SymptomKey(SymptomType.BRAIN_FOG)
SLEEP_DISTURBANCE = SymptomKey(SymptomType.SLEEP_DISTURBANCE)

OTHER_PREFIX = "other:"


def key_from_label(label: str) -> SymptomKey:
    """Inverse of str(SymptomKey)."""
    if label.startswith(OTHER_PREFIX):
        return SymptomKey(SymptomType.OTHER, label[len(OTHER_PREFIX):])
    return SymptomKey(SymptomType(label))


# ---------------------------------------------------------------------------
# Daily matrix
# ---------------------------------------------------------------------------

def build_daily_symptom_matrix(
    symptom_logs: Sequence[SymptomLog],
    cfg: PacingConfig,
) -> pd.DataFrame:
    """
    One row per date, one column per symptom key (labelled by str(SymptomKey),
    in first-seen order).

    Core columns come from dedicated fields; sleep quality is inverted into
    sleep_disturbance so that higher always means worse. Free-form entries
    add their own columns. Missing values stay NaN, never imputed. When a
    key is logged twice on one date, the later log wins.
    """
    base = cfg.correlation.sleep_inversion_base
    daily: Dict = {}

    for log in sort_by_date(symptom_logs):
        day = daily.setdefault(log.date, {})
        day[str(FATIGUE)] = log.fatigue
        if log.brain_fog is not None:
            day[str(BRAIN_FOG)] = log.brain_fog
        if log.sleep_quality is not None:
            day[str(SLEEP_DISTURBANCE)] = base - log.sleep_quality
        for entry in log.symptoms:
            day[str(entry.key)] = entry.severity

    columns: List[str] = []
    for day in daily.values():
        for key in day:
            if key not in columns:
                columns.append(key)

    return pd.DataFrame.from_dict(daily, orient="index", columns=columns, dtype=np.float64)


# ---------------------------------------------------------------------------
# Pearson
# ---------------------------------------------------------------------------

def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Pearson correlation from raw sums:

        r = (nΣxy - ΣxΣy) / sqrt((nΣx² - (Σx)²)(nΣy² - (Σy)²))

    Returns 0.0 for n < 2 or a constant series (zero denominator).
    """
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    n = len(x)
    if n < 2:
        return 0.0

    numerator = n * np.dot(x, y) - x.sum() * y.sum()
    denom_sq = (n * np.dot(x, x) - x.sum() ** 2) * (n * np.dot(y, y) - y.sum() ** 2)
    if denom_sq <= 0.0:
        return 0.0

    r = numerator / np.sqrt(denom_sq)
    return float(np.clip(r, -1.0, 1.0))


def correlation_significance(
    correlation: float,
    sample_size: int,
    cfg: PacingConfig,
) -> Significance:
    """Gate significance on both coefficient strength and sample size."""
    ct = cfg.correlation
    strength = abs(correlation)

    if sample_size < ct.low_sample_size:
        return Significance.LOW
    if strength > ct.high_r and sample_size >= ct.high_sample_size:
        return Significance.HIGH
    if strength > ct.moderate_r and sample_size >= ct.moderate_sample_size:
        return Significance.MODERATE
    return Significance.LOW


# ---------------------------------------------------------------------------
# Pairwise analysis
# ---------------------------------------------------------------------------

def analyze_symptom_correlations(
    symptom_logs: Sequence[SymptomLog],
    cfg: PacingConfig,
) -> List[SymptomCorrelation]:
    """
    Correlate every pair of symptoms that share at least min_shared_dates.

    Pairs with |r| <= meaningful_r are dropped. Results are sorted by |r|
    descending; ties keep column order.
    """
    ct = cfg.correlation
    matrix = build_daily_symptom_matrix(symptom_logs, cfg)
    correlations: List[SymptomCorrelation] = []

    for first, second in combinations(matrix.columns, 2):
        paired = matrix[[first, second]].dropna()
        n = len(paired)
        if n < ct.min_shared_dates:
            continue

        r = pearson(paired[first].values, paired[second].values)
        correlations.append(
            SymptomCorrelation(
                symptom1=key_from_label(first),
                symptom2=key_from_label(second),
                correlation=round_half_up(r, ct.decimals),
                significance=correlation_significance(r, n, cfg),
                sample_size=n,
            )
        )

    meaningful = [c for c in correlations if abs(c.correlation) > ct.meaningful_r]
    return sorted(meaningful, key=lambda c: abs(c.correlation), reverse=True)
