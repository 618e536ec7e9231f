"""
One-day-ahead energy forecast and its confidence score.

The forecast starts from the recent windowed average and applies fixed,
labeled adjustments; each adjustment is reported as a factor so the
result stays explainable. Confidence is derived from data volume and
variety only, never from the size of the adjustments.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pacewise.config import PacingConfig
from pacewise.models import (
    ActivityLog,
    EnergyForecast,
    EnergyPattern,
    ForecastFactor,
    Impact,
    UserHealthData,
)
from pacewise.patterns import detect_energy_pattern
from pacewise.series import round_half_up, windowed_average

logger = logging.getLogger(__name__)


PATTERN_FACTORS = {
    EnergyPattern.IMPROVING: ("Improving energy trend", Impact.POSITIVE),
    EnergyPattern.DECLINING: ("Declining energy trend", Impact.NEGATIVE),
    EnergyPattern.VOLATILE: ("Volatile energy pattern", Impact.NEUTRAL),
    EnergyPattern.STABLE: ("Stable energy pattern", Impact.NEUTRAL),
}


# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------

def calculate_prediction_confidence(
    energy_points: int,
    biometric_points: int,
    activity_points: int,
    cfg: PacingConfig,
) -> float:
    """
    Composite confidence ∈ [0, 1] rewarding both volume and variety.

    Each source saturates at its target count, so the score is
    non-decreasing in every count independently.
    """
    cw = cfg.confidence

    raw = (
        cw.energy * min(energy_points / cw.energy_target, 1.0)
        + cw.biometric * min(biometric_points / cw.biometric_target, 1.0)
        + cw.activity * min(activity_points / cw.activity_target, 1.0)
    )

    return round_half_up(float(np.clip(raw, 0.0, 1.0)), 2)


# ---------------------------------------------------------------------------
# Forecast pieces
# ---------------------------------------------------------------------------

def _had_recent_high_fatigue(
    activity_logs: Sequence[ActivityLog],
    today: date,
    cfg: PacingConfig,
) -> bool:
    fp = cfg.forecast
    cutoff = today - timedelta(days=fp.recent_activity_days)
    return any(
        log.date >= cutoff
        and log.post_activity_fatigue is not None
        and log.post_activity_fatigue > fp.high_fatigue
        for log in activity_logs
    )


def forecast_recommendations(
    predicted_level: float,
    pattern: EnergyPattern,
    cfg: PacingConfig,
) -> Tuple[str, ...]:
    """Plain-language planning advice for the forecast day."""
    fp = cfg.forecast
    advice: List[str] = []

    if predicted_level <= fp.low_energy_ceiling:
        advice.append("Plan for a lower energy day with minimal activities")
        advice.append("Prepare easy meals and prioritize rest")
    elif predicted_level >= fp.good_energy_floor:
        advice.append("Good energy predicted - consider optional activities")
        advice.append("Still pace yourself and avoid overcommitting")

    if pattern is EnergyPattern.VOLATILE:
        advice.append("Energy may fluctuate - stay flexible with plans")

    return tuple(advice)


def default_energy_forecast(
    user_id: Optional[str],
    today: date,
    cfg: PacingConfig,
) -> EnergyForecast:
    """Fixed low-confidence forecast used for sparse data and failures."""
    fp = cfg.forecast
    return EnergyForecast(
        user_id=user_id,
        forecast_date=today + timedelta(days=1),
        predicted_energy_level=fp.default_level,
        confidence=fp.default_confidence,
        factors=(
            ForecastFactor(
                factor="Insufficient data for prediction",
                impact=Impact.NEUTRAL,
                weight=fp.default_factor_weight,
            ),
        ),
        recommendations=("Continue tracking energy levels to improve predictions",),
    )


# ---------------------------------------------------------------------------
# Forecast
# ---------------------------------------------------------------------------

def forecast_energy(
    data: UserHealthData,
    today: date,
    cfg: PacingConfig,
) -> EnergyForecast:
    """
    Predict tomorrow's energy level.

    Stages:
        1. 7-day windowed average as the baseline
        2. ± trend_adjustment for an improving / declining pattern
        3. - fatigue_penalty if any activity in the last day left
           post-activity fatigue above high_fatigue
    """
    fp = cfg.forecast

    if len(data.energy_levels) < fp.min_entries:
        logger.debug("Only %d energy entries; returning default forecast", len(data.energy_levels))
        return default_energy_forecast(data.user_id, today, cfg)

    recent_average = windowed_average(
        data.energy_levels,
        cfg.windows.forecast_days,
        today,
        default=cfg.windows.neutral_energy,
    )
    pattern = detect_energy_pattern(data.energy_levels, cfg)

    # Stage 2: pattern adjustment
    predicted = recent_average
    if pattern is EnergyPattern.IMPROVING:
        predicted = min(fp.max_level, recent_average + fp.trend_adjustment)
    elif pattern is EnergyPattern.DECLINING:
        predicted = max(fp.min_level, recent_average - fp.trend_adjustment)

    label, impact = PATTERN_FACTORS[pattern]
    factors = [ForecastFactor(label, impact, fp.pattern_weights[pattern.value])]

    # Stage 3: recent post-activity fatigue
    if _had_recent_high_fatigue(data.activity_logs, today, cfg):
        predicted = max(fp.min_level, predicted - fp.fatigue_penalty)
        factors.append(
            ForecastFactor("Recent high post-activity fatigue", Impact.NEGATIVE, fp.fatigue_weight)
        )

    return EnergyForecast(
        user_id=data.user_id,
        forecast_date=today + timedelta(days=1),
        predicted_energy_level=round_half_up(predicted, 1),
        confidence=calculate_prediction_confidence(
            len(data.energy_levels),
            len(data.biometric_readings),
            len(data.activity_logs),
            cfg,
        ),
        factors=tuple(factors),
        recommendations=forecast_recommendations(predicted, pattern, cfg),
    )
