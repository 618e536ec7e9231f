"""
Pattern detectors: crash triggers, biometric concerns, activity tolerance.

Each detector is a pure function that inspects the snapshot and returns
structured flags. No side effects.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from pacewise.config import PacingConfig
from pacewise.models import (
    ActivityLog,
    ActivityType,
    BiometricAssessment,
    BiometricReading,
    EnergyEntry,
)
from pacewise.series import bucket_by_date, mean, sort_by_date


# ---------------------------------------------------------------------------
# Crash triggers
# ---------------------------------------------------------------------------

CRASH_TRIGGER_MESSAGES: Dict[ActivityType, str] = {
    ActivityType.MOVEMENT_SESSION: "Movement session may have been too intense",
    ActivityType.DAILY_ANCHOR: "Daily routine may need modification",
}


def _completed_activity(activities: Sequence[ActivityLog]) -> Optional[ActivityLog]:
    for activity in activities:
        if activity.completed:
            return activity
    return None


def identify_crash_triggers(
    energy_levels: Sequence[EnergyEntry],
    activity_logs: Sequence[ActivityLog],
    cfg: PacingConfig,
) -> Tuple[str, ...]:
    """
    Attribute large day-over-day energy drops to the preceding activity.

    A crash is `previous.level - current.level >= min_drop` between adjacent
    entries in date order. The completed activity logged on the previous
    entry's date, if any, is named as the likely trigger. Only a single
    prior day is checked. Triggers are unique, in first-seen order.
    """
    ordered = sort_by_date(energy_levels)
    activities_by_date = bucket_by_date(activity_logs)
    triggers: List[str] = []

    for previous, current in zip(ordered, ordered[1:]):
        if previous.level - current.level < cfg.crash.min_drop:
            continue

        activity = _completed_activity(activities_by_date.get(previous.date, ()))
        if activity is None:
            continue

        message = CRASH_TRIGGER_MESSAGES.get(activity.type)
        if message and message not in triggers:
            triggers.append(message)

    return tuple(triggers)


# ---------------------------------------------------------------------------
# Biometric concerns
# ---------------------------------------------------------------------------

ELEVATED_HEART_RATE = "Elevated resting heart rate detected - consider more rest"
LOW_HRV = "Low heart rate variability - may indicate need for recovery"
DECLINING_HRV = "Declining HRV trend - consider reducing activity intensity"


def assess_biometric_concerns(
    biometric_readings: Sequence[BiometricReading],
    cfg: PacingConfig,
) -> BiometricAssessment:
    """
    Check the most recent readings for elevated heart rate and low or
    falling HRV.

    Checks run in a fixed order and concerns are reported in that order:
        1. mean heart rate > elevated_heart_rate
        2. mean HRV < low_hrv
        3. (>= trend_min_readings) mean HRV of the trend_span readings before
           the latest trend_skip, minus mean HRV of the latest trend_span,
           exceeds hrv_drop
    """
    bt = cfg.biometric

    if len(biometric_readings) < bt.min_readings:
        return BiometricAssessment(has_concerns=False)

    recent = sort_by_date(biometric_readings)[-bt.recent_readings:]
    concerns: List[str] = []

    if mean([r.heart_rate for r in recent]) > bt.elevated_heart_rate:
        concerns.append(ELEVATED_HEART_RATE)

    if mean([r.hrv for r in recent]) < bt.low_hrv:
        concerns.append(LOW_HRV)

    if len(recent) >= bt.trend_min_readings:
        earlier = recent[-(bt.trend_span + bt.trend_skip):-bt.trend_skip]
        latest = recent[-bt.trend_span:]
        drop = mean([r.hrv for r in earlier]) - mean([r.hrv for r in latest])
        if drop > bt.hrv_drop:
            concerns.append(DECLINING_HRV)

    return BiometricAssessment(has_concerns=bool(concerns), concerns=tuple(concerns))


# ---------------------------------------------------------------------------
# Activity tolerance
# ---------------------------------------------------------------------------

def count_high_fatigue_activities(
    activity_logs: Sequence[ActivityLog],
    cfg: PacingConfig,
) -> int:
    """Number of activities followed by post-activity fatigue above threshold."""
    threshold = cfg.tolerance.high_fatigue
    return sum(
        1 for log in activity_logs
        if log.post_activity_fatigue is not None and log.post_activity_fatigue > threshold
    )
