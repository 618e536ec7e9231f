"""
Energy pattern classification, symptom trend, and recovery patterns.

Maps a user's recent history to a named label. Designed as a decision
tree for interpretability; volatility is checked before direction so a
swinging history is never reported as a trend.
"""

from typing import Optional, Sequence, Tuple

from pacewise.config import PacingConfig
from pacewise.models import (
    ActivityLog,
    ActivityType,
    EnergyEntry,
    EnergyPattern,
    Pattern,
    PatternType,
    SymptomLog,
)
from pacewise.series import mean, sort_by_date, variance


# ---------------------------------------------------------------------------
# Energy pattern
# ---------------------------------------------------------------------------

def detect_energy_pattern(
    energy_levels: Sequence[EnergyEntry],
    cfg: PacingConfig,
) -> EnergyPattern:
    """
    Classify recent energy as stable / improving / declining / volatile.

    Decision order matters; first match wins:
        fewer than min_entries     → stable (not enough data to call it)
        variance > threshold       → volatile
        half-mean delta > +delta   → improving
        half-mean delta < -delta   → declining
        otherwise                  → stable
    """
    p = cfg.pattern

    if len(energy_levels) < p.min_entries:
        return EnergyPattern.STABLE

    window = sort_by_date(energy_levels)[-p.window_entries:]
    levels = [e.level for e in window]

    first_avg = mean(levels[:p.half_entries])
    second_avg = mean(levels[-p.half_entries:])
    difference = second_avg - first_avg

    if variance(levels) > p.volatility_variance:
        return EnergyPattern.VOLATILE
    if difference > p.trend_delta:
        return EnergyPattern.IMPROVING
    if difference < -p.trend_delta:
        return EnergyPattern.DECLINING
    return EnergyPattern.STABLE


def energy_trend(pattern: EnergyPattern) -> str:
    """Directional trend for pattern analysis; volatile has no direction."""
    if pattern in (EnergyPattern.IMPROVING, EnergyPattern.DECLINING):
        return pattern.value
    return EnergyPattern.STABLE.value


# ---------------------------------------------------------------------------
# Symptom trend
# ---------------------------------------------------------------------------

def detect_symptom_trend(
    symptom_logs: Sequence[SymptomLog],
    cfg: PacingConfig,
) -> str:
    """Band the mean fatigue of the most recent logs."""
    st = cfg.symptom_trend

    if len(symptom_logs) < st.min_logs:
        return "stable"

    recent = sort_by_date(symptom_logs)[-st.recent_logs:]
    avg_fatigue = mean([log.fatigue for log in recent])

    if avg_fatigue <= st.improving_max_fatigue:
        return "improving"
    if avg_fatigue >= st.worsening_min_fatigue:
        return "worsening"
    return "stable"


# ---------------------------------------------------------------------------
# Recovery pattern
# ---------------------------------------------------------------------------

def detect_recovery_pattern(
    activity_logs: Sequence[ActivityLog],
    cfg: PacingConfig,
) -> Optional[Pattern]:
    """Report a recovery pattern once enough rest days have been logged."""
    rp = cfg.recovery
    rest_days = [log for log in activity_logs if log.type is ActivityType.REST_DAY]

    if len(rest_days) < rp.min_rest_days:
        return None

    return Pattern(
        type=PatternType.RECOVERY_PATTERN,
        description="Rest days appear to support energy recovery",
        confidence=rp.confidence,
        timeframe="Recent rest periods",
        recommendations=(
            "Continue incorporating regular rest days",
            "Plan rest days proactively rather than reactively",
            "Use rest days for gentle, restorative activities",
        ),
    )


# ---------------------------------------------------------------------------
# Advice per label
# ---------------------------------------------------------------------------

PATTERN_RECOMMENDATIONS = {
    EnergyPattern.IMPROVING: (
        "Continue current approach as it seems to be working",
        "Gradually and carefully consider small increases in activity",
        "Maintain consistent routines that support this improvement",
    ),
    EnergyPattern.DECLINING: (
        "Focus on rest and recovery",
        "Reduce non-essential activities temporarily",
        "Consider what might be contributing to the decline",
    ),
    EnergyPattern.VOLATILE: (
        "Work on consistent pacing to reduce boom-bust cycles",
        "Avoid overexertion even on good days",
        "Plan activities for your typically better times",
    ),
    EnergyPattern.STABLE: (
        "Maintain current stable approach",
        "Continue monitoring patterns",
        "Make gradual adjustments as needed",
    ),
}


def pattern_recommendations(pattern: EnergyPattern) -> Tuple[str, ...]:
    return PATTERN_RECOMMENDATIONS[pattern]
