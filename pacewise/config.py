"""
Centralized configuration for all thresholds, windows, weights and TTLs.

Every tunable constant lives here. Each group is a frozen dataclass so a
caller can override one group without touching the rest.
"""

from dataclasses import dataclass, field
from typing import Dict


# ---------------------------------------------------------------------------
# Windows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WindowParams:
    """Day windows used for windowed averages."""

    current_state_days: int = 3
    forecast_days: int = 7

    # Returned when a window holds no entries (middle of the 1-10 scale)
    neutral_energy: float = 5.0


# ---------------------------------------------------------------------------
# Energy pattern classification
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PatternThresholds:
    """Boundaries for labeling an energy history."""

    min_entries: int = 7
    window_entries: int = 14
    half_entries: int = 7

    # Population variance above this is volatile, regardless of trend
    volatility_variance: float = 4.0

    # Second-half mean minus first-half mean
    trend_delta: float = 1.0


@dataclass(frozen=True)
class SymptomTrendParams:
    """Fatigue bands for the symptom trend in pattern analysis."""

    min_logs: int = 7
    recent_logs: int = 7
    improving_max_fatigue: float = 4.0
    worsening_min_fatigue: float = 7.0


@dataclass(frozen=True)
class RecoveryPatternParams:
    """Rest-day count that makes a recovery pattern worth reporting."""

    min_rest_days: int = 2
    confidence: float = 0.6


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CrashThresholds:
    """A crash is a day-over-day drop of at least `min_drop` points."""

    min_drop: int = 3


@dataclass(frozen=True)
class BiometricThresholds:
    """Heart-rate / HRV risk boundaries."""

    min_readings: int = 3
    recent_readings: int = 7

    elevated_heart_rate: float = 90.0   # bpm, mean over recent readings
    low_hrv: float = 20.0               # ms, mean over recent readings

    # Declining HRV: mean of the `trend_span` readings before the latest
    # `trend_skip` versus mean of the latest `trend_span`
    trend_min_readings: int = 5
    trend_span: int = 3
    trend_skip: int = 2
    hrv_drop: float = 10.0


@dataclass(frozen=True)
class ActivityToleranceThresholds:
    """Post-activity fatigue above `high_fatigue` counts against tolerance."""

    high_fatigue: int = 6
    min_high_fatigue_activities: int = 2


# ---------------------------------------------------------------------------
# Symptom correlation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CorrelationThresholds:
    """Sample-size and coefficient gates for symptom correlations."""

    min_shared_dates: int = 5
    meaningful_r: float = 0.3

    low_sample_size: int = 10
    high_r: float = 0.7
    high_sample_size: int = 20
    moderate_r: float = 0.5
    moderate_sample_size: int = 15

    # sleep_disturbance = base - sleep_quality, so higher is worse
    sleep_inversion_base: int = 11
    decimals: int = 2


# ---------------------------------------------------------------------------
# Forecasting
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ForecastParams:
    """Adjustments applied on top of the windowed energy average."""

    min_entries: int = 7
    trend_adjustment: float = 0.5
    fatigue_penalty: float = 1.0
    high_fatigue: int = 6
    recent_activity_days: int = 1

    min_level: float = 1.0
    max_level: float = 10.0

    # Factor weights per energy pattern label
    pattern_weights: Dict[str, float] = field(default_factory=lambda: {
        "improving": 0.7,
        "declining": 0.8,
        "volatile": 0.6,
        "stable": 0.5,
    })
    fatigue_weight: float = 0.9

    low_energy_ceiling: float = 4.0
    good_energy_floor: float = 7.0

    default_level: float = 5.0
    default_confidence: float = 0.3
    default_factor_weight: float = 0.5


@dataclass(frozen=True)
class ConfidenceWeights:
    """
    Weights and saturation counts for prediction confidence [0, 1].

    confidence = w_energy * min(energy_n / energy_target, 1)
               + w_biometric * min(biometric_n / biometric_target, 1)
               + w_activity * min(activity_n / activity_target, 1)
    """

    energy: float = 0.6
    biometric: float = 0.2
    activity: float = 0.2

    energy_target: int = 14
    biometric_target: int = 7
    activity_target: int = 7

    def __post_init__(self):
        total = self.energy + self.biometric + self.activity
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Confidence weights must sum to 1.0, got {total}")


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecommendationParams:
    """Gates, lifetimes and ranking for synthesized recommendations."""

    min_energy_entries: int = 3
    rest_ceiling: float = 3.0
    activity_floor: float = 7.0

    ttl_hours: int = 24
    welcome_ttl_days: int = 7
    max_recommendations: int = 5

    priority_weights: Dict[str, int] = field(default_factory=lambda: {
        "high": 3,
        "medium": 2,
        "low": 1,
    })


# ---------------------------------------------------------------------------
# Routine adaptation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RoutineParams:
    """Energy bands that decide how far a daily routine is scaled back."""

    very_low_energy: float = 3.0
    moderate_energy: float = 5.0
    high_fatigue: float = 6.0
    afternoon_energy_ceiling: float = 4.0

    breathing_seconds: int = 120
    mobility_seconds: int = 180


# ---------------------------------------------------------------------------
# Disclaimers
# ---------------------------------------------------------------------------

NOT_MEDICAL_ADVICE = (
    "This information is for general wellness purposes only and is not medical advice."
)

DEFAULT_DISCLAIMERS: tuple = (
    NOT_MEDICAL_ADVICE,
    "Always consult with your healthcare provider before making changes to your health routine.",
    "These suggestions are based on patterns in your data and may not apply to your specific situation.",
    "If you experience worsening symptoms, please contact your healthcare provider.",
)

BIOMETRIC_DISCLAIMER = (
    "Biometric readings can be affected by many factors including stress, "
    "caffeine, and measurement conditions."
)


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PacingConfig:
    """Complete engine configuration. Pass to any entry point to override defaults."""

    windows: WindowParams = field(default_factory=WindowParams)
    pattern: PatternThresholds = field(default_factory=PatternThresholds)
    symptom_trend: SymptomTrendParams = field(default_factory=SymptomTrendParams)
    recovery: RecoveryPatternParams = field(default_factory=RecoveryPatternParams)
    crash: CrashThresholds = field(default_factory=CrashThresholds)
    biometric: BiometricThresholds = field(default_factory=BiometricThresholds)
    tolerance: ActivityToleranceThresholds = field(default_factory=ActivityToleranceThresholds)
    correlation: CorrelationThresholds = field(default_factory=CorrelationThresholds)
    forecast: ForecastParams = field(default_factory=ForecastParams)
    confidence: ConfidenceWeights = field(default_factory=ConfidenceWeights)
    recommendations: RecommendationParams = field(default_factory=RecommendationParams)
    routine: RoutineParams = field(default_factory=RoutineParams)
    disclaimers: tuple = DEFAULT_DISCLAIMERS
    biometric_disclaimer: str = BIOMETRIC_DISCLAIMER
