"""
Data model for the pacing engine.

Input entries validate their own field ranges on construction, so a
UserHealthData that exists is already within contract. Output records are
frozen and built fresh on every call.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

import pandas as pd


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class ActivityType(str, Enum):
    DAILY_ANCHOR = "daily_anchor"
    MOVEMENT_SESSION = "movement_session"
    REST_DAY = "rest_day"


class EnergyPattern(str, Enum):
    STABLE = "stable"
    IMPROVING = "improving"
    DECLINING = "declining"
    VOLATILE = "volatile"


class SymptomType(str, Enum):
    """Known symptom keys. Anything else is logged as OTHER with a label."""

    FATIGUE = "fatigue"
    POST_EXERTIONAL_MALAISE = "post_exertional_malaise"
    BRAIN_FOG = "brain_fog"
    COGNITIVE_DYSFUNCTION = "cognitive_dysfunction"
    MEMORY_ISSUES = "memory_issues"
    CONCENTRATION_DIFFICULTY = "concentration_difficulty"
    HEADACHE = "headache"
    MIGRAINE = "migraine"
    MUSCLE_PAIN = "muscle_pain"
    JOINT_PAIN = "joint_pain"
    MUSCLE_WEAKNESS = "muscle_weakness"
    NAUSEA = "nausea"
    DIZZINESS = "dizziness"
    ORTHOSTATIC_INTOLERANCE = "orthostatic_intolerance"
    HEART_PALPITATIONS = "heart_palpitations"
    CHEST_PAIN = "chest_pain"
    SHORTNESS_OF_BREATH = "shortness_of_breath"
    TEMPERATURE_REGULATION = "temperature_regulation"
    CHILLS = "chills"
    FEVER = "fever"
    NIGHT_SWEATS = "night_sweats"
    SLEEP_DISTURBANCE = "sleep_disturbance"
    UNREFRESHING_SLEEP = "unrefreshing_sleep"
    INSOMNIA = "insomnia"
    MOOD_CHANGES = "mood_changes"
    ANXIETY = "anxiety"
    DEPRESSION = "depression"
    IRRITABILITY = "irritability"
    DIGESTIVE_ISSUES = "digestive_issues"
    LOSS_OF_APPETITE = "loss_of_appetite"
    SENSORY_SENSITIVITY = "sensory_sensitivity"
    LIGHT_SENSITIVITY = "light_sensitivity"
    SOUND_SENSITIVITY = "sound_sensitivity"
    SMELL_SENSITIVITY = "smell_sensitivity"
    TASTE_CHANGES = "taste_changes"
    SKIN_SENSITIVITY = "skin_sensitivity"
    LYMPH_NODE_PAIN = "lymph_node_pain"
    SORE_THROAT = "sore_throat"
    FLU_LIKE_SYMPTOMS = "flu_like_symptoms"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------

SCALE_MIN = 1
SCALE_MAX = 10


def _check_scale(name: str, value: Any, optional: bool = False) -> None:
    """Levels and severities are integers on the 1-10 scale."""
    if value is None and optional:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not SCALE_MIN <= value <= SCALE_MAX:
        raise ValueError(f"{name} must be in [{SCALE_MIN}, {SCALE_MAX}], got {value}")


def _check_range(name: str, value: Any, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be numeric, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name} must be in [{low}, {high}], got {value}")


def _check_date(entry: Any) -> None:
    value = entry.date
    if isinstance(value, datetime):
        # Calendar dates only; drop the time component
        object.__setattr__(entry, "date", value.date())
    elif not isinstance(value, date):
        raise ValueError(f"date must be a calendar date, got {value!r}")


# ---------------------------------------------------------------------------
# Input entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EnergyEntry:
    """Self-reported energy level for one part of a day."""

    date: date
    level: int
    time_of_day: TimeOfDay = TimeOfDay.MORNING

    def __post_init__(self):
        _check_date(self)
        _check_scale("level", self.level)
        object.__setattr__(self, "time_of_day", TimeOfDay(self.time_of_day))


@dataclass(frozen=True)
class BiometricReading:
    """Resting heart rate (bpm) and HRV (ms) captured on one day."""

    date: date
    heart_rate: float
    hrv: float
    confidence: float = 1.0

    def __post_init__(self):
        _check_date(self)
        _check_range("heart_rate", self.heart_rate, 40, 200)
        _check_range("hrv", self.hrv, 0, 200)
        _check_range("confidence", self.confidence, 0, 1)


@dataclass(frozen=True)
class SymptomKey:
    """Column identity for a symptom: a known type, or OTHER plus a label."""

    type: SymptomType
    label: Optional[str] = None

    def __str__(self) -> str:
        if self.type is SymptomType.OTHER:
            return f"other:{self.label}"
        return self.type.value


@dataclass(frozen=True)
class SymptomEntry:
    """A free-form additional symptom on a daily log."""

    type: SymptomType
    severity: int
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "type", SymptomType(self.type))
        _check_scale("severity", self.severity)
        if self.type is SymptomType.OTHER:
            if not self.label or not self.label.strip():
                raise ValueError("symptom of type 'other' requires a label")
            object.__setattr__(self, "label", self.label.strip().lower())
        else:
            object.__setattr__(self, "label", None)

    @property
    def key(self) -> SymptomKey:
        return SymptomKey(self.type, self.label)


@dataclass(frozen=True)
class SymptomLog:
    """Daily symptom log. Fatigue is mandatory, the rest are optional."""

    date: date
    fatigue: int
    pain: Optional[int] = None
    brain_fog: Optional[int] = None
    sleep_quality: Optional[int] = None
    symptoms: Tuple[SymptomEntry, ...] = ()

    def __post_init__(self):
        _check_date(self)
        _check_scale("fatigue", self.fatigue)
        _check_scale("pain", self.pain, optional=True)
        _check_scale("brain_fog", self.brain_fog, optional=True)
        _check_scale("sleep_quality", self.sleep_quality, optional=True)
        object.__setattr__(self, "symptoms", tuple(self.symptoms))


@dataclass(frozen=True)
class ActivityLog:
    """One logged activity and how fatiguing it was afterwards."""

    date: date
    type: ActivityType
    completed: bool
    post_activity_fatigue: Optional[int] = None

    def __post_init__(self):
        _check_date(self)
        object.__setattr__(self, "type", ActivityType(self.type))
        if not isinstance(self.completed, bool):
            raise ValueError(f"completed must be a bool, got {self.completed!r}")
        _check_scale("post_activity_fatigue", self.post_activity_fatigue, optional=True)


@dataclass(frozen=True)
class UserHealthData:
    """One user's snapshot. Series are unordered; consumers sort by date."""

    user_id: Optional[str]
    energy_levels: Tuple[EnergyEntry, ...] = ()
    biometric_readings: Tuple[BiometricReading, ...] = ()
    symptom_logs: Tuple[SymptomLog, ...] = ()
    activity_logs: Tuple[ActivityLog, ...] = ()

    def __post_init__(self):
        for name, kind in (
            ("energy_levels", EnergyEntry),
            ("biometric_readings", BiometricReading),
            ("symptom_logs", SymptomLog),
            ("activity_logs", ActivityLog),
        ):
            entries = tuple(getattr(self, name))
            for entry in entries:
                if not isinstance(entry, kind):
                    raise ValueError(f"{name} must contain {kind.__name__} items, got {entry!r}")
            object.__setattr__(self, name, entries)


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------

class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationType(str, Enum):
    ENERGY_CONSERVATION = "energy_conservation"
    GENTLE_ACTIVITY = "gentle_activity"
    REST_RECOMMENDATION = "rest_recommendation"
    ROUTINE_MODIFICATION = "routine_modification"
    BIOMETRIC_CONCERN = "biometric_concern"


@dataclass(frozen=True)
class PacingRecommendation:
    type: RecommendationType
    priority: Priority
    title: str
    message: str
    reasoning: str
    action_items: Tuple[str, ...]
    valid_until: datetime
    confidence: float
    disclaimers: Tuple[str, ...]


class Impact(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class ForecastFactor:
    factor: str
    impact: Impact
    weight: float


@dataclass(frozen=True)
class EnergyForecast:
    user_id: Optional[str]
    forecast_date: date
    predicted_energy_level: float
    confidence: float
    factors: Tuple[ForecastFactor, ...]
    recommendations: Tuple[str, ...]


@dataclass(frozen=True)
class BiometricAssessment:
    has_concerns: bool
    concerns: Tuple[str, ...] = ()


class Significance(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class SymptomCorrelation:
    symptom1: SymptomKey
    symptom2: SymptomKey
    correlation: float
    significance: Significance
    sample_size: int


class PatternType(str, Enum):
    ENERGY_CYCLE = "energy_cycle"
    CRASH_TRIGGER = "crash_trigger"
    RECOVERY_PATTERN = "recovery_pattern"


@dataclass(frozen=True)
class Pattern:
    type: PatternType
    description: str
    confidence: float
    timeframe: str
    recommendations: Tuple[str, ...]


@dataclass(frozen=True)
class PatternTrends:
    energy_trend: str = "stable"
    symptom_trend: str = "stable"
    activity_tolerance: str = "stable"


@dataclass(frozen=True)
class PatternAnalysis:
    user_id: Optional[str]
    analysis_date: datetime
    patterns: Tuple[Pattern, ...]
    trends: PatternTrends
    correlations: Tuple[SymptomCorrelation, ...] = ()


@dataclass(frozen=True)
class PacingFindings:
    """Independent findings the synthesizer and pattern analysis draw on."""

    energy_pattern: EnergyPattern
    crash_triggers: Tuple[str, ...]
    biometrics: BiometricAssessment
    correlations: Tuple[SymptomCorrelation, ...]
    high_fatigue_activities: int


# ---------------------------------------------------------------------------
# Routine adaptation records
# ---------------------------------------------------------------------------

class Modification(str, Enum):
    REDUCE_DURATION = "reduce_duration"
    SKIP = "skip"
    SIMPLIFY = "simplify"
    ADD_REST = "add_rest"


@dataclass(frozen=True)
class BaseRoutine:
    id: str
    components: Tuple[str, ...] = ()


@dataclass(frozen=True)
class UserState:
    current_energy: float
    recent_fatigue: float


@dataclass(frozen=True)
class RoutineAdaptation:
    component: str
    modification: Modification
    reason: str
    new_duration: Optional[int] = None


@dataclass(frozen=True)
class AdaptedRoutine:
    base_routine_id: Optional[str]
    adaptations: Tuple[RoutineAdaptation, ...]
    estimated_energy_requirement: int
    recommended_time_of_day: TimeOfDay
    precautions: Tuple[str, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Parsing (JSON-shaped mappings → model)
# ---------------------------------------------------------------------------

_MISSING = object()


def _pick(raw: Mapping, camel: str, snake: str, default: Any = _MISSING) -> Any:
    """Read a field by its wire (camelCase) or Python (snake_case) name."""
    if camel in raw:
        return raw[camel]
    if snake in raw:
        return raw[snake]
    if default is _MISSING:
        raise ValueError(f"Missing required field: {camel}")
    return default


def _parse_date(value: Any) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    try:
        return pd.Timestamp(value).date()
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid date: {value!r}") from exc


def _parse_symptom_entry(raw: Mapping) -> SymptomEntry:
    return SymptomEntry(
        type=raw["type"],
        severity=raw["severity"],
        label=raw.get("label"),
    )


def parse_health_data(raw: Mapping) -> UserHealthData:
    """
    Build a validated UserHealthData from list-of-dict JSON data.

    Accepts both the app's camelCase keys and snake_case keys. Raises
    ValueError for missing fields or out-of-contract values.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"Health data must be a mapping, got {type(raw).__name__}")

    try:
        return _parse_snapshot(raw)
    except KeyError as exc:
        raise ValueError(f"Missing required field: {exc.args[0]}") from exc
    except TypeError as exc:
        raise ValueError(f"Malformed health data: {exc}") from exc


def _parse_snapshot(raw: Mapping) -> UserHealthData:
    energy = tuple(
        EnergyEntry(
            date=_parse_date(e["date"]),
            level=e["level"],
            time_of_day=_pick(e, "timeOfDay", "time_of_day", TimeOfDay.MORNING),
        )
        for e in _pick(raw, "energyLevels", "energy_levels", ())
    )
    biometrics = tuple(
        BiometricReading(
            date=_parse_date(b["date"]),
            heart_rate=_pick(b, "heartRate", "heart_rate"),
            hrv=b["hrv"],
            confidence=b.get("confidence", 1.0),
        )
        for b in _pick(raw, "biometricReadings", "biometric_readings", ())
    )
    symptoms = tuple(
        SymptomLog(
            date=_parse_date(s["date"]),
            fatigue=s["fatigue"],
            pain=s.get("pain"),
            brain_fog=_pick(s, "brainFog", "brain_fog", None),
            sleep_quality=_pick(s, "sleepQuality", "sleep_quality", None),
            symptoms=tuple(_parse_symptom_entry(x) for x in s.get("symptoms") or ()),
        )
        for s in _pick(raw, "symptomLogs", "symptom_logs", ())
    )
    activities = tuple(
        ActivityLog(
            date=_parse_date(a["date"]),
            type=a["type"],
            completed=a["completed"],
            post_activity_fatigue=_pick(a, "postActivityFatigue", "post_activity_fatigue", None),
        )
        for a in _pick(raw, "activityLogs", "activity_logs", ())
    )

    return UserHealthData(
        user_id=_pick(raw, "userId", "user_id", None),
        energy_levels=energy,
        biometric_readings=biometrics,
        symptom_logs=symptoms,
        activity_logs=activities,
    )


def ensure_health_data(data: Any) -> UserHealthData:
    """Accept a UserHealthData or a mapping; reject anything else."""
    if data is None:
        raise ValueError("Health data snapshot is required")
    if isinstance(data, UserHealthData):
        return data
    return parse_health_data(data)
