"""
Pipeline orchestration: snapshot → findings → recommendations / forecast.

This is the only module with I/O (file loading, console summary), and the
only place exceptions are turned into fallback results. Every public entry
point returns *some* guidance: an empty answer could be read as "no
guidance needed".
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Union

from pacewise.config import PacingConfig
from pacewise.correlation import analyze_symptom_correlations as _correlate
from pacewise.forecast import default_energy_forecast, forecast_energy
from pacewise.models import (
    AdaptedRoutine,
    BaseRoutine,
    EnergyForecast,
    Pattern,
    PatternAnalysis,
    PatternTrends,
    PatternType,
    PacingRecommendation,
    SymptomCorrelation,
    UserHealthData,
    UserState,
    ensure_health_data,
    parse_health_data,
)
from pacewise.patterns import (
    detect_recovery_pattern,
    detect_symptom_trend,
    energy_trend,
    pattern_recommendations,
)
from pacewise.recommendations import (
    fallback_recommendation,
    gather_findings,
    synthesize_recommendations,
)
from pacewise.routine import build_adapted_routine, default_adapted_routine

logger = logging.getLogger(__name__)


def _resolve(cfg: Optional[PacingConfig], now: Optional[datetime]):
    return cfg or PacingConfig(), now or datetime.now()


def _user_id(data: Any) -> Optional[str]:
    if isinstance(data, UserHealthData):
        return data.user_id
    if isinstance(data, dict):
        return data.get("userId", data.get("user_id"))
    return None


# ---------------------------------------------------------------------------
# Data loading (CLI mode only)
# ---------------------------------------------------------------------------

def load_data(filepath: Union[str, Path]) -> UserHealthData:
    """Load and validate one user's snapshot from a JSON file."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, "r") as f:
        raw = json.load(f)

    if not raw:
        raise ValueError("Data file is empty")

    return parse_health_data(raw)


# ---------------------------------------------------------------------------
# Pattern analysis
# ---------------------------------------------------------------------------

def _analyze_patterns(data: UserHealthData, now: datetime, cfg: PacingConfig) -> PatternAnalysis:
    findings = gather_findings(data, cfg)
    pattern = findings.energy_pattern

    patterns = [
        Pattern(
            type=PatternType.ENERGY_CYCLE,
            description=f"Energy levels show a {pattern.value} pattern over recent weeks",
            confidence=0.7,
            timeframe="Past 2 weeks",
            recommendations=pattern_recommendations(pattern),
        )
    ]

    if findings.crash_triggers:
        patterns.append(Pattern(
            type=PatternType.CRASH_TRIGGER,
            description=f"Potential triggers identified: {', '.join(findings.crash_triggers)}",
            confidence=0.8,
            timeframe="Recent activities",
            recommendations=(
                "Consider reducing intensity of identified trigger activities",
                "Add more rest periods around these activities",
                "Monitor energy levels more closely after these activities",
            ),
        ))

    recovery = detect_recovery_pattern(data.activity_logs, cfg)
    if recovery is not None:
        patterns.append(recovery)

    tolerance_hit = (
        findings.high_fatigue_activities >= cfg.tolerance.min_high_fatigue_activities
    )
    trends = PatternTrends(
        energy_trend=energy_trend(pattern),
        symptom_trend=detect_symptom_trend(data.symptom_logs, cfg),
        activity_tolerance="decreasing" if tolerance_hit else "stable",
    )

    return PatternAnalysis(
        user_id=data.user_id,
        analysis_date=now,
        patterns=tuple(patterns),
        trends=trends,
        correlations=findings.correlations,
    )


def default_pattern_analysis(user_id: Optional[str], now: datetime) -> PatternAnalysis:
    return PatternAnalysis(
        user_id=user_id,
        analysis_date=now,
        patterns=(
            Pattern(
                type=PatternType.ENERGY_CYCLE,
                description="Insufficient data for pattern analysis",
                confidence=0.1,
                timeframe="N/A",
                recommendations=("Continue tracking to identify patterns",),
            ),
        ),
        trends=PatternTrends(),
    )


# ---------------------------------------------------------------------------
# Public Entry Points
# ---------------------------------------------------------------------------

def analyze_pacing_needs(
    data: Any,
    cfg: Optional[PacingConfig] = None,
    now: Optional[datetime] = None,
) -> List[PacingRecommendation]:
    """
    Ranked pacing recommendations for one user's snapshot.

    Accepts a UserHealthData or JSON-shaped dict. Never raises: malformed
    input yields a single general-guidance fallback.
    """
    cfg, now = _resolve(cfg, now)
    try:
        snapshot = ensure_health_data(data)
        return synthesize_recommendations(snapshot, now, cfg)
    except Exception:
        logger.exception("Error analyzing pacing needs; returning fallback guidance")
        return [fallback_recommendation(now, cfg)]


def predict_energy_levels(
    data: Any,
    cfg: Optional[PacingConfig] = None,
    now: Optional[datetime] = None,
) -> EnergyForecast:
    """Tomorrow's energy forecast. Malformed input yields the default forecast."""
    cfg, now = _resolve(cfg, now)
    try:
        snapshot = ensure_health_data(data)
        return forecast_energy(snapshot, now.date(), cfg)
    except Exception:
        logger.exception("Error predicting energy levels; returning default forecast")
        return default_energy_forecast(_user_id(data), now.date(), cfg)


def analyze_patterns(
    data: Any,
    cfg: Optional[PacingConfig] = None,
    now: Optional[datetime] = None,
) -> PatternAnalysis:
    """Energy cycle, crash triggers, recovery pattern, trends and correlations."""
    cfg, now = _resolve(cfg, now)
    try:
        snapshot = ensure_health_data(data)
        return _analyze_patterns(snapshot, now, cfg)
    except Exception:
        logger.exception("Error analyzing patterns; returning default analysis")
        return default_pattern_analysis(_user_id(data), now)


def analyze_symptom_correlations(
    data: Any,
    cfg: Optional[PacingConfig] = None,
) -> List[SymptomCorrelation]:
    """Meaningful symptom pairs, strongest first. Malformed input yields []."""
    cfg = cfg or PacingConfig()
    try:
        snapshot = ensure_health_data(data)
        return _correlate(snapshot.symptom_logs, cfg)
    except Exception:
        logger.exception("Error analyzing symptom correlations")
        return []


def adapt_routine(
    base_routine: Any,
    user_state: Any,
    cfg: Optional[PacingConfig] = None,
) -> AdaptedRoutine:
    """
    Scale a daily routine to the user's current energy and recent fatigue.

    Accepts model instances or dicts ({"id", "components"} and
    {"currentEnergy", "recentFatigue"}). Never raises.
    """
    cfg = cfg or PacingConfig()
    routine_id = None
    try:
        if isinstance(base_routine, dict):
            base_routine = BaseRoutine(
                id=base_routine["id"],
                components=tuple(base_routine.get("components", ())),
            )
        routine_id = base_routine.id

        if isinstance(user_state, dict):
            user_state = UserState(
                current_energy=user_state.get("currentEnergy", user_state.get("current_energy")),
                recent_fatigue=user_state.get("recentFatigue", user_state.get("recent_fatigue")),
            )

        return build_adapted_routine(base_routine, user_state, cfg)
    except Exception:
        logger.exception("Error adapting routine; returning default routine")
        return default_adapted_routine(routine_id)


# ---------------------------------------------------------------------------
# Console summary (CLI mode)
# ---------------------------------------------------------------------------

def generate_summary(
    data: UserHealthData,
    cfg: Optional[PacingConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    """Format recommendations, forecast and patterns as console text."""
    cfg, now = _resolve(cfg, now)
    recommendations = analyze_pacing_needs(data, cfg, now)
    forecast = predict_energy_levels(data, cfg, now)
    analysis = analyze_patterns(data, cfg, now)

    lines = [
        "PACEWISE SUMMARY",
        "=" * 58,
        "",
        f"  Energy Trend        : {analysis.trends.energy_trend}",
        f"  Symptom Trend       : {analysis.trends.symptom_trend}",
        f"  Activity Tolerance  : {analysis.trends.activity_tolerance}",
        f"  Forecast ({forecast.forecast_date.isoformat()}) : "
        f"{forecast.predicted_energy_level}/10 (confidence: {forecast.confidence})",
        "",
        "  Recommendations:",
    ]

    for rec in recommendations:
        lines.append(f"    [{rec.priority.value.upper():6s}] {rec.title}")
        lines.append(f"             {rec.message}")

    if analysis.correlations:
        lines.append("")
        lines.append("  Symptom Correlations:")
        for c in analysis.correlations:
            lines.append(
                f"    {str(c.symptom1):20s} ~ {str(c.symptom2):20s} "
                f"r={c.correlation:+.2f} ({c.significance.value}, n={c.sample_size})"
            )

    lines.append("")
    lines.append(f"  * {cfg.disclaimers[0]}")
    lines.append("=" * 58)
    return "\n".join(lines)
