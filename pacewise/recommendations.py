"""
Recommendation synthesis: findings → ranked, time-bound pacing guidance.

Findings are gathered independently, then a fixed sequence of rules turns
them into PacingRecommendation records. Rules never depend on each other;
a rule that raises is logged and skipped so the remaining guidance still
reaches the user.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from pacewise.config import PacingConfig
from pacewise.correlation import analyze_symptom_correlations
from pacewise.detectors import (
    assess_biometric_concerns,
    count_high_fatigue_activities,
    identify_crash_triggers,
)
from pacewise.models import (
    BiometricAssessment,
    EnergyPattern,
    PacingFindings,
    PacingRecommendation,
    Priority,
    RecommendationType,
    UserHealthData,
)
from pacewise.patterns import detect_energy_pattern
from pacewise.series import windowed_average

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------

def _safely(name: str, compute: Callable, default):
    try:
        return compute()
    except Exception:
        logger.exception("Finding '%s' failed; continuing without it", name)
        return default


def gather_findings(data: UserHealthData, cfg: PacingConfig) -> PacingFindings:
    """Run every detector independently. A failing detector yields its neutral value."""
    return PacingFindings(
        energy_pattern=_safely(
            "energy_pattern",
            lambda: detect_energy_pattern(data.energy_levels, cfg),
            EnergyPattern.STABLE,
        ),
        crash_triggers=_safely(
            "crash_triggers",
            lambda: identify_crash_triggers(data.energy_levels, data.activity_logs, cfg),
            (),
        ),
        biometrics=_safely(
            "biometrics",
            lambda: assess_biometric_concerns(data.biometric_readings, cfg),
            BiometricAssessment(has_concerns=False),
        ),
        correlations=_safely(
            "correlations",
            lambda: tuple(analyze_symptom_correlations(data.symptom_logs, cfg)),
            (),
        ),
        high_fatigue_activities=_safely(
            "high_fatigue_activities",
            lambda: count_high_fatigue_activities(data.activity_logs, cfg),
            0,
        ),
    )


# ---------------------------------------------------------------------------
# Record builder
# ---------------------------------------------------------------------------

def build_recommendation(
    rec_type: RecommendationType,
    priority: Priority,
    title: str,
    message: str,
    reasoning: str,
    action_items: Sequence[str],
    confidence: float,
    now: datetime,
    cfg: PacingConfig,
    ttl: Optional[timedelta] = None,
    extra_disclaimers: Sequence[str] = (),
) -> PacingRecommendation:
    """Stamp validity and disclaimers onto a recommendation."""
    if ttl is None:
        ttl = timedelta(hours=cfg.recommendations.ttl_hours)

    return PacingRecommendation(
        type=rec_type,
        priority=priority,
        title=title,
        message=message,
        reasoning=reasoning,
        action_items=tuple(action_items),
        valid_until=now + ttl,
        confidence=confidence,
        disclaimers=tuple(cfg.disclaimers) + tuple(extra_disclaimers),
    )


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def current_state_rule(
    data: UserHealthData,
    findings: PacingFindings,
    now: datetime,
    cfg: PacingConfig,
) -> List[PacingRecommendation]:
    """Rest when the last few days were very low; permit activity when high."""
    rc = cfg.recommendations
    recent = windowed_average(
        data.energy_levels,
        cfg.windows.current_state_days,
        now.date(),
        default=cfg.windows.neutral_energy,
    )

    if recent <= rc.rest_ceiling:
        return [build_recommendation(
            RecommendationType.REST_RECOMMENDATION,
            Priority.HIGH,
            "Energy Conservation Needed",
            "Your recent energy levels suggest you need focused rest and recovery.",
            f"Average energy level of {recent:g}/10 over the past "
            f"{cfg.windows.current_state_days} days indicates significant fatigue.",
            (
                "Prioritize rest and gentle activities only",
                "Consider skipping optional activities today",
                "Focus on basic self-care and hydration",
                "Avoid stimulating activities or environments",
            ),
            0.9,
            now,
            cfg,
        )]

    if recent >= rc.activity_floor:
        return [build_recommendation(
            RecommendationType.GENTLE_ACTIVITY,
            Priority.LOW,
            "Good Energy Window",
            "Your energy levels suggest you might be able to engage in gentle activities.",
            f"Average energy level of {recent:g}/10 indicates a potentially good "
            "period for light activity.",
            (
                "Consider your optional movement session if you feel up to it",
                "Still pace yourself and listen to your body",
                "Plan rest periods after any activities",
                "Monitor for any signs of overexertion",
            ),
            0.7,
            now,
            cfg,
        )]

    return []


def pattern_rule(
    data: UserHealthData,
    findings: PacingFindings,
    now: datetime,
    cfg: PacingConfig,
) -> List[PacingRecommendation]:
    """Modify the routine on a decline; ask for consistency when volatile."""
    if findings.energy_pattern is EnergyPattern.DECLINING:
        return [build_recommendation(
            RecommendationType.ROUTINE_MODIFICATION,
            Priority.HIGH,
            "Declining Energy Pattern Detected",
            "Your energy levels have been trending downward. Consider adjusting your routine.",
            "Analysis shows a declining trend in energy levels over the past two weeks.",
            (
                "Reduce the intensity of daily activities",
                "Add more rest periods throughout the day",
                "Consider temporarily skipping optional activities",
                "Focus on sleep optimization and stress reduction",
            ),
            0.8,
            now,
            cfg,
        )]

    if findings.energy_pattern is EnergyPattern.VOLATILE:
        return [build_recommendation(
            RecommendationType.ENERGY_CONSERVATION,
            Priority.MEDIUM,
            "Variable Energy Pattern",
            "Your energy levels show high variability. Consistent pacing may help.",
            "Energy levels show significant day-to-day variation, which may indicate "
            "boom-bust cycles.",
            (
                "Try to maintain consistent activity levels even on good days",
                "Avoid overexertion during high-energy periods",
                "Plan activities for your typically better times of day",
                "Keep a buffer of energy for unexpected demands",
            ),
            0.7,
            now,
            cfg,
        )]

    return []


def biometric_rule(
    data: UserHealthData,
    findings: PacingFindings,
    now: datetime,
    cfg: PacingConfig,
) -> List[PacingRecommendation]:
    """Surface heart-rate / HRV concerns, with a measurement-confound caveat."""
    if not findings.biometrics.has_concerns:
        return []

    return [build_recommendation(
        RecommendationType.BIOMETRIC_CONCERN,
        Priority.MEDIUM,
        "Biometric Patterns Suggest Rest",
        "Your heart rate and HRV patterns suggest your body may need additional recovery.",
        "; ".join(findings.biometrics.concerns),
        (
            "Consider taking a rest day or reducing activity intensity",
            "Focus on stress reduction and relaxation techniques",
            "Ensure adequate sleep and hydration",
            "Monitor how you feel and adjust activities accordingly",
        ),
        0.6,
        now,
        cfg,
        extra_disclaimers=(cfg.biometric_disclaimer,),
    )]


def activity_tolerance_rule(
    data: UserHealthData,
    findings: PacingFindings,
    now: datetime,
    cfg: PacingConfig,
) -> List[PacingRecommendation]:
    """Scale back when several activities left the user highly fatigued."""
    tt = cfg.tolerance
    count = findings.high_fatigue_activities

    if count < tt.min_high_fatigue_activities:
        return []

    return [build_recommendation(
        RecommendationType.ROUTINE_MODIFICATION,
        Priority.HIGH,
        "Activity Modifications Needed",
        "Recent activities seem to be causing significant fatigue. Consider scaling back.",
        f"{count} recent activities resulted in high post-activity fatigue "
        f"(>{tt.high_fatigue}/10).",
        (
            "Reduce the duration or intensity of activities",
            "Add more rest periods during activities",
            "Consider alternating activity days with complete rest days",
            "Focus on the most essential activities only",
        ),
        0.8,
        now,
        cfg,
    )]


RULES: Tuple[Tuple[str, Callable], ...] = (
    ("current_state", current_state_rule),
    ("energy_pattern", pattern_rule),
    ("biometric", biometric_rule),
    ("activity_tolerance", activity_tolerance_rule),
)


# ---------------------------------------------------------------------------
# Fixed recommendations
# ---------------------------------------------------------------------------

def welcome_recommendation(now: datetime, cfg: PacingConfig) -> PacingRecommendation:
    """Returned instead of the rules while the user is still building a baseline."""
    return build_recommendation(
        RecommendationType.ENERGY_CONSERVATION,
        Priority.MEDIUM,
        "Welcome to Pacing",
        "Start by tracking your energy levels daily to help us provide personalized "
        "recommendations.",
        "Insufficient data for personalized analysis. Building baseline understanding.",
        (
            "Log your energy levels daily using the 1-10 scale",
            "Complete your daily anchor routine at a comfortable pace",
            "Note how activities affect your energy and symptoms",
            "Be patient as we learn your patterns over the next week",
        ),
        0.5,
        now,
        cfg,
        ttl=timedelta(days=cfg.recommendations.welcome_ttl_days),
    )


def steady_pacing_recommendation(now: datetime, cfg: PacingConfig) -> PacingRecommendation:
    """Returned when the data is sufficient but no rule found anything to flag."""
    return build_recommendation(
        RecommendationType.ENERGY_CONSERVATION,
        Priority.LOW,
        "Steady Pacing",
        "Your recent data shows no warning signs. Keep pacing the way you have been.",
        "Energy, biometric and activity patterns are within your usual range.",
        (
            "Maintain your current routine and rest periods",
            "Keep logging energy and symptoms daily",
            "Make any increases in activity small and gradual",
        ),
        0.6,
        now,
        cfg,
    )


def fallback_recommendation(now: datetime, cfg: PacingConfig) -> PacingRecommendation:
    """General guidance used whenever personal analysis cannot run."""
    return build_recommendation(
        RecommendationType.ENERGY_CONSERVATION,
        Priority.MEDIUM,
        "General Pacing Guidance",
        "Focus on gentle, consistent activities and listen to your body.",
        "Unable to analyze personal data. Providing general chronic fatigue "
        "management guidance.",
        (
            "Pace activities throughout the day with regular rest breaks",
            "Prioritize essential activities and let go of non-essentials",
            "Maintain consistent sleep and meal times",
            "Stay hydrated and avoid overexertion",
        ),
        0.3,
        now,
        cfg,
    )


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

def rank_recommendations(
    recommendations: Sequence[PacingRecommendation],
    cfg: PacingConfig,
) -> List[PacingRecommendation]:
    """Drop repeated (type, title) pairs, sort by priority weight, keep the top N."""
    rc = cfg.recommendations
    seen = set()
    unique: List[PacingRecommendation] = []

    for rec in recommendations:
        key = (rec.type, rec.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(rec)

    ranked = sorted(unique, key=lambda r: rc.priority_weights.get(r.priority.value, 0), reverse=True)
    return ranked[:rc.max_recommendations]


# ---------------------------------------------------------------------------
# Synthesis
# ---------------------------------------------------------------------------

def synthesize_recommendations(
    data: UserHealthData,
    now: datetime,
    cfg: PacingConfig,
) -> List[PacingRecommendation]:
    """
    Turn one snapshot into at most `max_recommendations` records.

    Order of evaluation:
        1. too few energy entries   → welcome recommendation only
        2. findings                 → gathered independently
        3. rules                    → each isolated; failures skipped
        4. nothing fired            → steady-pacing recommendation
        5. rank                     → dedupe, priority sort, truncate
    """
    if len(data.energy_levels) < cfg.recommendations.min_energy_entries:
        logger.debug("Only %d energy entries; returning welcome recommendation", len(data.energy_levels))
        return [welcome_recommendation(now, cfg)]

    findings = gather_findings(data, cfg)
    recommendations: List[PacingRecommendation] = []

    for name, rule in RULES:
        try:
            recommendations.extend(rule(data, findings, now, cfg))
        except Exception:
            logger.exception("Recommendation rule '%s' failed; skipping", name)

    if not recommendations:
        recommendations.append(steady_pacing_recommendation(now, cfg))

    return rank_recommendations(recommendations, cfg)
