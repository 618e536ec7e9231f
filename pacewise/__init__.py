"""
PACEWISE: Rule-Based Pacing Analytics Engine

A deterministic, interpretable engine that turns one user's daily energy,
symptom, biometric and activity logs into pacing guidance aimed at
preventing post-exertional symptom flares.

Architecture:
    config           All thresholds, windows, weights, TTLs (single source of truth)
    models           Input entries, output records, parsing and validation
    series           Windowed averages, variance, date bucketing
    patterns         Energy pattern classification, symptom trend, recovery pattern
    detectors        Crash triggers, biometric concerns, activity tolerance
    correlation      Pairwise Pearson correlation across symptom severities
    forecast         Next-day energy forecast and prediction confidence
    recommendations  Rules → ranked, time-bound, disclaimer-bearing guidance
    routine          Daily routine adaptation
    pipeline         Public entry points, fallbacks, file loading, console summary

Public API:
    analyze_pacing_needs(data)           → list[PacingRecommendation]
    predict_energy_levels(data)          → EnergyForecast
    analyze_patterns(data)               → PatternAnalysis
    adapt_routine(routine, state)        → AdaptedRoutine
    analyze_symptom_correlations(data)   → list[SymptomCorrelation]
"""

from pacewise.config import PacingConfig
from pacewise.models import UserHealthData, parse_health_data
from pacewise.pipeline import (
    adapt_routine,
    analyze_pacing_needs,
    analyze_patterns,
    analyze_symptom_correlations,
    generate_summary,
    load_data,
    predict_energy_levels,
)

__version__ = "1.0.0"

__all__ = [
    "PacingConfig",
    "UserHealthData",
    "parse_health_data",
    "analyze_pacing_needs",
    "predict_energy_levels",
    "analyze_patterns",
    "adapt_routine",
    "analyze_symptom_correlations",
    "load_data",
    "generate_summary",
]
