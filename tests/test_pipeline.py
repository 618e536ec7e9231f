"""Public entry points, fallbacks, file loading and the console summary."""

import json
import os
import tempfile
from datetime import timedelta
from pathlib import Path

from pacewise import (
    adapt_routine,
    analyze_pacing_needs,
    analyze_patterns,
    analyze_symptom_correlations,
    generate_summary,
    load_data,
    predict_energy_levels,
)
from pacewise.config import NOT_MEDICAL_ADVICE
from pacewise.models import ActivityType, PatternType, TimeOfDay

from builders import (
    CFG,
    DECLINING,
    NOW,
    TODAY,
    activity,
    energy_series,
    snapshot,
    symptom_log,
)

SAMPLE = Path(__file__).resolve().parent.parent / "sample_data.json"


def crash_snapshot():
    # the 6 → 3 drop lands the day after a completed movement session
    return snapshot(
        energy_series(DECLINING),
        activities=[
            activity(7, ActivityType.MOVEMENT_SESSION),
            activity(5, ActivityType.REST_DAY),
            activity(3, ActivityType.REST_DAY),
        ],
    )


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

def test_missing_snapshot_gives_general_guidance():
    recs = analyze_pacing_needs(None, CFG, NOW)
    assert len(recs) == 1
    assert recs[0].title == "General Pacing Guidance"
    assert recs[0].confidence == 0.3
    assert NOT_MEDICAL_ADVICE in recs[0].disclaimers


def test_malformed_dict_gives_general_guidance():
    recs = analyze_pacing_needs({"energyLevels": [{"level": 99}]}, CFG, NOW)
    assert [r.title for r in recs] == ["General Pacing Guidance"]


def test_forecast_fallback_keeps_user_id():
    forecast = predict_energy_levels({"userId": "u-9", "energyLevels": "bad"}, CFG, NOW)
    assert forecast.user_id == "u-9"
    assert forecast.predicted_energy_level == 5.0
    assert forecast.forecast_date == TODAY + timedelta(days=1)


def test_pattern_analysis_fallback():
    analysis = analyze_patterns(None, CFG, NOW)
    assert analysis.patterns[0].description == "Insufficient data for pattern analysis"
    assert analysis.patterns[0].confidence == 0.1
    assert analysis.trends.energy_trend == "stable"


def test_correlation_fallback_is_empty():
    assert analyze_symptom_correlations(None, CFG) == []


# ---------------------------------------------------------------------------
# Happy paths
# ---------------------------------------------------------------------------

def test_accepts_dict_input():
    raw = {
        "userId": "u-1",
        "energyLevels": [{"date": TODAY.isoformat(), "level": 2} for _ in range(3)],
    }
    recs = analyze_pacing_needs(raw, CFG, NOW)
    assert recs[0].title == "Energy Conservation Needed"


def test_pattern_analysis_finds_all_pattern_types():
    analysis = analyze_patterns(crash_snapshot(), CFG, NOW)
    assert [p.type for p in analysis.patterns] == [
        PatternType.ENERGY_CYCLE,
        PatternType.CRASH_TRIGGER,
        PatternType.RECOVERY_PATTERN,
    ]
    assert analysis.patterns[0].description == (
        "Energy levels show a declining pattern over recent weeks"
    )
    assert "Movement session may have been too intense" in analysis.patterns[1].description
    assert analysis.trends.energy_trend == "declining"
    assert analysis.trends.activity_tolerance == "stable"
    assert analysis.analysis_date == NOW


def test_pattern_analysis_reports_tolerance_and_symptoms():
    data = snapshot(
        energy_series([5] * 7),
        symptoms=[symptom_log(i, 8) for i in range(7)],
        activities=[
            activity(1, ActivityType.DAILY_ANCHOR, fatigue=8),
            activity(2, ActivityType.DAILY_ANCHOR, fatigue=7),
        ],
    )
    analysis = analyze_patterns(data, CFG, NOW)
    assert analysis.trends.activity_tolerance == "decreasing"
    assert analysis.trends.symptom_trend == "worsening"


def test_forecast_entry_point():
    forecast = predict_energy_levels(snapshot(energy_series([5] * 7)), CFG, NOW)
    assert forecast.forecast_date == TODAY + timedelta(days=1)
    assert forecast.predicted_energy_level == 5.0


def test_adapt_routine_from_dicts():
    result = adapt_routine(
        {"id": "r-1", "components": ["breathing", "mobility"]},
        {"currentEnergy": 2, "recentFatigue": 3},
        CFG,
    )
    assert result.base_routine_id == "r-1"
    assert result.estimated_energy_requirement == 2
    assert result.recommended_time_of_day == TimeOfDay.AFTERNOON


def test_adapt_routine_snake_case_state():
    result = adapt_routine({"id": "r-1"}, {"current_energy": 9, "recent_fatigue": 8}, CFG)
    assert result.estimated_energy_requirement == 4


def test_adapt_routine_fallback():
    result = adapt_routine({"id": "r-1"}, {"recentFatigue": 3}, CFG)
    assert result.base_routine_id == "r-1"
    assert result.estimated_energy_requirement == 4
    assert result.precautions == ("Listen to your body and adjust as needed",)


def test_defaults_resolve_without_config():
    recs = analyze_pacing_needs(snapshot(energy_series([5] * 7)))
    assert len(recs) >= 1


# ---------------------------------------------------------------------------
# Data loading
# ---------------------------------------------------------------------------

def test_load_missing_file():
    try:
        load_data("/nonexistent/snapshot.json")
        raise RuntimeError("Should have raised FileNotFoundError")
    except FileNotFoundError:
        pass


def test_load_empty_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "empty.json")
        with open(path, "w") as f:
            json.dump({}, f)
        try:
            load_data(path)
            raise RuntimeError("Should have raised ValueError")
        except ValueError:
            pass


def test_load_sample_data():
    data = load_data(SAMPLE)
    assert data.user_id is not None
    assert len(data.energy_levels) == 14
    assert any(e.label == "tinnitus" for log in data.symptom_logs for e in log.symptoms)


def test_summary_for_sample_data():
    summary = generate_summary(load_data(SAMPLE), CFG, NOW)
    assert summary.startswith("PACEWISE SUMMARY")
    assert "Recommendations:" in summary
    assert NOT_MEDICAL_ADVICE in summary


def test_results_are_deterministic_for_fixed_now():
    data = load_data(SAMPLE)
    assert analyze_pacing_needs(data, CFG, NOW) == analyze_pacing_needs(data, CFG, NOW)
    assert predict_energy_levels(data, CFG, NOW) == predict_energy_levels(data, CFG, NOW)
    assert analyze_patterns(data, CFG, NOW) == analyze_patterns(data, CFG, NOW)


def test_output_is_bounded():
    recs = analyze_pacing_needs(load_data(SAMPLE), CFG, NOW)
    assert 1 <= len(recs) <= 5
    assert all(0.0 <= r.confidence <= 1.0 for r in recs)
