"""Energy pattern classification, symptom trend, recovery pattern."""

from pacewise.models import ActivityType, EnergyPattern, PatternType
from pacewise.patterns import (
    detect_energy_pattern,
    detect_recovery_pattern,
    detect_symptom_trend,
    energy_trend,
    pattern_recommendations,
)

from builders import CFG, DECLINING, activity, energy_series, symptom_log


def test_seven_equal_entries_are_stable():
    assert detect_energy_pattern(energy_series([5] * 7), CFG) == EnergyPattern.STABLE


def test_fewer_than_seven_entries_always_stable():
    wild = energy_series([1, 10, 1, 10, 1, 10])
    assert detect_energy_pattern(wild, CFG) == EnergyPattern.STABLE


def test_improving():
    entries = energy_series([3] * 7 + [5] * 7)
    assert detect_energy_pattern(entries, CFG) == EnergyPattern.IMPROVING


def test_declining():
    assert detect_energy_pattern(energy_series(DECLINING), CFG) == EnergyPattern.DECLINING


def test_volatility_takes_precedence_over_improvement():
    # second-half mean is 9 points higher, but variance is 20.25
    entries = energy_series([1] * 7 + [10] * 7)
    assert detect_energy_pattern(entries, CFG) == EnergyPattern.VOLATILE


def test_alternating_levels_are_volatile():
    entries = energy_series([1, 9] * 7)
    assert detect_energy_pattern(entries, CFG) == EnergyPattern.VOLATILE


def test_only_last_fourteen_entries_count():
    entries = energy_series([1] * 10 + [5] * 14)
    assert detect_energy_pattern(entries, CFG) == EnergyPattern.STABLE


def test_unsorted_input_is_sorted_first():
    entries = tuple(reversed(energy_series([3] * 7 + [5] * 7)))
    assert detect_energy_pattern(entries, CFG) == EnergyPattern.IMPROVING
    assert entries[0].level == 5, "input must not be reordered"


def test_energy_trend_hides_volatility():
    assert energy_trend(EnergyPattern.VOLATILE) == "stable"
    assert energy_trend(EnergyPattern.DECLINING) == "declining"


def test_pattern_recommendations_per_label():
    for pattern in EnergyPattern:
        assert len(pattern_recommendations(pattern)) == 3


def test_symptom_trend_needs_seven_logs():
    logs = [symptom_log(i, 9) for i in range(6)]
    assert detect_symptom_trend(logs, CFG) == "stable"


def test_symptom_trend_improving():
    logs = [symptom_log(i, 3) for i in range(7)]
    assert detect_symptom_trend(logs, CFG) == "improving"


def test_symptom_trend_worsening():
    logs = [symptom_log(i, 8) for i in range(8)]
    assert detect_symptom_trend(logs, CFG) == "worsening"


def test_symptom_trend_uses_most_recent_logs():
    old = [symptom_log(20 + i, 9) for i in range(3)]
    recent = [symptom_log(i, 5) for i in range(7)]
    assert detect_symptom_trend(old + recent, CFG) == "stable"


def test_recovery_pattern_needs_two_rest_days():
    logs = [activity(1, ActivityType.REST_DAY), activity(2, ActivityType.DAILY_ANCHOR)]
    assert detect_recovery_pattern(logs, CFG) is None


def test_recovery_pattern_reported():
    logs = [activity(1, ActivityType.REST_DAY), activity(3, ActivityType.REST_DAY)]
    pattern = detect_recovery_pattern(logs, CFG)
    assert pattern.type == PatternType.RECOVERY_PATTERN
    assert pattern.confidence == 0.6
