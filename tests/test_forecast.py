"""Tomorrow's energy forecast and prediction confidence."""

from datetime import timedelta

from pacewise.forecast import (
    calculate_prediction_confidence,
    forecast_energy,
    forecast_recommendations,
)
from pacewise.models import ActivityType, EnergyPattern, Impact

from builders import CFG, TODAY, activity, biometric_series, energy_series, snapshot


def test_confidence_counts_saturate():
    assert calculate_prediction_confidence(14, 7, 7, CFG) == 1.0
    assert calculate_prediction_confidence(100, 100, 100, CFG) == 1.0


def test_confidence_energy_only():
    assert calculate_prediction_confidence(7, 0, 0, CFG) == 0.3
    assert calculate_prediction_confidence(14, 0, 0, CFG) == 0.6


def test_confidence_is_monotonic():
    previous = 0.0
    for n in range(0, 20):
        current = calculate_prediction_confidence(n, n // 2, n // 3, CFG)
        assert current >= previous
        previous = current


def test_too_few_entries_returns_default():
    forecast = forecast_energy(snapshot(energy_series([9] * 6)), TODAY, CFG)
    assert forecast.predicted_energy_level == 5.0
    assert forecast.confidence == 0.3
    assert forecast.factors[0].factor == "Insufficient data for prediction"
    assert forecast.forecast_date == TODAY + timedelta(days=1)


def test_stable_forecast_is_window_average():
    forecast = forecast_energy(snapshot(energy_series([5] * 7)), TODAY, CFG)
    assert forecast.predicted_energy_level == 5.0
    assert forecast.confidence == 0.3
    assert [f.factor for f in forecast.factors] == ["Stable energy pattern"]
    assert forecast.user_id == "user-1"


def test_improving_trend_adds_half_point():
    # 7-day window holds [3, 5, 5, 5, 5, 5, 5, 5] → 4.8
    forecast = forecast_energy(snapshot(energy_series([3] * 7 + [5] * 7)), TODAY, CFG)
    assert forecast.predicted_energy_level == 5.3
    assert forecast.factors[0].impact == Impact.POSITIVE
    assert forecast.factors[0].weight == 0.7


def test_declining_trend_subtracts_half_point():
    # window holds [5, 3, 3, 3, 3, 3, 3, 3] → 3.3
    forecast = forecast_energy(snapshot(energy_series([5] * 7 + [3] * 7)), TODAY, CFG)
    assert forecast.predicted_energy_level == 2.8
    assert forecast.factors[0].impact == Impact.NEGATIVE


def test_prediction_clamped_to_scale():
    forecast = forecast_energy(snapshot(energy_series([8] * 7 + [10] * 7)), TODAY, CFG)
    assert forecast.predicted_energy_level == 10.0


def test_recent_high_fatigue_penalty():
    data = snapshot(
        energy_series([5] * 7),
        activities=[activity(1, ActivityType.MOVEMENT_SESSION, fatigue=8)],
    )
    forecast = forecast_energy(data, TODAY, CFG)
    assert forecast.predicted_energy_level == 4.0
    assert forecast.factors[-1].factor == "Recent high post-activity fatigue"
    assert forecast.factors[-1].weight == 0.9
    assert "Plan for a lower energy day with minimal activities" in forecast.recommendations


def test_older_high_fatigue_not_penalized():
    data = snapshot(
        energy_series([5] * 7),
        activities=[activity(2, ActivityType.MOVEMENT_SESSION, fatigue=8)],
    )
    assert forecast_energy(data, TODAY, CFG).predicted_energy_level == 5.0


def test_confidence_uses_all_sources():
    data = snapshot(
        energy_series([5] * 14),
        biometrics=biometric_series([60] * 7, [50] * 7),
        activities=[activity(i, ActivityType.DAILY_ANCHOR) for i in range(1, 8)],
    )
    assert forecast_energy(data, TODAY, CFG).confidence == 1.0


def test_forecast_recommendations_bands():
    assert forecast_recommendations(8.0, EnergyPattern.STABLE, CFG)[0].startswith("Good energy")
    assert forecast_recommendations(5.0, EnergyPattern.STABLE, CFG) == ()
    volatile = forecast_recommendations(5.0, EnergyPattern.VOLATILE, CFG)
    assert volatile == ("Energy may fluctuate - stay flexible with plans",)
