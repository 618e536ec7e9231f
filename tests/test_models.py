"""Input validation and JSON-shaped parsing."""

from datetime import date, datetime

from pacewise.models import (
    ActivityLog,
    BiometricReading,
    EnergyEntry,
    SymptomEntry,
    SymptomLog,
    SymptomType,
    TimeOfDay,
    UserHealthData,
    ensure_health_data,
    parse_health_data,
)

D = date(2026, 10, 14)


def raises_value_error(fn):
    try:
        fn()
        raise RuntimeError("Should have raised ValueError")
    except ValueError:
        pass


def test_energy_level_out_of_range():
    raises_value_error(lambda: EnergyEntry(D, 0))
    raises_value_error(lambda: EnergyEntry(D, 11))


def test_energy_level_must_be_integer():
    raises_value_error(lambda: EnergyEntry(D, 5.5))
    raises_value_error(lambda: EnergyEntry(D, True))


def test_datetime_is_truncated_to_date():
    entry = EnergyEntry(datetime(2026, 10, 14, 22, 30), 5)
    assert entry.date == D


def test_time_of_day_coerced():
    assert EnergyEntry(D, 5, "evening").time_of_day == TimeOfDay.EVENING


def test_biometric_ranges():
    raises_value_error(lambda: BiometricReading(D, 30, 50))
    raises_value_error(lambda: BiometricReading(D, 60, 250))
    raises_value_error(lambda: BiometricReading(D, 60, 50, confidence=1.5))


def test_other_symptom_requires_label():
    raises_value_error(lambda: SymptomEntry(SymptomType.OTHER, 5))
    raises_value_error(lambda: SymptomEntry(SymptomType.OTHER, 5, label="  "))


def test_other_symptom_label_normalized():
    entry = SymptomEntry("other", 5, label=" Tinnitus ")
    assert str(entry.key) == "other:tinnitus"


def test_known_symptom_drops_label():
    entry = SymptomEntry("headache", 4, label="ignored")
    assert entry.label is None
    assert str(entry.key) == "headache"


def test_symptom_log_optional_fields():
    raises_value_error(lambda: SymptomLog(D, 5, sleep_quality=0))
    assert SymptomLog(D, 5).brain_fog is None


def test_activity_completed_must_be_bool():
    raises_value_error(lambda: ActivityLog(D, "rest_day", completed="yes"))


def test_snapshot_rejects_wrong_item_types():
    raises_value_error(lambda: UserHealthData("u", energy_levels=({"level": 5},)))


def test_parse_camel_case():
    data = parse_health_data({
        "userId": "u-1",
        "energyLevels": [{"date": "2026-10-14", "level": 4, "timeOfDay": "afternoon"}],
        "biometricReadings": [{"date": "2026-10-14", "heartRate": 70, "hrv": 45, "confidence": 0.8}],
        "symptomLogs": [{
            "date": "2026-10-14T08:00:00Z", "fatigue": 6, "brainFog": 3, "sleepQuality": 7,
            "symptoms": [{"type": "other", "severity": 5, "label": "Tinnitus"}],
        }],
        "activityLogs": [{"date": "2026-10-13", "type": "movement_session",
                          "completed": True, "postActivityFatigue": 8}],
    })
    assert data.user_id == "u-1"
    assert data.energy_levels[0].time_of_day == TimeOfDay.AFTERNOON
    assert data.biometric_readings[0].heart_rate == 70
    assert data.symptom_logs[0].date == D
    assert data.symptom_logs[0].sleep_quality == 7
    assert data.activity_logs[0].post_activity_fatigue == 8


def test_parse_snake_case():
    data = parse_health_data({
        "user_id": "u-2",
        "energy_levels": [{"date": "2026-10-14", "level": 4, "time_of_day": "morning"}],
        "activity_logs": [{"date": "2026-10-14", "type": "rest_day", "completed": True}],
    })
    assert data.user_id == "u-2"
    assert data.activity_logs[0].post_activity_fatigue is None
    assert data.symptom_logs == ()


def test_parse_missing_field():
    raises_value_error(lambda: parse_health_data({"energyLevels": [{"date": "2026-10-14"}]}))


def test_parse_bad_date():
    raises_value_error(lambda: parse_health_data({"energyLevels": [{"date": "soon", "level": 5}]}))


def test_parse_non_mapping():
    raises_value_error(lambda: parse_health_data([1, 2, 3]))


def test_ensure_health_data():
    raises_value_error(lambda: ensure_health_data(None))
    snapshot = UserHealthData("u")
    assert ensure_health_data(snapshot) is snapshot
