"""Configuration defaults and validation."""

from pacewise.config import (
    NOT_MEDICAL_ADVICE,
    ConfidenceWeights,
    PacingConfig,
    RecommendationParams,
)

from builders import CFG, approx


def test_confidence_weights_sum_to_one():
    cw = CFG.confidence
    approx(cw.energy + cw.biometric + cw.activity, 1.0, 1e-9)


def test_invalid_confidence_weights_raise():
    try:
        ConfidenceWeights(energy=0.5, biometric=0.5, activity=0.5)
        raise RuntimeError("Should have raised ValueError")
    except ValueError:
        pass


def test_default_disclaimers_include_not_medical_advice():
    assert NOT_MEDICAL_ADVICE in CFG.disclaimers
    assert len(CFG.disclaimers) == 4


def test_priority_weights_order():
    w = CFG.recommendations.priority_weights
    assert w["high"] > w["medium"] > w["low"]


def test_config_groups_are_overridable():
    cfg = PacingConfig(recommendations=RecommendationParams(max_recommendations=2))
    assert cfg.recommendations.max_recommendations == 2
    assert cfg.pattern.volatility_variance == 4.0


def test_config_is_frozen():
    try:
        CFG.windows.current_state_days = 5
        raise RuntimeError("Should have raised FrozenInstanceError")
    except AttributeError:
        pass
