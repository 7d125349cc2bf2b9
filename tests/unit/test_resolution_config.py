"""
Tests for the weighting configuration and its validation.
"""

import pytest
from pydantic import ValidationError

from core.schemas import (
    ConfigurationError,
    ErrorCodes,
    ResolutionConfig,
    ResolutionThresholds,
    Strategy,
    WeightSet,
    validate_resolution_config,
)


class TestDefaults:

    def test_default_weight_sets_sum_to_one(self):
        config = ResolutionConfig()
        for strategy in Strategy:
            assert config.weights_for(strategy).total == pytest.approx(1.0, abs=1e-3)

    def test_default_thresholds(self):
        thresholds = ResolutionConfig().thresholds
        assert thresholds.market_validated == 0.8
        assert thresholds.evidence_contradicts == 0.2

    def test_default_config_validates(self):
        config = ResolutionConfig()
        assert validate_resolution_config(config) is config


class TestFromDict:

    def test_partial_weights_keep_defaults(self):
        config = ResolutionConfig.from_dict({
            "weights": {"standard": {"market": 0.3, "evidence": 0.3, "ai": 0.4}},
        })
        assert config.weights_for(Strategy.STANDARD).market == 0.3
        assert config.weights_for(Strategy.MARKET_VALIDATED).market == 0.6

    def test_empty_and_none(self):
        assert ResolutionConfig.from_dict(None) == ResolutionConfig()
        assert ResolutionConfig.from_dict({}) == ResolutionConfig()

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ResolutionConfig.from_dict({
                "weights": {"STANDARD": {"market": 0.5, "evidence": 0.5, "ai": 0.5}},
            })
        assert "weights must sum to 1.0" in exc_info.value.message

    def test_sum_within_tolerance_accepted(self):
        config = ResolutionConfig.from_dict({
            "weights": {"STANDARD": {"market": 0.3333, "evidence": 0.3333, "ai": 0.3333}},
        })
        assert config.weights_for(Strategy.STANDARD).total == pytest.approx(0.9999)

    @pytest.mark.parametrize("thresholds", [
        {"market_validated": 0.3, "evidence_contradicts": 0.5},
        {"market_validated": 0.5, "evidence_contradicts": 0.5},
        {"market_validated": 1.2, "evidence_contradicts": 0.2},
        {"market_validated": 0.8, "evidence_contradicts": -0.1},
    ])
    def test_invalid_thresholds(self, thresholds):
        with pytest.raises(ConfigurationError):
            ResolutionConfig.from_dict({"thresholds": thresholds})

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigurationError):
            ResolutionConfig.from_dict({"threshold": {"market_validated": 0.9}})

    def test_round_trip_through_dict(self):
        config = ResolutionConfig.from_dict({"thresholds": {"market_validated": 0.75}})
        assert ResolutionConfig.from_dict(config.to_dict()) == config


class TestValidate:
    """validate_resolution_config catches instances that skipped validation."""

    def test_unvalidated_weights(self):
        bad = WeightSet.model_construct(market=0.9, evidence=0.9, ai=0.9)
        weights = dict(ResolutionConfig().weights)
        weights[Strategy.STANDARD] = bad
        config = ResolutionConfig.model_construct(
            thresholds=ResolutionThresholds(),
            weights=weights,
            evidence_multipliers=ResolutionConfig().evidence_multipliers,
        )
        with pytest.raises(ConfigurationError) as exc_info:
            validate_resolution_config(config)
        assert exc_info.value.code == ErrorCodes.WEIGHTS_INVALID

    def test_missing_strategy(self):
        weights = dict(ResolutionConfig().weights)
        del weights[Strategy.MARKET_VALIDATED]
        config = ResolutionConfig.model_construct(
            thresholds=ResolutionThresholds(),
            weights=weights,
            evidence_multipliers=ResolutionConfig().evidence_multipliers,
        )
        with pytest.raises(ConfigurationError):
            validate_resolution_config(config)

    def test_unvalidated_thresholds(self):
        config = ResolutionConfig.model_construct(
            thresholds=ResolutionThresholds.model_construct(market_validated=0.2, evidence_contradicts=0.8),
            weights=ResolutionConfig().weights,
            evidence_multipliers=ResolutionConfig().evidence_multipliers,
        )
        with pytest.raises(ConfigurationError) as exc_info:
            validate_resolution_config(config)
        assert exc_info.value.code == ErrorCodes.THRESHOLDS_INVALID


def test_weight_set_direct_construction_validates():
    with pytest.raises(ValidationError):
        WeightSet(market=0.2, evidence=0.2, ai=0.2)
