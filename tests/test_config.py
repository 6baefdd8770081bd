import pytest

from edgesim.config import ComparisonConfig, ExperimentConfig, SimulationConfig
from edgesim.errors import InvalidParameterError


@pytest.mark.parametrize(
    "overrides",
    [
        {"n_rows": 0},
        {"n_numeric": -1},
        {"cardinality": 27},
        {"cardinality": 0},
        {"noise_std": -0.1},
        {"quantile": 0.0},
        {"quantile": 1.0},
        {"outcome_fn": "not callable"},
    ],
)
def test_simulation_config_rejects(overrides):
    with pytest.raises(InvalidParameterError):
        SimulationConfig(**overrides).validate()


@pytest.mark.parametrize(
    "overrides",
    [{"n_estimators": 0}, {"l1_ratio": 1.5}, {"l1_ratio": 0.0}, {"cv_folds": 1}, {"min_samples_leaf": 0}],
)
def test_comparison_config_rejects(overrides):
    with pytest.raises(InvalidParameterError):
        ComparisonConfig(**overrides).validate()


def test_experiment_config_defaults():
    config = ExperimentConfig(seed=7)
    config.validate()
    assert config.comparison.random_state == 7
    assert config.share_threshold


def test_experiment_config_rejects_empty_split():
    with pytest.raises(InvalidParameterError):
        ExperimentConfig(n_test=0).validate()


def test_invalid_parameter_is_value_error():
    with pytest.raises(ValueError):
        SimulationConfig(quantile=2.0).validate()
