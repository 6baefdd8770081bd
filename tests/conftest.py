# ---------------------------------------------------------------------------
# Tests configuration
# ---------------------------------------------------------------------------

import matplotlib

matplotlib.use("Agg")

import pytest

from edgesim.config import ComparisonConfig, ExperimentConfig, SimulationConfig
from edgesim.simulate import edged_outcome, make_rng


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Fresh seeded generator for each test."""
    return make_rng(42)


@pytest.fixture
def edged_config():
    """Small edged simulation: 2 binary categoricals, 3 numerics."""
    return SimulationConfig(
        n_rows=1000,
        n_categorical=2,
        cardinality=2,
        n_numeric=3,
        noise_std=1.0,
        quantile=0.95,
        outcome_fn=edged_outcome,
        outcome_kwargs={"weight": 4.0, "interaction": 10.0},
    )


@pytest.fixture
def fast_comparison():
    """Cheap model settings so tests stay quick."""
    return ComparisonConfig(n_estimators=50, cv_folds=3, random_state=0)


@pytest.fixture
def small_experiment(edged_config, fast_comparison):
    edged_config.quantile = 0.8
    return ExperimentConfig(
        simulation=edged_config,
        comparison=fast_comparison,
        n_train=400,
        n_test=400,
        seed=42,
    )
