"""
End-to-end experiments.

1. Edges: simulate train/test tables with the edged outcome and compare a
   random forest against an elastic net on the test ROC curve. The linear
   ramp favours the elastic net, the categorical equality favours the
   forest, so each model wins on a different part of the curve.
2. Redundancy: duplicate the most informative column several times, then
   look at forest importances and recursive feature elimination.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .compare import ComparisonResult, compare_models, fit_forest
from .config import ComparisonConfig, ExperimentConfig, SimulationConfig
from .encoding import DesignEncoder
from .schema import LABEL_COLUMN, categorical_name, numeric_name
from .selection import rank_feature_importances, recursive_feature_elimination
from .simulate import edged_outcome, repeat_column, simulate_dataset, simulate_train_test
from .viz import plot_rfe_profile

logger = logging.getLogger(__name__)


def predictor_columns(config: SimulationConfig) -> list:
    """Categorical then numeric column names of a simulated table."""
    return [categorical_name(i) for i in range(1, config.n_categorical + 1)] + [
        numeric_name(i) for i in range(1, config.n_numeric + 1)
    ]


def edges_config(
    n_train: int = 1000,
    n_test: int = 1000,
    seed: int = 42,
    weight: float = 4.0,
    interaction: float = 10.0,
) -> ExperimentConfig:
    """Default configuration for the edges experiment."""
    simulation = SimulationConfig(
        n_rows=n_train,
        n_categorical=2,
        cardinality=2,
        n_numeric=3,
        noise_std=1.0,
        quantile=0.95,
        outcome_fn=edged_outcome,
        outcome_kwargs={"weight": weight, "interaction": interaction},
    )
    return ExperimentConfig(
        simulation=simulation,
        comparison=ComparisonConfig(random_state=seed),
        n_train=n_train,
        n_test=n_test,
        seed=seed,
    )


def run_edges_experiment(
    config: ExperimentConfig,
    rng: np.random.Generator,
    plot: bool = True,
    ax=None,
) -> Tuple[pd.DataFrame, pd.DataFrame, ComparisonResult]:
    """
    Simulate train and test tables and compare the two model families.

    Returns
    -------
    train, test : pd.DataFrame
    result : ComparisonResult
    """
    config.validate()
    logger.info(
        "Simulating %d training and %d test rows", config.n_train, config.n_test
    )
    train, test = simulate_train_test(
        config.simulation,
        config.n_train,
        config.n_test,
        rng,
        share_threshold=config.share_threshold,
    )
    result = compare_models(
        train,
        test,
        LABEL_COLUMN,
        predictor_columns(config.simulation),
        config=config.comparison,
        plot=plot,
        ax=ax,
    )
    return train, test, result


def run_redundancy_experiment(
    config: ExperimentConfig,
    rng: np.random.Generator,
    source_column: Optional[str] = None,
    n_copies: int = 10,
    sizes: Sequence[int] = (1, 2, 4, 8, 16),
    n_splits: int = 5,
    tolerance: Optional[float] = None,
    estimator=None,
    plot: bool = False,
) -> Dict[str, Any]:
    """
    Duplicate one column and look at importance ranking and RFE.

    ``source_column`` defaults to the last numeric column, which carries
    the largest weight under the edged outcome.

    Returns
    -------
    dict with keys:
        - 'data': the augmented table
        - 'importances': forest importances per design column
        - 'rfe': RFEResult
    """
    config.validate()
    simulation = replace(config.simulation, n_rows=config.n_train)
    if source_column is None:
        source_column = numeric_name(simulation.n_numeric)

    data = simulate_dataset(simulation, rng)
    data = repeat_column(data, source_column, n_copies)
    predictors = predictor_columns(simulation) + [
        f"{source_column}_rep_{i}" for i in range(1, n_copies + 1)
    ]

    encoder = DesignEncoder(predictors).fit(data)
    X = encoder.transform(data)
    y = data[LABEL_COLUMN].to_numpy().astype(int)

    forest = fit_forest(X, y, config.comparison)
    importances = rank_feature_importances(forest, encoder.feature_names_)

    rfe = recursive_feature_elimination(
        X,
        y,
        sizes,
        n_splits=n_splits,
        estimator=estimator,
        tolerance=tolerance,
        random_state=config.comparison.random_state,
    )

    if plot:
        plot_rfe_profile(rfe)

    return {"data": data, "importances": importances, "rfe": rfe}
