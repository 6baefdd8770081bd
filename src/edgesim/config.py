"""
Configuration for the edge simulations.

Separate configuration classes for the different components:
- SimulationConfig: Parameters for synthetic data generation
- ComparisonConfig: Hyperparameters for the two model families
- ExperimentConfig: Main configuration that combines both with split sizes

Modify the parameters in each config class to experiment with different scenarios.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from .errors import InvalidParameterError
from .schema import ALPHABET

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """
    Configuration for synthetic data generation.

    Controls how a simulated table is created:
    - Number of rows, categorical and numeric columns
    - Categorical cardinality
    - Outcome function, noise and label quantile
    """

    # ===================== TABLE SHAPE =====================
    n_rows: int = 1000  # Rows per simulated table
    n_categorical: int = 2  # Columns cat_1 ... cat_C
    cardinality: int = 2  # Letters per categorical column (max 26)
    n_numeric: int = 3  # Columns num_1 ... num_M

    # ===================== OUTCOME =====================
    noise_std: float = 1.0  # Sd of additive Gaussian noise on the outcome
    quantile: float = 0.5  # Label is outcome > quantile(outcome, q)
    outcome_fn: Optional[Callable[..., Any]] = None  # f(df, **outcome_kwargs)
    outcome_kwargs: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate simulation parameters."""
        if self.n_rows <= 0:
            raise InvalidParameterError("n_rows must be positive")
        if self.n_categorical < 0 or self.n_numeric < 0:
            raise InvalidParameterError("Column counts must be non-negative")
        if not 1 <= self.cardinality <= len(ALPHABET):
            raise InvalidParameterError(
                f"cardinality must be between 1 and {len(ALPHABET)}, "
                f"got {self.cardinality}"
            )
        if self.noise_std < 0:
            raise InvalidParameterError("noise_std must be non-negative")
        if not 0 < self.quantile < 1:
            raise InvalidParameterError("quantile must be between 0 and 1")
        if self.outcome_fn is not None and not callable(self.outcome_fn):
            raise InvalidParameterError("outcome_fn must be callable")

        logger.debug("Simulation configuration validated")


@dataclass
class ComparisonConfig:
    """
    Configuration for the model comparison.

    Random forest and elastic-net hyperparameters plus the seed shared by
    both model fits.
    """

    # ===================== RANDOM FOREST =====================
    n_estimators: int = 500
    max_features: Union[str, int, float, None] = "sqrt"
    min_samples_leaf: int = 1

    # ===================== ELASTIC NET =====================
    l1_ratio: float = 0.5  # 1 = lasso; must be above 0
    cv_folds: int = 5
    max_iter: int = 5000

    random_state: int = 42  # Random seed for model fitting

    def validate(self) -> None:
        """Validate comparison parameters."""
        if self.n_estimators <= 0:
            raise InvalidParameterError("n_estimators must be positive")
        if self.min_samples_leaf <= 0:
            raise InvalidParameterError("min_samples_leaf must be positive")
        if not 0 < self.l1_ratio <= 1:
            raise InvalidParameterError("l1_ratio must be in (0, 1]")
        if self.cv_folds < 2:
            raise InvalidParameterError("cv_folds must be at least 2")
        if self.max_iter <= 0:
            raise InvalidParameterError("max_iter must be positive")

        logger.debug("Comparison configuration validated")


@dataclass
class ExperimentConfig:
    """
    Main configuration for an experiment run.

    Combines simulation and comparison configurations with the train/test
    split sizes and the run seed.
    """

    simulation: SimulationConfig = None
    comparison: ComparisonConfig = None
    n_train: int = 1000
    n_test: int = 1000
    seed: int = 42
    share_threshold: bool = True  # Label the test table with the train cutoff

    def __post_init__(self):
        """Initialize default configurations if not provided."""
        if self.simulation is None:
            self.simulation = SimulationConfig()
        if self.comparison is None:
            self.comparison = ComparisonConfig(random_state=self.seed)

    def validate(self) -> None:
        """Validate all configurations."""
        if self.n_train <= 0 or self.n_test <= 0:
            raise InvalidParameterError("n_train and n_test must be positive")
        self.simulation.validate()
        self.comparison.validate()
        logger.info("Experiment configuration validated")
