"""
edgesim: simulated tables for comparing tree ensembles and linear models.

The simulator builds tables whose signal is partly linear (favouring a
regularized linear model) and partly an equality interaction between
categorical columns (favouring a tree ensemble). The comparison harness fits
both on the same train/test split and reports their ROC curves and AUCs.
"""

from .compare import ComparisonResult, RocCurve, compare_models, print_comparison
from .config import ComparisonConfig, ExperimentConfig, SimulationConfig
from .encoding import DesignEncoder
from .errors import (
    DesignMatrixError,
    EdgesimError,
    InvalidParameterError,
    ModelFitError,
)
from .schema import ColumnSpec, Schema, build_schema
from .selection import (
    RFEResult,
    duplicate_columns,
    rank_feature_importances,
    recursive_feature_elimination,
)
from .simulate import (
    edged_outcome,
    get_data_summary,
    make_rng,
    repeat_column,
    simulate_dataset,
    simulate_train_test,
)

__version__ = "0.1.0"

__all__ = [
    "ColumnSpec",
    "ComparisonConfig",
    "ComparisonResult",
    "DesignEncoder",
    "DesignMatrixError",
    "EdgesimError",
    "ExperimentConfig",
    "InvalidParameterError",
    "ModelFitError",
    "RFEResult",
    "RocCurve",
    "Schema",
    "SimulationConfig",
    "build_schema",
    "compare_models",
    "duplicate_columns",
    "edged_outcome",
    "get_data_summary",
    "make_rng",
    "print_comparison",
    "rank_feature_importances",
    "recursive_feature_elimination",
    "repeat_column",
    "simulate_dataset",
    "simulate_train_test",
]
