"""
Helper functions for comparing a tree ensemble with a regularized linear model.

This module fits a random forest and a cross-validated elastic net on the
same simulated training table and compares how well each ranks the test
rows, via ROC curves and AUC.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import ElasticNetCV
from sklearn.metrics import roc_auc_score, roc_curve

from .config import ComparisonConfig
from .encoding import DesignEncoder
from .errors import DesignMatrixError, InvalidParameterError, ModelFitError
from .viz import plot_roc_curves

logger = logging.getLogger(__name__)

FOREST_NAME = "Random forest"
LINEAR_NAME = "Elastic net"


@dataclass
class RocCurve:
    """ROC curve of one model on the test table."""

    name: str
    fpr: np.ndarray
    tpr: np.ndarray
    thresholds: np.ndarray
    auc: float


@dataclass
class ComparisonResult:
    """Curves, fitted models and the encoder from one comparison."""

    curves: Dict[str, RocCurve]
    models: Dict[str, Any] = field(default_factory=dict)
    encoder: Optional[DesignEncoder] = None
    feature_names: List[str] = field(default_factory=list)

    @property
    def aucs(self) -> Dict[str, float]:
        return {name: curve.auc for name, curve in self.curves.items()}


def _binary_labels(df: pd.DataFrame, label: str) -> np.ndarray:
    if label not in df.columns:
        raise DesignMatrixError(f"Label column {label!r} not in table")
    return np.asarray(df[label]).astype(int)


def roc_for_scores(name: str, y_true: np.ndarray, scores: np.ndarray) -> RocCurve:
    """Full ROC curve (every achievable threshold) and AUC of ``scores``."""
    fpr, tpr, thresholds = roc_curve(y_true, scores, drop_intermediate=False)
    auc = float(roc_auc_score(y_true, scores))
    return RocCurve(name=name, fpr=fpr, tpr=tpr, thresholds=thresholds, auc=auc)


def fit_forest(
    X: pd.DataFrame, y: np.ndarray, config: ComparisonConfig
) -> RandomForestClassifier:
    """Fit the random forest; fitting errors surface as ModelFitError."""
    model = RandomForestClassifier(
        n_estimators=config.n_estimators,
        max_features=config.max_features,
        min_samples_leaf=config.min_samples_leaf,
        random_state=config.random_state,
    )
    try:
        model.fit(X, y)
    except ValueError as exc:
        raise ModelFitError(f"{FOREST_NAME} fit failed: {exc}") from exc
    return model


def fit_elastic_net(X: pd.DataFrame, y: np.ndarray, config: ComparisonConfig) -> ElasticNetCV:
    """Fit the cross-validated elastic net on the 0/1 label."""
    model = ElasticNetCV(
        l1_ratio=config.l1_ratio,
        cv=config.cv_folds,
        max_iter=config.max_iter,
        random_state=config.random_state,
    )
    try:
        model.fit(X, y.astype(float))
    except ValueError as exc:
        raise ModelFitError(f"{LINEAR_NAME} fit failed: {exc}") from exc
    return model


def compare_models(
    train: pd.DataFrame,
    test: pd.DataFrame,
    label: str,
    predictors: Sequence[str],
    config: Optional[ComparisonConfig] = None,
    plot: bool = False,
    ax=None,
) -> ComparisonResult:
    """
    Fit a random forest and an elastic net on ``train`` and compare them on ``test``.

    Parameters
    ----------
    train : pd.DataFrame
        Training table.
    test : pd.DataFrame
        Test table.
    label : str
        Boolean (or 0/1) label column.
    predictors : sequence of str
        Predictor columns. Categorical ones are expanded to indicators
        using the training levels.
    config : ComparisonConfig, optional
        Model hyperparameters. Defaults to ComparisonConfig().
    plot : bool, default=False
        Overlay both ROC curves on ``ax`` (or a new figure).
    ax : matplotlib Axes, optional
        Axes to draw on when ``plot`` is True.

    Returns
    -------
    ComparisonResult
        Per-model ROC curves and AUCs (``result.aucs``), the fitted models
        and the design encoder.

    Raises
    ------
    InvalidParameterError
        If ``predictors`` is empty.
    DesignMatrixError
        If a predictor or the label is missing from either table, or the
        test label has a single class.
    ModelFitError
        If the training label has a single class or a model fails to fit.
    """
    config = config or ComparisonConfig()
    config.validate()
    predictors = list(predictors)
    if not predictors:
        raise InvalidParameterError("At least one predictor is required")
    if label in predictors:
        raise InvalidParameterError(f"Label {label!r} cannot also be a predictor")

    encoder = DesignEncoder(predictors).fit(train)
    X_train = encoder.transform(train)
    X_test = encoder.transform(test)
    y_train = _binary_labels(train, label)
    y_test = _binary_labels(test, label)

    classes = np.unique(y_train)
    if classes.size < 2:
        raise ModelFitError(
            f"Training label {label!r} has a single class ({classes.tolist()}); "
            "both classes are required to fit a classifier"
        )
    test_classes = np.unique(y_test)
    if test_classes.size < 2:
        raise DesignMatrixError(
            f"Test label {label!r} has a single class ({test_classes.tolist()}); "
            "ROC and AUC are undefined"
        )

    logger.info(
        "Fitting models on %d rows x %d design columns", *X_train.shape
    )
    forest = fit_forest(X_train, y_train, config)
    forest_scores = forest.predict_proba(X_test)[:, list(forest.classes_).index(1)]

    linear = fit_elastic_net(X_train, y_train, config)
    linear_scores = linear.predict(X_test)

    curves = {
        FOREST_NAME: roc_for_scores(FOREST_NAME, y_test, forest_scores),
        LINEAR_NAME: roc_for_scores(LINEAR_NAME, y_test, linear_scores),
    }
    for name, curve in curves.items():
        logger.info("%s test AUC: %.3f", name, curve.auc)

    result = ComparisonResult(
        curves=curves,
        models={FOREST_NAME: forest, LINEAR_NAME: linear},
        encoder=encoder,
        feature_names=list(encoder.feature_names_),
    )

    if plot:
        plot_roc_curves(result.curves.values(), ax=ax)

    return result


def print_comparison(comparison_result: ComparisonResult):
    """
    Print formatted comparison results.

    Parameters
    ----------
    comparison_result : ComparisonResult
        Result from compare_models().
    """
    print("\n" + "=" * 70)
    print("Model Comparison Results")
    print("=" * 70)

    print("\nTest AUC:")
    for name, auc in comparison_result.aucs.items():
        print(f"  {name}: {auc:.3f}")

    linear = comparison_result.models.get(LINEAR_NAME)
    if linear is not None:
        print(f"\n{LINEAR_NAME} (alpha = {linear.alpha_:.4g}) non-zero coefficients:")
        for name, coef in zip(comparison_result.feature_names, linear.coef_):
            if coef != 0:
                print(f"  {name}: {coef:.4f}")

    # Where each model wins along the curve
    print("\nTrue positive rate at fixed false positive rates:")
    for fpr_level in (0.01, 0.05, 0.1, 0.25, 0.5):
        row = []
        for name, curve in comparison_result.curves.items():
            tpr = float(np.interp(fpr_level, curve.fpr, curve.tpr))
            row.append(f"{name}: {tpr:.3f}")
        print(f"  FPR {fpr_level:>4.2f} -> " + ", ".join(row))

    print("\n" + "=" * 70)
