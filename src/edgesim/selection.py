"""
Feature-importance ranking and recursive feature elimination.

Used to show how duplicated columns affect which predictors a model
considers important. RFE here follows the "candidate sizes" formulation:
every size in a sequence is cross-validated, and the smallest size that
scores within one standard error (or a given tolerance) of the best is
selected. Exact duplicate columns are collapsed to their first occurrence
before elimination, so a repeated column can be selected at most once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.ensemble import RandomForestClassifier
from sklearn.exceptions import NotFittedError
from sklearn.feature_selection import RFE
from sklearn.model_selection import StratifiedKFold, cross_val_score
from sklearn.pipeline import Pipeline
from sklearn.utils.validation import check_is_fitted

from .errors import InvalidParameterError, ModelFitError

logger = logging.getLogger(__name__)


@dataclass
class RFEResult:
    """Outcome of a recursive feature elimination run."""

    selected: List[str]
    profile: pd.DataFrame  # columns: size, mean_score, std_score
    ranking: Dict[str, int]  # 1 = selected
    best_size: int
    duplicates: Dict[str, List[str]] = field(default_factory=dict)  # kept -> copies


def rank_feature_importances(model, feature_names: Sequence[str]) -> pd.Series:
    """
    Importance score per predictor, sorted from most to least important.

    Parameters
    ----------
    model : fitted estimator exposing ``feature_importances_``
    feature_names : sequence of str
        Design-matrix column names, in the order the model saw them.
    """
    try:
        check_is_fitted(model)
    except NotFittedError as exc:
        raise ModelFitError("Model has not been fitted. Call fit() first.") from exc

    importances = np.asarray(model.feature_importances_)
    if importances.shape[0] != len(feature_names):
        raise InvalidParameterError(
            f"Got {len(feature_names)} feature names for "
            f"{importances.shape[0]} importances"
        )
    return pd.Series(importances, index=list(feature_names), name="importance").sort_values(
        ascending=False, kind="mergesort"
    )


def _default_estimator(random_state: Optional[int]) -> RandomForestClassifier:
    return RandomForestClassifier(n_estimators=200, random_state=random_state)


def duplicate_columns(X: pd.DataFrame) -> Dict[str, List[str]]:
    """
    Group exactly identical columns.

    Returns a mapping from the first column of each group to the later
    columns holding the same values. Columns without copies are omitted.
    """
    first_by_values: Dict[tuple, str] = {}
    groups: Dict[str, List[str]] = {}
    for name in X.columns:
        values = np.ascontiguousarray(X[name].to_numpy())
        key = (str(values.dtype), values.tobytes())
        if key in first_by_values:
            groups.setdefault(first_by_values[key], []).append(name)
        else:
            first_by_values[key] = name
    return groups


def recursive_feature_elimination(
    X: pd.DataFrame,
    y,
    sizes: Sequence[int],
    n_splits: int = 5,
    estimator=None,
    scoring: str = "roc_auc",
    tolerance: Optional[float] = None,
    random_state: Optional[int] = None,
) -> RFEResult:
    """
    Cross-validate RFE at each candidate subset size and pick the best.

    Parameters
    ----------
    X : pd.DataFrame of shape (n_samples, n_features)
        Design matrix. Exact duplicate columns are collapsed to their first
        occurrence; the copies are reported in ``RFEResult.duplicates`` and
        ranked after every eliminated feature.
    y : array-like of shape (n_samples,)
        Binary labels.
    sizes : sequence of int
        Candidate subset sizes. Sizes above the number of distinct features
        are dropped; the full distinct feature set is always profiled.
    n_splits : int, default=5
        Number of stratified CV folds.
    estimator : sklearn estimator, optional
        Model whose importances drive elimination. Defaults to a 200-tree
        random forest.
    scoring : str, default="roc_auc"
        Scorer passed to cross_val_score.
    tolerance : float, optional
        Pick the smallest size whose mean score is at least
        ``best - tolerance``. If None, the fold standard deviation of the
        best size is used (one-standard-error rule).
    random_state : int, optional
        Seed for fold shuffling and the default estimator.

    Returns
    -------
    RFEResult
    """
    if not isinstance(X, pd.DataFrame):
        X = pd.DataFrame(X, columns=[f"x{i}" for i in range(np.shape(X)[1])])
    y = np.asarray(y).astype(int)

    if n_splits < 2:
        raise InvalidParameterError("n_splits must be at least 2")
    if tolerance is not None and tolerance < 0:
        raise InvalidParameterError("tolerance must be non-negative")
    sizes = list(sizes)
    if not sizes:
        raise InvalidParameterError("At least one candidate size is required")
    if np.unique(y).size < 2:
        raise ModelFitError("RFE needs both classes present in y")

    duplicates = duplicate_columns(X)
    dropped = {name for copies in duplicates.values() for name in copies}
    if dropped:
        logger.info("Collapsing %d duplicate columns before RFE", len(dropped))
    X_distinct = X[[name for name in X.columns if name not in dropped]]
    n_features = X_distinct.shape[1]

    candidate = sorted({int(s) for s in sizes if 1 <= int(s) < n_features})
    candidate.append(n_features)

    estimator = estimator if estimator is not None else _default_estimator(random_state)
    folds = StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=random_state)

    rows = []
    for size in candidate:
        pipeline = Pipeline(
            [
                ("select", RFE(clone(estimator), n_features_to_select=size)),
                ("model", clone(estimator)),
            ]
        )
        scores = cross_val_score(pipeline, X_distinct, y, cv=folds, scoring=scoring)
        rows.append(
            {"size": size, "mean_score": float(scores.mean()), "std_score": float(scores.std())}
        )
        logger.debug("RFE size %d: %s %.4f", size, scoring, scores.mean())

    profile = pd.DataFrame(rows, columns=["size", "mean_score", "std_score"])
    best = profile.loc[profile["mean_score"].idxmax()]
    if tolerance is None:
        tolerance = float(best["std_score"])
    within = profile.loc[profile["mean_score"] >= best["mean_score"] - tolerance, "size"]
    best_size = int(within.min())

    final = RFE(clone(estimator), n_features_to_select=best_size).fit(X_distinct, y)
    names = list(X_distinct.columns)
    selected = [name for name, keep in zip(names, final.support_) if keep]
    ranking = {name: int(rank) for name, rank in zip(names, final.ranking_)}
    last_rank = max(ranking.values()) + 1
    ranking.update({name: last_rank for name in dropped})
    ranking = {name: ranking[name] for name in X.columns}

    logger.info("RFE selected %d of %d features: %s", best_size, n_features, selected)
    return RFEResult(
        selected=selected,
        profile=profile,
        ranking=ranking,
        best_size=best_size,
        duplicates=duplicates,
    )
