"""
Hyperparameter tuning for the random forest using Optuna.

This module tunes the forest used in the model comparison by maximising
K-fold cross-validated AUC on the training design matrix. The search uses
Optuna's TPE sampler.

Hyperparameters tuned by default:
- n_estimators: Number of trees
- max_features: Fraction of design columns tried at each split
- min_samples_leaf: Minimum rows per leaf
"""

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import optuna
from sklearn.ensemble import RandomForestClassifier
from sklearn.model_selection import StratifiedKFold, cross_val_score

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)


def forest_cv_auc(
    X,
    y,
    params: Dict[str, Any],
    n_splits: int = 5,
    random_state: Optional[int] = 123,
) -> float:
    """
    Compute K-fold cross-validated AUC of a random forest.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Design matrix.
    y : array-like of shape (n_samples,)
        Binary labels.
    params : dict
        Keyword arguments for RandomForestClassifier.
    n_splits : int, default=5
        Number of stratified folds.
    random_state : int, optional
        Seed for fold shuffling.

    Returns
    -------
    float
        Mean AUC across folds.
    """
    y = np.asarray(y).astype(int)
    if len(y) != len(X):
        raise InvalidParameterError(
            f"Input arrays must have matching lengths: X={len(X)}, y={len(y)}"
        )

    folds = StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=random_state)
    scores = cross_val_score(
        RandomForestClassifier(**params), X, y, cv=folds, scoring="roc_auc"
    )
    return float(np.mean(scores))


def tune_forest_with_optuna(
    X,
    y,
    fixed: Optional[Dict[str, Any]] = None,
    search_space: Optional[Dict[str, Dict[str, Any]]] = None,
    n_trials: int = 30,
    n_splits: int = 5,
    random_state: Optional[int] = 123,
    show_progress_bar: bool = False,
) -> Tuple[Dict[str, Any], float]:
    """
    Hyperparameter tuning using Optuna with K-fold CV AUC.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Design matrix.
    y : array-like of shape (n_samples,)
        Binary labels.
    fixed : dict, optional
        Fixed RandomForestClassifier parameters used in all trials.
    search_space : dict, optional
        Custom search space. If None, defaults to n_estimators (100-500,
        step 50), max_features (0.1-1.0) and min_samples_leaf (1-20, log).
        Format: {"param_name": {"low": value, "high": value, "log": bool}}
    n_trials : int, default=30
        Number of Optuna optimization trials.
    n_splits : int, default=5
        Number of folds for cross-validation.
    random_state : int, optional
        Random seed for folds, forests and the Optuna sampler.
    show_progress_bar : bool, default=False
        Forwarded to study.optimize.

    Returns
    -------
    best_params : dict
        Best parameters found (combines fixed and tuned parameters).
    best_auc : float
        Best cross-validated AUC achieved.

    Raises
    ------
    RuntimeError
        If the Optuna study completes no trial.
    """
    fixed = dict(fixed or {})
    fixed.setdefault("random_state", random_state)
    search_space = dict(search_space or {})

    if not search_space:
        if "n_estimators" not in fixed:
            search_space["n_estimators"] = {"low": 100, "high": 500, "step": 50}
        if "max_features" not in fixed:
            search_space["max_features"] = {"low": 0.1, "high": 1.0}
        if "min_samples_leaf" not in fixed:
            search_space["min_samples_leaf"] = {"low": 1, "high": 20, "log": True}

    def objective(trial):
        params = dict(fixed)

        for name, spec in search_space.items():
            if name in fixed:
                continue

            if isinstance(spec["low"], float) or isinstance(spec["high"], float):
                params[name] = trial.suggest_float(
                    name, spec["low"], spec["high"], log=spec.get("log", False)
                )
            else:
                params[name] = trial.suggest_int(
                    name,
                    spec["low"],
                    spec["high"],
                    step=spec.get("step", 1),
                    log=spec.get("log", False),
                )

        return forest_cv_auc(X, y, params, n_splits=n_splits, random_state=random_state)

    sampler = optuna.samplers.TPESampler(seed=random_state)
    study = optuna.create_study(direction="maximize", sampler=sampler)
    study.optimize(objective, n_trials=n_trials, show_progress_bar=show_progress_bar)

    completed = [t for t in study.trials if t.state == optuna.trial.TrialState.COMPLETE]
    if not completed:
        raise RuntimeError(
            "No successful trials completed. Check that forest fitting "
            "succeeds with the provided parameters."
        )

    best_params = dict(fixed)
    best_params.update(study.best_trial.params)
    logger.info("Best forest params %s with CV AUC %.4f", best_params, study.best_value)
    return best_params, study.best_value
