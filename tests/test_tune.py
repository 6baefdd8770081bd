import numpy as np
import pytest

from edgesim.errors import InvalidParameterError
from edgesim.tune import forest_cv_auc, tune_forest_with_optuna


@pytest.fixture
def xy():
    rng = np.random.default_rng(1)
    X = rng.standard_normal((200, 4))
    y = (X[:, 0] + 0.5 * rng.standard_normal(200) > 0).astype(int)
    return X, y


def test_forest_cv_auc(xy):
    X, y = xy
    auc = forest_cv_auc(X, y, {"n_estimators": 20, "random_state": 0}, n_splits=3)
    assert 0.7 < auc <= 1.0


def test_forest_cv_auc_length_mismatch(xy):
    X, y = xy
    with pytest.raises(InvalidParameterError):
        forest_cv_auc(X, y[:-1], {"n_estimators": 5})


def test_tune_with_optuna(xy):
    X, y = xy
    best_params, best_auc = tune_forest_with_optuna(
        X,
        y,
        fixed={"n_jobs": 1},
        search_space={
            "n_estimators": {"low": 10, "high": 20, "step": 10},
            "min_samples_leaf": {"low": 1, "high": 5},
        },
        n_trials=3,
        n_splits=3,
        random_state=0,
    )
    assert best_params["n_jobs"] == 1
    assert best_params["random_state"] == 0
    assert best_params["n_estimators"] in (10, 20)
    assert 1 <= best_params["min_samples_leaf"] <= 5
    assert 0.0 <= best_auc <= 1.0
