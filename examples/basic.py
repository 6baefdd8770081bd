# examples/basic.py
import matplotlib.pyplot as plt

from edgesim.compare import compare_models, print_comparison
from edgesim.config import ComparisonConfig, SimulationConfig
from edgesim.encoding import DesignEncoder
from edgesim.simulate import edged_outcome, make_rng, print_data_summary, simulate_train_test
from edgesim.tune import tune_forest_with_optuna

SEED = 42
PREDICTORS = ["cat_1", "cat_2"] + [f"num_{i}" for i in range(1, 11)]


if __name__ == "__main__":
    # --- simulate data: many numeric columns on a ramp, one categorical equality ---
    rng = make_rng(SEED)
    config = SimulationConfig(
        n_categorical=2,
        cardinality=2,
        n_numeric=10,
        noise_std=1.0,
        quantile=0.9,
        outcome_fn=edged_outcome,
        outcome_kwargs={"weight": 4.0, "interaction": 10.0},
    )
    train, test = simulate_train_test(config, n_train=5000, n_test=5000, rng=rng)
    print_data_summary(train, "Training data")

    # --- tune the forest on the training design matrix only ---
    print("Running hyperparameter optimization...")
    X_train = DesignEncoder(PREDICTORS).fit_transform(train)
    best_params, best_auc = tune_forest_with_optuna(
        X_train,
        train["label"],
        search_space={
            "n_estimators": {"low": 100, "high": 400, "step": 100},
            "max_features": {"low": 0.1, "high": 0.8},
        },
        n_trials=10,
        n_splits=3,
        random_state=SEED,
    )
    print("Best params:", best_params)
    print("Best CV AUC:", best_auc)

    # --- compare tuned forest with the elastic net on the test table ---
    comparison = ComparisonConfig(
        n_estimators=best_params["n_estimators"],
        max_features=best_params["max_features"],
        random_state=SEED,
    )
    result = compare_models(
        train, test, "label", PREDICTORS, config=comparison, plot=True
    )
    print_comparison(result)
    plt.show()
