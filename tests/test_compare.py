import matplotlib.pyplot as plt
import numpy as np
import pytest

from edgesim.compare import (
    FOREST_NAME,
    LINEAR_NAME,
    compare_models,
    print_comparison,
    roc_for_scores,
)
from edgesim.errors import DesignMatrixError, InvalidParameterError, ModelFitError
from edgesim.simulate import simulate_train_test

PREDICTORS = ["cat_1", "cat_2", "num_1", "num_2", "num_3"]


@pytest.fixture
def split(edged_config, rng):
    edged_config.quantile = 0.8
    return simulate_train_test(edged_config, 400, 400, rng)


def test_compare_returns_two_aucs(split, fast_comparison):
    train, test = split
    result = compare_models(train, test, "label", PREDICTORS, config=fast_comparison)

    assert set(result.aucs) == {FOREST_NAME, LINEAR_NAME}
    for auc in result.aucs.values():
        assert 0.0 <= auc <= 1.0
        assert auc > 0.6
    assert result.feature_names == [
        "cat_1_a",
        "cat_1_b",
        "cat_2_a",
        "cat_2_b",
        "num_1",
        "num_2",
        "num_3",
    ]


def test_curves_cover_every_threshold(split, fast_comparison):
    train, test = split
    result = compare_models(train, test, "label", PREDICTORS, config=fast_comparison)
    for curve in result.curves.values():
        assert curve.fpr[0] == 0.0 and curve.tpr[0] == 0.0
        assert curve.fpr[-1] == 1.0 and curve.tpr[-1] == 1.0
        assert np.all(np.diff(curve.fpr) >= 0)
        assert len(curve.fpr) == len(curve.tpr) == len(curve.thresholds)


def test_single_class_training_label_fails(split, fast_comparison):
    train, test = split
    train = train.copy()
    train["label"] = False
    with pytest.raises(ModelFitError):
        compare_models(train, test, "label", PREDICTORS, config=fast_comparison)


def test_empty_predictors_fail(split, fast_comparison):
    train, test = split
    with pytest.raises(InvalidParameterError):
        compare_models(train, test, "label", [], config=fast_comparison)


def test_missing_test_column_fails(split, fast_comparison):
    train, test = split
    with pytest.raises(DesignMatrixError):
        compare_models(
            train, test.drop(columns=["num_2"]), "label", PREDICTORS, config=fast_comparison
        )


def test_plot_legend_reports_auc(split, fast_comparison):
    train, test = split
    fig, ax = plt.subplots()
    result = compare_models(
        train, test, "label", PREDICTORS, config=fast_comparison, plot=True, ax=ax
    )
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert f"{FOREST_NAME} (AUC = {result.aucs[FOREST_NAME]:.3f})" in labels
    assert f"{LINEAR_NAME} (AUC = {result.aucs[LINEAR_NAME]:.3f})" in labels
    plt.close(fig)


def test_roc_for_perfect_scores():
    y = np.array([0, 0, 1, 1])
    curve = roc_for_scores("perfect", y, np.array([0.1, 0.2, 0.8, 0.9]))
    assert curve.auc == 1.0


def test_print_comparison(split, fast_comparison, capsys):
    train, test = split
    result = compare_models(train, test, "label", PREDICTORS, config=fast_comparison)
    print_comparison(result)
    out = capsys.readouterr().out
    assert "Model Comparison Results" in out
    assert FOREST_NAME in out and LINEAR_NAME in out
    assert "Test AUC:" in out
    assert "True positive rate at fixed false positive rates:" in out


def test_single_class_test_label_fails(split, fast_comparison):
    train, test = split
    test = test.copy()
    test["label"] = False
    with pytest.raises(DesignMatrixError, match="single class"):
        compare_models(train, test, "label", PREDICTORS, config=fast_comparison)
