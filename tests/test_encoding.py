import numpy as np
import pandas as pd
import pytest

from edgesim.encoding import DesignEncoder
from edgesim.errors import DesignMatrixError, InvalidParameterError


@pytest.fixture
def train_df():
    return pd.DataFrame(
        {
            "color": ["red", "blue", "red", "green"],
            "size": pd.Categorical(["s", "m", "s", "m"], categories=["s", "m", "l"]),
            "x": [0.5, 1.5, -2.0, 3.0],
        }
    )


def test_fit_expands_categoricals(train_df):
    enc = DesignEncoder(["color", "x", "size"]).fit(train_df)
    assert enc.categorical_ == ["color", "size"]
    assert enc.feature_names_ == [
        "color_blue",
        "color_green",
        "color_red",
        "x",
        "size_s",
        "size_m",
        "size_l",
    ]
    design = enc.transform(train_df)
    assert design.loc[0, "color_red"] == 1.0
    assert design.loc[0, "color_blue"] == 0.0
    # declared but unused level still gets a (zero) column
    assert (design["size_l"] == 0.0).all()
    np.testing.assert_allclose(design["x"], train_df["x"])


def test_test_matrix_uses_training_expansion(train_df):
    enc = DesignEncoder(["color", "x"]).fit(train_df)
    test_df = pd.DataFrame({"color": ["purple", "red"], "x": [1.0, 2.0]})
    design = enc.transform(test_df)

    assert list(design.columns) == enc.feature_names_
    unseen = design.iloc[0][["color_blue", "color_green", "color_red"]]
    assert (unseen == 0.0).all()
    assert design.iloc[1]["color_red"] == 1.0


def test_training_level_absent_from_test_is_zero_filled(train_df):
    enc = DesignEncoder(["color"]).fit(train_df)
    design = enc.transform(pd.DataFrame({"color": ["red", "red"]}))
    assert (design["color_green"] == 0.0).all()
    assert (design["color_blue"] == 0.0).all()


def test_boolean_predictor_is_numeric():
    df = pd.DataFrame({"flag": [True, False, True]})
    design = DesignEncoder(["flag"]).fit_transform(df)
    assert design["flag"].tolist() == [1.0, 0.0, 1.0]


def test_empty_predictors_rejected():
    with pytest.raises(InvalidParameterError):
        DesignEncoder([])


def test_missing_predictor_in_test(train_df):
    enc = DesignEncoder(["color", "x"]).fit(train_df)
    with pytest.raises(DesignMatrixError):
        enc.transform(train_df.drop(columns=["x"]))


def test_transform_before_fit(train_df):
    with pytest.raises(DesignMatrixError):
        DesignEncoder(["x"]).transform(train_df)


def test_numeric_predictor_turned_categorical(train_df):
    enc = DesignEncoder(["x"]).fit(train_df)
    with pytest.raises(DesignMatrixError):
        enc.transform(pd.DataFrame({"x": ["a", "b"]}))
