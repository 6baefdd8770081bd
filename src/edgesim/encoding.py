"""
Design-matrix construction.

A DesignEncoder is fitted on the training table and then applied unchanged
to any other table, so train and test matrices always share columns:
- numeric predictors pass through as float
- categorical predictors expand to one indicator per training level

Levels seen only at test time give all-zero indicators; training levels
absent from the test table give zero-filled indicator columns.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.preprocessing import OneHotEncoder

from .errors import DesignMatrixError, InvalidParameterError

logger = logging.getLogger(__name__)


def _is_categorical(series: pd.Series) -> bool:
    if isinstance(series.dtype, pd.CategoricalDtype):
        return True
    return series.dtype == object or pd.api.types.is_string_dtype(series.dtype)


def _training_levels(series: pd.Series) -> List[str]:
    if isinstance(series.dtype, pd.CategoricalDtype):
        return [str(level) for level in series.cat.categories]
    return sorted(str(level) for level in series.dropna().unique())


class DesignEncoder:
    """
    Fitted encoder from raw predictor columns to a numeric design matrix.

    Parameters
    ----------
    predictors : sequence of str
        Predictor columns, in the order they appear in the design matrix.

    Attributes
    ----------
    categorical_ : list of str
        Predictors treated as categorical during fit.
    levels_ : dict
        Training levels per categorical predictor.
    feature_names_ : list of str
        Design-matrix column names.
    """

    def __init__(self, predictors: Sequence[str]):
        predictors = list(predictors)
        if not predictors:
            raise InvalidParameterError("At least one predictor is required")
        if len(set(predictors)) != len(predictors):
            raise InvalidParameterError(f"Duplicate predictors: {predictors}")
        self.predictors = predictors
        self.categorical_: Optional[List[str]] = None
        self.levels_: Dict[str, List[str]] = {}
        self.feature_names_: Optional[List[str]] = None
        self._encoders: Dict[str, OneHotEncoder] = {}

    def _check_columns(self, df: pd.DataFrame) -> None:
        missing = [p for p in self.predictors if p not in df.columns]
        if missing:
            raise DesignMatrixError(f"Predictors missing from table: {missing}")

    def fit(self, df: pd.DataFrame) -> "DesignEncoder":
        """Learn categorical predictors and their levels from ``df``."""
        self._check_columns(df)

        self.categorical_ = []
        self.levels_ = {}
        self._encoders = {}
        feature_names: List[str] = []

        for name in self.predictors:
            column = df[name]
            if not _is_categorical(column):
                feature_names.append(name)
                continue

            levels = _training_levels(column)
            encoder = OneHotEncoder(
                categories=[levels],
                handle_unknown="ignore",
                sparse_output=False,
                dtype=float,
            )
            encoder.fit(self._as_object(column))

            self.categorical_.append(name)
            self.levels_[name] = levels
            self._encoders[name] = encoder
            feature_names.extend(f"{name}_{level}" for level in levels)

        self.feature_names_ = feature_names
        logger.debug(
            "Design encoder fitted: %d predictors -> %d columns",
            len(self.predictors),
            len(feature_names),
        )
        return self

    @staticmethod
    def _as_object(column: pd.Series) -> np.ndarray:
        return column.astype(object).astype(str).to_numpy().reshape(-1, 1)

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Build the design matrix of ``df`` with the fitted expansion."""
        if self.feature_names_ is None:
            raise DesignMatrixError("DesignEncoder has not been fitted. Call fit() first.")
        self._check_columns(df)

        blocks = []
        for name in self.predictors:
            if name in self._encoders:
                encoder = self._encoders[name]
                values = encoder.transform(self._as_object(df[name]))
                columns = [f"{name}_{level}" for level in self.levels_[name]]
                blocks.append(pd.DataFrame(values, columns=columns, index=df.index))
            else:
                column = df[name]
                if _is_categorical(column):
                    raise DesignMatrixError(
                        f"Predictor {name!r} was numeric in training but is "
                        "categorical here"
                    )
                blocks.append(column.astype(float).to_frame(name))

        design = pd.concat(blocks, axis=1)
        if list(design.columns) != self.feature_names_:
            raise DesignMatrixError(
                "Design matrix columns do not match the fitted expansion: "
                f"{list(design.columns)} != {self.feature_names_}"
            )
        return design

    def fit_transform(self, df: pd.DataFrame) -> pd.DataFrame:
        return self.fit(df).transform(df)
