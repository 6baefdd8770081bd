"""
Data Generator for the Edge Simulations

Generates synthetic tables with:
- An integer id column 1..N
- C categorical columns drawn uniformly from the first K letters
- M numeric columns drawn from a standard normal
- Optionally, a continuous outcome f(table) + Gaussian noise and a boolean
  label that is True when the outcome exceeds one of its quantiles

All randomness comes from an explicitly passed ``numpy.random.Generator``.
Draw order is fixed (categorical columns in order, then the numeric block,
then outcome noise) so the same seed reproduces the same table.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import SimulationConfig
from .errors import InvalidParameterError
from .schema import ID_COLUMN, LABEL_COLUMN, OUTCOME_COLUMN, build_schema

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the generator a whole run draws from."""
    return np.random.default_rng(seed)


def simulate_dataset(
    config: SimulationConfig,
    rng: np.random.Generator,
    threshold: Optional[float] = None,
) -> pd.DataFrame:
    """
    Simulate one table.

    Parameters
    ----------
    config : SimulationConfig
        Shape, noise, quantile and outcome function of the table.
    rng : np.random.Generator
        Generator to draw from. Its state is advanced.
    threshold : float, optional
        Cutoff for the label. If None, the empirical ``config.quantile``
        of this table's own outcome is used.

    Returns
    -------
    pd.DataFrame
        Columns in schema order. When an outcome function is given the
        label cutoff is stored in ``df.attrs["label_threshold"]``.

    Raises
    ------
    InvalidParameterError
        If the configuration is invalid (e.g. cardinality above 26 or a
        quantile outside (0, 1)).
    """
    config.validate()
    with_outcome = config.outcome_fn is not None
    schema = build_schema(
        config.n_categorical, config.cardinality, config.n_numeric, with_outcome
    )
    n = config.n_rows

    columns: Dict[str, Any] = {ID_COLUMN: np.arange(1, n + 1)}
    for spec in schema.categorical:
        draws = rng.choice(np.array(spec.levels), size=n, replace=True)
        columns[spec.name] = pd.Categorical(draws, categories=list(spec.levels))

    numeric_specs = schema.numeric
    if numeric_specs:
        block = rng.standard_normal(size=(n, len(numeric_specs)))
        for j, spec in enumerate(numeric_specs):
            columns[spec.name] = block[:, j]

    df = pd.DataFrame(columns)

    if with_outcome:
        signal = np.asarray(config.outcome_fn(df, **config.outcome_kwargs), dtype=float)
        if signal.shape != (n,):
            raise InvalidParameterError(
                f"outcome_fn must return one value per row, got shape {signal.shape}"
            )
        noise = rng.normal(0.0, config.noise_std, size=n)
        outcome = signal + noise

        if threshold is None:
            threshold = float(np.quantile(outcome, config.quantile))
        df[OUTCOME_COLUMN] = outcome
        df[LABEL_COLUMN] = outcome > threshold
        df.attrs["label_threshold"] = float(threshold)
        df.attrs["quantile"] = config.quantile

    logger.debug(
        "Simulated %d rows x %d columns (schema %s)", n, df.shape[1], schema.names
    )
    return df


def simulate_train_test(
    config: SimulationConfig,
    n_train: int,
    n_test: int,
    rng: np.random.Generator,
    share_threshold: bool = True,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Simulate a training table, then a test table, from the same generator.

    With ``share_threshold`` the test label uses the training cutoff, so
    both labels answer the same question; otherwise each table is cut at
    its own empirical quantile.
    """
    train = simulate_dataset(replace(config, n_rows=n_train), rng)
    threshold = train.attrs.get("label_threshold") if share_threshold else None
    test = simulate_dataset(replace(config, n_rows=n_test), rng, threshold=threshold)
    return train, test


def edged_outcome(
    df: pd.DataFrame,
    weight: float = 1.0,
    interaction: float = 1.0,
    columns: Sequence[str] = ("cat_1", "cat_2"),
) -> np.ndarray:
    """
    Outcome with a linear ramp over the numeric columns plus a categorical
    equality interaction.

    The numeric column j (of M, in table order) gets weight
    ``weight * j / M``. Rows where the two ``columns`` hold the same letter
    get ``+interaction``, all others ``-interaction``. The ramp is easy for
    a linear model and hard for trees; the equality is the reverse.

    Parameters
    ----------
    df : pd.DataFrame
        Table with numeric (float) columns and the two categorical columns.
    weight : float, default=1.0
        Overall scale of the linear ramp.
    interaction : float, default=1.0
        Size of the equality bonus/penalty.
    columns : sequence of str, default=("cat_1", "cat_2")
        The two categorical columns compared.

    Returns
    -------
    np.ndarray of shape (n_rows,)
    """
    if len(columns) != 2:
        raise InvalidParameterError("edged_outcome compares exactly two columns")
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise InvalidParameterError(f"Interaction columns not in table: {missing}")

    numeric = [c for c in df.select_dtypes(include="floating").columns if c != OUTCOME_COLUMN]
    n_numeric = len(numeric)
    if n_numeric:
        ramp = weight * np.arange(1, n_numeric + 1) / n_numeric
        linear = df[numeric].to_numpy(dtype=float) @ ramp
    else:
        linear = np.zeros(len(df))

    left = df[columns[0]].astype(str).to_numpy()
    right = df[columns[1]].astype(str).to_numpy()
    bonus = np.where(left == right, interaction, -interaction)

    return linear + bonus


def repeat_column(df: pd.DataFrame, column: str, n_copies: int) -> pd.DataFrame:
    """
    Append ``n_copies`` exact duplicates of ``column``.

    The copies are named ``{column}_rep_1`` ... ``{column}_rep_N``. The
    input table is left untouched; a new table is returned.
    """
    if column not in df.columns:
        raise InvalidParameterError(f"Column {column!r} not in table")
    if n_copies < 0:
        raise InvalidParameterError("n_copies must be non-negative")

    names = [f"{column}_rep_{i}" for i in range(1, n_copies + 1)]
    clashes = [name for name in names if name in df.columns]
    if clashes:
        raise InvalidParameterError(f"Repeated column names already exist: {clashes}")

    copies = pd.DataFrame({name: df[column].copy() for name in names}, index=df.index)
    out = pd.concat([df, copies], axis=1)
    out.attrs = dict(df.attrs)
    return out


def get_data_summary(df: pd.DataFrame) -> Dict[str, Any]:
    """
    Get summary statistics of a simulated table.

    Args:
        df: Table produced by simulate_dataset (optionally augmented)

    Returns:
        Dictionary with summary statistics
    """
    summary: Dict[str, Any] = {
        "n_rows": len(df),
        "n_columns": df.shape[1],
    }

    if OUTCOME_COLUMN in df.columns:
        summary["outcome_mean"] = float(df[OUTCOME_COLUMN].mean())
        summary["outcome_std"] = float(df[OUTCOME_COLUMN].std())
    if LABEL_COLUMN in df.columns:
        summary["n_positive"] = int(df[LABEL_COLUMN].sum())
        summary["positive_rate"] = float(df[LABEL_COLUMN].mean())
    if "label_threshold" in df.attrs:
        summary["label_threshold"] = df.attrs["label_threshold"]

    for name in df.select_dtypes(include="category").columns:
        summary[f"{name}_counts"] = df[name].value_counts(sort=False).to_dict()

    return summary


def print_data_summary(df: pd.DataFrame, title: str = "Data Summary") -> None:
    """Print get_data_summary() in a readable layout."""
    summary = get_data_summary(df)
    print(f"\n{title}:")
    for key, value in summary.items():
        if isinstance(value, float):
            print(f"  {key}: {value:.4f}")
        else:
            print(f"  {key}: {value}")


if __name__ == "__main__":
    # Example usage
    print("Generating edged data...")

    config = SimulationConfig(
        n_rows=5000,
        n_categorical=2,
        cardinality=2,
        n_numeric=10,
        noise_std=1.0,
        quantile=0.9,
        outcome_fn=edged_outcome,
        outcome_kwargs={"weight": 4.0, "interaction": 10.0},
    )
    data = simulate_dataset(config, make_rng(42))

    print(f"Generated data shape: {data.shape}")
    print_data_summary(data)
