"""
Column schema for simulated tables.

The schema is built from the simulation parameters before any data is
drawn, so the simulator, the encoder and the tests all agree on column
names, kinds and categorical levels.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .errors import InvalidParameterError

ALPHABET: Tuple[str, ...] = tuple(string.ascii_lowercase)

ID_COLUMN = "id"
OUTCOME_COLUMN = "outcome"
LABEL_COLUMN = "label"

KINDS = ("id", "categorical", "numeric", "outcome", "label")


def categorical_name(i: int) -> str:
    return f"cat_{i}"


def numeric_name(i: int) -> str:
    return f"num_{i}"


def category_levels(cardinality: int) -> Tuple[str, ...]:
    """First ``cardinality`` letters of the alphabet."""
    if cardinality < 1 or cardinality > len(ALPHABET):
        raise InvalidParameterError(
            f"cardinality must be between 1 and {len(ALPHABET)}, got {cardinality}"
        )
    return ALPHABET[:cardinality]


@dataclass(frozen=True)
class ColumnSpec:
    """One column of a simulated table."""

    name: str
    kind: str
    levels: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        if self.kind not in KINDS:
            raise InvalidParameterError(f"Unknown column kind: {self.kind!r}")
        if (self.kind == "categorical") != (self.levels is not None):
            raise InvalidParameterError(
                f"Column {self.name!r}: levels are required for categorical "
                "columns and not allowed otherwise"
            )


class Schema:
    """Ordered, immutable collection of column specs."""

    def __init__(self, columns):
        self._columns = tuple(columns)
        names = [c.name for c in self._columns]
        if len(set(names)) != len(names):
            raise InvalidParameterError(f"Duplicate column names in schema: {names}")
        self._index = {c.name: c for c in self._columns}

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[ColumnSpec]:
        return iter(self._columns)

    def __getitem__(self, name: str) -> ColumnSpec:
        return self._index[name]

    def __contains__(self, name) -> bool:
        return name in self._index

    def __repr__(self) -> str:
        return f"Schema({list(self.names)})"

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self._columns)

    def by_kind(self, kind: str) -> Tuple[ColumnSpec, ...]:
        return tuple(c for c in self._columns if c.kind == kind)

    @property
    def categorical(self) -> Tuple[ColumnSpec, ...]:
        return self.by_kind("categorical")

    @property
    def numeric(self) -> Tuple[ColumnSpec, ...]:
        return self.by_kind("numeric")


def build_schema(
    n_categorical: int,
    cardinality: int,
    n_numeric: int,
    with_outcome: bool = False,
) -> Schema:
    """
    Build the schema of a simulated table.

    Parameters
    ----------
    n_categorical : int
        Number of categorical columns (``cat_1`` ... ``cat_C``).
    cardinality : int
        Number of letters each categorical column may take.
    n_numeric : int
        Number of standard-normal columns (``num_1`` ... ``num_M``).
    with_outcome : bool, default=False
        Append the continuous ``outcome`` and boolean ``label`` columns.

    Returns
    -------
    Schema
    """
    if n_categorical < 0 or n_numeric < 0:
        raise InvalidParameterError("Column counts must be non-negative")
    levels = category_levels(cardinality)

    columns = [ColumnSpec(ID_COLUMN, "id")]
    columns += [
        ColumnSpec(categorical_name(i), "categorical", levels)
        for i in range(1, n_categorical + 1)
    ]
    columns += [ColumnSpec(numeric_name(i), "numeric") for i in range(1, n_numeric + 1)]
    if with_outcome:
        columns.append(ColumnSpec(OUTCOME_COLUMN, "outcome"))
        columns.append(ColumnSpec(LABEL_COLUMN, "label"))
    return Schema(columns)
