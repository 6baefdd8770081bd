import pytest

from edgesim.errors import InvalidParameterError
from edgesim.schema import ALPHABET, ColumnSpec, Schema, build_schema, category_levels


def test_build_schema_order_and_kinds():
    schema = build_schema(n_categorical=2, cardinality=3, n_numeric=2, with_outcome=True)
    assert schema.names == ("id", "cat_1", "cat_2", "num_1", "num_2", "outcome", "label")
    assert [c.name for c in schema.categorical] == ["cat_1", "cat_2"]
    assert [c.name for c in schema.numeric] == ["num_1", "num_2"]
    assert schema["cat_2"].levels == ("a", "b", "c")
    assert schema["num_1"].levels is None
    assert "label" in schema
    assert len(schema) == 7


def test_build_schema_without_outcome():
    schema = build_schema(n_categorical=0, cardinality=1, n_numeric=1)
    assert schema.names == ("id", "num_1")


def test_category_levels_bounds():
    assert category_levels(26) == ALPHABET
    with pytest.raises(InvalidParameterError):
        category_levels(27)
    with pytest.raises(InvalidParameterError):
        category_levels(0)


def test_column_spec_rejects_bad_definitions():
    with pytest.raises(InvalidParameterError):
        ColumnSpec("x", "text")
    with pytest.raises(InvalidParameterError):
        ColumnSpec("x", "categorical")
    with pytest.raises(InvalidParameterError):
        ColumnSpec("x", "numeric", ("a",))


def test_schema_rejects_duplicate_names():
    with pytest.raises(InvalidParameterError):
        Schema([ColumnSpec("x", "numeric"), ColumnSpec("x", "numeric")])
