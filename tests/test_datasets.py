"""Tests for column kind detection, column order and selection helpers."""

import pytest

from tabviz.core.datasets import (
    ColumnKind,
    Dataset,
    move_column,
    parse_number,
    resolve_column_order,
    valid_selection,
    validate_column_order,
)


class TestParseNumber:
    @pytest.mark.parametrize(
        "cell, expected",
        [("3", 3.0), (" 3.5 ", 3.5), ("-1e3", -1000.0), (".5", 0.5)],
    )
    def test_parses(self, cell, expected):
        assert parse_number(cell) == expected

    @pytest.mark.parametrize("cell", [None, "", "   ", "abc", "nan", "inf", "-Infinity", "1_000", "1,5"])
    def test_rejects(self, cell):
        assert parse_number(cell) is None


class TestColumnKind:
    def test_numeric_and_categorical(self, flower_dataset):
        kinds = [flower_dataset.column_kind(i) for i in range(flower_dataset.n_columns)]
        assert kinds[:4] == [ColumnKind.NUMERIC] * 4
        assert kinds[4] is ColumnKind.CATEGORICAL
        assert kinds[5] is ColumnKind.CATEGORICAL

    def test_single_bad_cell_demotes_column(self):
        ds = Dataset.from_rows(["x"], [["1"], ["2"], ["two"]])
        assert not ds.is_numeric(0)

    def test_blank_is_ignored_unless_strict(self):
        ds = Dataset.from_rows(["x"], [["1"], [None], ["  "]])
        assert ds.is_numeric(0)
        assert not ds.is_numeric(0, strict=True)

    def test_all_blank_column_is_numeric(self):
        ds = Dataset.from_rows(["x"], [[None], [""]])
        assert ds.column_kind(0) is ColumnKind.NUMERIC

    def test_bad_index(self, flower_dataset):
        with pytest.raises(IndexError):
            flower_dataset.column_values(99)


class TestClassLabels:
    def test_detected_case_insensitively(self, flower_dataset):
        assert flower_dataset.class_column == "Class"
        assert flower_dataset.distinct_labels() == ["setosa", "versicolor", "virginica"]

    def test_missing_class_column(self):
        ds = Dataset.from_rows(["a", "b"], [["1", "2"]])
        assert ds.class_index == -1
        assert ds.class_labels() is None
        assert ds.distinct_labels() == []

    def test_blank_label_is_none(self):
        ds = Dataset.from_rows(["a", "class"], [["1", "x"], ["2", ""]])
        assert ds.class_labels() == ["x", None]


class TestColumnOrder:
    def test_validate(self):
        assert validate_column_order([2, 0, 1], 3) == [2, 0, 1]
        with pytest.raises(ValueError):
            validate_column_order([0, 0, 1], 3)
        with pytest.raises(ValueError):
            validate_column_order([0, 1], 3)

    def test_resolve_by_name(self, tumor_dataset):
        assert resolve_column_order(tumor_dataset, ["f2"]) == [1, 0, 2]
        with pytest.raises(KeyError):
            resolve_column_order(tumor_dataset, ["missing"])

    def test_move(self):
        assert move_column([0, 1, 2], 2, -1) == [0, 2, 1]
        assert move_column([0, 1, 2], 0, -5) == [0, 1, 2]
        assert move_column([0, 1, 2], 7, 1) == [0, 1, 2]


def test_valid_selection_drops_stale_rows():
    assert valid_selection([0, 2, 5, -1, "x"], 3) == frozenset({0, 2})


def test_valid_selection_ignores_non_integral_indices():
    assert valid_selection([1.7, 2.0, "1", 0], 3) == frozenset({0})
