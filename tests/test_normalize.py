"""Tests for min-max normalization and the table views built on it."""

import numpy as np
import pytest

from tabviz.core.datasets import Dataset
from tabviz.core.normalize import (
    BlankPolicy,
    blank_mask,
    heatmap_color,
    heatmap_colors,
    normalize,
    normalize_dataset,
    normalized_frame,
)


class TestNormalize:
    def test_scenario_columns(self, tumor_dataset):
        cols = normalize_dataset(tumor_dataset)
        np.testing.assert_allclose(cols[0].values, [0.0, 0.5, 1.0])
        np.testing.assert_allclose(cols[1].values, [0.0, 0.5, 1.0])
        assert cols[1].minimum == 10.0 and cols[1].maximum == 30.0
        assert not cols[2].is_numeric

    def test_values_within_unit_range(self):
        rng = np.random.default_rng(7)
        raw = [f"{v:.6f}" for v in rng.normal(50.0, 20.0, size=200)]
        col = normalize(raw)
        assert col.is_numeric
        assert np.all((col.values >= 0.0) & (col.values <= 1.0))
        assert col.values.min() == 0.0 and col.values.max() == 1.0

    def test_degenerate_range_is_zero(self):
        col = normalize(["4", "4.0", "4"])
        assert col.degenerate
        assert col.values.tolist() == [0.0, 0.0, 0.0]

    def test_single_row(self):
        col = normalize(["12.5"])
        assert col.values.tolist() == [0.0]

    def test_unparsable_cell_makes_categorical(self):
        col = normalize(["1", "2", "oops"])
        assert not col.is_numeric
        assert np.isnan(col.values).all()

    def test_strict_blank_makes_categorical(self):
        col = normalize(["1", "", "3"], BlankPolicy.STRICT)
        assert not col.is_numeric

    def test_tolerant_blank_is_excluded(self):
        col = normalize(["1", "", "3", None], "tolerant")
        assert col.is_numeric
        assert col.values[0] == 0.0 and col.values[2] == 1.0
        assert col.excluded_rows == [1, 3]

    def test_tolerant_all_blank(self):
        col = normalize(["", None], BlankPolicy.TOLERANT)
        assert col.is_numeric
        assert np.isnan(col.values).all()

    def test_empty_column(self):
        col = normalize([])
        assert col.is_numeric
        assert col.values.size == 0

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            normalize(["1"], "lenient")

    def test_dataset_keeps_names_and_indices(self, flower_dataset):
        cols = normalize_dataset(flower_dataset)
        assert [c.name for c in cols] == flower_dataset.columns
        assert [c.index for c in cols] == list(range(flower_dataset.n_columns))


class TestNormalizedFrame:
    def test_numeric_replaced_text_kept(self, tumor_dataset):
        df = normalized_frame(tumor_dataset)
        assert df.iloc[:, 0].tolist() == ["0.0000", "0.5000", "1.0000"]
        assert df.iloc[:, 2].tolist() == ["benign", "malignant", "benign"]
        # source table untouched
        assert tumor_dataset.frame.iloc[1, 0] == "5"

    def test_tolerant_blank_kept(self):
        ds = Dataset.from_rows(["x"], [["2"], [None], ["4"]])
        df = normalized_frame(ds, BlankPolicy.TOLERANT, decimals=1)
        assert df.iloc[:, 0].tolist() == ["0.0", None, "1.0"]


class TestHeatmap:
    def test_ramp_ends(self):
        assert heatmap_color(0.0) == "#0000ff"
        assert heatmap_color(1.0) == "#ff0000"
        assert heatmap_color(0.5) == "#7f0080"

    def test_ramp_clamped(self):
        assert heatmap_color(1.7) == "#ff0000"
        assert heatmap_color(-0.2) == "#0000ff"

    def test_colors_skip_text_and_blanks(self):
        ds = Dataset.from_rows(["x", "name", "class"], [["0", "a", "p"], [None, "b", "q"], ["10", "c", "p"]])
        colors = heatmap_colors(ds)
        assert colors.iloc[0, 0] == "#0000ff"
        assert colors.iloc[1, 0] is None
        assert colors.iloc[2, 0] == "#ff0000"
        assert colors.iloc[:, 1].isna().all()
        assert colors.iloc[:, 2].isna().all()


def test_blank_mask():
    ds = Dataset.from_rows(["a", "b"], [["1", ""], [None, "x"]])
    mask = blank_mask(ds)
    assert mask.values.tolist() == [[False, True], [True, False]]
