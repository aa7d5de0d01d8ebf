"""Shared fixtures: small tables built from string cells, as the loaders produce them."""

import os
import tempfile

import pytest

# keep the CLI tests from appending to the log in the home directory
os.environ.setdefault("TABVIZ_LOG_PATH", os.path.join(tempfile.gettempdir(), "tabviz_tests.log"))

from tabviz.core.datasets import Dataset
from tabviz.core.state import ProjectState, load_dataset


@pytest.fixture
def tumor_dataset() -> Dataset:
    """Two numeric features and a canonical benign/malignant class column."""
    return Dataset.from_rows(
        ["f1", "f2", "class"],
        [
            ["0", "10", "benign"],
            ["5", "20", "malignant"],
            ["10", "30", "benign"],
        ],
    )


@pytest.fixture
def flower_dataset() -> Dataset:
    """Four numeric features, a text column and three non-canonical classes."""
    return Dataset.from_rows(
        ["sepal_length", "sepal_width", "petal_length", "petal_width", "note", "Class"],
        [
            ["5.1", "3.5", "1.4", "0.2", "a", "setosa"],
            ["4.9", "3.0", "1.4", "0.2", "b", "setosa"],
            ["7.0", "3.2", "4.7", "1.4", "c", "versicolor"],
            ["6.4", "3.2", "4.5", "1.5", "d", "versicolor"],
            ["6.3", "3.3", "6.0", "2.5", "e", "virginica"],
            ["5.8", "2.7", "5.1", "1.9", "f", "virginica"],
        ],
    )


@pytest.fixture
def flower_state(flower_dataset) -> ProjectState:
    state = ProjectState()
    load_dataset(state, flower_dataset)
    return state
