from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Union

import numpy as np
import pandas as pd

from tabviz.core.datasets import Dataset, is_blank, parse_number


class BlankPolicy(str, Enum):
    """How blank cells take part in numeric detection.

    strict: a blank cell makes the whole column categorical.
    tolerant: blanks are excluded from min/max and left NaN; rows holding
    them are skipped when drawn.
    """

    STRICT = "strict"
    TOLERANT = "tolerant"


PolicyLike = Union[BlankPolicy, str]


@dataclass
class NormalizedColumn:
    name: str
    values: np.ndarray
    is_numeric: bool
    minimum: float = float("nan")
    maximum: float = float("nan")
    index: int = -1

    @property
    def degenerate(self) -> bool:
        """True for a numeric column whose present values are all equal."""
        return self.is_numeric and bool(np.isfinite(self.minimum)) and self.minimum == self.maximum

    @property
    def excluded_rows(self) -> list[int]:
        if not self.is_numeric:
            return []
        return [int(i) for i in np.flatnonzero(~np.isfinite(self.values))]


def _categorical(name: str, n: int, index: int) -> NormalizedColumn:
    return NormalizedColumn(name=name, values=np.full(n, np.nan), is_numeric=False, index=index)


def normalize(
    values: Iterable[Any],
    policy: PolicyLike = BlankPolicy.STRICT,
    name: str = "",
    index: int = -1,
) -> NormalizedColumn:
    """Min-max scale a column of raw cells into [0, 1].

    Any unparsable non-blank cell makes the column categorical (values all
    NaN). When every present value is equal the range is degenerate and all
    of them normalize to 0.0.
    """
    policy = BlankPolicy(policy)
    cells = list(values)
    n = len(cells)
    parsed = np.full(n, np.nan, dtype=float)
    for i, cell in enumerate(cells):
        if is_blank(cell):
            if policy is BlankPolicy.STRICT:
                return _categorical(name, n, index)
            continue
        v = parse_number(cell)
        if v is None:
            return _categorical(name, n, index)
        parsed[i] = v

    present = np.isfinite(parsed)
    out = np.full(n, np.nan, dtype=float)
    if not present.any():
        return NormalizedColumn(name=name, values=out, is_numeric=True, index=index)

    lo = float(np.min(parsed[present]))
    hi = float(np.max(parsed[present]))
    if hi > lo:
        out[present] = (parsed[present] - lo) / (hi - lo)
    else:
        out[present] = 0.0
    return NormalizedColumn(name=name, values=out, is_numeric=True, minimum=lo, maximum=hi, index=index)


def normalize_dataset(dataset: Dataset, policy: PolicyLike = BlankPolicy.STRICT) -> list[NormalizedColumn]:
    """Normalized columns in declaration order."""
    return [
        normalize(dataset.column_values(idx), policy, name=name, index=idx)
        for idx, name in enumerate(dataset.columns)
    ]


def normalized_frame(
    dataset: Dataset,
    policy: PolicyLike = BlankPolicy.STRICT,
    decimals: int = 4,
) -> pd.DataFrame:
    """Table view with numeric columns replaced by their normalized values.

    Categorical columns and excluded cells keep their original text.
    """
    out = dataset.frame.copy()
    for col in normalize_dataset(dataset, policy):
        if not col.is_numeric or col.index == dataset.class_index:
            continue
        original = dataset.column_values(col.index)
        out.iloc[:, col.index] = [
            f"{v:.{decimals}f}" if np.isfinite(v) else cell
            for v, cell in zip(col.values, original)
        ]
    return out


def heatmap_color(value: float) -> str:
    """Blue (0.0) to red (1.0) ramp used for cell shading."""
    red = int(255 * float(value))
    red = max(0, min(255, red))
    blue = max(0, min(255, 255 - red))
    return f"#{red:02x}00{blue:02x}"


def heatmap_colors(dataset: Dataset) -> pd.DataFrame:
    """Per-cell hex colors for numeric columns; None for text and blank cells.

    Numeric detection here is tolerant: blank cells are skipped rather than
    demoting the column.
    """
    grid: list[list[Optional[str]]] = [[None] * dataset.n_columns for _ in range(dataset.n_rows)]
    for col in normalize_dataset(dataset, BlankPolicy.TOLERANT):
        if not col.is_numeric or col.index == dataset.class_index:
            continue
        for row, v in enumerate(col.values):
            if np.isfinite(v):
                grid[row][col.index] = heatmap_color(v)
    return pd.DataFrame(grid, columns=dataset.columns, dtype=object)


def blank_mask(dataset: Dataset) -> pd.DataFrame:
    return dataset.frame.apply(lambda s: s.map(is_blank)).astype(bool)
