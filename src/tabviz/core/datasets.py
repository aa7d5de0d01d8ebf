from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

import pandas as pd

from tabviz.data.loaders import find_class_column, frame_from_rows


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


def is_blank(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, float) and math.isnan(cell):
        return True
    return not str(cell).strip()


def parse_number(cell: Any) -> Optional[float]:
    """Parse a cell as a finite double; None when it is blank or does not parse.

    Digit-group underscores, NaN and infinities are rejected so that a parsed
    value can always take part in a min/max range.
    """
    if is_blank(cell):
        return None
    text = str(cell).strip()
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass
class Dataset:
    """Immutable snapshot of a table: named columns, string-or-None cells."""

    frame: pd.DataFrame
    class_index: int = -1
    _kinds: dict[tuple[int, bool], ColumnKind] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, class_column: Optional[str] = None) -> "Dataset":
        return cls(frame=frame, class_index=find_class_column(list(frame.columns), class_column))

    @classmethod
    def from_rows(
        cls,
        columns: Sequence[Any],
        rows: Sequence[Sequence[Any]],
        class_column: Optional[str] = None,
    ) -> "Dataset":
        return cls.from_frame(frame_from_rows(columns, rows), class_column)

    @property
    def columns(self) -> list[str]:
        return [str(c) for c in self.frame.columns]

    @property
    def n_rows(self) -> int:
        return int(self.frame.shape[0])

    @property
    def n_columns(self) -> int:
        return int(self.frame.shape[1])

    @property
    def class_column(self) -> Optional[str]:
        if 0 <= self.class_index < self.n_columns:
            return self.columns[self.class_index]
        return None

    def column_values(self, index: int) -> list[Any]:
        if not 0 <= index < self.n_columns:
            raise IndexError(f"Column index {index} out of range (0..{self.n_columns - 1}).")
        return self.frame.iloc[:, index].tolist()

    def class_labels(self) -> Optional[list[Optional[str]]]:
        """Per-row class labels, or None when there is no class column."""
        if self.class_column is None:
            return None
        return [None if is_blank(v) else str(v) for v in self.column_values(self.class_index)]

    def distinct_labels(self) -> list[str]:
        """Class labels in first-seen order."""
        labels = self.class_labels() or []
        return list(dict.fromkeys(lbl for lbl in labels if lbl is not None))

    def column_kind(self, index: int, strict: bool = False) -> ColumnKind:
        """Numeric only if every non-blank cell parses; strict also rejects blanks."""
        key = (index, bool(strict))
        kind = self._kinds.get(key)
        if kind is None:
            kind = ColumnKind.NUMERIC
            for cell in self.column_values(index):
                if is_blank(cell):
                    if strict:
                        kind = ColumnKind.CATEGORICAL
                        break
                    continue
                if parse_number(cell) is None:
                    kind = ColumnKind.CATEGORICAL
                    break
            self._kinds[key] = kind
        return kind

    def is_numeric(self, index: int, strict: bool = False) -> bool:
        return self.column_kind(index, strict) is ColumnKind.NUMERIC


def identity_order(dataset: Dataset) -> list[int]:
    return list(range(dataset.n_columns))


def validate_column_order(order: Iterable[int], n_columns: int) -> list[int]:
    new_list = [int(i) for i in order]
    if sorted(new_list) != list(range(n_columns)):
        raise ValueError("Column order must include every column index exactly once.")
    return new_list


def resolve_column_order(dataset: Dataset, names: Iterable[str]) -> list[int]:
    """Turn a (possibly partial) list of column names into a full permutation.

    Named columns come first in the given order; the rest keep declaration order.
    """
    cols = dataset.columns
    order: list[int] = []
    for name in names:
        if name not in cols:
            raise KeyError(f"Unknown column: {name}")
        idx = cols.index(name)
        if idx not in order:
            order.append(idx)
    order.extend(i for i in range(len(cols)) if i not in order)
    return order


def move_column(order: Sequence[int], column: int, offset: int) -> list[int]:
    new_order = list(order)
    if column not in new_order:
        return new_order
    idx = new_order.index(column)
    new_idx = max(0, min(len(new_order) - 1, idx + offset))
    if new_idx == idx:
        return new_order
    new_order.pop(idx)
    new_order.insert(new_idx, column)
    return new_order


def valid_selection(selection: Iterable[int], n_rows: int) -> frozenset[int]:
    """Drop stale indices (negative or past the last row) and non-integral ones."""
    out = set()
    for idx in selection:
        try:
            i = operator.index(idx)
        except TypeError:
            continue
        if 0 <= i < n_rows:
            out.add(i)
    return frozenset(out)
