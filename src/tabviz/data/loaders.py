import io
import os
from typing import Any, List, Optional, Sequence

import pandas as pd

CLASS_COLUMN_NAME = "class"


def make_unique_name(name: str, existing_names: set, default: str = "column") -> str:
    base = str(name).strip() if str(name).strip() else default
    if base not in existing_names:
        return base
    i = 2
    while f"{base} ({i})" in existing_names:
        i += 1
    return f"{base} ({i})"


def unique_column_names(names: Sequence[Any]) -> List[str]:
    out: List[str] = []
    seen: set = set()
    for name in names:
        unique = make_unique_name("" if name is None else str(name), seen)
        seen.add(unique)
        out.append(unique)
    return out


def _to_string_cells(df: pd.DataFrame) -> pd.DataFrame:
    """Object frame of str cells; missing cells become None."""
    df = df.astype(object)
    return df.where(pd.notna(df), None)


def frame_from_rows(columns: Sequence[Any], rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """Build a string-celled frame from a header and row tuples (short rows are padded with None)."""
    names = unique_column_names(columns)
    width = len(names)
    cells: List[List[Optional[str]]] = []
    for idx, row in enumerate(rows):
        row = list(row)
        if len(row) > width:
            raise ValueError(f"Row {idx} has {len(row)} cells but the header has {width}.")
        row = row + [None] * (width - len(row))
        cells.append([None if v is None else str(v) for v in row])
    return pd.DataFrame(cells, columns=names, dtype=object)


def read_csv_text(text: str) -> pd.DataFrame:
    return _read_csv(io.StringIO(text))


def load_csv_file(path: str) -> pd.DataFrame:
    """Load a CSV file with a header row; every cell is kept as text."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"CSV file not found: {path}")
    with open(path, "r", encoding="utf-8", newline="") as f:
        return _read_csv(f)


def _read_csv(handle) -> pd.DataFrame:
    try:
        df = pd.read_csv(
            handle,
            dtype=str,
            keep_default_na=False,
            na_values=[""],
            skipinitialspace=False,
        )
    except pd.errors.EmptyDataError:
        raise ValueError("CSV input has no header row.") from None
    df.columns = unique_column_names(df.columns)
    return _to_string_cells(df)


def find_class_column(columns: Sequence[str], name: Optional[str] = None) -> int:
    """Index of the class column, or -1 when no column is named "class".

    An explicit ``name`` must match exactly and raises ``KeyError`` when it is
    missing; otherwise the first column named "class" (any case) is used.
    """
    cols = [str(c) for c in columns]
    if name:
        if name not in cols:
            raise KeyError(f"Unknown class column: {name}")
        return cols.index(name)
    for idx, col in enumerate(cols):
        if col.strip().lower() == CLASS_COLUMN_NAME:
            return idx
    return -1
