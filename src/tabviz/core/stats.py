from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from tabviz.core.datasets import ColumnKind, Dataset, is_blank, parse_number


@dataclass
class ColumnSummary:
    name: str
    kind: ColumnKind
    count: int
    blanks: int
    minimum: float = float("nan")
    maximum: float = float("nan")
    mean: float = float("nan")
    std: float = float("nan")
    distinct: int = 0


def summarize_columns(dataset: Dataset) -> list[ColumnSummary]:
    """Per-column counts, plus range/mean/std for numeric columns.

    Kinds use blank-tolerant detection; std is the population std.
    """
    out: list[ColumnSummary] = []
    for idx, name in enumerate(dataset.columns):
        cells = dataset.column_values(idx)
        present = [c for c in cells if not is_blank(c)]
        kind = dataset.column_kind(idx)
        summary = ColumnSummary(
            name=name,
            kind=kind,
            count=len(present),
            blanks=len(cells) - len(present),
            distinct=len(set(str(c).strip() for c in present)),
        )
        if kind is ColumnKind.NUMERIC and present:
            arr = np.asarray([parse_number(c) for c in present], dtype=float)
            summary.minimum = float(np.min(arr))
            summary.maximum = float(np.max(arr))
            summary.mean = float(np.mean(arr))
            summary.std = float(np.std(arr))
        out.append(summary)
    return out


def class_counts(dataset: Dataset) -> dict[str, int]:
    """Rows per class label, in first-seen order."""
    labels = dataset.class_labels()
    if labels is None:
        return {}
    series = pd.Series([lbl for lbl in labels if lbl is not None], dtype=object)
    counts = series.groupby(series, sort=False).size()
    return {str(k): int(v) for k, v in counts.items()}


def format_summary(dataset: Dataset, decimals: int = 3) -> str:
    lines = [f"Rows: {dataset.n_rows}", f"Columns: {dataset.n_columns}"]
    counts = class_counts(dataset)
    if counts:
        lines.append(f"Class column: {dataset.class_column} ({len(counts)} classes)")
        for label, n in counts.items():
            lines.append(f"  {label}: {n}")
    lines.append("")
    for s in summarize_columns(dataset):
        head = f"{s.name} [{s.kind.value}] count={s.count} blanks={s.blanks}"
        if s.kind is ColumnKind.NUMERIC and s.count:
            head += (
                f" min={s.minimum:.{decimals}f} max={s.maximum:.{decimals}f}"
                f" mean={s.mean:.{decimals}f} std={s.std:.{decimals}f}"
            )
        else:
            head += f" distinct={s.distinct}"
        lines.append(head)
    return "\n".join(lines)
