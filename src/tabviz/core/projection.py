from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from tabviz.core.datasets import valid_selection, validate_column_order
from tabviz.core.layouts import (
    LAYOUT_TITLES,
    LAYOUTS,
    MIN_ATTRIBUTES,
    AxisGuide,
    LayoutKind,
    PairPlotFrame,
    PlotSize,
)
from tabviz.core.normalize import NormalizedColumn, normalize_dataset
from tabviz.core.state import ProjectState, require_dataset
from tabviz.core.styles import HIGHLIGHT_COLOR, LegendEntry, StyleRegistry


class InsufficientAttributesError(ValueError):
    """The layout has fewer numeric attributes than it needs to draw anything."""

    def __init__(self, layout: LayoutKind, found: int, required: int) -> None:
        self.layout = layout
        self.found = found
        self.required = required
        super().__init__(
            f"Not enough numeric attributes for {LAYOUT_TITLES[layout]}: "
            f"need at least {required}, found {found}."
        )


@dataclass
class RowGeometry:
    row: int
    label: Optional[str]
    color: str
    shape: str
    points: np.ndarray
    closed: bool = False
    connect_points: bool = True
    markers: bool = True
    selected: bool = False


@dataclass
class ProjectionResult:
    layout: LayoutKind
    size: PlotSize
    attributes: list[str] = field(default_factory=list)
    rows: list[RowGeometry] = field(default_factory=list)
    axes: list[AxisGuide] = field(default_factory=list)
    circle: Optional[tuple[float, float, float]] = None
    frames: list[PairPlotFrame] = field(default_factory=list)
    legend: list[LegendEntry] = field(default_factory=list)
    skipped_rows: list[int] = field(default_factory=list)

    @property
    def title(self) -> str:
        return LAYOUT_TITLES[self.layout]

    @property
    def empty(self) -> bool:
        return not self.rows

    @property
    def selected_rows(self) -> list[int]:
        return [g.row for g in self.rows if g.selected]


def project(
    layout: LayoutKind | str,
    columns: Sequence[NormalizedColumn],
    class_labels: Optional[Sequence[Optional[str]]],
    column_order: Iterable[int],
    selection: Iterable[int] = (),
    styles: Optional[StyleRegistry] = None,
    size: Optional[PlotSize] = None,
    class_index: int = -1,
) -> ProjectionResult:
    """Project every row of the normalized table under ``layout``.

    Axes are the numeric columns other than ``class_index``, taken in
    ``column_order``. Non-selected rows come first in the result and
    selected rows last, drawn in the highlight color. Rows with an excluded
    (NaN) value are skipped. A table without rows yields an empty result.
    """
    layout = LayoutKind(layout)
    size = size or PlotSize()
    styles = styles or StyleRegistry()
    order = validate_column_order(column_order, len(columns))

    n_rows = len(columns[0].values) if columns else len(class_labels or [])
    if any(len(c.values) != n_rows for c in columns):
        raise ValueError("All columns must have the same number of rows.")
    if class_labels is not None and len(class_labels) != n_rows:
        raise ValueError(f"Expected {n_rows} class labels, got {len(class_labels)}.")

    result = ProjectionResult(layout=layout, size=size)
    if n_rows == 0:
        return result

    attrs = [columns[i] for i in order if columns[i].is_numeric and i != class_index]
    required = MIN_ATTRIBUTES[layout]
    if len(attrs) < required:
        raise InsufficientAttributesError(layout, len(attrs), required)

    values = np.column_stack([np.asarray(c.values, dtype=float) for c in attrs])
    complete = np.all(np.isfinite(values), axis=1)
    geometry = LAYOUTS[layout](np.where(complete[:, None], values, 0.0), [c.name for c in attrs], size)

    result.attributes = [c.name for c in attrs]
    result.axes = geometry.axes
    result.circle = geometry.circle
    result.frames = geometry.frames
    result.legend = styles.legend_entries()
    result.skipped_rows = [int(r) for r in np.flatnonzero(~complete)]

    selected = valid_selection(selection, n_rows)
    draw_order = [r for r in range(n_rows) if r not in selected] + sorted(selected)
    for row in draw_order:
        if not complete[row]:
            continue
        label = class_labels[row] if class_labels is not None else None
        style = styles.style_for(label)
        is_selected = row in selected
        result.rows.append(
            RowGeometry(
                row=row,
                label=label,
                color=HIGHLIGHT_COLOR if is_selected else style.color,
                shape=style.shape,
                points=np.array(geometry.points[row], dtype=float),
                closed=geometry.closed,
                connect_points=True,
                markers=geometry.markers,
                selected=is_selected,
            )
        )
    return result


def _resolve_projection_inputs(
    state: ProjectState,
    layout: Optional[LayoutKind | str] = None,
    column_order: Optional[Iterable[int]] = None,
    selection: Optional[Iterable[int]] = None,
    size: Optional[PlotSize] = None,
):
    plot = state.plot_settings
    layout = layout if layout is not None else plot.layout
    column_order = list(column_order) if column_order is not None else list(state.column_order)
    selection = set(selection) if selection is not None else set(state.selection)
    size = size if size is not None else PlotSize(plot.width, plot.height, plot.margin)
    return LayoutKind(layout), column_order, selection, size


def prepare_projection(
    state: ProjectState,
    *,
    layout: Optional[LayoutKind | str] = None,
    column_order: Optional[Iterable[int]] = None,
    selection: Optional[Iterable[int]] = None,
    size: Optional[PlotSize] = None,
) -> ProjectionResult:
    dataset = require_dataset(state)
    layout, column_order, selection, size = _resolve_projection_inputs(
        state, layout, column_order, selection, size
    )
    columns = normalize_dataset(dataset, state.plot_settings.blank_policy)
    return project(
        layout,
        columns,
        dataset.class_labels(),
        column_order,
        selection,
        styles=state.styles,
        size=size,
        class_index=dataset.class_index,
    )
