from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

import pandas as pd

from tabviz.core.datasets import (
    Dataset,
    identity_order,
    move_column,
    validate_column_order,
)
from tabviz.core.layouts import LayoutKind, PlotSize
from tabviz.core.normalize import BlankPolicy
from tabviz.core.styles import ClassStyle, StyleRegistry


@dataclass
class PlotSettings:
    layout: str = LayoutKind.PARALLEL.value
    width: float = 800.0
    height: float = 600.0
    margin: float = 50.0
    blank_policy: str = BlankPolicy.STRICT.value
    use_plotly: bool = False
    class_column: str = ""


@dataclass
class ProjectState:
    """Shared, UI-agnostic state: the loaded table and how it is being viewed."""

    dataset: Optional[Dataset] = None
    column_order: list[int] = field(default_factory=list)
    selection: set[int] = field(default_factory=set)
    styles: StyleRegistry = field(default_factory=StyleRegistry)
    plot_settings: PlotSettings = field(default_factory=PlotSettings)

    @property
    def loaded(self) -> bool:
        return self.dataset is not None

    def clear(self) -> None:
        self.dataset = None
        self.column_order.clear()
        self.selection.clear()
        self.styles = StyleRegistry()
        self.plot_settings = PlotSettings()


def require_dataset(state: ProjectState) -> Dataset:
    if state.dataset is None:
        raise ValueError("No data loaded.")
    return state.dataset


def load_dataset(state: ProjectState, data: Union[Dataset, pd.DataFrame]) -> Dataset:
    """Replace the table wholesale; selection, column order and styles start over."""
    if isinstance(data, Dataset):
        dataset = data
    else:
        dataset = Dataset.from_frame(data, state.plot_settings.class_column or None)
    state.dataset = dataset
    state.column_order = identity_order(dataset)
    state.selection = set()
    state.styles = StyleRegistry.from_labels(dataset.distinct_labels())
    return dataset


def set_layout(state: ProjectState, layout: Union[LayoutKind, str]) -> None:
    try:
        state.plot_settings.layout = LayoutKind(layout).value
    except ValueError:
        choices = ", ".join(k.value for k in LayoutKind)
        raise ValueError(f"Unknown layout '{layout}'. Expected one of: {choices}") from None


def set_blank_policy(state: ProjectState, policy: Union[BlankPolicy, str]) -> None:
    state.plot_settings.blank_policy = BlankPolicy(policy).value


def set_plot_size(state: ProjectState, width: float, height: float, margin: Optional[float] = None) -> None:
    margin = state.plot_settings.margin if margin is None else float(margin)
    PlotSize(float(width), float(height), margin)
    state.plot_settings.width = float(width)
    state.plot_settings.height = float(height)
    state.plot_settings.margin = margin


def set_use_plotly(state: ProjectState, use_plotly: bool) -> None:
    state.plot_settings.use_plotly = bool(use_plotly)


def set_selection(state: ProjectState, rows: Iterable[int]) -> None:
    # stale indices are dropped at render time, not here
    state.selection = {int(r) for r in rows}


def set_column_order(state: ProjectState, order: Iterable[int]) -> None:
    dataset = require_dataset(state)
    state.column_order = validate_column_order(order, dataset.n_columns)


def move_column_in_order(state: ProjectState, column: int, offset: int) -> None:
    state.column_order = move_column(state.column_order, column, offset)


def set_class_style(
    state: ProjectState,
    label: str,
    color: Optional[str] = None,
    shape: Optional[str] = None,
) -> ClassStyle:
    return state.styles.set_override(label, color=color, shape=shape)
