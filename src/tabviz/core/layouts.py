"""Geometry of the four projection layouts.

Each layout is a pure function of a ``(rows, attributes)`` matrix of values
already normalized to [0, 1], the attribute names and a ``PlotSize``. It
returns per-row point arrays plus the axis guides a renderer needs. All
coordinates are in plot units with the origin at the bottom-left and y
pointing up.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

import numpy as np

Point = tuple[float, float]


class LayoutKind(str, Enum):
    PARALLEL = "parallel"
    STAR = "star"
    CIRCULAR = "circular"
    SHIFTED_PAIRED = "shifted_paired"


LAYOUT_TITLES = {
    LayoutKind.PARALLEL: "Parallel Coordinates",
    LayoutKind.STAR: "Star Coordinates",
    LayoutKind.CIRCULAR: "Circular Coordinates",
    LayoutKind.SHIFTED_PAIRED: "Shifted Paired Coordinates",
}

# shifted paired pairs an odd last attribute with itself, so one is enough everywhere
MIN_ATTRIBUTES = {kind: 1 for kind in LayoutKind}


@dataclass(frozen=True)
class PlotSize:
    width: float = 800.0
    height: float = 600.0
    margin: float = 50.0

    def __post_init__(self) -> None:
        if not (np.isfinite(self.width) and np.isfinite(self.height) and np.isfinite(self.margin)):
            raise ValueError("Plot size must be finite.")
        if self.margin < 0:
            raise ValueError("Plot margin cannot be negative.")
        if self.width <= 2 * self.margin or self.height <= 2 * self.margin:
            raise ValueError(
                f"Plot size {self.width:g}x{self.height:g} leaves no room inside a {self.margin:g} margin."
            )


@dataclass
class AxisGuide:
    label: str
    start: Point
    end: Point
    anchor: Point


@dataclass
class PairPlotFrame:
    index: int
    x_label: str
    y_label: str
    origin: Point
    side: float


@dataclass
class LayoutGeometry:
    points: np.ndarray
    axes: list[AxisGuide] = field(default_factory=list)
    closed: bool = False
    markers: bool = True
    circle: Optional[tuple[float, float, float]] = None
    frames: list[PairPlotFrame] = field(default_factory=list)


def _close(points: np.ndarray) -> np.ndarray:
    return np.concatenate([points, points[:, :1, :]], axis=1)


def _pt(x: float, y: float) -> Point:
    return (float(x), float(y))


def parallel_coordinates(values: np.ndarray, names: Sequence[str], size: PlotSize) -> LayoutGeometry:
    n = len(names)
    left, right = size.margin, size.width - size.margin
    bottom, top = size.margin, size.height - size.margin
    if n == 1:
        xs = np.asarray([(left + right) / 2.0])
    else:
        xs = left + np.arange(n, dtype=float) * (right - left) / (n - 1)
    ys = bottom + values * (top - bottom)
    points = np.stack([np.broadcast_to(xs, values.shape), ys], axis=-1)
    axes = [AxisGuide(name, _pt(x, bottom), _pt(x, top), _pt(x, top)) for name, x in zip(names, xs)]
    return LayoutGeometry(points=points, axes=axes, closed=False, markers=True)


def _center_radius(size: PlotSize) -> tuple[float, float, float]:
    cx = size.width / 2.0
    cy = size.height / 2.0
    return cx, cy, min(size.width, size.height) / 2.0 - size.margin


def star_coordinates(values: np.ndarray, names: Sequence[str], size: PlotSize) -> LayoutGeometry:
    n = len(names)
    cx, cy, radius = _center_radius(size)
    angles = np.arange(n, dtype=float) * 2.0 * math.pi / n
    xs = cx + radius * values * np.cos(angles)
    ys = cy + radius * values * np.sin(angles)
    points = _close(np.stack([xs, ys], axis=-1))
    axes = []
    for name, a in zip(names, angles):
        tip = _pt(cx + radius * math.cos(a), cy + radius * math.sin(a))
        axes.append(AxisGuide(name, _pt(cx, cy), tip, tip))
    return LayoutGeometry(points=points, axes=axes, closed=True, markers=False)


def circular_coordinates(values: np.ndarray, names: Sequence[str], size: PlotSize) -> LayoutGeometry:
    """Values slide each point along its arc segment; the radius never changes.

    Segment i starts at angle ``i * step - pi/2`` and, because y is flipped
    below, runs clockwise from 12 o'clock.
    """
    n = len(names)
    cx, cy, radius = _center_radius(size)
    step = 2.0 * math.pi / n
    offsets = np.arange(n, dtype=float) * step
    theta = offsets + values * step - math.pi / 2.0
    xs = cx + radius * np.cos(theta)
    ys = cy - radius * np.sin(theta)
    points = _close(np.stack([xs, ys], axis=-1))

    anchors = [_pt(cx + radius * math.cos(a - math.pi / 2.0), cy - radius * math.sin(a - math.pi / 2.0))
               for a in offsets]
    axes = [
        AxisGuide(name, anchors[i], anchors[(i + 1) % n], anchors[i])
        for i, name in enumerate(names)
    ]
    return LayoutGeometry(points=points, axes=axes, closed=True, markers=True, circle=(cx, cy, radius))


def attribute_pairs(n: int) -> list[tuple[int, int]]:
    """(0,1), (2,3), ...; an odd last attribute is paired with itself."""
    return [(i, i + 1 if i + 1 < n else i) for i in range(0, n, 2)]


def shifted_paired_coordinates(values: np.ndarray, names: Sequence[str], size: PlotSize) -> LayoutGeometry:
    pairs = attribute_pairs(len(names))
    cell = size.width / len(pairs)
    pad = min(size.margin, cell / 4.0)
    side = min(cell - 2.0 * pad, size.height - 2.0 * size.margin)
    oy = (size.height - side) / 2.0

    frames: list[PairPlotFrame] = []
    axes: list[AxisGuide] = []
    columns = []
    for idx, (a, b) in enumerate(pairs):
        ox = idx * cell + (cell - side) / 2.0
        frames.append(PairPlotFrame(idx, names[a], names[b], _pt(ox, oy), float(side)))
        axes.append(AxisGuide(names[a], _pt(ox, oy), _pt(ox + side, oy), _pt(ox + side / 2.0, oy)))
        axes.append(AxisGuide(names[b], _pt(ox, oy), _pt(ox, oy + side), _pt(ox, oy + side)))
        columns.append(np.stack([ox + side * values[:, a], oy + side * values[:, b]], axis=-1))
    points = np.stack(columns, axis=1)
    return LayoutGeometry(points=points, axes=axes, closed=False, markers=True, frames=frames)


LayoutFunc = Callable[[np.ndarray, Sequence[str], PlotSize], LayoutGeometry]

LAYOUTS: dict[LayoutKind, LayoutFunc] = {
    LayoutKind.PARALLEL: parallel_coordinates,
    LayoutKind.STAR: star_coordinates,
    LayoutKind.CIRCULAR: circular_coordinates,
    LayoutKind.SHIFTED_PAIRED: shifted_paired_coordinates,
}
