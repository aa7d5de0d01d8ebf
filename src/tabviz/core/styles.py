from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

import numpy as np
from matplotlib.colors import hsv_to_rgb, is_color_like, to_hex

ALERT_COLOR = "#ff0000"
SAFE_COLOR = "#00ff00"
HIGHLIGHT_COLOR = "#ffff00"
DEFAULT_COLOR = "#000000"

ALERT_LABELS = ("malignant", "positive")
SAFE_LABELS = ("benign", "negative")

SHAPE_PALETTE = (
    "circle",
    "square",
    "triangle",
    "star4",
    "star5",
    "star6",
    "star7",
    "star8",
)


@dataclass(frozen=True)
class ClassStyle:
    color: str
    shape: str


DEFAULT_STYLE = ClassStyle(color=DEFAULT_COLOR, shape="circle")


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str
    shape: str
    overridden: bool = False


def canonical_color(label: str) -> Optional[str]:
    key = str(label).strip().lower()
    if key in ALERT_LABELS:
        return ALERT_COLOR
    if key in SAFE_LABELS:
        return SAFE_COLOR
    return None


def hue_color(hue: float) -> str:
    """Fully saturated, full value color at ``hue`` in [0, 1)."""
    return to_hex(hsv_to_rgb((float(hue) % 1.0, 1.0, 1.0)))


def assign_styles(
    labels: Iterable[Optional[str]],
    overrides: Optional[Mapping[str, ClassStyle]] = None,
) -> dict[str, ClassStyle]:
    """Deterministic color and shape per distinct label.

    Canonical pair labels get the fixed alert/safe colors. The remaining
    labels split the hue wheel evenly in first-seen order; the denominator
    counts only those non-canonical labels. Shapes cycle through
    ``SHAPE_PALETTE`` over every label in first-seen order, independently of
    color. Overrides replace the computed style for their label verbatim and
    never shift the colors or shapes of other labels.
    """
    overrides = overrides or {}
    distinct = list(dict.fromkeys(str(lbl) for lbl in labels if lbl is not None))

    colors: dict[str, str] = {}
    remaining: list[str] = []
    for lbl in distinct:
        fixed = canonical_color(lbl)
        if fixed is not None:
            colors[lbl] = fixed
        else:
            remaining.append(lbl)
    for idx, lbl in enumerate(remaining):
        colors[lbl] = hue_color(idx / float(len(remaining)))

    out: dict[str, ClassStyle] = {}
    for idx, lbl in enumerate(distinct):
        if lbl in overrides:
            out[lbl] = overrides[lbl]
        else:
            out[lbl] = ClassStyle(color=colors[lbl], shape=SHAPE_PALETTE[idx % len(SHAPE_PALETTE)])
    return out


@dataclass
class StyleRegistry:
    """Label -> style mapping plus the user overrides that survive re-renders.

    The registry is owned by the caller; reads and writes must be serialized
    by whoever shares it.
    """

    styles: dict[str, ClassStyle] = field(default_factory=dict)
    overrides: dict[str, ClassStyle] = field(default_factory=dict)

    @classmethod
    def from_labels(cls, labels: Iterable[Optional[str]]) -> "StyleRegistry":
        registry = cls()
        registry.rebuild(labels)
        return registry

    def __len__(self) -> int:
        return len(self.styles)

    def __contains__(self, label: object) -> bool:
        return label in self.styles

    def rebuild(self, labels: Iterable[Optional[str]]) -> None:
        self.styles = assign_styles(labels, self.overrides)

    def clear(self) -> None:
        self.styles.clear()
        self.overrides.clear()

    def copy(self) -> "StyleRegistry":
        return StyleRegistry(styles=dict(self.styles), overrides=dict(self.overrides))

    def style_for(self, label: Optional[str]) -> ClassStyle:
        if label is None:
            return DEFAULT_STYLE
        return self.styles.get(str(label), DEFAULT_STYLE)

    def set_override(self, label: str, color: Optional[str] = None, shape: Optional[str] = None) -> ClassStyle:
        if label not in self.styles:
            raise KeyError(f"Unknown class label: {label}")
        current = self.styles[label]
        if color is not None:
            if not is_color_like(color):
                raise ValueError(f"Invalid color: {color!r}")
            color = to_hex(color)
        if shape is not None and shape not in SHAPE_PALETTE:
            raise ValueError(f"Unknown shape '{shape}'. Expected one of: {', '.join(SHAPE_PALETTE)}")
        style = ClassStyle(color=color or current.color, shape=shape or current.shape)
        self.overrides[label] = style
        self.styles[label] = style
        return style

    def clear_override(self, label: str) -> None:
        if self.overrides.pop(label, None) is None:
            return
        self.rebuild(list(self.styles.keys()))

    def legend_entries(self) -> list[LegendEntry]:
        return [
            LegendEntry(label=lbl, color=style.color, shape=style.shape, overridden=lbl in self.overrides)
            for lbl, style in self.styles.items()
        ]


def _star(points: int, outer: float, inner: float) -> np.ndarray:
    step = math.pi / points
    verts = []
    for i in range(2 * points):
        r = outer if i % 2 == 0 else inner
        a = math.pi / 2 + i * step
        verts.append((r * math.cos(a), r * math.sin(a)))
    return np.asarray(verts, dtype=float)


def shape_vertices(shape: str, size: float = 6.0) -> np.ndarray:
    """Outline of a palette shape centred on the origin, y pointing up.

    ``size`` is the bounding width of circle, square and triangle. Stars
    use ``size`` as outer radius and half of it as inner radius.
    """
    h = size / 2.0
    if shape == "circle":
        t = np.linspace(0.0, 2.0 * math.pi, 32, endpoint=False)
        return np.column_stack([h * np.cos(t), h * np.sin(t)])
    if shape == "square":
        return np.asarray([(-h, -h), (h, -h), (h, h), (-h, h)], dtype=float)
    if shape == "triangle":
        return np.asarray([(-h, h), (h, h), (0.0, -h)], dtype=float)
    if shape.startswith("star") and shape in SHAPE_PALETTE:
        return _star(int(shape[4:]), size, size / 2.0)
    raise ValueError(f"Unknown shape: {shape}")
