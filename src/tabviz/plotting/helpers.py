import numpy as np
from matplotlib.path import Path

from tabviz.core.styles import SHAPE_PALETTE, shape_vertices

PLOT_BACKGROUND = "#c0c0c0"
AXIS_COLOR = "#000000"

_PLOTLY_SYMBOLS = {
    "circle": "circle",
    "square": "square",
    "triangle": "triangle-down",
    "star4": "star-diamond",
    "star5": "star",
    "star6": "hexagram",
    "star7": "star-triangle-up",
    "star8": "star-square",
}


def mpl_marker(shape: str):
    """matplotlib marker spec for a palette shape."""
    if shape == "circle":
        return "o"
    if shape == "square":
        return "s"
    if shape == "triangle":
        return "v"
    if shape.startswith("star") and shape in SHAPE_PALETTE:
        verts = shape_vertices(shape)
        return Path(np.vstack([verts, verts[:1]]), closed=True)
    raise ValueError(f"Unknown shape: {shape}")


def plotly_symbol(shape: str) -> str:
    try:
        return _PLOTLY_SYMBOLS[shape]
    except KeyError:
        raise ValueError(f"Unknown shape: {shape}") from None


def segment_xy(points, closed: bool):
    """x and y arrays for a row's connecting line."""
    x = points[:, 0]
    y = points[:, 1]
    if closed and len(points) and not (points[0] == points[-1]).all():
        x = list(x) + [x[0]]
        y = list(y) + [y[0]]
    return x, y
