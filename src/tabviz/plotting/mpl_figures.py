from __future__ import annotations

from typing import Optional

from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle

from tabviz.core.layouts import LayoutKind
from tabviz.core.projection import ProjectionResult
from tabviz.plotting.helpers import AXIS_COLOR, PLOT_BACKGROUND, mpl_marker, segment_xy


def _draw_axes(ax, result: ProjectionResult) -> None:
    if result.circle is not None:
        cx, cy, r = result.circle
        ax.add_patch(Circle((cx, cy), r, fill=False, color=AXIS_COLOR, linewidth=1.0))
    for guide in result.axes:
        if result.layout is not LayoutKind.CIRCULAR:
            ax.plot(
                [guide.start[0], guide.end[0]],
                [guide.start[1], guide.end[1]],
                color=AXIS_COLOR,
                linewidth=1.0,
            )
        ha = "center"
        va = "bottom"
        if result.layout is LayoutKind.SHIFTED_PAIRED and guide.start[1] == guide.end[1]:
            va = "top"
        ax.annotate(guide.label, xy=guide.anchor, xytext=(0, 4 if va == "bottom" else -4),
                    textcoords="offset points", ha=ha, va=va, fontsize=9)


def draw_projection(
    ax,
    result: ProjectionResult,
    *,
    line_width: float = 1.0,
    highlight_width: float = 2.0,
    marker_size: float = 5.0,
    show_legend: bool = True,
) -> None:
    """Draw a projection onto a matplotlib axes in result order.

    Each row draws its connecting line and then its markers before the next
    row starts, so selected rows (last in the result) end up on top.
    """
    ax.set_facecolor(PLOT_BACKGROUND)
    ax.set_xlim(0.0, result.size.width)
    ax.set_ylim(0.0, result.size.height)
    ax.set_aspect("equal" if result.layout in (LayoutKind.STAR, LayoutKind.CIRCULAR) else "auto")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(result.title, pad=12)
    _draw_axes(ax, result)

    for geom in result.rows:
        width = highlight_width if geom.selected else line_width
        if geom.connect_points and len(geom.points) > 1:
            x, y = segment_xy(geom.points, geom.closed)
            ax.plot(x, y, color=geom.color, linewidth=width)
        if geom.markers:
            pts = geom.points[:-1] if geom.closed else geom.points
            ax.plot(
                pts[:, 0],
                pts[:, 1],
                linestyle="none",
                marker=mpl_marker(geom.shape),
                markersize=marker_size,
                color=geom.color,
            )

    if show_legend and result.legend:
        handles = [
            Line2D([0], [0], color=e.color, marker=mpl_marker(e.shape), linestyle="none", label=e.label)
            for e in result.legend
        ]
        ax.legend(handles=handles, loc="upper center", bbox_to_anchor=(0.5, -0.02),
                  ncol=min(len(handles), 6), frameon=False)


def projection_figure(
    result: ProjectionResult,
    figsize: Optional[tuple[float, float]] = None,
    dpi: int = 100,
    **draw_kwargs,
) -> Figure:
    if figsize is None:
        figsize = (result.size.width / dpi, result.size.height / dpi)
    fig = Figure(figsize=figsize, dpi=dpi)
    ax = fig.add_subplot(111)
    draw_projection(ax, result, **draw_kwargs)
    fig.subplots_adjust(left=0.02, right=0.98, top=0.92, bottom=0.1)
    return fig
