from __future__ import annotations

import plotly.graph_objects as go

from tabviz.core.layouts import LayoutKind
from tabviz.core.projection import ProjectionResult
from tabviz.plotting.helpers import AXIS_COLOR, PLOT_BACKGROUND, plotly_symbol, segment_xy


def projection_figure(result: ProjectionResult, line_width: float = 1.0, highlight_width: float = 2.0) -> go.Figure:
    """Interactive figure with one trace per row, in result (draw) order."""
    fig = go.Figure()

    if result.circle is not None:
        cx, cy, r = result.circle
        fig.add_shape(type="circle", x0=cx - r, y0=cy - r, x1=cx + r, y1=cy + r,
                      line=dict(color=AXIS_COLOR, width=1))
    for guide in result.axes:
        if result.layout is not LayoutKind.CIRCULAR:
            fig.add_shape(type="line", x0=guide.start[0], y0=guide.start[1],
                          x1=guide.end[0], y1=guide.end[1], line=dict(color=AXIS_COLOR, width=1))
        fig.add_annotation(x=guide.anchor[0], y=guide.anchor[1], text=guide.label,
                           showarrow=False, yshift=10)

    seen: set = set()
    for geom in result.rows:
        name = "Selected" if geom.selected else str(geom.label if geom.label is not None else "")
        group = "__selected__" if geom.selected else name
        if geom.connect_points and geom.markers:
            mode = "lines+markers"
        elif geom.markers:
            mode = "markers"
        else:
            mode = "lines"
        x, y = segment_xy(geom.points, geom.closed)
        fig.add_scatter(
            x=list(x),
            y=list(y),
            mode=mode,
            name=name,
            legendgroup=group,
            showlegend=group not in seen,
            line=dict(color=geom.color, width=highlight_width if geom.selected else line_width),
            marker=dict(color=geom.color, size=7, symbol=plotly_symbol(geom.shape)),
            hovertext=f"row {geom.row}",
        )
        seen.add(group)

    fig.update_layout(
        title=result.title,
        plot_bgcolor=PLOT_BACKGROUND,
        width=int(result.size.width),
        height=int(result.size.height),
        showlegend=bool(seen),
    )
    fig.update_xaxes(range=[0, result.size.width], showgrid=False, zeroline=False, showticklabels=False)
    fig.update_yaxes(range=[0, result.size.height], showgrid=False, zeroline=False, showticklabels=False)
    if result.layout in (LayoutKind.STAR, LayoutKind.CIRCULAR):
        fig.update_yaxes(scaleanchor="x", scaleratio=1)
    return fig
