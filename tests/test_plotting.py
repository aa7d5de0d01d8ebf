import numpy as np
import pytest
from matplotlib.figure import Figure
from matplotlib.path import Path

from tabviz.core.layouts import LayoutKind
from tabviz.core.projection import prepare_projection
from tabviz.core.state import set_selection
from tabviz.core.styles import HIGHLIGHT_COLOR, SHAPE_PALETTE
from tabviz.plotting import mpl_figures, plotly_figures
from tabviz.plotting.helpers import mpl_marker, plotly_symbol, segment_xy


class TestHelpers:
    @pytest.mark.parametrize("shape", SHAPE_PALETTE)
    def test_every_shape_has_markers(self, shape):
        assert mpl_marker(shape) is not None
        assert plotly_symbol(shape)

    def test_star_marker_is_outline(self):
        marker = mpl_marker("star6")
        assert isinstance(marker, Path)
        assert len(marker.vertices) == 13
        radii = np.hypot(*marker.vertices[:-1].T)
        np.testing.assert_allclose(radii[::2], 6.0)
        np.testing.assert_allclose(radii[1::2], 3.0)

    def test_unknown_shape(self):
        with pytest.raises(ValueError):
            mpl_marker("hexagon")
        with pytest.raises(ValueError):
            plotly_symbol("hexagon")

    def test_segment_xy_closes_open_ring(self):
        pts = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]])
        x, y = segment_xy(pts, closed=True)
        assert list(x) == [0.0, 1.0, 1.0, 0.0]
        assert list(y) == [0.0, 0.0, 1.0, 0.0]


class TestMatplotlib:
    @pytest.mark.parametrize("layout", list(LayoutKind))
    def test_selected_row_drawn_last(self, flower_state, layout):
        set_selection(flower_state, [2])
        result = prepare_projection(flower_state, layout=layout)
        fig = mpl_figures.projection_figure(result)
        assert isinstance(fig, Figure)
        ax = fig.axes[0]
        assert ax.lines[-1].get_color() == HIGHLIGHT_COLOR
        assert ax.get_title() == result.title
        assert ax.get_legend() is not None

    def test_star_rows_have_no_markers(self, flower_state):
        result = prepare_projection(flower_state, layout=LayoutKind.STAR)
        ax = mpl_figures.projection_figure(result).axes[0]
        row_lines = [ln for ln in ax.lines if ln.get_color() != "#000000"]
        assert len(row_lines) == len(result.rows)
        assert all(ln.get_marker() in ("None", "", None) for ln in row_lines)

    def test_circle_patch(self, flower_state):
        result = prepare_projection(flower_state, layout=LayoutKind.CIRCULAR)
        ax = mpl_figures.projection_figure(result).axes[0]
        assert len(ax.patches) == 1

    def test_savefig(self, flower_state, tmp_path):
        result = prepare_projection(flower_state)
        out = tmp_path / "plot.png"
        mpl_figures.projection_figure(result).savefig(out)
        assert out.stat().st_size > 0


class TestPlotly:
    def test_one_trace_per_row(self, flower_state):
        set_selection(flower_state, [0, 3])
        result = prepare_projection(flower_state, layout=LayoutKind.SHIFTED_PAIRED)
        fig = plotly_figures.projection_figure(result)
        assert len(fig.data) == len(result.rows)
        assert [t.line.color for t in fig.data[-2:]] == [HIGHLIGHT_COLOR, HIGHLIGHT_COLOR]
        assert fig.data[-1].name == "Selected"
        legend_names = [t.name for t in fig.data if t.showlegend]
        assert legend_names == ["setosa", "versicolor", "virginica", "Selected"]

    def test_star_is_lines_only(self, flower_state):
        result = prepare_projection(flower_state, layout=LayoutKind.STAR)
        fig = plotly_figures.projection_figure(result)
        assert {t.mode for t in fig.data} == {"lines"}
        assert fig.layout.yaxis.scaleanchor == "x"

    def test_axis_labels(self, flower_state):
        result = prepare_projection(flower_state, layout=LayoutKind.PARALLEL)
        fig = plotly_figures.projection_figure(result)
        assert [a.text for a in fig.layout.annotations] == result.attributes
