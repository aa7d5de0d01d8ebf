from __future__ import annotations

import argparse
import sys

from tabviz.core.datasets import resolve_column_order
from tabviz.core.layouts import LayoutKind
from tabviz.core.normalize import BlankPolicy
from tabviz.core.projection import InsufficientAttributesError, prepare_projection
from tabviz.core.state import (
    ProjectState,
    load_dataset,
    set_blank_policy,
    set_class_style,
    set_column_order,
    set_layout,
    set_plot_size,
    set_selection,
    set_use_plotly,
)
from tabviz.core.stats import format_summary
from tabviz.data.loaders import load_csv_file
from tabviz.utils.log import log_event, log_events, log_exception
from tabviz.version import APP_TITLE, BUILD_VERSION


def _int_list(text: str) -> list[int]:
    out = []
    for part in str(text).split(","):
        part = part.strip()
        if not part:
            continue
        try:
            out.append(int(part))
        except ValueError:
            raise argparse.ArgumentTypeError(f"Not a row index: {part!r}") from None
    return out


def _size(text: str) -> tuple[float, float]:
    try:
        w, h = str(text).lower().split("x", 1)
        return float(w), float(h)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Size must look like 800x600, got {text!r}") from None


def _style(text: str) -> tuple[str, str, str]:
    label, sep, rest = str(text).partition("=")
    if not sep or not label:
        raise argparse.ArgumentTypeError(f"Style must look like LABEL=COLOR[:SHAPE], got {text!r}")
    color, _, shape = rest.partition(":")
    return label, color, shape


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tabviz", description=APP_TITLE)
    parser.add_argument("csv", help="CSV file with a header row")
    parser.add_argument("--layout", default=LayoutKind.PARALLEL.value,
                        choices=[k.value for k in LayoutKind])
    parser.add_argument("--order", default="", help="comma separated column names to put first")
    parser.add_argument("--select", type=_int_list, default=[], help="comma separated row indices")
    parser.add_argument("--size", type=_size, default=(800.0, 600.0), help="plot size, e.g. 800x600")
    parser.add_argument("--margin", type=float, default=50.0)
    parser.add_argument("--class-column", default="", help="class column name (default: 'class')")
    parser.add_argument("--tolerant", action="store_true",
                        help="skip rows with blank numeric cells instead of dropping the column")
    parser.add_argument("--style", type=_style, action="append", default=[],
                        help="override a class style, LABEL=COLOR[:SHAPE]")
    parser.add_argument("--plotly", action="store_true", help="render with plotly instead of matplotlib")
    parser.add_argument("--out", default="", help="output image (.png/.svg/.pdf) or .html with --plotly")
    parser.add_argument("--summary", action="store_true", help="print column statistics and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {BUILD_VERSION}")
    return parser


def _configure(state: ProjectState, ns: argparse.Namespace) -> None:
    state.plot_settings.class_column = ns.class_column
    set_layout(state, ns.layout)
    set_plot_size(state, ns.size[0], ns.size[1], ns.margin)
    set_blank_policy(state, BlankPolicy.TOLERANT if ns.tolerant else BlankPolicy.STRICT)
    set_use_plotly(state, ns.plotly)


def _render(state: ProjectState, out: str) -> str:
    result = prepare_projection(state)
    log_event("render", f"{result.title}: {len(result.rows)} row(s), {len(result.attributes)} attribute(s)")
    if result.skipped_rows:
        log_events("render skipped row", result.skipped_rows)

    if state.plot_settings.use_plotly:
        import plotly.io as pio
        from tabviz.plotting.plotly_figures import projection_figure

        fig = projection_figure(result)
        if out:
            pio.write_html(fig, file=out, auto_open=False, include_plotlyjs="cdn")
        else:
            fig.show()
    elif out:
        from tabviz.plotting.mpl_figures import projection_figure

        projection_figure(result).savefig(out, dpi=100, bbox_inches="tight")
    else:
        import matplotlib.pyplot as plt
        from tabviz.plotting.mpl_figures import draw_projection

        fig, ax = plt.subplots(figsize=(state.plot_settings.width / 100.0, state.plot_settings.height / 100.0))
        draw_projection(ax, result)
        plt.show()
    return f"Plotted {len(result.rows)} row(s) with {result.title}."


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    ns = build_parser().parse_args(args)

    state = ProjectState()
    try:
        _configure(state, ns)
        dataset = load_dataset(state, load_csv_file(ns.csv))
        log_event("load", f"{ns.csv}: {dataset.n_rows} row(s), {dataset.n_columns} column(s)")
        if ns.summary:
            print(format_summary(dataset))
            return 0
        if ns.order:
            set_column_order(state, resolve_column_order(dataset, [c.strip() for c in ns.order.split(",") if c.strip()]))
        set_selection(state, ns.select)
        for label, color, shape in ns.style:
            set_class_style(state, label, color=color or None, shape=shape or None)
        print(_render(state, ns.out))
        return 0
    except InsufficientAttributesError as exc:
        log_event("render", str(exc))
        print(str(exc), file=sys.stderr)
        return 2
    except Exception as exc:
        log_exception(f"tabviz {' '.join(args)}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
