"""
src/layout/charts.py
─────────────────────
AggregateDataset / ChartConfig → Plotly figures.

Rendering rules:
  - None values are gaps (connectgaps=False), never zero
  - per-point colors come from SeriesStyle.colors, resolved by point_style()
  - series sharing a stack id are drawn as stacked bars
"""
from __future__ import annotations

import plotly.graph_objects as go

from src.analytics.formatting import format_inr, format_inr_k, share_pct
from src.analytics.thresholds import ThresholdLine, point_style
from src.data.models import AggregateDataset, ChartConfig, Series

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"


def _layout(height: int = 260) -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 10, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "xaxis": {"gridcolor": GRID_CLR},
        "yaxis": {"gridcolor": GRID_CLR},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}, "orientation": "h", "y": 1.1},
        "height": height,
        "showlegend": True,
    }


def empty_figure(height: int = 260, message: str = "") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(**_layout(height))
    if message:
        fig.add_annotation(text=message, showarrow=False, font={"color": MUTED, "size": 12},
                           xref="paper", yref="paper", x=0.5, y=0.5)
    return fig


def _marker_colors(dataset: AggregateDataset, i: int) -> list[str | None] | str | None:
    s = dataset.series[i]
    if s.style.colors is None:
        return s.style.color
    return [point_style(dataset, i, j) for j in range(len(s.values))]


def _trace(dataset: AggregateDataset, i: int) -> go.Scatter | go.Bar:
    s: Series = dataset.series[i]
    colors = _marker_colors(dataset, i)
    if s.style.kind == "bar":
        return go.Bar(
            x=dataset.labels,
            y=s.values,
            name=s.name,
            marker={"color": colors},
        )
    return go.Scatter(
        x=dataset.labels,
        y=s.values,
        name=s.name,
        mode="lines+markers",
        connectgaps=False,
        line={"color": s.style.color, "width": 2, "shape": "spline", "dash": s.style.dash},
        marker={"color": colors, "size": 7, "line": {"color": colors, "width": 1}},
        fill="tozeroy" if s.style.fill else None,
    )


def _value_max(dataset: AggregateDataset) -> float | None:
    present = [v for s in dataset.series for v in s.values if v is not None]
    return max(present) if present else None


def dataset_figure(
    dataset: AggregateDataset,
    height: int = 260,
    y_min: float | None = None,
    y_range: tuple[float, float] | None = None,
    threshold: ThresholdLine | None = None,
    x_title: str = "",
    y_title: str = "",
    tick_text: list[str] | None = None,
) -> go.Figure:
    """Line/bar chart for any non-pie dataset."""
    if dataset.is_empty:
        return empty_figure(height)

    fig = go.Figure()
    for i in range(len(dataset.series)):
        fig.add_trace(_trace(dataset, i))

    layout = _layout(height)
    if any(s.style.stack for s in dataset.series):
        layout["barmode"] = "stack"
    fig.update_layout(**layout)
    fig.update_xaxes(title_text=x_title, type="category")
    fig.update_yaxes(title_text=y_title)

    if tick_text is not None:
        fig.update_xaxes(tickmode="array", tickvals=dataset.labels, ticktext=tick_text)

    if threshold is not None:
        fig.add_hline(
            y=threshold.y,
            line_dash=threshold.dash,
            line_color=threshold.color,
            line_width=threshold.width,
            annotation_text=threshold.label,
            annotation_position="top right",
            annotation_font_color=threshold.color,
            annotation_font_size=9,
        )

    if y_range is not None:
        fig.update_yaxes(range=list(y_range))
    elif y_min is not None:
        top = max(_value_max(dataset) or y_min, threshold.y if threshold else y_min)
        fig.update_yaxes(range=[y_min, top * 1.05 if top > 0 else 1.0])
    return fig


def stacked_cost_figure(
    dataset: AggregateDataset,
    height: int = 260,
    tick_text: list[str] | None = None,
    totals: dict[str, float] | None = None,
) -> go.Figure:
    """Stacked zone costs; y ticks in thousands of ₹, period total per zone in the legend."""
    fig = dataset_figure(dataset, height=height, x_title="Date", y_title="Cost (₹)", tick_text=tick_text)
    if not dataset.is_empty:
        peak = max(sum(s.values[j] or 0.0 for s in dataset.series) for j in range(len(dataset.labels)))
        step = max(peak / 5, 1.0)
        ticks = [step * k for k in range(7)]
        fig.update_yaxes(tickmode="array", tickvals=ticks, ticktext=[format_inr_k(t) for t in ticks])
    for trace in fig.data:
        zone = trace.name
        trace.hovertemplate = f"{zone}: ₹%{{y:,.0f}}<extra></extra>"
        if totals and zone in totals:
            trace.name = f"{zone} ({format_inr(totals[zone])})"
    return fig


def department_figure(dataset: AggregateDataset, total: float, height: int = 260) -> go.Figure:
    """Doughnut of department cost with the period total in the centre."""
    if dataset.is_empty:
        return empty_figure(height)
    s = dataset.series[0]
    values = [v or 0.0 for v in s.values]
    fig = go.Figure(
        go.Pie(
            labels=dataset.labels,
            values=values,
            hole=0.7,
            sort=False,
            marker={"colors": s.style.colors},
            customdata=[[format_inr(v), f"{share_pct(v, total):.1f}%"] for v in values],
            hovertemplate="%{label}<br>%{customdata[0]} (%{customdata[1]})<extra></extra>",
            textinfo="none",
        )
    )
    fig.update_layout(**_layout(height))
    fig.update_layout(legend={"orientation": "h", "y": -0.1})
    fig.add_annotation(
        text=f"<b>Total</b><br>{format_inr(total)}",
        showarrow=False,
        font={"color": "#c9d1d9", "size": 13},
        x=0.5, y=0.5, xref="paper", yref="paper",
    )
    return fig


def display_figure(config: ChartConfig, height: int = 360) -> go.Figure:
    """Chart produced by the query service."""
    chart_type = config.type.lower()
    fig = go.Figure()
    for ds in config.datasets:
        color = ds.backgroundColor if ds.backgroundColor is not None else ds.borderColor
        if chart_type in ("pie", "doughnut"):
            fig.add_trace(go.Pie(
                labels=config.labels,
                values=[v or 0.0 for v in ds.data],
                name=ds.label,
                hole=0.6 if chart_type == "doughnut" else 0.0,
                marker={"colors": color if isinstance(color, list) else None},
            ))
        elif chart_type == "line":
            fig.add_scatter(x=config.labels, y=ds.data, name=ds.label, mode="lines+markers",
                            connectgaps=False, line={"color": ds.borderColor})
        else:
            fig.add_bar(x=config.labels, y=ds.data, name=ds.label, marker={"color": color})
    fig.update_layout(**_layout(height))
    if config.title:
        fig.update_layout(title={"text": config.title, "font": {"size": 13, "color": MUTED}},
                          margin={"l": 10, "r": 10, "t": 40, "b": 10})
    return fig
