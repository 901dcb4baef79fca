"""
src/layout/components/generated_view.py
────────────────────────────────────────
Renders a resolved DisplayConfig: a chart or a row of metric cards.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.data.models import CardsDisplay, ChartDisplay
from src.layout.charts import display_figure
from src.layout.components.kpi_card import metric_card


def render_display(config: ChartDisplay | CardsDisplay) -> html.Div:
    if isinstance(config, ChartDisplay):
        return html.Div(
            dcc.Graph(figure=display_figure(config.chartConfig), config={"displayModeBar": False}),
            className="chart-card",
        )
    return html.Div(
        dbc.Row(
            [dbc.Col(metric_card(card), xs=12, md=6, lg=4) for card in config.cards],
            className="g-3",
        )
    )
