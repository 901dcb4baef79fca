"""
src/layout/components/kpi_card.py
──────────────────────────────────
Metric card component for query results.
"""
from dash import html

from src.data.models import MetricCard, Trend

CARD_BG = "#161b22"
MUTED = "#8b949e"

TREND_STYLE: dict[Trend, tuple[str, str]] = {
    Trend.UP: ("▲", "#2ea44f"),
    Trend.DOWN: ("▼", "#da3633"),
    Trend.NEUTRAL: ("●", MUTED),
}


def metric_card(card: MetricCard, border_color: str = "#30363d") -> html.Div:
    """
    Compact metric card.

    Args:
        card: Title, value, unit, description and trend to show
        border_color: Card border color
    """
    arrow, color = TREND_STYLE[card.trend]
    value = [html.Span(card.value)]
    if card.unit:
        value.append(html.Span(f" {card.unit}", style={"fontSize": ".8rem", "color": MUTED}))

    children = [
        html.Div(
            [
                html.Span(card.title),
                html.Span(arrow, style={"color": color, "marginLeft": "6px"}),
            ],
            style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"},
        ),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color, "lineHeight": "1.2", "marginTop": "2px"}),
    ]
    if card.description:
        children.append(
            html.Div(card.description, style={"fontSize": ".72rem", "color": MUTED, "marginTop": "6px"})
        )

    return html.Div(
        children,
        className="metric-card",
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border_color}",
            "borderRadius": "8px",
            "padding": "14px 16px",
            "minWidth": "160px",
        },
    )
