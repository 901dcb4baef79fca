"""
src/pages/dashboard.py
───────────────────────
Category dashboard: six energy panels, heading filter and query bar.

Static structure; figures and dropdown options are injected via callbacks.
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

from config.settings import settings
from src.layout.charts import empty_figure
from src.layout.composer import HIDDEN, PANELS, Panel

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"

_AVG_KWH_OPTIONS = [
    {"label": "Combined Average", "value": "combined"},
    {"label": "IF1 Average", "value": "IF1"},
    {"label": "IF2 Average", "value": "IF2"},
]

_METRIC_OPTIONS = [
    {"label": "Power Consumption", "value": "consumption"},
    {"label": "Power Factor", "value": "powerFactor"},
]

# panel id → graph id
GRAPH_IDS: dict[str, str] = {
    "panel-department-cost": "graph-department-cost",
    "panel-avg-kwh": "graph-avg-kwh",
    "panel-kwh-parts": "graph-kwh-parts",
    "panel-consumption-molten": "graph-consumption-molten",
    "panel-time-zone": "graph-time-zone",
    "panel-daily-consumption": "graph-daily-consumption",
}


def _dropdown(id_: str, options: list[dict], value: str, width: str = "170px") -> dcc.Dropdown:
    return dcc.Dropdown(
        id=id_,
        options=options,
        value=value,
        clearable=False,
        className="dark-dropdown",
        style={"width": width, "fontSize": ".8rem"},
    )


def _controls(panel_id: str) -> list:
    if panel_id == "panel-avg-kwh":
        return [_dropdown("avg-kwh-mode", _AVG_KWH_OPTIONS, "combined")]
    if panel_id == "panel-kwh-parts":
        return [_dropdown("kwh-parts-machine", [{"label": "All Machines", "value": ""}], "")]
    if panel_id == "panel-daily-consumption":
        return [
            dcc.DatePickerSingle(
                id="daily-date",
                date=settings.DEFAULT_DAY,
                display_format="YYYY-MM-DD",
                className="dark-datepicker",
            ),
            _dropdown("daily-department", [], settings.DEFAULT_DEPARTMENT, width="150px"),
            _dropdown("daily-metric", _METRIC_OPTIONS, "consumption"),
        ]
    return []


def _panel(panel: Panel) -> dbc.Col:
    height = 400 if panel.id == "panel-daily-consumption" else 260
    return dbc.Col(
        html.Div(
            [
                html.Div(
                    [
                        html.Div(panel.heading, className="chart-title"),
                        html.Div(_controls(panel.id), style={"display": "flex", "gap": "8px"}),
                    ],
                    style={"display": "flex", "justifyContent": "space-between", "alignItems": "center",
                           "marginBottom": "8px"},
                ),
                dcc.Loading(
                    dcc.Graph(
                        id=GRAPH_IDS[panel.id],
                        figure=empty_figure(height, "Loading..."),
                        config={"displayModeBar": False},
                    ),
                    type="dot",
                    color="#58a6ff",
                ),
            ],
            className="chart-card",
        ),
        id=panel.id,
        xs=12,
        lg=panel.width,
    )


def layout(category: str) -> html.Div:
    return html.Div(
        [
            dcc.Store(id="store-loaded"),
            dcc.Store(id="store-daily-day", data=settings.DEFAULT_DAY),

            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.Div(
                        [
                            dcc.Link("‹", href="/", style={"fontSize": "1.6rem", "color": MUTED,
                                                           "textDecoration": "none", "marginRight": "12px"}),
                            html.H2(category, className="page-title", style={"margin": 0}),
                        ],
                        style={"display": "flex", "alignItems": "center"},
                    ),
                    dcc.Input(
                        id="panel-search",
                        type="text",
                        value="",
                        placeholder="Search headings...",
                        debounce=False,
                        style={"maxWidth": "360px", "width": "100%", "background": CARD_BG,
                               "border": f"1px solid {BORDER}", "borderRadius": "6px",
                               "color": "#c9d1d9", "padding": "6px 10px"},
                    ),
                ],
                className="page-header",
                style={"display": "flex", "justifyContent": "space-between", "alignItems": "center",
                       "marginBottom": "1rem"},
            ),

            # ── Query bar ─────────────────────────────────────────────────────
            dbc.InputGroup(
                [
                    dbc.Input(id="query-input", placeholder="Ask about your energy data...", value="",
                              n_submit=0, debounce=True),
                    dbc.Button("Ask", id="query-submit", n_clicks=0, color="primary"),
                    dbc.Button("Back to Dashboard", id="query-back", n_clicks=0, color="secondary"),
                ],
                className="mb-3",
            ),

            # ── Generated view (query result) ─────────────────────────────────
            html.Div(id="generated-view", style=HIDDEN),

            # ── Panels ────────────────────────────────────────────────────────
            html.Div(
                dbc.Row([_panel(p) for p in PANELS], className="g-3"),
                id="dashboard-view",
            ),
        ],
        style={"padding": "1.5rem"},
    )
