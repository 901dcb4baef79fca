"""
src/callbacks/dashboard.py
───────────────────────────
Dashboard page callbacks.

Mount loads all six aggregates concurrently; each panel then renders from
its own fetcher state. A panel whose fetcher is not `ready` keeps what it
already shows (no_update).
"""
from __future__ import annotations

import asyncio

from dash import Input, Output, State, no_update

from config.energy import LIMITS
from src.analytics.daily_slice import accept_date, date_bounds, department_options, slice_or_empty
from src.analytics.formatting import format_day_label, format_day_month
from src.analytics.transforms import ChartData
from src.data.models import FetchStatus
from src.data.session import registry
from src.layout.charts import dataset_figure, department_figure, stacked_cost_figure
from src.layout.composer import PANELS, panel_styles


def current_data(session_id: str | None, name: str, **inputs):
    """
    Data of a ready fetcher, else None.

    With control values given, a state produced for other values is
    refreshed first, so the figure always matches the selector.
    """
    session = registry.get(session_id)
    if session is None:
        return None
    state = session.fetchers[name].state
    if inputs:
        state = asyncio.run(session.ensure(name, **inputs))
    return state.data if state.status is FetchStatus.READY else None


def register(app) -> None:

    # ── Mount: fetch everything ───────────────────────────────────────────────
    @app.callback(
        Output("store-loaded", "data"),
        Input("store-session", "data"),
        State("avg-kwh-mode", "value"),
        State("kwh-parts-machine", "value"),
    )
    def load_dashboard(session_id: str | None, mode: str | None, machine: str | None):
        session = registry.get(session_id)
        if session is None:
            return no_update
        states = asyncio.run(session.load_all(avg_kwh_mode=mode or "combined", machine=machine or None))
        return {name: state.status.value for name, state in states.items()}

    # ── Heading filter ────────────────────────────────────────────────────────
    @app.callback(
        [Output(p.id, "style") for p in PANELS],
        Input("panel-search", "value"),
    )
    def filter_panels(query: str | None):
        return panel_styles(query)

    # ── Department cost ───────────────────────────────────────────────────────
    @app.callback(
        Output("graph-department-cost", "figure"),
        Input("store-loaded", "data"),
        State("store-session", "data"),
    )
    def update_department_cost(loaded: dict | None, session_id: str | None):
        chart: ChartData | None = current_data(session_id, "department_cost")
        if chart is None:
            return no_update
        return department_figure(chart.dataset, chart.total or 0.0)

    # ── Average KWH/Tonne ─────────────────────────────────────────────────────
    @app.callback(
        Output("graph-avg-kwh", "figure"),
        Input("store-loaded", "data"),
        Input("avg-kwh-mode", "value"),
        State("store-session", "data"),
    )
    def update_avg_kwh(loaded: dict | None, mode: str | None, session_id: str | None):
        chart: ChartData | None = current_data(session_id, "avg_kwh", mode=mode or "combined")
        if chart is None:
            return no_update
        return dataset_figure(
            chart.dataset,
            y_min=chart.y_min,
            threshold=chart.threshold,
            x_title="Date",
            y_title="KWH/Tonne",
            tick_text=[format_day_label(label) for label in chart.dataset.labels],
        )

    # ── KWH per part ──────────────────────────────────────────────────────────
    @app.callback(
        Output("graph-kwh-parts", "figure"),
        Output("kwh-parts-machine", "options"),
        Input("store-loaded", "data"),
        Input("kwh-parts-machine", "value"),
        State("store-session", "data"),
    )
    def update_kwh_parts(loaded: dict | None, machine: str | None, session_id: str | None):
        chart: ChartData | None = current_data(session_id, "kwh_parts", machine=machine or None)
        if chart is None:
            return no_update, no_update
        options = [{"label": "All Machines", "value": ""}] + [{"label": m, "value": m} for m in chart.machines]
        fig = dataset_figure(
            chart.dataset,
            y_min=chart.y_min,
            x_title="Date",
            y_title="KWH/Part",
            tick_text=[format_day_month(label) for label in chart.dataset.labels],
        )
        return fig, options

    # ── Consumption vs molten metal ───────────────────────────────────────────
    @app.callback(
        Output("graph-consumption-molten", "figure"),
        Input("store-loaded", "data"),
        State("store-session", "data"),
    )
    def update_consumption_molten(loaded: dict | None, session_id: str | None):
        chart: ChartData | None = current_data(session_id, "consumption_molten")
        if chart is None:
            return no_update
        return dataset_figure(
            chart.dataset,
            y_min=chart.y_min,
            x_title="Date",
            y_title="Consumption (kWh/Tonne)",
            tick_text=[format_day_month(label) for label in chart.dataset.labels],
        )

    # ── MSEB time-zone cost ───────────────────────────────────────────────────
    @app.callback(
        Output("graph-time-zone", "figure"),
        Input("store-loaded", "data"),
        State("store-session", "data"),
    )
    def update_time_zone(loaded: dict | None, session_id: str | None):
        chart: ChartData | None = current_data(session_id, "time_zone")
        if chart is None:
            return no_update
        return stacked_cost_figure(
            chart.dataset,
            tick_text=[format_day_label(label).replace(" ", "<br>") for label in chart.dataset.labels],
            totals=chart.totals,
        )

    # ── Daily consumption ─────────────────────────────────────────────────────
    @app.callback(
        Output("graph-daily-consumption", "figure"),
        Output("daily-department", "options"),
        Output("daily-date", "min_date_allowed"),
        Output("daily-date", "max_date_allowed"),
        Output("daily-date", "date"),
        Output("store-daily-day", "data"),
        Input("store-loaded", "data"),
        Input("daily-date", "date"),
        Input("daily-department", "value"),
        Input("daily-metric", "value"),
        State("store-daily-day", "data"),
        State("store-session", "data"),
    )
    def update_daily(
        loaded: dict | None,
        picked: str | None,
        department: str,
        metric: str,
        current_day: str,
        session_id: str | None,
    ):
        days = current_data(session_id, "daily_consumption")
        if days is None:
            return (no_update,) * 6
        day = accept_date(days, (picked or "")[:10], current_day)
        dataset = slice_or_empty(days, day, department, metric)
        first, last = date_bounds(days)
        fig = dataset_figure(
            dataset,
            height=400,
            y_range=LIMITS.power_factor_range if metric == "powerFactor" else None,
            x_title="Hours of the Day",
            y_title="Power Factor" if metric == "powerFactor" else "Consumption (kWh)",
        )
        options = [{"label": d, "value": d} for d in department_options(days)]
        return fig, options, first, last, day, day
