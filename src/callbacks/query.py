"""
src/callbacks/query.py
───────────────────────
Free-text query callbacks: submit a question, show the generated view,
return to the dashboard.
"""
from __future__ import annotations

import asyncio

from dash import Input, Output, State, ctx, no_update

from src.data.session import registry
from src.layout.components.generated_view import render_display
from src.layout.composer import HIDDEN, SHOWN


def register(app) -> None:

    @app.callback(
        Output("generated-view", "children"),
        Output("generated-view", "style"),
        Output("dashboard-view", "style"),
        Output("query-input", "value"),
        Input("query-submit", "n_clicks"),
        Input("query-input", "n_submit"),
        Input("query-back", "n_clicks"),
        State("query-input", "value"),
        State("store-session", "data"),
        prevent_initial_call=True,
    )
    def handle_query(n_clicks: int, n_submit: int, n_back: int, query: str | None, session_id: str | None):
        session = registry.get(session_id)
        if session is None:
            return (no_update,) * 4
        resolver = session.query

        if ctx.triggered_id == "query-back":
            resolver.clear()
            return [], HIDDEN, SHOWN, ""

        config = asyncio.run(resolver.submit(query))
        if config is None:
            # blank query, or one still running
            return (no_update,) * 4
        return render_display(config), SHOWN, HIDDEN, no_update
