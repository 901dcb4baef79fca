"""
src/callbacks/navigation.py — Page routing and dashboard session lifecycle.
"""
from __future__ import annotations

from urllib.parse import unquote

from dash import Input, Output, State

from config.settings import settings
from src.data.session import registry

_CATEGORY_PREFIX = "/category/"


def category_from_path(pathname: str | None) -> str:
    """'/category/Melting%20Shop' → 'Melting Shop'; anything else → default."""
    if pathname and pathname.startswith(_CATEGORY_PREFIX):
        name = unquote(pathname[len(_CATEGORY_PREFIX):]).strip("/")
        if name:
            return name
    return settings.DEFAULT_CATEGORY


def register(app) -> None:
    """Register routing callbacks."""
    from src.pages import dashboard

    @app.callback(
        Output("page-content", "children"),
        Output("store-session", "data"),
        Input("url", "pathname"),
        State("store-session", "data"),
    )
    def display_page(pathname: str, previous_session: str | None):
        # Leaving a view tears its session down; late fetch results become no-ops
        registry.close(previous_session)
        session_id = registry.open()
        return dashboard.layout(category_from_path(pathname)), session_id
