"""
src/layout/composer.py
───────────────────────
View composer: the fixed panel registry and the heading filter.

A panel is shown iff its heading contains the filter text
(case-insensitive). The filter only hides panels; it never touches data
and has nothing to do with query resolution.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Panel:
    id: str
    heading: str
    width: int   # bootstrap columns at lg (12 = full row)


PANELS: tuple[Panel, ...] = (
    Panel(id="panel-department-cost", heading="Cost of Energy by Department", width=4),
    Panel(id="panel-avg-kwh", heading="Average KWH/Tonne Trend", width=4),
    Panel(id="panel-kwh-parts", heading="Average KWH/Part", width=4),
    Panel(id="panel-consumption-molten", heading="Consumption and Molten Metal Trend", width=8),
    Panel(id="panel-time-zone", heading="Cost (₹) wrt MSEB Time Zone", width=4),
    Panel(id="panel-daily-consumption", heading="Daily Consumption Trend", width=12),
)

HIDDEN = {"display": "none"}
SHOWN: dict = {}


def matches(heading: str, query: str | None) -> bool:
    return (query or "").lower() in heading.lower()


def visible_panels(query: str | None) -> list[Panel]:
    return [p for p in PANELS if matches(p.heading, query)]


def panel_styles(query: str | None) -> list[dict]:
    """One style per panel, in registry order, for the Dash outputs."""
    return [SHOWN if matches(p.heading, query) else HIDDEN for p in PANELS]
