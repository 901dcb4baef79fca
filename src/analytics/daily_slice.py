"""
src/analytics/daily_slice.py
─────────────────────────────
Daily-slice selector: one day × one department × one metric → a
24-hour multi-series dataset (one series per machine).

A missing hour or metric becomes None (a gap), never 0: a gap must not
read as zero consumption.
"""
from __future__ import annotations

from config.energy import DAILY_METRICS, DEFAULT_MACHINE_COLOR, MACHINE_COLORS
from src.data.errors import NoMatchingSlice
from src.data.models import AggregateDataset, DailyConsumptionDay, Series, SeriesStyle

HOURS: list[str] = [str(h) for h in range(24)]


def find_day(days: list[DailyConsumptionDay], selected_date: str) -> DailyConsumptionDay:
    for day in days:
        if day.date == selected_date:
            return day
    raise NoMatchingSlice(f"no consumption data for {selected_date}")


def select_daily_slice(
    days: list[DailyConsumptionDay],
    selected_date: str,
    department: str,
    metric: str = "consumption",
) -> AggregateDataset | None:
    """
    Build the hourly dataset for a selection.

    Returns None when the day is absent or the department has no entry
    for that day.
    """
    if metric not in DAILY_METRICS:
        raise ValueError(f"unknown daily metric: {metric!r}")
    try:
        day = find_day(days, selected_date)
    except NoMatchingSlice:
        return None
    machines = day.departments.get(department)
    if machines is None:
        return None

    series = []
    for machine_id, hourly in machines.items():
        values = []
        for hour in HOURS:
            sample = hourly.get(hour)
            values.append(getattr(sample, metric) if sample is not None else None)
        series.append(
            Series(
                name=f"{machine_id} {DAILY_METRICS[metric]}",
                values=values,
                style=SeriesStyle(kind="line", color=MACHINE_COLORS.get(machine_id, DEFAULT_MACHINE_COLOR)),
            )
        )
    return AggregateDataset(labels=list(HOURS), series=series)


def slice_or_empty(
    days: list[DailyConsumptionDay] | None,
    selected_date: str,
    department: str,
    metric: str = "consumption",
) -> AggregateDataset:
    """Same as select_daily_slice, with no match rendered as an empty chart."""
    if not days:
        return AggregateDataset.empty()
    return select_daily_slice(days, selected_date, department, metric) or AggregateDataset.empty()


def department_options(days: list[DailyConsumptionDay] | None) -> list[str]:
    """Departments of the first day, in payload order."""
    if not days:
        return []
    return list(days[0].departments)


def date_bounds(days: list[DailyConsumptionDay] | None) -> tuple[str | None, str | None]:
    if not days:
        return None, None
    return days[0].date, days[-1].date


def accept_date(days: list[DailyConsumptionDay] | None, requested: str, current: str) -> str:
    """A picked date is taken only if the data has that day."""
    if days and any(day.date == requested for day in days):
        return requested
    return current
