"""
src/analytics/transforms.py
────────────────────────────
Raw aggregate rows → chart-ready datasets, one transform per resource.

  department_cost     : {_id, totalCost}[]            → pie slices + total
  avg_kwh             : {Date, avg_of_IF1/IF2}[]      → threshold-annotated line
  kwh_parts           : {_id, machineData}[]          → per-machine or averaged line
  consumption_molten  : {date, metal, consumption}[]  → line + over-spec bars
  time_zone           : {date, zoneA..zoneD}[]        → four stacked bars
  daily_consumption   : DailyConsumptionDay[]         → kept whole

Series order is always the declared order (input rows, zones, machines).
"""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from config.energy import (
    AVG_KWH_MODES,
    DEPARTMENT_PALETTE,
    LIMITS,
    MOLTEN_METAL_COLOR,
    NORMAL_COLOR,
)
from src.analytics.tariff import build_zone_dataset
from src.analytics.thresholds import ThresholdLine, annotate_threshold, over_spec_colors
from src.data.models import (
    AggregateDataset,
    AvgKWHRow,
    ConsumptionMoltenRow,
    DailyConsumptionDay,
    DepartmentCost,
    KWHPartsRow,
    Series,
    SeriesStyle,
    TimeZoneBucket,
)


@dataclass(frozen=True)
class ChartData:
    """A dataset plus the derived values its chart options need."""
    dataset: AggregateDataset
    y_min: float | None = None
    threshold: ThresholdLine | None = None
    total: float | None = None
    totals: dict[str, float] = field(default_factory=dict)
    machines: list[str] = field(default_factory=list)


def _optional(values: pd.Series) -> list[float | None]:
    return [None if pd.isna(v) else float(v) for v in values]


def _floor_min(values: list[float | None], offset: float = 0.0) -> float:
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return max(0.0, min(present) - offset)


# ── Department cost ───────────────────────────────────────────────────────────

def department_cost(rows: list[DepartmentCost]) -> ChartData:
    values = [r.totalCost for r in rows]
    colors = [DEPARTMENT_PALETTE[i % len(DEPARTMENT_PALETTE)] for i in range(len(rows))]
    dataset = AggregateDataset(
        labels=[r.id for r in rows],
        series=[Series(name="Cost", values=values, style=SeriesStyle(kind="pie", colors=colors))],
    )
    return ChartData(dataset=dataset, total=float(sum(values)))


# ── Average KWH/Tonne ─────────────────────────────────────────────────────────

def avg_kwh(rows: list[AvgKWHRow], mode: str = "combined") -> ChartData:
    if mode not in AVG_KWH_MODES:
        raise ValueError(f"unknown average KWH mode: {mode!r}")

    df = pd.DataFrame([r.model_dump() for r in rows], columns=["Date", "avg_of_IF1", "avg_of_IF2"])
    machines = ["avg_of_IF1", "avg_of_IF2"]
    df[machines] = df[machines].astype(float)

    if mode == "combined":
        values = _optional(df[machines].mean(axis=1, skipna=False))
    else:
        values = _optional(df[f"avg_of_{mode}"])

    annotation = annotate_threshold(values, LIMITS.kwh_per_tonne_alert)
    series = Series(
        name=AVG_KWH_MODES[mode],
        values=values,
        style=SeriesStyle(kind="line", color=NORMAL_COLOR, colors=annotation.colors, fill=True),
    )
    return ChartData(
        dataset=AggregateDataset(labels=[str(d) for d in df["Date"]], series=[series]),
        y_min=_floor_min(values, LIMITS.avg_kwh_axis_padding),
        threshold=annotation.line,
    )


# ── KWH per part ──────────────────────────────────────────────────────────────

def kwh_parts(rows: list[KWHPartsRow], machine: str | None = None) -> ChartData:
    """
    Selected machine → its column (absent → 0); otherwise the mean of the
    machines reporting on that row (0 when none do). The y-axis minimum
    always comes from every machine value, whatever the selection.
    """
    frame = pd.DataFrame([r.machineData for r in rows], index=range(len(rows))).astype(float)

    if machine:
        values = [float(r.machineData.get(machine) or 0.0) for r in rows]
    else:
        values = [float(v) for v in frame.mean(axis=1, skipna=True).fillna(0.0)]

    observed = frame.to_numpy().ravel()
    observed = observed[~np.isnan(observed)]
    y_min = max(0.0, float(observed.min())) if observed.size else 0.0

    series = Series(name="KWH/Part", values=values, style=SeriesStyle(kind="line", color=NORMAL_COLOR, fill=True))
    return ChartData(
        dataset=AggregateDataset(labels=[r.id for r in rows], series=[series]),
        y_min=y_min,
        machines=list(rows[0].machineData) if rows else [],
    )


# ── Consumption vs molten metal ───────────────────────────────────────────────

def consumption_molten(rows: list[ConsumptionMoltenRow]) -> ChartData:
    metal = [r.sum_of_moltenmetal for r in rows]
    consumption = [r.sum_of_consumtion for r in rows]
    series = [
        Series(name="Molten Metal", values=metal, style=SeriesStyle(kind="line", color=MOLTEN_METAL_COLOR)),
        Series(
            name="Consumption",
            values=consumption,
            style=SeriesStyle(kind="bar", colors=over_spec_colors(consumption, metal)),
        ),
    ]
    return ChartData(
        dataset=AggregateDataset(labels=[r.date for r in rows], series=series),
        y_min=_floor_min([*consumption, *metal]),
    )


# ── Time-zone cost ────────────────────────────────────────────────────────────

def time_zone(rows: list[TimeZoneBucket]) -> ChartData:
    breakdown = build_zone_dataset(rows)
    return ChartData(dataset=breakdown.dataset, total=breakdown.grand_total, totals=breakdown.totals)


# ── Daily consumption ─────────────────────────────────────────────────────────

def daily_consumption(rows: list[DailyConsumptionDay]) -> list[DailyConsumptionDay]:
    return rows
