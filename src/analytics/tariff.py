"""
src/analytics/tariff.py
────────────────────────
MSEB time-of-day tariff zone calculator.

One TimeZoneBucket per day → four stacked bar series (Zone A..D, fixed
order) sharing the date axis, plus per-zone cost totals. The four zones
are independently reported; their sum is not checked against any total.
"""
from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from config.energy import TARIFF_ZONES
from src.data.models import AggregateDataset, Series, SeriesStyle, TimeZoneBucket

STACK_ID = "tariff"


@dataclass(frozen=True)
class ZoneCostBreakdown:
    dataset: AggregateDataset
    totals: dict[str, float]   # zone label → cost over the whole period
    grand_total: float


def build_zone_dataset(buckets: list[TimeZoneBucket]) -> ZoneCostBreakdown:
    keys = [z.key for z in TARIFF_ZONES]
    if not buckets:
        empty = AggregateDataset.empty()
        return ZoneCostBreakdown(empty, {z.label: 0.0 for z in TARIFF_ZONES}, 0.0)

    df = pd.DataFrame([b.model_dump() for b in buckets], columns=["date", *keys])
    series = [
        Series(
            name=zone.label,
            values=[float(v) for v in df[zone.key]],
            style=SeriesStyle(kind="bar", color=zone.color, stack=STACK_ID),
        )
        for zone in TARIFF_ZONES
    ]
    sums = df[keys].sum()
    totals = {zone.label: float(sums[zone.key]) for zone in TARIFF_ZONES}
    return ZoneCostBreakdown(
        dataset=AggregateDataset(labels=[str(d) for d in df["date"]], series=series),
        totals=totals,
        grand_total=float(sums.sum()),
    )
