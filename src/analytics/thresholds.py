"""
src/analytics/thresholds.py
────────────────────────────
Threshold annotator for energy KPI series.

Provides:
  - Per-point classification against a scalar alert line (KWH/Tonne > 675)
  - Over-spec flag for specific consumption (kWh per tonne of molten metal)
  - Threshold line descriptor for Plotly chart overlays
  - Pure per-point style lookup evaluated at render time

Everything here is stateless: identical input gives identical output.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from config.energy import FLAGGED_COLOR, LIMITS, NORMAL_COLOR, OVER_SPEC_COLOR
from src.data.models import AggregateDataset


@dataclass(frozen=True)
class ThresholdLine:
    """Horizontal overlay annotation drawn at `y`."""
    y: float
    label: str
    color: str = FLAGGED_COLOR
    dash: str = "dash"
    width: int = 2


@dataclass(frozen=True)
class ThresholdAnnotation:
    flags: list[bool]
    colors: list[str]
    line: ThresholdLine


def threshold_line(threshold: float) -> ThresholdLine:
    return ThresholdLine(y=threshold, label=f"Threshold ({threshold:g})")


def annotate_threshold(
    values: list[float | None],
    threshold: float = LIMITS.kwh_per_tonne_alert,
    normal_color: str = NORMAL_COLOR,
    flagged_color: str = FLAGGED_COLOR,
) -> ThresholdAnnotation:
    """
    Classify every point of a series against `threshold`.

    A point is flagged iff value > threshold; the boundary itself and
    missing samples (None) are not flagged.
    """
    arr = np.array([np.nan if v is None else v for v in values], dtype=float)
    with np.errstate(invalid="ignore"):
        mask = arr > threshold
    flags = [bool(f) for f in mask]
    colors = [flagged_color if f else normal_color for f in flags]
    return ThresholdAnnotation(flags=flags, colors=colors, line=threshold_line(threshold))


def specific_consumption(consumption: float, molten_metal: float) -> float | None:
    """kWh per tonne of molten metal; None when no metal was produced."""
    if molten_metal == 0:
        return None
    return consumption / (molten_metal / 1000.0)


def flag_over_spec(
    consumption: float,
    molten_metal: float,
    ceiling: float = LIMITS.specific_consumption_ceiling,
) -> bool:
    """
    True iff consumption / (molten_metal / 1000) > ceiling.

    Zero molten metal: any consumption is over spec (no production to
    amortise it against); zero consumption with zero metal is not.
    """
    ratio = specific_consumption(consumption, molten_metal)
    if ratio is None:
        return consumption > 0
    return ratio > ceiling


def over_spec_colors(
    consumption: list[float],
    molten_metal: list[float],
    ceiling: float = LIMITS.specific_consumption_ceiling,
) -> list[str]:
    return [
        OVER_SPEC_COLOR if flag_over_spec(c, m, ceiling) else NORMAL_COLOR
        for c, m in zip(consumption, molten_metal, strict=True)
    ]


def point_style(dataset: AggregateDataset, series_index: int, index: int) -> str | None:
    """Color of one point, resolved from the dataset snapshot only."""
    style = dataset.series[series_index].style
    if style.colors is not None:
        return style.colors[index]
    return style.color
