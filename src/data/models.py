"""
src/data/models.py
──────────────────
Pydantic v2 data models.

  - Wire schemas for every aggregate resource and the generation endpoint
  - AggregateDataset : the uniform chart-ready presentation model
  - DisplayConfig    : chart | cards result of a free-text query
  - FetchState       : per-resource loading state
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

T = TypeVar("T")
RowT = TypeVar("RowT")


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


# ── Presentation model ────────────────────────────────────────────────────────

class SeriesStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["line", "bar", "pie"] = "line"
    color: str | None = None
    colors: list[str] | None = None   # per-point fill, same length as values
    fill: bool = False
    stack: str | None = None
    dash: str | None = None


class Series(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    values: list[float | None]
    style: SeriesStyle = Field(default_factory=SeriesStyle)


class AggregateDataset(BaseModel):
    """
    Ordered category labels plus named value series.

    `None` in `values` is a missing sample and must render as a gap.
    """

    model_config = ConfigDict(frozen=True)

    labels: list[str] = Field(default_factory=list)
    series: list[Series] = Field(default_factory=list)

    @model_validator(mode="after")
    def _aligned(self) -> AggregateDataset:
        for s in self.series:
            if len(s.values) != len(self.labels):
                raise ValueError(
                    f"series {s.name!r} has {len(s.values)} values for {len(self.labels)} labels"
                )
            if s.style.colors is not None and len(s.style.colors) != len(s.values):
                raise ValueError(f"series {s.name!r} has misaligned point colors")
        return self

    @classmethod
    def empty(cls) -> AggregateDataset:
        return cls(labels=[], series=[])

    @property
    def is_empty(self) -> bool:
        return not self.labels and not self.series


# ── Aggregate resource schemas ────────────────────────────────────────────────

class DepartmentCost(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    totalCost: float


class DepartmentCostResponse(BaseModel):
    aggregatedCosts: list[DepartmentCost]


class AvgKWHRow(BaseModel):
    Date: str
    avg_of_IF1: float | None = None
    avg_of_IF2: float | None = None


class KWHPartsRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    machineData: dict[str, float | None] = Field(default_factory=dict)


class ConsumptionMoltenRow(BaseModel):
    date: str
    sum_of_moltenmetal: float
    sum_of_consumtion: float


class TimeZoneBucket(BaseModel):
    date: str
    zoneA: float
    zoneB: float
    zoneC: float
    zoneD: float


class HourSample(BaseModel):
    consumption: float | None = None
    powerFactor: float | None = Field(
        default=None, validation_alias=AliasChoices("powerFactor", "F_F")
    )


class DailyConsumptionDay(BaseModel):
    date: str = Field(validation_alias=AliasChoices("date", "Date"))
    departments: dict[str, dict[str, dict[str, HourSample]]] = Field(
        validation_alias=AliasChoices("departments", "Departments")
    )


class AggregatedData(BaseModel, Generic[RowT]):
    """Envelope shared by every `{aggregatedData: [...]}` resource."""

    aggregatedData: list[RowT]


# ── Query display config ──────────────────────────────────────────────────────

class MetricCard(BaseModel):
    title: str
    value: str
    unit: str = ""
    description: str = ""
    trend: Trend = Trend.NEUTRAL

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ChartDataset(BaseModel):
    model_config = ConfigDict(extra="allow")

    label: str = ""
    data: list[float | None]
    backgroundColor: str | list[str] | None = None
    borderColor: str | None = None


class ChartConfig(BaseModel):
    type: str = "bar"
    title: str = ""
    labels: list[str]
    datasets: list[ChartDataset]
    options: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _flatten_chartjs(cls, raw: Any) -> Any:
        # Accept the Chart.js shape {type, data: {labels, datasets}, options}
        if isinstance(raw, dict) and isinstance(raw.get("data"), dict):
            flat = {k: v for k, v in raw.items() if k != "data"}
            flat.setdefault("labels", raw["data"].get("labels"))
            flat.setdefault("datasets", raw["data"].get("datasets"))
            return flat
        return raw

    @field_validator("labels", mode="before")
    @classmethod
    def _labels_as_text(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [str(x) for x in v]
        return v


class ChartDisplay(BaseModel):
    displayType: Literal["chart"]
    chartConfig: ChartConfig


class CardsDisplay(BaseModel):
    displayType: Literal["cards"]
    cards: list[MetricCard]


DisplayConfig = Annotated[ChartDisplay | CardsDisplay, Field(discriminator="displayType")]


# ── Fetch state ───────────────────────────────────────────────────────────────

@dataclass
class FetchState(Generic[T]):
    status: FetchStatus = FetchStatus.IDLE
    data: T | None = None
    seq: int = 0
    inputs: dict[str, Any] = field(default_factory=dict)   # combination this state belongs to
