"""
tests/test_charts.py
─────────────────────
Tests for the Plotly figure adapters.
"""
from src.analytics import transforms
from src.analytics.tariff import build_zone_dataset
from src.analytics.thresholds import threshold_line
from src.data.models import (
    AggregateDataset,
    AggregatedData,
    AvgKWHRow,
    ChartConfig,
    Series,
    SeriesStyle,
    TimeZoneBucket,
)
from src.layout.charts import dataset_figure, department_figure, display_figure, stacked_cost_figure


def _line(values) -> AggregateDataset:
    return AggregateDataset(
        labels=[str(i) for i in range(len(values))],
        series=[Series(name="s", values=values, style=SeriesStyle(kind="line", color="#fff"))],
    )


class TestDatasetFigure:
    def test_gaps_are_kept(self):
        fig = dataset_figure(_line([1.0, None, 3.0]))
        assert list(fig.data[0].y) == [1.0, None, 3.0]
        assert fig.data[0].connectgaps is False

    def test_empty_dataset(self):
        assert len(dataset_figure(AggregateDataset.empty()).data) == 0

    def test_threshold_and_y_min(self, avg_kwh_payload):
        rows = AggregatedData[AvgKWHRow].model_validate(avg_kwh_payload).aggregatedData
        chart = transforms.avg_kwh(rows)
        fig = dataset_figure(chart.dataset, y_min=chart.y_min, threshold=chart.threshold)

        assert fig.layout.shapes[0].y0 == 675.0
        assert fig.layout.yaxis.range[0] == 640.0
        assert list(fig.data[0].marker.color) == chart.dataset.series[0].style.colors

    def test_fixed_range(self):
        fig = dataset_figure(_line([0.9, 0.8]), y_range=(0.0, 1.0), threshold=threshold_line(0.95))
        assert tuple(fig.layout.yaxis.range) == (0.0, 1.0)


class TestCostFigures:
    def test_zone_bars_are_stacked(self):
        dataset = build_zone_dataset(
            [TimeZoneBucket(date="2024-07-30", zoneA=1000, zoneB=2000, zoneC=3000, zoneD=4000)]
        ).dataset
        fig = stacked_cost_figure(dataset)
        assert fig.layout.barmode == "stack"
        assert [t.name for t in fig.data] == ["Zone A", "Zone B", "Zone C", "Zone D"]

    def test_zone_totals_in_legend(self, time_zone_payload):
        rows = AggregatedData[TimeZoneBucket].model_validate(time_zone_payload).aggregatedData
        chart = transforms.time_zone(rows)
        fig = stacked_cost_figure(chart.dataset, totals=chart.totals)
        assert fig.data[3].name == "Zone D (₹ 8,500)"
        assert fig.data[3].hovertemplate.startswith("Zone D: ")

    def test_department_total_in_centre(self):
        dataset = AggregateDataset(
            labels=["Melting", "Moulding"],
            series=[Series(name="Cost", values=[150000.0, 50000.0],
                           style=SeriesStyle(kind="pie", colors=["#FF6B6B", "#FFD93D"]))],
        )
        fig = department_figure(dataset, total=200000.0)
        assert fig.data[0].hole == 0.7
        assert "₹ 2,00,000" in fig.layout.annotations[0].text
        assert fig.data[0].customdata[0][1] == "75.0%"


class TestDisplayFigure:
    def _config(self, chart_type: str) -> ChartConfig:
        return ChartConfig.model_validate({
            "type": chart_type,
            "data": {"labels": [1, 2], "datasets": [{"label": "x", "data": [3, 4]}]},
        })

    def test_trace_types(self):
        assert display_figure(self._config("pie")).data[0].type == "pie"
        assert display_figure(self._config("doughnut")).data[0].hole == 0.6
        assert display_figure(self._config("line")).data[0].type == "scatter"
        assert display_figure(self._config("bar")).data[0].type == "bar"

    def test_labels_stringified(self):
        assert list(display_figure(self._config("bar")).data[0].x) == ["1", "2"]
