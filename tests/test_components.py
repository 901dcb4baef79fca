"""
tests/test_components.py
─────────────────────────
Tests for query result components and page routing helpers.
"""
from dash import dcc

from config.settings import settings
from src.callbacks.navigation import category_from_path
from src.data.models import CardsDisplay, ChartConfig, ChartDisplay, MetricCard, Trend
from src.layout.components.generated_view import render_display
from src.layout.components.kpi_card import metric_card


class TestMetricCard:
    def test_unit_appended(self):
        card = metric_card(MetricCard(title="Cost", value=1200, unit="₹", trend=Trend.UP))
        value_row = card.children[1]
        assert value_row.children[0].children == "1200"
        assert value_row.children[1].children == " ₹"

    def test_description_optional(self):
        assert len(metric_card(MetricCard(title="A", value="1")).children) == 2
        assert len(metric_card(MetricCard(title="A", value="1", description="d")).children) == 3


class TestRenderDisplay:
    def test_cards(self):
        config = CardsDisplay(displayType="cards", cards=[MetricCard(title="A", value="1")] * 3)
        row = render_display(config).children
        assert len(row.children) == 3

    def test_chart(self):
        config = ChartDisplay(
            displayType="chart",
            chartConfig=ChartConfig(labels=["a"], datasets=[{"label": "x", "data": [1]}]),
        )
        assert isinstance(render_display(config).children, dcc.Graph)


class TestCategoryFromPath:
    def test_category_route(self):
        assert category_from_path("/category/Melting%20Shop") == "Melting Shop"

    def test_fallback_to_default(self):
        assert category_from_path("/") == settings.DEFAULT_CATEGORY
        assert category_from_path(None) == settings.DEFAULT_CATEGORY
        assert category_from_path("/category/") == settings.DEFAULT_CATEGORY
