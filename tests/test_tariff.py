"""
tests/test_tariff.py
─────────────────────
Tests for the MSEB tariff zone calculator.
"""
from src.analytics.tariff import STACK_ID, build_zone_dataset
from src.data.models import TimeZoneBucket


def _bucket(date: str, a: float, b: float, c: float, d: float) -> TimeZoneBucket:
    return TimeZoneBucket(date=date, zoneA=a, zoneB=b, zoneC=c, zoneD=d)


class TestBuildZoneDataset:
    def test_four_stacked_series(self):
        result = build_zone_dataset([_bucket("2024-07-30", 1, 2, 3, 4)])
        assert len(result.dataset.series) == 4
        assert all(s.style.stack == STACK_ID for s in result.dataset.series)
        assert all(s.style.kind == "bar" for s in result.dataset.series)

    def test_values_per_zone(self):
        result = build_zone_dataset([_bucket("d1", 1, 2, 3, 4), _bucket("d2", 10, 20, 30, 40)])
        assert result.dataset.labels == ["d1", "d2"]
        assert result.dataset.series[2].values == [3.0, 30.0]

    def test_totals(self):
        result = build_zone_dataset([_bucket("d1", 1, 2, 3, 4), _bucket("d2", 10, 20, 30, 40)])
        assert result.totals == {"Zone A": 11.0, "Zone B": 22.0, "Zone C": 33.0, "Zone D": 44.0}
        assert result.grand_total == 110.0

    def test_empty_input(self):
        result = build_zone_dataset([])
        assert result.dataset.is_empty
        assert result.grand_total == 0.0

    def test_identical_input_identical_output(self):
        buckets = [_bucket("d1", 5, 6, 7, 8)]
        assert build_zone_dataset(buckets) == build_zone_dataset(buckets)
