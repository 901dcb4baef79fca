"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Energy Monitor test suite.
"""
import os

import pytest

# Point every client at a mocked host before settings are imported
os.environ.setdefault("API_BASE_URL", "http://energy.test/api")
os.environ.setdefault("GENERATION_URL", "http://energy.test/api/chat-response")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

API = "http://energy.test/api"
GENERATION_URL = f"{API}/chat-response"


@pytest.fixture
def department_cost_payload() -> dict:
    return {
        "aggregatedCosts": [
            {"_id": "Melting", "totalCost": 125000.0},
            {"_id": "Moulding", "totalCost": 48000.0},
            {"_id": "Fettling", "totalCost": 27000.0},
        ]
    }


@pytest.fixture
def avg_kwh_payload() -> dict:
    return {
        "aggregatedData": [
            {"Date": "2024-07-28", "avg_of_IF1": 640.0, "avg_of_IF2": 660.0},
            {"Date": "2024-07-29", "avg_of_IF1": 700.0, "avg_of_IF2": 650.0},
            {"Date": "2024-07-30", "avg_of_IF1": 690.0, "avg_of_IF2": 720.0},
        ]
    }


@pytest.fixture
def kwh_parts_payload() -> dict:
    return {
        "aggregatedData": [
            {"_id": "2024-07-28", "machineData": {"IF1": 12.0, "IF2": 18.0}},
            {"_id": "2024-07-29", "machineData": {"IF1": 9.0, "IF2": None}},
            {"_id": "2024-07-30", "machineData": {"IF2": 15.0}},
        ]
    }


@pytest.fixture
def consumption_molten_payload() -> dict:
    return {
        "aggregatedData": [
            {"date": "2024-07-28", "sum_of_moltenmetal": 40000.0, "sum_of_consumtion": 38000.0},
            {"date": "2024-07-29", "sum_of_moltenmetal": 30000.0, "sum_of_consumtion": 33000.0},
        ]
    }


@pytest.fixture
def time_zone_payload() -> dict:
    return {
        "aggregatedData": [
            {"date": "2024-07-29", "zoneA": 1000.0, "zoneB": 2000.0, "zoneC": 3000.0, "zoneD": 4000.0},
            {"date": "2024-07-30", "zoneA": 1500.0, "zoneB": 2500.0, "zoneC": 3500.0, "zoneD": 4500.0},
        ]
    }


def _hours(consumption: float, pf: float, skip: set[int] = frozenset()) -> dict:
    return {
        str(h): {"consumption": consumption + h, "F_F": pf}
        for h in range(24)
        if h not in skip
    }


@pytest.fixture
def daily_payload() -> dict:
    """Original backend shape: Date / Departments / F_F keys."""
    return {
        "aggregatedData": [
            {
                "Date": "2024-07-29",
                "Departments": {
                    "Melting": {"IF1": _hours(100.0, 0.92), "IF2": _hours(80.0, 0.88)},
                    "Moulding": {"MM1": _hours(20.0, 0.95)},
                },
            },
            {
                "Date": "2024-07-31",
                "Departments": {
                    "Melting": {"IF1": _hours(110.0, 0.91, skip={5}), "IF2": _hours(90.0, 0.87)},
                },
            },
        ]
    }


@pytest.fixture
def daily_days(daily_payload):
    from src.data.models import AggregatedData, DailyConsumptionDay
    return AggregatedData[DailyConsumptionDay].model_validate(daily_payload).aggregatedData
