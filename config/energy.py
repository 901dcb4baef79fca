"""
config/energy.py
────────────────
Energy KPI limits, tariff zones, machine palette and resource registry.

Limits:
  IF average KWH/Tonne alert line : value > 675 → flagged
  Specific consumption ceiling    : kWh per tonne of molten metal > 1020
  Power factor display range      : [0, 1]
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class EnergyLimits:
    kwh_per_tonne_alert: float
    specific_consumption_ceiling: float
    avg_kwh_axis_padding: float
    power_factor_range: tuple[float, float]


LIMITS = EnergyLimits(
    kwh_per_tonne_alert=675.0,
    specific_consumption_ceiling=1020.0,
    avg_kwh_axis_padding=10.0,
    power_factor_range=(0.0, 1.0),
)


@dataclass(frozen=True)
class TariffZone:
    key: str      # field name in the TimeZone payload
    label: str
    color: str


# ── MSEB tariff zones (stacking order is fixed) ───────────────────────────────
TARIFF_ZONES: tuple[TariffZone, ...] = (
    TariffZone(key="zoneA", label="Zone A", color="rgba(255, 99, 132, 0.5)"),
    TariffZone(key="zoneB", label="Zone B", color="rgba(54, 162, 235, 0.5)"),
    TariffZone(key="zoneC", label="Zone C", color="rgba(255, 206, 86, 0.5)"),
    TariffZone(key="zoneD", label="Zone D", color="rgba(75, 192, 192, 0.5)"),
)

# ── Colors ────────────────────────────────────────────────────────────────────
NORMAL_COLOR = "#2196F3"
NORMAL_FILL = "rgba(33, 150, 243, 0.1)"
FLAGGED_COLOR = "#FF0000"
OVER_SPEC_COLOR = "#FF5252"
MOLTEN_METAL_COLOR = "#FFD700"

DEPARTMENT_PALETTE: list[str] = ["#FF6B6B", "#FFD93D", "#95D03A", "#2ECC71", "#0A2647"]

MACHINE_COLORS: dict[str, str] = {
    "IF1": "#2196F3",
    "IF2": "#FF5722",
    "MM1": "#4CAF50",
}
DEFAULT_MACHINE_COLOR = "#FFC107"

# ── Average KWH modes ─────────────────────────────────────────────────────────
AVG_KWH_MODES: dict[str, str] = {
    "combined": "Combined Average KWH",
    "IF1": "Average KWH - IF1",
    "IF2": "Average KWH - IF2",
}

# ── Daily slice metrics ───────────────────────────────────────────────────────
DAILY_METRICS: dict[str, str] = {
    "consumption": "Consumption",
    "powerFactor": "Power Factor",
}

# ── Remote aggregate resources (path under API_BASE_URL) ──────────────────────
RESOURCES: dict[str, str] = {
    "department_cost": "aggregate-energy-costs",
    "avg_kwh": "avgKWH",
    "kwh_parts": "KWHParts",
    "consumption_molten": "ConsumptionMoltenMetal",
    "time_zone": "TimeZone",
    "daily_consumption": "consumption",
}
