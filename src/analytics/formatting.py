"""
src/analytics/formatting.py
────────────────────────────
Fixed-locale display formatting (en-IN currency, date tick labels).

No locale negotiation: currency always uses Indian digit grouping
(1,23,45,678) with a ₹ prefix and no decimals.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

CURRENCY = "₹"


def group_indian(n: int) -> str:
    """Indian grouping: last three digits, then pairs."""
    sign = "-" if n < 0 else ""
    digits = str(abs(n))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join(pairs) + "," + tail


def _whole(value: float) -> int:
    """Round half away from zero, like the en-IN number formatter."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_inr(value: float | None, spaced: bool = True) -> str:
    if value is None:
        return f"{CURRENCY} -"
    sep = " " if spaced else ""
    return f"{CURRENCY}{sep}{group_indian(_whole(value))}"


def format_inr_k(value: float) -> str:
    """Axis tick in thousands, e.g. 12500 → '13K'."""
    return f"{_whole(value / 1000)}K"


def share_pct(value: float, total: float) -> float:
    """Percentage of total; 0 when the total is 0."""
    if total == 0:
        return 0.0
    return 100.0 * value / total


def _parse(label: str) -> date | None:
    try:
        return datetime.fromisoformat(label[:10]).date()
    except ValueError:
        return None


def format_day_label(label: str) -> str:
    """'2024-07-30' → '30 Jul 24'; non-dates pass through unchanged."""
    d = _parse(label)
    return d.strftime("%d %b %y") if d else label


def format_day_month(label: str) -> str:
    """'2024-07-30' → '30<br>Jul' (two-line Plotly tick)."""
    d = _parse(label)
    return d.strftime("%d<br>%b") if d else label
