"""
src/query/resolver.py
──────────────────────
Free-text query → DisplayConfig (chart | cards) via the generation endpoint.

States:
  idle → submitted → resolved
                   → fallback_applied

Any failure ends in a single synthetic card:
  transport failure (network, non-2xx, non-JSON) → "Error Processing Query"
  unusable content (no/invalid displayConfig)    → "Not Relevant Query"
Both are the same CardsDisplay variant; only the text differs.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from config.settings import settings
from src.data.client import borrow_client, post_json
from src.data.errors import MalformedPayload, TransportError
from src.data.models import CardsDisplay, ChartDisplay, DisplayConfig, MetricCard, Trend

logger = logging.getLogger(__name__)

_PAYLOAD_KEYS = {"chart": "chartConfig", "cards": "cards"}
_display_adapter: TypeAdapter[ChartDisplay | CardsDisplay] = TypeAdapter(DisplayConfig)


class QueryState(str, Enum):
    IDLE = "idle"
    SUBMITTED = "submitted"
    RESOLVED = "resolved"
    FALLBACK_APPLIED = "fallback_applied"


NOT_RELEVANT_CARD = MetricCard(
    title="Not Relevant Query",
    value="N/A",
    unit="",
    description="The question could not be matched to the energy data on this dashboard. "
    "Try asking about consumption, cost by department or KWH/Tonne trends.",
    trend=Trend.NEUTRAL,
)

ERROR_CARD = MetricCard(
    title="Error Processing Query",
    value="Error",
    unit="",
    description="The query service did not return a usable response. Please try again.",
    trend=Trend.NEUTRAL,
)


def fallback(card: MetricCard) -> CardsDisplay:
    return CardsDisplay(displayType="cards", cards=[card.model_copy()])


def normalize_display_config(body: Any) -> ChartDisplay | CardsDisplay | None:
    """
    Keep exactly `displayType` and its matching payload.

    Returns None when the body has no usable displayConfig.
    """
    if not isinstance(body, dict):
        return None
    raw = body.get("displayConfig")
    if not isinstance(raw, dict):
        return None
    display_type = raw.get("displayType")
    payload_key = _PAYLOAD_KEYS.get(display_type) if isinstance(display_type, str) else None
    if payload_key is None or raw.get(payload_key) is None:
        return None
    try:
        return _display_adapter.validate_python({"displayType": display_type, payload_key: raw[payload_key]})
    except ValidationError as exc:
        logger.warning("Invalid %s displayConfig: %d error(s)", display_type, exc.error_count())
        return None


class QueryResolver:
    def __init__(self, url: str | None = None) -> None:
        self.url = url
        self.state = QueryState.IDLE
        self.query = ""
        self.config: ChartDisplay | CardsDisplay | None = None
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(
        self, query: str | None, client: httpx.AsyncClient | None = None
    ) -> ChartDisplay | CardsDisplay | None:
        """
        Resolve one query. Blank queries and submissions made while a
        previous one is still running are ignored (returns None).
        """
        text = (query or "").strip()
        if not text or self._busy:
            return None

        self._busy = True
        self.state = QueryState.SUBMITTED
        self.query = text
        try:
            async with borrow_client(client) as c:
                body = await post_json(c, self.url or settings.GENERATION_URL, {"prompt": text})
        except (TransportError, MalformedPayload) as exc:
            logger.error("Error processing query %r: %s", text, exc)
            config, state = fallback(ERROR_CARD), QueryState.FALLBACK_APPLIED
        else:
            config = normalize_display_config(body)
            if config is None:
                logger.warning("Query %r produced no usable displayConfig", text)
                config, state = fallback(NOT_RELEVANT_CARD), QueryState.FALLBACK_APPLIED
            else:
                state = QueryState.RESOLVED
        finally:
            self._busy = False

        self.config = config
        self.state = state
        return config

    def clear(self) -> None:
        """Back to the dashboard: the query and its result are discarded."""
        self.query = ""
        self.config = None
        self.state = QueryState.IDLE
