"""
src/data/session.py
───────────────────
Session-scoped state container.

Provides:
  - DashboardSession : the six aggregate fetchers of one dashboard view
  - SessionRegistry  : one DashboardSession per browser session id

A session also carries the QueryResolver of its view.

The six fetchers are independent: load_all() runs them concurrently and a
failure in one never affects another.

Thread safety: the registry guards its sessions with an RLock (Dash serves
callbacks from worker threads).
"""
from __future__ import annotations

import asyncio
import logging
import threading
import uuid
from collections import OrderedDict
from typing import Any

import httpx

from config.energy import RESOURCES
from config.settings import settings
from src.analytics import transforms
from src.data.client import borrow_client
from src.data.fetchers import AggregateFetcher
from src.data.models import (
    AggregatedData,
    AvgKWHRow,
    ConsumptionMoltenRow,
    DailyConsumptionDay,
    DepartmentCostResponse,
    FetchState,
    FetchStatus,
    KWHPartsRow,
    TimeZoneBucket,
)
from src.query.resolver import QueryResolver

logger = logging.getLogger(__name__)


def _rows(payload: Any) -> list:
    return payload.aggregatedData


class DashboardSession:
    def __init__(self) -> None:
        self.department_cost = AggregateFetcher(
            "department costs",
            RESOURCES["department_cost"],
            DepartmentCostResponse,
            lambda p: p.aggregatedCosts,
            transforms.department_cost,
        )
        self.avg_kwh = AggregateFetcher(
            "average KWH data", RESOURCES["avg_kwh"], AggregatedData[AvgKWHRow], _rows, transforms.avg_kwh
        )
        self.kwh_parts = AggregateFetcher(
            "KWH parts data", RESOURCES["kwh_parts"], AggregatedData[KWHPartsRow], _rows, transforms.kwh_parts
        )
        self.consumption_molten = AggregateFetcher(
            "combined data",
            RESOURCES["consumption_molten"],
            AggregatedData[ConsumptionMoltenRow],
            _rows,
            transforms.consumption_molten,
        )
        self.time_zone = AggregateFetcher(
            "time zone data", RESOURCES["time_zone"], AggregatedData[TimeZoneBucket], _rows, transforms.time_zone
        )
        self.daily_consumption = AggregateFetcher(
            "consumption data",
            RESOURCES["daily_consumption"],
            AggregatedData[DailyConsumptionDay],
            _rows,
            transforms.daily_consumption,
        )
        self.query = QueryResolver()
        self.closed = False

    @property
    def fetchers(self) -> dict[str, AggregateFetcher]:
        return {
            "department_cost": self.department_cost,
            "avg_kwh": self.avg_kwh,
            "kwh_parts": self.kwh_parts,
            "consumption_molten": self.consumption_molten,
            "time_zone": self.time_zone,
            "daily_consumption": self.daily_consumption,
        }

    def states(self) -> dict[str, FetchState]:
        return {name: f.state for name, f in self.fetchers.items()}

    async def load_all(
        self,
        client: httpx.AsyncClient | None = None,
        avg_kwh_mode: str = "combined",
        machine: str | None = None,
    ) -> dict[str, FetchState]:
        """Mount: fetch every resource concurrently."""
        inputs: dict[str, dict[str, Any]] = {
            "avg_kwh": {"mode": avg_kwh_mode},
            "kwh_parts": {"machine": machine},
        }
        async with borrow_client(client) as c:
            names = list(self.fetchers)
            gathered = await asyncio.gather(
                *(self.fetchers[n].refresh(c, **inputs.get(n, {})) for n in names),
                return_exceptions=True,
            )
        for name, result in zip(names, gathered, strict=True):
            if isinstance(result, BaseException):
                logger.warning("Fetcher %s failed: %s", name, result)
        return self.states()

    async def refresh(self, name: str, client: httpx.AsyncClient | None = None, **inputs: Any) -> FetchState:
        """Re-fetch a single resource after one of its inputs changed."""
        async with borrow_client(client) as c:
            return await self.fetchers[name].refresh(c, **inputs)

    async def ensure(self, name: str, client: httpx.AsyncClient | None = None, **inputs: Any) -> FetchState:
        """
        Bring a resource in line with the current control values.

        Refreshes only when the state (or the request in flight) belongs to
        another input combination. An idle fetcher is left to load_all().
        """
        fetcher = self.fetchers[name]
        if fetcher.state.status is FetchStatus.IDLE or fetcher.serves(**inputs):
            return fetcher.state
        return await self.refresh(name, client, **inputs)

    def close(self) -> None:
        self.closed = True
        for fetcher in self.fetchers.values():
            fetcher.close()


class SessionRegistry:
    """
    Sessions are created only by open(). Lookups never create one, so a
    late callback carrying a closed id cannot revive it. The least recently
    used session is closed once more than `max_sessions` are open (tabs
    closed without navigating never call close()).
    """

    def __init__(self, max_sessions: int = settings.MAX_SESSIONS) -> None:
        self._sessions: OrderedDict[str, DashboardSession] = OrderedDict()
        self._max = max_sessions
        self._lock = threading.RLock()

    def open(self) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = DashboardSession()
            evicted = []
            while len(self._sessions) > self._max:
                evicted.append(self._sessions.popitem(last=False))
        for old_id, session in evicted:
            logger.info("Session %s evicted", old_id)
            session.close()
        return session_id

    def get(self, session_id: str | None) -> DashboardSession | None:
        """Open session for this id, or None."""
        if not session_id:
            return None
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
            return session

    def close(self, session_id: str | None) -> None:
        if not session_id:
            return
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


registry = SessionRegistry()
