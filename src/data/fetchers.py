"""
src/data/fetchers.py
────────────────────
Aggregate fetchers: one per remote aggregate resource.

Each fetcher owns a FetchState and a request sequence number. Only the
response belonging to the latest request may write the state; responses
that arrive after a newer request, or after close(), are dropped.

Transitions:
  refresh()            → loading
  2xx + valid payload  → ready(transformed data)
  anything else        → failed (no data; error is logged, not stored)
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

from src.data.client import get_json, parse_payload, resource_url
from src.data.errors import MalformedPayload, TransportError
from src.data.models import FetchState, FetchStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _key(inputs: dict[str, Any]) -> tuple:
    return tuple(sorted(inputs.items()))


class AggregateFetcher(Generic[T]):
    def __init__(
        self,
        name: str,
        resource: str,
        schema: type[BaseModel],
        extract: Callable[[Any], list],
        transform: Callable[..., T],
    ) -> None:
        self.name = name
        self.resource = resource
        self.schema = schema
        self.extract = extract
        self.transform = transform
        self.state: FetchState[T] = FetchState()
        self._seq = 0
        self._pending: tuple | None = None
        self._closed = False
        # Dash runs callbacks (each with its own event loop) on worker threads
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Teardown: results still in flight become no-ops."""
        with self._lock:
            self._closed = True

    def serves(self, **inputs: Any) -> bool:
        """True if the current (or in-flight) state is for this input combination."""
        with self._lock:
            if self.state.status is FetchStatus.LOADING:
                return _key(inputs) == self._pending
            return _key(inputs) == _key(self.state.inputs)

    def _begin(self, inputs: dict[str, Any]) -> int | None:
        """Claim a sequence number, or None if nothing should be requested."""
        key = _key(inputs)
        with self._lock:
            if self._closed:
                return None
            if self.state.status is FetchStatus.LOADING and key == self._pending:
                return None
            self._seq += 1
            self._pending = key
            self.state = FetchState(status=FetchStatus.LOADING, seq=self._seq, inputs=dict(inputs))
            return self._seq

    async def refresh(self, client: httpx.AsyncClient, **inputs: Any) -> FetchState[T]:
        """
        Fetch the resource for one input combination.

        A call for the combination already in flight does not issue a
        second request.
        """
        seq = self._begin(inputs)
        if seq is None:
            return self.state

        try:
            body = await get_json(client, resource_url(self.resource))
            payload = parse_payload(self.schema, body)
            data = self.transform(self.extract(payload), **inputs)
        except (TransportError, MalformedPayload) as exc:
            logger.error("Error fetching %s: %s", self.name, exc)
            self._commit(seq, FetchState(status=FetchStatus.FAILED, seq=seq, inputs=dict(inputs)))
            return self.state
        except Exception:
            self._commit(seq, FetchState(status=FetchStatus.FAILED, seq=seq, inputs=dict(inputs)))
            raise

        self._commit(seq, FetchState(status=FetchStatus.READY, data=data, seq=seq, inputs=dict(inputs)))
        return self.state

    def _commit(self, seq: int, state: FetchState[T]) -> None:
        with self._lock:
            if self._closed:
                logger.debug("%s: result after teardown dropped", self.name)
                return
            if seq != self._seq:
                logger.debug("%s: stale result #%d dropped (current #%d)", self.name, seq, self._seq)
                return
            self.state = state
            self._pending = None
