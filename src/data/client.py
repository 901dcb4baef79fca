"""
src/data/client.py
──────────────────
HTTP access to the aggregate API and the generation endpoint.

Every failure is collapsed into the pipeline taxonomy:
  - connection / timeout / non-2xx  → TransportError
  - non-JSON body / schema mismatch → MalformedPayload
"""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from config.settings import settings
from src.data.errors import MalformedPayload, TransportError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def make_client() -> httpx.AsyncClient:
    """Async client with the configured transport timeout."""
    return httpx.AsyncClient(
        timeout=settings.REQUEST_TIMEOUT_S,
        headers={"Accept": "application/json"},
    )


def resource_url(resource: str) -> str:
    return f"{settings.API_BASE_URL.rstrip('/')}/{resource}"


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedPayload(f"{response.request.url}: body is not JSON") from exc


async def _send(client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> Any:
    logger.debug("%s %s", method, url)
    try:
        response = await client.request(method, url, **kwargs)
        _ = response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TransportError(
            f"{method} {url} returned {exc.response.status_code}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise TransportError(f"{method} {url} failed: {exc}") from exc
    return _decode(response)


async def get_json(client: httpx.AsyncClient, url: str) -> Any:
    return await _send(client, "GET", url)


async def post_json(client: httpx.AsyncClient, url: str, body: dict[str, Any]) -> Any:
    return await _send(client, "POST", url, json=body)


def parse_payload(model: type[ModelT], body: Any) -> ModelT:
    """Validate a decoded body against its response schema."""
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise MalformedPayload(
            f"{model.__name__}: {exc.error_count()} validation error(s)"
        ) from exc


@asynccontextmanager
async def borrow_client(client: httpx.AsyncClient | None) -> AsyncIterator[httpx.AsyncClient]:
    """Use the caller's client, or open (and close) a configured one."""
    if client is not None:
        yield client
        return
    async with make_client() as owned:
        yield owned
