"""
src/data/errors.py
──────────────────
Error taxonomy for the aggregation pipeline.

  TransportError   : network unreachable or non-2xx status
  MalformedPayload : valid transport, body is not JSON or fails its schema
  NoMatchingSlice  : a day / department / machine selection has no data
"""
from __future__ import annotations


class EnergyMonitorError(Exception):
    """Base class for every pipeline error."""


class TransportError(EnergyMonitorError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedPayload(EnergyMonitorError):
    pass


class NoMatchingSlice(EnergyMonitorError):
    pass
