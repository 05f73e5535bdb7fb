"""Session event log with an optional HTTP collector."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Protocol

import requests

from ..core.exceptions import EventLogError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

ENDPOINT_ENV = "SUDOKULINK_EVENT_ENDPOINT"


class EventSink(Protocol):
    def send(self, event: Dict[str, Any]) -> None:
        ...


class MemoryEventSink:
    """Keeps every event in a list."""

    def __init__(self) -> None:
        self.events: List[Dict[str, Any]] = []

    def send(self, event: Dict[str, Any]) -> None:
        self.events.append(event)


class HttpEventSink:
    """POSTs each event as JSON to a collector endpoint."""

    def __init__(self, endpoint: str, timeout_seconds: float = 5.0) -> None:
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds

    def send(self, event: Dict[str, Any]) -> None:
        try:
            response = requests.post(self.endpoint, json=event, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise EventLogError(f"Event delivery failed: {exc}") from exc


class EventLog:
    """Fan ``{name, info}`` events out to sinks; delivery failures are logged."""

    def __init__(self, sinks: Optional[List[EventSink]] = None) -> None:
        self.sinks: List[EventSink] = list(sinks or [])

    @classmethod
    def from_env(cls, endpoint: Optional[str] = None, env_var: str = ENDPOINT_ENV) -> "EventLog":
        endpoint = endpoint or os.environ.get(env_var)
        return cls([HttpEventSink(endpoint)] if endpoint else [])

    def emit(self, name: str, info: Dict[str, Any]) -> None:
        event = {"name": name, "info": info}
        LOGGER.info("Event %s %s", name, info)
        for sink in self.sinks:
            try:
                sink.send(event)
            except EventLogError as exc:
                LOGGER.warning("Dropping event %s: %s", name, exc)
