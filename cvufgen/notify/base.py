"""Outbound collaborator interface and best-effort delivery."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional, Protocol, Set

import httpx

from ..logging import get_logger


class CollaboratorError(RuntimeError):
    """Raised when a collaborator endpoint rejects a delivery."""

    def __init__(self, *, name: str, status: int, url: str, body: str) -> None:
        super().__init__(f"{name} HTTP {status}: {url} :: {body[:500]}")
        self.name = name
        self.status = status
        self.url = url
        self.body = body


class Collaborator(Protocol):
    """Something that accepts a JSON payload after a generation request."""

    name: str
    enabled: bool

    async def send(self, payload: Mapping[str, Any]) -> None:
        ...


class NoOpCollaborator:
    """Stands in for a collaborator whose credentials are not configured."""

    enabled = False

    def __init__(self, name: str) -> None:
        self.name = name

    async def send(self, payload: Mapping[str, Any]) -> None:
        return None


async def post_json(
    name: str,
    url: str,
    payload: Mapping[str, Any],
    *,
    timeout: float,
    headers: Mapping[str, str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    """POST ``payload`` as JSON and raise ``CollaboratorError`` on HTTP errors."""
    if client is not None:
        response = await client.post(url, json=payload, headers=headers, timeout=timeout)
    else:
        async with httpx.AsyncClient(timeout=timeout) as owned:
            response = await owned.post(url, json=payload, headers=headers)
    if response.is_error:
        raise CollaboratorError(
            name=name, status=response.status_code, url=url, body=response.text
        )
    return response


class WebhookCollaborator:
    """Delivers payloads to an incoming-webhook URL (chat or sheet logger)."""

    enabled = True

    def __init__(
        self,
        name: str,
        url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.name = name
        self.url = url
        self.timeout = timeout
        self._client = client

    async def send(self, payload: Mapping[str, Any]) -> None:
        await post_json(self.name, self.url, payload, timeout=self.timeout, client=self._client)


class BestEffortDispatcher:
    """Schedules collaborator deliveries without ever failing the caller.

    Each delivery runs as its own task on the running loop. Failures are
    logged and dropped; nothing is retried.
    """

    def __init__(self) -> None:
        self._pending: Set[asyncio.Task[None]] = set()
        self.logger = get_logger("notify")

    @property
    def pending(self) -> int:
        return len(self._pending)

    def dispatch(
        self,
        name: str,
        collaborator: Collaborator,
        payload: Mapping[str, Any] | None,
    ) -> Optional[asyncio.Task[None]]:
        if payload is None or not collaborator.enabled:
            self.logger.debug("Skipping %s delivery (not configured)", name)
            return None
        task = asyncio.get_running_loop().create_task(self._deliver(name, collaborator, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every outstanding delivery to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _deliver(self, name: str, collaborator: Collaborator, payload: Mapping[str, Any]) -> None:
        try:
            await collaborator.send(payload)
        except Exception as exc:
            self.logger.warning("%s delivery failed: %s", name, exc)
        else:
            self.logger.debug("%s delivery succeeded", name)


__all__ = [
    "BestEffortDispatcher",
    "Collaborator",
    "CollaboratorError",
    "NoOpCollaborator",
    "WebhookCollaborator",
    "post_json",
]
