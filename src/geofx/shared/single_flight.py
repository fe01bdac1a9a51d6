# src/geofx/shared/single_flight.py
"""
Single Flight - Request Coalescing for Concurrent Callers

This module provides a small coalescing primitive for the event loop: while
an operation for a given key is in flight, later callers for the same key
await the pending task instead of starting a second one. Once the task
finishes (successfully or not) the key is released, so the next call starts
fresh.

Files that USE this module:
- geofx.application.location_chain (key "location")
- geofx.application.rates_service (key "rate:<currency>")
- geofx.application.currency_store (keys "initialize" / "refresh")

Files that this module USES:
- None (pure asyncio utility)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlight:
    """Pending-task map keyed by operation name."""

    def __init__(self):
        self._inflight: Dict[str, "asyncio.Future[Any]"] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._inflight

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``factory()`` once for all concurrent callers of ``key``.

        The shared task is shielded, so a caller being cancelled does not
        cancel the operation for the others.

        Args:
            key: Operation key (e.g., "location", "rate:ngn")
            factory: Zero-argument coroutine function to run

        Returns:
            The shared result

        Raises:
            Whatever the shared operation raised, to every waiting caller
        """
        task = self._inflight.get(key)
        if task is not None:
            log.debug("Joining in-flight operation %s", key)
            return await asyncio.shield(task)

        task = asyncio.ensure_future(factory())
        self._inflight[key] = task

        def _release(done: "asyncio.Future[Any]") -> None:
            if self._inflight.get(key) is done:
                del self._inflight[key]

        task.add_done_callback(_release)
        return await asyncio.shield(task)
