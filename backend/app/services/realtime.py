"""In-process change feed for row inserts.

Writers publish from request handlers (event loop or worker thread);
subscribers consume from an ``asyncio.Queue`` bound to their own loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    owner_id: str
    record: dict[str, Any]
    event_type: str = "INSERT"


@dataclass(eq=False)
class _Subscription:
    table: str
    owner_id: str
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue[ChangeEvent] = field(default_factory=asyncio.Queue)


class ChangeFeed:
    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []

    @asynccontextmanager
    async def subscribe(self, table: str, owner_id: str) -> AsyncIterator[asyncio.Queue[ChangeEvent]]:
        sub = _Subscription(table=table, owner_id=owner_id, loop=asyncio.get_running_loop())
        self._subscriptions.append(sub)
        logger.info("Realtime subscriber added for %s (owner=%s)", table, owner_id)
        try:
            yield sub.queue
        finally:
            self._subscriptions.remove(sub)
            logger.info("Realtime subscriber removed for %s (owner=%s)", table, owner_id)

    def publish(self, event: ChangeEvent) -> int:
        """Deliver ``event`` to matching subscribers; returns how many matched."""
        delivered = 0
        for sub in list(self._subscriptions):
            if sub.table != event.table or sub.owner_id != event.owner_id:
                continue
            if sub.loop.is_closed():
                continue
            sub.loop.call_soon_threadsafe(sub.queue.put_nowait, event)
            delivered += 1
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)


change_feed = ChangeFeed()
