"""
Shutdown coordination.

Stops the listener, disconnects every session and waits for connection
handlers to finish. Runs once no matter how many paths ask for it.
"""

import asyncio
from typing import Optional, Set

from server.chat.registry import ClientRegistry
from server.utils.logger import logger


class ShutdownCoordinator:
    """Idempotent teardown of the listener and all sessions."""

    def __init__(self, registry: ClientRegistry):
        self.registry = registry
        self.shutdown_event = asyncio.Event()
        self.listener: Optional[asyncio.AbstractServer] = None
        self.serve_task: Optional[asyncio.Task] = None
        self.handler_tasks: Set[asyncio.Task] = set()
        self.completed = False
        self._teardown: Optional[asyncio.Task] = None

    @property
    def requested(self) -> bool:
        return self.shutdown_event.is_set()

    def request(self):
        """Signal global shutdown; the server's main task performs it."""
        self.shutdown_event.set()

    def track(self, task: asyncio.Task):
        """Remember a connection handler so shutdown can wait for it."""
        self.handler_tasks.add(task)
        task.add_done_callback(self.handler_tasks.discard)

    async def shutdown(self):
        """
        Tear everything down once. Later and concurrent callers wait for
        the same teardown instead of returning before it has finished.
        """
        if self._teardown is None:
            self._teardown = asyncio.ensure_future(self._teardown_all())
        await asyncio.shield(self._teardown)

    async def _teardown_all(self):
        self.shutdown_event.set()
        logger.warning("Initiating server shutdown...")

        # Stop accepting. A cancelled serve_forever waits for open
        # connections, so it is only awaited once sessions are closed.
        if self.serve_task is not None and not self.serve_task.done():
            self.serve_task.cancel()
        if self.listener is not None:
            self.listener.close()

        # Emptying the registry first means closing handlers find nothing to
        # remove and announce no departures
        sessions = await self.registry.clear()
        await asyncio.gather(*(session.close() for session in sessions))
        logger.info(f"Disconnected {len(sessions)} client(s)")

        # Handlers still running include connections that never named themselves
        pending = [task for task in self.handler_tasks if not task.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if self.serve_task is not None:
            await asyncio.gather(self.serve_task, return_exceptions=True)
        if self.listener is not None:
            await self.listener.wait_closed()

        self.completed = True
        logger.info("Server Shut Down.")
