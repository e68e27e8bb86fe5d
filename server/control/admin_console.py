"""
Admin console module.

Reads operator commands from the server's own terminal and turns them
into announcements, a client listing, or a shutdown request.
"""

import asyncio
import sys
import threading
from typing import Awaitable, Callable, Optional

from common.constants import AdminCommands
from common.protocol_definitions import parse_command, create_announcement_message
from server.chat.broadcaster import Broadcaster
from server.chat.registry import ClientRegistry
from server.control.shutdown import ShutdownCoordinator
from server.utils.logger import logger


class ConsoleInput:
    """
    Feeds stdin lines to the event loop from a daemon thread.

    A blocked ``readline`` on a daemon thread does not keep the process
    alive after shutdown, unlike the default executor.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.lines: Optional[asyncio.Queue] = None

    def _start(self):
        loop = asyncio.get_running_loop()
        self.lines = asyncio.Queue()

        def pump():
            try:
                for line in iter(self.stream.readline, ''):
                    loop.call_soon_threadsafe(self.lines.put_nowait, line)
                loop.call_soon_threadsafe(self.lines.put_nowait, None)
            except RuntimeError:
                # Event loop already closed
                return

        threading.Thread(target=pump, name='admin-console', daemon=True).start()

    async def read_line(self) -> Optional[str]:
        """Next line from the console, or None at end of input."""
        if self.lines is None:
            self._start()
        return await self.lines.get()


class AdminConsole:
    """Operator command loop running beside the accept loop."""

    def __init__(self, registry: ClientRegistry, broadcaster: Broadcaster,
                 coordinator: ShutdownCoordinator,
                 read_line: Optional[Callable[[], Awaitable[Optional[str]]]] = None):
        self.registry = registry
        self.broadcaster = broadcaster
        self.coordinator = coordinator
        self.read_line = read_line or ConsoleInput().read_line

    async def run(self):
        """Process console lines until shutdown is requested."""
        logger.info("Server Console: Type /list, /sysmsg <msg> or /exit to view commands.")

        while not self.coordinator.requested:
            line = await self.read_line()
            if line is None:
                # No operator attached; keep serving until stopped another way
                logger.info("Console input closed, admin commands disabled")
                await self.coordinator.shutdown_event.wait()
                return

            if not await self.handle_command(line):
                return

    async def handle_command(self, line: str) -> bool:
        """Run one console command; False once shutdown has been requested."""
        if not line.strip():
            return True

        command = parse_command(line)

        if command.verb == AdminCommands.LIST:
            await self.show_clients()
        elif command.verb == AdminCommands.SYSMSG:
            if command.args:
                await self.broadcaster.broadcast_to_all(create_announcement_message(command.args))
                logger.info(f"System message sent: {command.args}")
            else:
                logger.info("Usage: /sysmsg <message>")
        elif command.verb in (AdminCommands.EXIT, AdminCommands.SHUTDOWN):
            self.coordinator.request()
            return False
        else:
            logger.info(f"Unknown console command: {command.verb}")

        return True

    async def show_clients(self):
        names = await self.registry.names()
        logger.info("--- CONNECTED CLIENTS ---")
        if names:
            for name in names:
                logger.info(f"- {name}")
        else:
            logger.info("No clients connected.")
