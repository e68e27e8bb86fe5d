"""
Session module.

Per-connection state: display name, stream handles, the cancellation
signal for this connection and its outbound queue.
"""

import asyncio
from typing import Optional

from common.constants import FRAMING_LINE
from common.protocol_definitions import encode_unit
from server.utils.config import ServerConfig
from server.utils.logger import logger


# Queued after the last message when a session closes
_CLOSE = object()


class Session:
    """One connected client, from accept to disconnect."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 config: ServerConfig):
        self.reader = reader
        self.writer = writer
        self.config = config
        self.username: Optional[str] = None

        peer = writer.get_extra_info('peername')
        self.address = peer[0] if peer else 'unknown'

        self.cancelled = asyncio.Event()
        self.outbox: asyncio.Queue = asyncio.Queue(maxsize=config.outbox_size)
        self.closed = False
        self._writer_task: Optional[asyncio.Task] = None

    def __repr__(self):
        return f"<Session {self.display_name!r} {self.address}>"

    @property
    def display_name(self) -> str:
        return self.username if self.username is not None else 'Unknown'

    def start(self):
        """Start the writer task that drains the outbox."""
        if self._writer_task is None:
            self._writer_task = asyncio.create_task(self._drain_outbox())

    def send(self, message: str) -> bool:
        """
        Queue a message for this client without waiting for delivery.

        Returns False when the session is already going away. A full
        outbox means the client stopped reading; the session is cancelled
        rather than letting the sender wait on it.
        """
        if self.closed or self.cancelled.is_set():
            return False

        try:
            self.outbox.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(f"Outbox full for {self.display_name} ({self.address}), disconnecting")
            self.cancel()
            return False
        return True

    def cancel(self):
        """Signal this connection's loops to stop."""
        self.cancelled.set()

    async def read_unit(self, size: int) -> Optional[bytes]:
        """
        Read the next inbound unit.

        Raw framing returns whatever one read yields (up to ``size``
        bytes); line framing returns one newline-terminated line. Returns
        None when the peer closed the stream or the session was cancelled,
        including while the read is still pending.
        """
        if self.cancelled.is_set():
            return None

        if self.config.framing == FRAMING_LINE:
            read_task = asyncio.ensure_future(self.reader.readline())
        else:
            read_task = asyncio.ensure_future(self.reader.read(size))
        cancel_task = asyncio.ensure_future(self.cancelled.wait())

        try:
            done, _ = await asyncio.wait({read_task, cancel_task},
                                         return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (read_task, cancel_task):
                if not task.done():
                    task.cancel()

        if read_task not in done:
            return None

        data = read_task.result()
        return data or None

    async def _drain_outbox(self):
        """Write queued messages in order until the session closes."""
        while True:
            message = await self.outbox.get()
            if message is _CLOSE:
                break

            try:
                self.writer.write(encode_unit(message, self.config.framing))
                await self.writer.drain()
            except (ConnectionError, OSError) as e:
                logger.error(f"Failed to send to {self.display_name}: {e}")
                self.cancel()
                break

    async def close(self):
        """
        Flush what is already queued, then close the stream.

        A peer that stopped reading gets its transport aborted once
        ``close_timeout`` runs out, so closing never waits on the client.
        Safe to call more than once and from several tasks; only the first
        call does anything.
        """
        if self.closed:
            return
        self.closed = True
        self.cancel()

        flushed = True
        if self._writer_task is not None and not self._writer_task.done():
            try:
                self.outbox.put_nowait(_CLOSE)
            except asyncio.QueueFull:
                self._writer_task.cancel()
                flushed = False

            done, _ = await asyncio.wait({self._writer_task}, timeout=self.config.close_timeout)
            if not done:
                self._writer_task.cancel()
                flushed = False

        if flushed:
            self.writer.close()
        else:
            self.writer.transport.abort()

        try:
            # Shielded so a timeout does not cancel the stream's own close waiter
            await asyncio.wait_for(asyncio.shield(self.writer.wait_closed()),
                                   self.config.close_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{self.display_name} did not close in time, aborting connection")
            self.writer.transport.abort()
        except (ConnectionError, OSError):
            pass
