"""
Chat client module.

This module handles client-side chat messaging functionality.
"""

import asyncio
from typing import Callable, Optional

from common.constants import FRAMING_RAW, FRAMING_LINE, RECEIVE_BUFFER_SIZE
from common.protocol_definitions import encode_unit, decode_unit, classify_message
from client.utils.logger import logger


class ChatClient:
    """Client-side chat functionality."""

    def __init__(self, writer: Optional[asyncio.StreamWriter] = None, framing: str = FRAMING_RAW):
        self.writer = writer
        self.framing = framing
        self.message_handler: Optional[Callable[[str, str], None]] = None

    def set_writer(self, writer: asyncio.StreamWriter):
        """Set the writer for sending messages."""
        self.writer = writer

    def set_message_handler(self, handler: Callable[[str, str], None]):
        """Set the handler called with (message, kind) for incoming messages."""
        self.message_handler = handler

    async def send_text(self, text: str) -> bool:
        """Send one unit (display name, chat line or command) to the server."""
        if not self.writer:
            logger.error("Not connected to server")
            return False

        try:
            self.writer.write(encode_unit(text, self.framing))
            await self.writer.drain()
            return True
        except (ConnectionError, OSError) as e:
            logger.error(f"[SEND ERROR] Connection lost: {e}")
            return False

    async def receive_loop(self, reader: asyncio.StreamReader):
        """Deliver server messages to the handler until the server closes."""
        while True:
            if self.framing == FRAMING_LINE:
                data = await reader.readline()
            else:
                data = await reader.read(RECEIVE_BUFFER_SIZE)
            if not data:
                break

            message = decode_unit(data)
            if message and self.message_handler:
                self.message_handler(message, classify_message(message))
