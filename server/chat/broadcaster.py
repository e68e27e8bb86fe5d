"""
Broadcaster module.

Fans messages out to registered sessions. Delivery is queued on each
recipient's outbox, so callers never wait for a socket write.
"""

from typing import Optional

from common.protocol_definitions import create_whisper_from_message
from server.chat.registry import ClientRegistry
from server.chat.session import Session
from server.utils.logger import logger


class Broadcaster:
    """Delivers messages to all, all-but-sender, or one named session."""

    def __init__(self, registry: ClientRegistry):
        self.registry = registry

    async def broadcast_to_others(self, message: str, sender: Optional[Session]) -> int:
        """Send to every registered session except the sender."""
        sessions = await self.registry.snapshot()
        delivered = 0
        for session in sessions:
            if session is sender:
                continue
            if session.send(message):
                delivered += 1
        return delivered

    async def broadcast_to_all(self, message: str) -> int:
        """Send a system message to everyone and echo it on the server console."""
        logger.log_system(message)
        return await self.broadcast_to_others(message, None)

    async def whisper(self, sender_name: str, target_name: str, text: str) -> bool:
        """
        Send a private message to the first session named ``target_name``.

        Returns False if nobody by that name is registered.
        """
        target = await self.registry.find_by_name(target_name)
        if target is None:
            return False

        target.send(create_whisper_from_message(sender_name, text))
        logger.log_whisper(sender_name, target.display_name, text)
        return True
