"""
Command dispatcher module.

Interprets slash commands sent by connected clients. Every response goes
back to the issuing session only; bad or missing arguments turn into a
usage notice.
"""

from common.constants import Commands
from common.protocol_definitions import (
    parse_command, parse_whisper, names_match,
    create_user_list_message, create_help_message, create_goodbye_message,
    create_unknown_command_message, create_whisper_usage_message,
    create_whisper_incomplete_message, create_whisper_self_message,
    create_user_not_found_message, create_whisper_to_message
)
from server.chat.broadcaster import Broadcaster
from server.chat.registry import ClientRegistry
from server.chat.session import Session
from server.utils.logger import logger


class CommandDispatcher:
    """Routes client commands to their handlers."""

    def __init__(self, registry: ClientRegistry, broadcaster: Broadcaster):
        self.registry = registry
        self.broadcaster = broadcaster

    async def dispatch(self, session: Session, text: str):
        """Handle one command unit from ``session``."""
        command = parse_command(text)
        logger.debug(f"Command from {session.display_name}: {command.verb}")

        if command.verb == Commands.LIST:
            await self.handle_list(session)
        elif command.verb == Commands.WHISPER:
            await self.handle_whisper(session, command.args)
        elif command.verb == Commands.HELP:
            session.send(create_help_message())
        elif command.verb == Commands.EXIT:
            self.handle_exit(session)
        else:
            session.send(create_unknown_command_message(command.verb))

    async def handle_list(self, session: Session):
        names = await self.registry.names()
        session.send(create_user_list_message(names))

    async def handle_whisper(self, session: Session, args: str):
        if not args:
            session.send(create_whisper_usage_message())
            return

        request = parse_whisper(args)
        if request is None:
            session.send(create_whisper_incomplete_message())
            return

        if names_match(request.target, session.display_name):
            session.send(create_whisper_self_message())
            return

        if await self.broadcaster.whisper(session.display_name, request.target, request.text):
            session.send(create_whisper_to_message(request.target, request.text))
        else:
            session.send(create_user_not_found_message(request.target))

    def handle_exit(self, session: Session):
        # Goodbye is queued before the cancel so it is flushed on close
        session.send(create_goodbye_message())
        logger.info(f"Logout request from {session.display_name}")
        session.cancel()
