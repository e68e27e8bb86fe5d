#!/usr/bin/env python3
"""
ShadeNet Relay Server - Main Module

Accepts client connections, runs the per-connection handshake and receive
loop, and wires together the registry, broadcaster, command dispatcher,
admin console and shutdown coordinator.
"""

import asyncio
from typing import Optional

from common.constants import DEFAULT_HOST, DEFAULT_PORT, FRAMING_RAW, FRAMINGS
from common.protocol_definitions import (
    decode_unit, is_command, create_welcome_message, create_chat_message,
    create_user_joined_message, create_user_left_message
)
from server.chat.broadcaster import Broadcaster
from server.chat.dispatcher import CommandDispatcher
from server.chat.registry import ClientRegistry
from server.chat.session import Session
from server.control.admin_console import AdminConsole
from server.control.shutdown import ShutdownCoordinator
from server.utils.config import ServerConfig
from server.utils.logger import logger


class RelayServer:
    """Main server class that integrates all functionality."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, framing: str = FRAMING_RAW,
                 config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig(host, port, framing)

        # Initialize modules
        self.registry = ClientRegistry()
        self.broadcaster = Broadcaster(self.registry)
        self.dispatcher = CommandDispatcher(self.registry, self.broadcaster)
        self.coordinator = ShutdownCoordinator(self.registry)

        self.server: Optional[asyncio.AbstractServer] = None

    @property
    def port(self) -> int:
        """Port actually bound, useful when configured with port 0."""
        if self.server is None or not self.server.sockets:
            return self.config.port
        return self.server.sockets[0].getsockname()[1]

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        if self.coordinator.requested:
            writer.close()
            return
        self.coordinator.track(asyncio.current_task())

        session = Session(reader, writer, self.config)
        session.start()
        logger.log_connection(writer.get_extra_info('peername'))

        registered = False
        try:
            if not await self.handshake(session):
                return
            await self.registry.add(session)
            registered = True

            await self.broadcaster.broadcast_to_all(
                create_user_joined_message(session.username, session.address))

            await self.receive_loop(session)

        except asyncio.CancelledError:
            logger.info(f"Connection cancelled for {session.display_name}")
        except (ConnectionError, OSError) as e:
            logger.error(f"Socket error for {session.display_name}: {e}")
        except Exception as e:
            logger.log_error(f"client {session.display_name} ({session.address})", e)
        finally:
            await self.disconnect_session(session, registered)

    async def handshake(self, session: Session) -> bool:
        """Adopt the first unit as the display name; False if the peer left first."""
        data = await session.read_unit(self.config.handshake_buffer_size)
        if data is None:
            return False

        # Line framing reads a whole line, so the name is capped here as well
        session.username = decode_unit(data[:self.config.handshake_buffer_size])
        session.send(create_welcome_message(session.username))
        logger.log_login(session.username, session.address)
        return True

    async def receive_loop(self, session: Session):
        """Relay chat and dispatch commands until the session ends."""
        while True:
            try:
                data = await session.read_unit(self.config.receive_buffer_size)
            except (ConnectionError, OSError):
                # Client closed the connection abruptly
                break
            if data is None:
                break

            text = decode_unit(data)
            if not text:
                continue

            if is_command(text):
                await self.dispatcher.dispatch(session, text)
            else:
                await self.broadcaster.broadcast_to_others(
                    create_chat_message(session.username, text), session)
                logger.log_chat(session.username, text)

    async def disconnect_session(self, session: Session, registered: bool):
        """Close the session and announce its departure exactly once."""
        await session.close()

        if registered and await self.registry.remove(session):
            logger.log_disconnect(session.display_name, session.address)
            await self.broadcaster.broadcast_to_all(create_user_left_message(session.display_name))

    async def start(self):
        """Validate the configuration and bind the listener."""
        self.config.validate()

        self.server = await asyncio.start_server(
            self.handle_client,
            self.config.host,
            self.config.port
        )
        self.coordinator.listener = self.server

        addr = ', '.join(str(sock.getsockname()) for sock in self.server.sockets)
        logger.info(f"Chat server started on {addr}. Waiting for clients...")

    async def run(self, console: Optional[AdminConsole] = None):
        """
        Serve until the accept loop ends, the console asks for shutdown,
        or shutdown is requested some other way, then tear everything down.
        """
        if self.server is None:
            await self.start()

        serve_task = asyncio.create_task(self.server.serve_forever())
        self.coordinator.serve_task = serve_task

        waiters = {serve_task, asyncio.create_task(self.coordinator.shutdown_event.wait())}
        if console is not None:
            waiters.add(asyncio.create_task(console.run()))

        try:
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
            if serve_task in done and not serve_task.cancelled() and serve_task.exception():
                logger.log_error("accept loop", serve_task.exception())
        finally:
            await self.coordinator.shutdown()
            for task in waiters:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*waiters, return_exceptions=True)

    async def stop(self):
        """Request shutdown and wait for it to finish."""
        self.coordinator.request()
        await self.coordinator.shutdown()

    def create_console(self, read_line=None) -> AdminConsole:
        return AdminConsole(self.registry, self.broadcaster, self.coordinator, read_line)


import argparse
import logging
import sys


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='ShadeNet Relay Chat Server')
    parser.add_argument('--host', type=str, default=DEFAULT_HOST,
                       help=f'IP address to bind to (default: {DEFAULT_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                       help=f'TCP port to listen on (default: {DEFAULT_PORT})')
    parser.add_argument('--framing', choices=FRAMINGS, default=FRAMING_RAW,
                       help='raw: one read is one message; line: newline-delimited (default: raw)')
    parser.add_argument('--log-level', type=str, default='INFO',
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Logging level (default: INFO)')
    parser.add_argument('--log-file', type=str, default=None,
                       help='Also write operational logs to this file')
    parser.add_argument('--no-console', action='store_true',
                       help='Do not read admin commands from stdin')
    return parser.parse_args(argv)


async def serve(args) -> None:
    server = RelayServer(host=args.host, port=args.port, framing=args.framing)
    await server.start()
    console = None if args.no_console else server.create_console()
    await server.run(console)


def main(argv=None) -> int:
    args = parse_args(argv)
    logger.configure(getattr(logging, args.log_level), args.log_file)

    try:
        asyncio.run(serve(args))
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except (ValueError, OSError) as e:
        logger.error(f"FATAL ERROR: {e}")
        logger.error("Please check the IP address and port.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
