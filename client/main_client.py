#!/usr/bin/env python3
"""
ShadeNet Relay Client - Main Module

Connects to the relay server, sends the display name as the first
message, then relays terminal input and prints whatever the server sends.
"""

import asyncio
import sys
from typing import Optional

from client.chat.chat_client import ChatClient
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import DEFAULT_HOST, DEFAULT_PORT, FRAMING_RAW, FRAMINGS
from common.protocol_definitions import MessageKinds, split_chat_message


class RelayClient:
    """Main client class that integrates all functionality."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, username: str = None,
                 framing: str = FRAMING_RAW):
        self.config = ClientConfig(host, port, username, framing)
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.running = False

        self.chat_client = ChatClient(framing=framing)
        self.chat_client.set_message_handler(self.handle_message)

    async def connect(self) -> bool:
        """Open the connection and introduce ourselves by name."""
        try:
            self.reader, self.writer = await asyncio.open_connection(self.config.host, self.config.port)
        except OSError as e:
            logger.log_connection(self.config.host, self.config.port, False)
            logger.error(f"[ERROR] Failed to connect to server: {e}")
            return False

        logger.log_connection(self.config.host, self.config.port, True)
        self.chat_client.set_writer(self.writer)
        self.running = True
        return await self.chat_client.send_text(self.config.username)

    def handle_message(self, message: str, kind: str):
        """Print one server message."""
        if kind == MessageKinds.CHAT:
            name, text = split_chat_message(message)
            print(f"[{name}]: {text}")
        else:
            print(message)

    async def listen_for_messages(self):
        try:
            await self.chat_client.receive_loop(self.reader)
        except (ConnectionError, OSError):
            pass
        if self.running:
            logger.error("[CONNECTION ERROR] Server disconnected. Press Enter to exit.")
            self.running = False

    async def send(self, text: str) -> bool:
        """Send typed input; returns False when the session should end."""
        text = text.strip()
        if self.config.is_quit(text):
            if text.lower() == '/exit':
                await self.chat_client.send_text(text)
            return False
        if not text:
            return True
        return await self.chat_client.send_text(text)

    async def interactive_mode(self):
        """Run client with interactive chat input."""
        if not await self.connect():
            return

        listener_task = asyncio.create_task(self.listen_for_messages())
        logger.show_interactive_mode_info()

        try:
            while self.running:
                user_input = await asyncio.get_running_loop().run_in_executor(
                    None, sys.stdin.readline
                )
                if not user_input:
                    break
                if not self.running or not await self.send(user_input):
                    break
        except asyncio.CancelledError:
            pass
        finally:
            await self.close(listener_task)

    async def close(self, listener_task: Optional[asyncio.Task] = None):
        self.running = False
        if self.writer:
            self.writer.close()
            try:
                await self.writer.wait_closed()
            except (ConnectionError, OSError):
                pass

        if listener_task is not None:
            listener_task.cancel()
            try:
                await listener_task
            except asyncio.CancelledError:
                pass

        logger.info("--- Disconnected from chat. ---")


import argparse


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='ShadeNet Relay Chat Client')
    parser.add_argument('username', nargs='?', default=None,
                       help='Display name (prompted for if omitted)')
    parser.add_argument('--host', type=str, default=DEFAULT_HOST,
                       help=f'Server address (default: {DEFAULT_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                       help=f'Server port (default: {DEFAULT_PORT})')
    parser.add_argument('--framing', choices=FRAMINGS, default=FRAMING_RAW,
                       help='Must match the server framing (default: raw)')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    username = args.username
    if username is None:
        username = input("Enter your username: ").strip()

    client = RelayClient(host=args.host, port=args.port, username=username, framing=args.framing)
    try:
        asyncio.run(client.interactive_mode())
    except KeyboardInterrupt:
        print("\n[INFO] Client terminated")
    return 0


if __name__ == "__main__":
    sys.exit(main())
