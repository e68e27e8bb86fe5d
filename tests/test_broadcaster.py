#!/usr/bin/env python3
"""
Unit tests for server/chat/broadcaster.py
"""

import unittest
from unittest.mock import patch

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from server.chat.broadcaster import Broadcaster
from server.chat.registry import ClientRegistry
from server.utils.logger import logger
from tests.helpers import StubSession


class TestBroadcaster(unittest.IsolatedAsyncioTestCase):
    """Fan-out modes."""

    async def asyncSetUp(self):
        self.registry = ClientRegistry()
        self.broadcaster = Broadcaster(self.registry)
        self.alice = StubSession("alice")
        self.bob = StubSession("bob")
        self.carol = StubSession("carol")
        for session in (self.alice, self.bob, self.carol):
            await self.registry.add(session)

    async def test_broadcast_to_others_skips_sender(self):
        delivered = await self.broadcaster.broadcast_to_others("[alice]: hi", self.alice)

        self.assertEqual(delivered, 2)
        self.assertEqual(self.alice.sent, [])
        self.assertEqual(self.bob.sent, ["[alice]: hi"])
        self.assertEqual(self.carol.sent, ["[alice]: hi"])

    async def test_broadcast_to_all_echoes_to_console(self):
        with patch.object(logger, 'log_system') as log_system:
            delivered = await self.broadcaster.broadcast_to_all("dave has left the chat.")

        self.assertEqual(delivered, 3)
        log_system.assert_called_once_with("dave has left the chat.")
        for session in (self.alice, self.bob, self.carol):
            self.assertEqual(session.sent, ["dave has left the chat."])

    async def test_failed_recipient_does_not_stop_broadcast(self):
        self.bob.accept = False
        delivered = await self.broadcaster.broadcast_to_others("[alice]: hi", self.alice)

        self.assertEqual(delivered, 1)
        self.assertEqual(self.carol.sent, ["[alice]: hi"])

    async def test_whisper_delivers_to_one_session(self):
        self.assertTrue(await self.broadcaster.whisper("carol", "BOB", "secret"))

        self.assertEqual(self.bob.sent, ["[WHISPER from carol]: secret"])
        self.assertEqual(self.alice.sent, [])
        self.assertEqual(self.carol.sent, [])

    async def test_whisper_unknown_target(self):
        self.assertFalse(await self.broadcaster.whisper("carol", "dave", "secret"))
        for session in (self.alice, self.bob, self.carol):
            self.assertEqual(session.sent, [])

    async def test_whisper_duplicate_names_not_duplicated(self):
        other_bob = StubSession("bob")
        await self.registry.add(other_bob)

        self.assertTrue(await self.broadcaster.whisper("alice", "bob", "psst"))
        self.assertEqual(self.bob.sent, ["[WHISPER from alice]: psst"])
        self.assertEqual(other_bob.sent, [])

    async def test_empty_registry(self):
        await self.registry.clear()
        self.assertEqual(await self.broadcaster.broadcast_to_all("anyone?"), 0)


if __name__ == '__main__':
    unittest.main()
