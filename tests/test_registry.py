#!/usr/bin/env python3
"""
Unit tests for server/chat/registry.py
"""

import asyncio
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from server.chat.registry import ClientRegistry
from tests.helpers import StubSession


class TestClientRegistry(unittest.IsolatedAsyncioTestCase):
    """Registry membership and lookups."""

    async def asyncSetUp(self):
        self.registry = ClientRegistry()
        self.alice = StubSession("alice")
        self.bob = StubSession("bob")
        self.carol = StubSession("carol")
        for session in (self.alice, self.bob, self.carol):
            await self.registry.add(session)

    async def test_names_in_registry_order(self):
        self.assertEqual(await self.registry.names(), ["alice", "bob", "carol"])
        self.assertEqual(len(self.registry), 3)

    async def test_remove_happens_once(self):
        self.assertTrue(await self.registry.remove(self.bob))
        self.assertFalse(await self.registry.remove(self.bob))
        self.assertEqual(await self.registry.names(), ["alice", "carol"])
        self.assertNotIn(self.bob, self.registry)

    async def test_find_by_name_ignores_case(self):
        self.assertIs(await self.registry.find_by_name("BOB"), self.bob)
        self.assertIsNone(await self.registry.find_by_name("dave"))

    async def test_duplicate_names_resolve_to_first(self):
        second_alice = StubSession("Alice")
        await self.registry.add(second_alice)

        self.assertEqual(await self.registry.names(), ["alice", "bob", "carol", "Alice"])
        self.assertIs(await self.registry.find_by_name("alice"), self.alice)

        await self.registry.remove(self.alice)
        self.assertIs(await self.registry.find_by_name("alice"), second_alice)

    async def test_empty_name_is_allowed(self):
        nameless = StubSession("")
        await self.registry.add(nameless)
        self.assertIs(await self.registry.find_by_name(""), nameless)

    async def test_snapshot_is_a_copy(self):
        snapshot = await self.registry.snapshot()
        await self.registry.remove(self.alice)
        self.assertEqual(len(snapshot), 3)
        self.assertEqual(len(self.registry), 2)

    async def test_clear_returns_sessions(self):
        sessions = await self.registry.clear()
        self.assertEqual(sessions, [self.alice, self.bob, self.carol])
        self.assertEqual(len(self.registry), 0)
        self.assertFalse(await self.registry.remove(self.alice))

    async def test_concurrent_add_and_remove(self):
        extra = [StubSession(f"user{i}") for i in range(50)]
        await asyncio.gather(*(self.registry.add(s) for s in extra))
        await asyncio.gather(*(self.registry.remove(s) for s in extra[::2]))

        names = await self.registry.names()
        self.assertEqual(len(names), 3 + 25)
        self.assertNotIn("user0", names)
        self.assertIn("user1", names)


if __name__ == '__main__':
    unittest.main()
