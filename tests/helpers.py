"""
Shared test doubles.
"""

import asyncio
from unittest.mock import AsyncMock, Mock


class StubSession:
    """Stands in for a Session where only names and queued messages matter."""

    def __init__(self, username, accept=True):
        self.username = username
        self.sent = []
        self.cancelled = False
        self.accept = accept

    def __repr__(self):
        return f"<StubSession {self.username!r}>"

    @property
    def display_name(self):
        return self.username if self.username is not None else 'Unknown'

    def send(self, message):
        if not self.accept:
            return False
        self.sent.append(message)
        return True

    def cancel(self):
        self.cancelled = True


def make_writer(peer=('10.0.0.7', 40000)):
    """Mock StreamWriter recording everything written to it."""
    writer = Mock()
    writer.get_extra_info = Mock(return_value=peer)
    writer.write = Mock()
    writer.drain = AsyncMock()
    writer.close = Mock()
    writer.wait_closed = AsyncMock()
    return writer


def written(writer):
    """Bytes passed to writer.write, in order."""
    return [call.args[0] for call in writer.write.call_args_list]


async def settle(rounds=5):
    """Let queued tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
