"""
Client registry module.

Holds the sessions that completed their handshake. Every operation takes
the registry lock for the list operation only; callers never hold it while
waiting on a socket.
"""

import asyncio
from typing import List, Optional

from common.protocol_definitions import names_match
from server.chat.session import Session


class ClientRegistry:
    """Lock-guarded list of active sessions."""

    def __init__(self):
        self._sessions: List[Session] = []
        self.lock = asyncio.Lock()  # Protect shared state

    async def add(self, session: Session):
        async with self.lock:
            self._sessions.append(session)

    async def remove(self, session: Session) -> bool:
        """Remove a session; False if it was not registered (already removed)."""
        async with self.lock:
            try:
                self._sessions.remove(session)
            except ValueError:
                return False
            return True

    async def snapshot(self) -> List[Session]:
        """Copy of the current sessions, safe to iterate without the lock."""
        async with self.lock:
            return list(self._sessions)

    async def names(self) -> List[str]:
        """Display names in registry order."""
        async with self.lock:
            return [session.display_name for session in self._sessions]

    async def find_by_name(self, name: str) -> Optional[Session]:
        """First session whose name matches case-insensitively."""
        async with self.lock:
            for session in self._sessions:
                if session.username is not None and names_match(session.username, name):
                    return session
        return None

    async def clear(self) -> List[Session]:
        """Empty the registry and return what it held."""
        async with self.lock:
            sessions = self._sessions
            self._sessions = []
        return sessions

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, session: Session):
        return session in self._sessions
