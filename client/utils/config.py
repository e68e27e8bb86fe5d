"""
Client configuration module.

This module handles client-side configuration settings.
"""

from common.constants import DEFAULT_HOST, DEFAULT_PORT, FRAMING_RAW


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, username: str = None,
                 framing: str = FRAMING_RAW):
        self.host = host
        self.port = port
        self.username = (username or '').strip() or "Anonymous"
        self.framing = framing

        # Words typed locally that end the session
        self.quit_words = ('quit', '/exit')

    def is_quit(self, text: str) -> bool:
        return text.strip().lower() in self.quit_words
