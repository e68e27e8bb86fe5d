"""
Server configuration module.

This module handles server-side configuration settings.
"""

import ipaddress

from common.constants import (
    DEFAULT_HOST, DEFAULT_PORT, HANDSHAKE_BUFFER_SIZE, RECEIVE_BUFFER_SIZE,
    OUTBOX_SIZE, CLOSE_TIMEOUT, FRAMING_RAW, FRAMINGS
)


class ConfigurationError(ValueError):
    """Raised when the server cannot start with the given settings."""


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 framing: str = FRAMING_RAW):
        self.host = host
        self.port = port
        self.framing = framing

        # Read sizes
        self.handshake_buffer_size = HANDSHAKE_BUFFER_SIZE
        self.receive_buffer_size = RECEIVE_BUFFER_SIZE

        # Outbound delivery settings
        self.outbox_size = OUTBOX_SIZE
        self.close_timeout = CLOSE_TIMEOUT

    def validate(self):
        """Reject settings the listener could never bind with."""
        try:
            ipaddress.ip_address(self.host)
        except ValueError:
            raise ConfigurationError(f"Invalid IP address format: {self.host!r}")

        if not isinstance(self.port, int) or not 0 <= self.port <= 65535:
            raise ConfigurationError(f"Invalid port: {self.port!r}")

        if self.framing not in FRAMINGS:
            raise ConfigurationError(
                f"Unknown framing {self.framing!r}, expected one of {', '.join(FRAMINGS)}")

        if self.outbox_size <= 0:
            raise ConfigurationError("Outbox size must be positive")
