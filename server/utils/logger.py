"""
Server logging module.

This module handles server-side logging functionality. Only operational
events are logged; chat traffic is echoed to the console and never stored.
"""

import logging
from pathlib import Path
from typing import Optional


class ServerLogger:
    """Server logging class."""

    def __init__(self, log_level: int = logging.INFO):
        # Set up main logger
        self.logger = logging.getLogger('relay_server')
        self.logger.setLevel(log_level)
        self.logger.propagate = False

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create formatter
        self.formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(self.formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

    def configure(self, log_level: int = logging.INFO, log_file: Optional[str] = None):
        """Apply the level from the command line and optionally mirror to a file."""
        self.logger.setLevel(log_level)
        for handler in self.logger.handlers:
            handler.setLevel(log_level)

        if log_file:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding='utf-8')
            file_handler.setLevel(log_level)
            file_handler.setFormatter(self.formatter)
            self.logger.addHandler(file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, addr):
        """Log an accepted connection before its handshake."""
        self.debug(f"New connection from {addr}")

    def log_login(self, username: str, addr):
        """Log a completed handshake."""
        self.info(f"[CONNECTED] New client: {username} | IP: {addr}")

    def log_disconnect(self, username: str, addr):
        """Log user disconnect."""
        self.info(f"[DISCONNECTED] {username} | IP: {addr}")

    def log_chat(self, username: str, message: str):
        """Log chat message."""
        self.info(f"[CHAT] {username}: {message}")

    def log_whisper(self, from_username: str, to_username: str, message: str):
        """Log whisper message."""
        self.info(f"[WHISPER] {from_username} -> {to_username}: {message}")

    def log_system(self, message: str):
        """Echo a system message to the server console."""
        self.info(f"[SYSTEM]: {message}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ServerLogger()
