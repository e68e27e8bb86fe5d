"""
Shared constants for the ShadeNet relay chat.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 5000

# Buffer Sizes
HANDSHAKE_BUFFER_SIZE = 1024
RECEIVE_BUFFER_SIZE = 4096

# Outbound delivery
OUTBOX_SIZE = 256  # queued messages per session before it is dropped
CLOSE_TIMEOUT = 2.0  # seconds to flush a closing session's outbox

# Framing
FRAMING_RAW = 'raw'    # one read is one message
FRAMING_LINE = 'line'  # newline-delimited messages
FRAMINGS = (FRAMING_RAW, FRAMING_LINE)

ENCODING = 'utf-8'
COMMAND_SIGIL = '/'


# Commands a connected client may send
class Commands:
    LIST = '/list'
    WHISPER = '/whisper'
    HELP = '/help'
    EXIT = '/exit'


# Commands typed on the server console
class AdminCommands:
    LIST = '/list'
    SYSMSG = '/sysmsg'
    EXIT = '/exit'
    SHUTDOWN = '/shutdown'


# Prefix tags on server -> client messages
class MessageTags:
    SERVER = '[SERVER]'
    ANNOUNCEMENT = '[SERVER ANNOUNCEMENT]'
    WHISPER_FROM = '[WHISPER from'
    WHISPER_TO = '[WHISPER to'
    WHISPER = '[WHISPER'
