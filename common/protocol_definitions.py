"""
Protocol definitions for the ShadeNet relay chat.

This module defines the text shapes exchanged between client and server,
plus the helpers used to split commands and classify incoming messages.
Messages are plain UTF-8 text; the only structure is the prefix tag.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from common.constants import ENCODING, COMMAND_SIGIL, FRAMING_LINE, MessageTags


WHISPER_USAGE = "Usage: /whisper <user> <message>"

HELP_TEXT = ("Available Commands: /list (View users), "
             "/whisper <user> <message> (Private message), /exit (Quit).")


class MessageKinds:
    """Client-side classification of server messages."""
    SERVER = 'server'
    ANNOUNCEMENT = 'announcement'
    WHISPER = 'whisper'
    CHAT = 'chat'
    NOTICE = 'notice'


@dataclass
class ParsedCommand:
    """A command split into its verb and remaining argument string."""
    verb: str
    args: str


@dataclass
class WhisperRequest:
    """Target and text of a /whisper command."""
    target: str
    text: str


def decode_unit(data: bytes) -> str:
    """Decode one received unit and trim surrounding whitespace."""
    return data.decode(ENCODING, errors='replace').strip()


def encode_unit(text: str, framing: str) -> bytes:
    """Encode one outbound unit for the given framing."""
    data = text.encode(ENCODING)
    if framing == FRAMING_LINE:
        data += b'\n'
    return data


def is_command(text: str) -> bool:
    return text.startswith(COMMAND_SIGIL)


def parse_command(text: str) -> ParsedCommand:
    """
    Split a command into a lower-cased verb and a trimmed argument.

    The first run of whitespace is the boundary; the argument is not
    tokenized further.
    """
    parts = text.strip().split(None, 1)
    if not parts:
        return ParsedCommand(verb='', args='')
    verb = parts[0].lower()
    args = parts[1].strip() if len(parts) > 1 else ''
    return ParsedCommand(verb=verb, args=args)


def parse_whisper(args: str) -> Optional[WhisperRequest]:
    """Split '<target> <text>'; None when the text part is missing."""
    parts = args.strip().split(None, 1)
    if len(parts) < 2:
        return None
    return WhisperRequest(target=parts[0], text=parts[1])


def names_match(left: str, right: str) -> bool:
    """Display names compare case-insensitively."""
    return left.casefold() == right.casefold()


def create_server_message(text: str) -> str:
    return f"{MessageTags.SERVER} {text}"


def create_welcome_message(username: str) -> str:
    return create_server_message(f"Welcome, {username}! Type /help for commands.")


def create_user_list_message(usernames) -> str:
    return create_server_message("Online Users: " + ", ".join(usernames))


def create_help_message() -> str:
    return create_server_message(HELP_TEXT)


def create_goodbye_message() -> str:
    return create_server_message("You requested disconnection. Goodbye!")


def create_unknown_command_message(verb: str) -> str:
    return create_server_message(f"Unknown command: {verb}. Type /help.")


def create_whisper_usage_message() -> str:
    return create_server_message(WHISPER_USAGE)


def create_whisper_incomplete_message() -> str:
    return create_server_message(f"Incomplete private message. {WHISPER_USAGE}")


def create_whisper_self_message() -> str:
    return create_server_message("No need to whisper to yourself.")


def create_user_not_found_message(target: str) -> str:
    return create_server_message(f"User '{target}' not found.")


def create_chat_message(username: str, text: str) -> str:
    return f"[{username}]: {text}"


def create_whisper_from_message(sender: str, text: str) -> str:
    return f"{MessageTags.WHISPER_FROM} {sender}]: {text}"


def create_whisper_to_message(target: str, text: str) -> str:
    return f"{MessageTags.WHISPER_TO} {target}]: {text}"


def create_announcement_message(text: str) -> str:
    return f"{MessageTags.ANNOUNCEMENT} {text}"


def create_user_joined_message(username: str, address: str) -> str:
    return f"{username} ({address}) has joined the chat!"


def create_user_left_message(username: str) -> str:
    return f"{username} has left the chat."


def split_chat_message(message: str) -> Optional[Tuple[str, str]]:
    """Split '[name]: text' into (name, text), or None if it is not chat."""
    if not message.startswith('['):
        return None
    name_end = message.find(']')
    if name_end <= 0:
        return None
    rest = message[name_end + 1:].lstrip()
    if not rest.startswith(':'):
        return None
    text = rest[1:]
    if text.startswith(' '):
        text = text[1:]
    return message[1:name_end], text


def classify_message(message: str) -> str:
    """Classify a server message by its prefix tag."""
    if message.startswith(MessageTags.ANNOUNCEMENT):
        return MessageKinds.ANNOUNCEMENT
    if message.startswith(MessageTags.SERVER):
        return MessageKinds.SERVER
    if message.startswith(MessageTags.WHISPER):
        return MessageKinds.WHISPER
    if split_chat_message(message) is not None:
        return MessageKinds.CHAT
    return MessageKinds.NOTICE
