#!/usr/bin/env python3
"""
ShadeNet Relay Client - Main Entry Point

Usage:
    python main_client.py [username] [--host HOST] [--port PORT] [--framing raw|line]

Type messages to chat; /list, /whisper <user> <message>, /help and /exit
are handled by the server. 'quit' or /exit ends the session.
"""

if __name__ == "__main__":
    import sys

    from client.main_client import main

    sys.exit(main())
