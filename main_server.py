#!/usr/bin/env python3
"""
ShadeNet Relay Server - Main Entry Point

Usage:
    python main_server.py

Optional arguments:
    --host HOST           Bind address (default: 127.0.0.1)
    --port PORT           TCP port (default: 5000)
    --framing MODE        raw (one read per message) or line (default: raw)
    --log-level LEVEL     DEBUG, INFO, WARNING or ERROR (default: INFO)
    --log-file PATH       Also write operational logs to PATH
    --no-console          Do not read admin commands from stdin

Admin console commands: /list, /sysmsg <message>, /exit, /shutdown
"""

if __name__ == "__main__":
    import sys

    from server.main_server import main

    sys.exit(main())
