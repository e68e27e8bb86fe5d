"""
Chat module for server-side messaging functionality.

Handles:
- Per-connection sessions and their outbound queues
- The registry of connected clients
- Broadcast and whisper delivery
- Client command dispatch
"""
