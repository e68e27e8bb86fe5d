"""
Control module for server-side operator functionality.

Handles:
- Admin console commands
- Shutdown coordination
"""
