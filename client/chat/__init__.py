"""
Chat module for client-side messaging functionality.

Handles:
- Sending chat lines and commands
- Receiving and classifying server messages
"""
