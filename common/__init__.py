"""
Shared constants and message shapes used by client and server.
"""
