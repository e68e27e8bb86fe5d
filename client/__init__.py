"""
Client package for the ShadeNet relay chat.

This package contains the terminal client: connection, name handshake,
message relay and configuration.
"""
