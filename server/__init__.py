"""
Server package for the ShadeNet relay chat.

This package contains all server-side functionality including:
- Connection handling and the name handshake
- The client registry and message fan-out
- Client command dispatch
- The admin console and shutdown coordination
"""
