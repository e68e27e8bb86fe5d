#!/usr/bin/env python3
"""
Unit tests for server/utils/config.py and client/utils/config.py
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from client import main_client as client_main
from client.utils.config import ClientConfig
from common.constants import (
    DEFAULT_HOST, DEFAULT_PORT, FRAMING_RAW, HANDSHAKE_BUFFER_SIZE, RECEIVE_BUFFER_SIZE
)
from server import main_server as server_main
from server.utils.config import ServerConfig, ConfigurationError


class TestServerConfig(unittest.TestCase):
    """Startup validation."""

    def test_defaults(self):
        config = ServerConfig()
        config.validate()
        self.assertEqual(config.host, DEFAULT_HOST)
        self.assertEqual(config.port, DEFAULT_PORT)
        self.assertEqual(config.handshake_buffer_size, HANDSHAKE_BUFFER_SIZE)
        self.assertEqual(config.receive_buffer_size, RECEIVE_BUFFER_SIZE)

    def test_ipv6_address_accepted(self):
        ServerConfig(host='::1', port=0).validate()

    def test_unparseable_address(self):
        with self.assertRaises(ConfigurationError):
            ServerConfig(host='not-an-ip').validate()
        with self.assertRaises(ConfigurationError):
            ServerConfig(host='300.1.1.1').validate()

    def test_port_out_of_range(self):
        with self.assertRaises(ConfigurationError):
            ServerConfig(port=70000).validate()
        with self.assertRaises(ConfigurationError):
            ServerConfig(port=-1).validate()

    def test_unknown_framing(self):
        with self.assertRaises(ConfigurationError):
            ServerConfig(framing='length-prefixed').validate()

    def test_configuration_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class TestClientConfig(unittest.TestCase):
    """Client settings."""

    def test_username_trimmed_with_fallback(self):
        self.assertEqual(ClientConfig(username='  alice ').username, 'alice')
        self.assertEqual(ClientConfig(username='   ').username, 'Anonymous')
        self.assertEqual(ClientConfig().username, 'Anonymous')

    def test_quit_words(self):
        config = ClientConfig()
        self.assertTrue(config.is_quit('QUIT'))
        self.assertTrue(config.is_quit(' /exit \n'))
        self.assertFalse(config.is_quit('/list'))


class TestCommandLineDefaults(unittest.TestCase):
    """Both entry points fall back to the shared defaults."""

    def test_server_defaults(self):
        args = server_main.parse_args([])
        self.assertEqual((args.host, args.port), (DEFAULT_HOST, DEFAULT_PORT))
        self.assertEqual(args.framing, FRAMING_RAW)

    def test_client_defaults(self):
        args = client_main.parse_args([])
        self.assertEqual((args.host, args.port), (DEFAULT_HOST, DEFAULT_PORT))
        self.assertIsNone(args.username)

    def test_server_rejects_unknown_framing(self):
        with self.assertRaises(SystemExit):
            server_main.parse_args(["--framing", "json"])


if __name__ == '__main__':
    unittest.main()
