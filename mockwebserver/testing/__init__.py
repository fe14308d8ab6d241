"""Testing integration for mockwebserver."""

from .fixtures import mock_server, mock_server_config

__all__ = ["mock_server", "mock_server_config"]
