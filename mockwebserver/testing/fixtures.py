"""pytest plugin providing a started MockServer per test.

Requires pytest (``pip install mockwebserver[pytest]``). Installing the
package registers this module as a plugin; without installation, list it in
a conftest: ``pytest_plugins = ["mockwebserver.testing.fixtures"]``.
"""

from typing import Iterator

import pytest

from ..core.config import MockServerConfig
from ..mock.server import MockServer


@pytest.fixture()
def mock_server_config() -> MockServerConfig:
    """Configuration used by `mock_server`. Override to customize."""
    return MockServerConfig()


@pytest.fixture()
def mock_server(mock_server_config: MockServerConfig) -> Iterator[MockServer]:
    """Yield a running MockServer and stop it after the test."""
    server = MockServer(config=mock_server_config)
    server.start()
    yield server
    server.stop()
