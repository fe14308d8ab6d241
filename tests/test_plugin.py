"""Tests for the pytest plugin."""

from mockwebserver import MockServer, ServerState


def test_plugin_registered_once_under_module_name(request):
    """Test the fixtures module is loaded as a single plugin."""
    plugins = request.config.pluginmanager.get_plugins()
    names = [
        request.config.pluginmanager.get_name(p)
        for p in plugins
        if getattr(p, "__name__", None) == "mockwebserver.testing.fixtures"
    ]

    assert names == ["mockwebserver.testing.fixtures"]


def test_mock_server_fixture_is_running(mock_server):
    """Test the fixture yields a started server."""
    assert isinstance(mock_server, MockServer)
    assert mock_server.state == ServerState.RUNNING
