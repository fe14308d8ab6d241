"""Exceptions raised by mockwebserver."""


class MockServerError(Exception):
    """Base class for mock server errors."""
    pass


class ServerStateError(MockServerError):
    """Operation is not valid in the server's current lifecycle state."""
    pass


class ScriptError(MockServerError):
    """A response script could not be loaded."""
    pass
