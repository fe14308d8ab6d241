"""mockwebserver - Scriptable web server for testing HTTP clients.

Modules:
    core        - Data models, configuration and exceptions
    mock        - The mock server and its handler/request queues
    utils       - Handler factories for common responses
    testing     - pytest plugin
"""

__version__ = "0.1.0"

from .core.config import MockServerConfig, load_config
from .core.exceptions import MockServerError, ScriptError, ServerStateError
from .core.models import DispatchPolicy, RecordedRequest, ServerState
from .mock.scripts import CannedResponse, ResponseScript
from .mock.server import MockServer

__all__ = [
    # Config
    "MockServerConfig",
    "load_config",
    # Models
    "DispatchPolicy",
    "RecordedRequest",
    "ServerState",
    "CannedResponse",
    "ResponseScript",
    # Errors
    "MockServerError",
    "ScriptError",
    "ServerStateError",
    # Server
    "MockServer",
]
