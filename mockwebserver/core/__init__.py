"""Core data models and configuration for mockwebserver."""

from .models import DispatchPolicy, RecordedRequest, ServerState
from .config import MockServerConfig, load_config
from .exceptions import MockServerError, ScriptError, ServerStateError

__all__ = [
    "DispatchPolicy",
    "RecordedRequest",
    "ServerState",
    "MockServerConfig",
    "load_config",
    "MockServerError",
    "ScriptError",
    "ServerStateError",
]
