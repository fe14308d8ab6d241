"""Mock web server for testing HTTP clients."""

from .server import MockServer
from .queues import HandlerQueue, RequestLog
from .scripts import CannedResponse, ResponseScript

__all__ = ["MockServer", "HandlerQueue", "RequestLog", "CannedResponse", "ResponseScript"]
