"""Scriptable mock HTTP server built on Flask and Werkzeug."""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional, Union

from flask import Flask, Response, make_response, request
from werkzeug.serving import ThreadedWSGIServer, WSGIRequestHandler

from ..core.config import MockServerConfig
from ..core.exceptions import ServerStateError
from ..core.models import DispatchPolicy, RecordedRequest, ServerState
from .queues import HandlerQueue, RequestLog
from .scripts import CannedResponse, ResponseScript

logger = logging.getLogger(__name__)


class _RequestHandler(WSGIRequestHandler):
    # One request per connection, so shutdown never waits on idle keep-alive sockets.
    protocol_version = "HTTP/1.0"

    def log_request(self, code: Any = "-", size: Any = "-") -> None:
        if self.server.log_requests:
            super().log_request(code, size)


class _DrainingWSGIServer(ThreadedWSGIServer):
    """Threaded WSGI server whose close joins every in-flight request."""
    daemon_threads = False
    block_on_close = True
    log_requests = False


class MockServer:
    """Scriptable web server for testing HTTP clients.

    Enqueue handlers, exercise the client against `start()`'s URL, then
    verify the requests with `take_request()`. The first request is served
    by the first enqueued handler, the second by the second, and so on,
    whatever their method or path.

    Example:
        with MockServer() as server:
            server.enqueue_response("Hello World!")
            requests.get(server.url("/greeting"))
            assert server.take_request().path == "/greeting"
    """

    def __init__(self, config: Optional[MockServerConfig] = None):
        """Initialize the mock server.

        Args:
            config: Server configuration.
        """
        self.config = config or MockServerConfig()
        self.app = Flask(__name__, static_folder=None)

        self._handlers = HandlerQueue()
        self._requests = RequestLog()
        # Guards state transitions and makes record + handler selection atomic.
        self._lock = threading.Lock()
        self._state = ServerState.NEW

        self._server: Optional[_DrainingWSGIServer] = None
        self._server_thread: Optional[threading.Thread] = None
        self._base_url: Optional[str] = None

        # Runs before routing errors are raised, so every method and path is dispatched.
        self.app.before_request(self._dispatch)

    def _dispatch(self) -> Response:
        """Record the request and serve it with the next handler."""
        body = request.get_data()
        handler = None

        with self._lock:
            recorded = RecordedRequest(
                sequence_number=self._requests.count,
                method=request.method,
                path=request.path,
                query_string=request.query_string.decode("latin-1"),
                url=request.url,
                headers=list(request.headers.items()),
                body=body,
                remote_addr=request.remote_addr,
            )
            self._requests.append(recorded)
            if self.config.dispatch_policy == DispatchPolicy.BEST_EFFORT:
                handler = self._handlers.pop()

        if self.config.dispatch_policy == DispatchPolicy.RENDEZVOUS:
            handler = self._handlers.claim(recorded.sequence_number)
            if handler is None:
                logger.warning(f"Request {recorded} released without a handler at shutdown")

        if handler is None:
            logger.debug(f"Request #{recorded.sequence_number} {recorded}: default response")
            return Response(status=self.config.default_status)

        logger.debug(f"Request #{recorded.sequence_number} {recorded}: dispatching to handler")
        # Handler errors propagate; Flask answers them with a 500.
        return make_response(handler(recorded))

    def start(self) -> str:
        """Start the server on a background thread.

        The caller should call `stop` when finished.

        Returns:
            Base URL of the server.
        """
        with self._lock:
            if self._state != ServerState.NEW:
                raise ServerStateError(f"Cannot start a server that is {self._state.value}")

            self._server = _DrainingWSGIServer(
                self.config.host,
                self.config.port,
                self.app,
                handler=_RequestHandler,
            )
            self._server.log_requests = self.config.log_requests
            port = self._server.server_address[1]
            self._base_url = f"http://{self.config.host}:{port}"

            self._server_thread = threading.Thread(
                target=self._server.serve_forever,
                name=f"mockwebserver-{port}",
                daemon=True,
            )
            self._server_thread.start()
            self._state = ServerState.RUNNING

        logger.info(f"Mock server started at {self._base_url}")
        return self._base_url

    def stop(self) -> None:
        """Shut down the server.

        Blocks until every request already accepted has run its handler and
        written its response. Stopping a stopped server does nothing.
        """
        with self._lock:
            if self._state == ServerState.NEW:
                raise ServerStateError("Cannot stop a server that was never started")
            if self._state == ServerState.STOPPED:
                return
            self._state = ServerState.STOPPED

        # Stop accepting first, then release requests still waiting on a handler.
        self._server.shutdown()
        self._handlers.close()
        self._server_thread.join()
        self._server.server_close()
        logger.info(f"Mock server at {self._base_url} stopped")

    def enqueue(self, handler: Callable[[RecordedRequest], Any]) -> None:
        """Add a handler for the next unserved request.

        The first request is served by the first enqueued handler; the
        second request by the second enqueued handler; and so on. The
        handler receives the RecordedRequest and returns anything Flask
        accepts as a response.

        Args:
            handler: Response-producing callable.
        """
        if not callable(handler):
            raise TypeError(f"Handler must be callable, got {type(handler).__name__}")
        self._handlers.put(handler)
        logger.debug(f"Enqueued handler {getattr(handler, '__name__', handler)!r}")

    def enqueue_response(
        self,
        body: str = "",
        status: int = 200,
        headers: Optional[dict[str, str]] = None
    ) -> None:
        """Enqueue a fixed response.

        Args:
            body: Response body.
            status: HTTP status code.
            headers: Extra response headers.
        """
        self.enqueue(CannedResponse(status=status, body=body, headers=headers or {}).as_handler())

    def enqueue_script(self, script: Union[ResponseScript, str, Path]) -> int:
        """Enqueue every response of a script, in order.

        Args:
            script: ResponseScript or path to a YAML/JSON script file.

        Returns:
            Number of handlers enqueued.
        """
        if not isinstance(script, ResponseScript):
            script = ResponseScript.load(script)
        handlers = script.handlers()
        for handler in handlers:
            self.enqueue(handler)
        return len(handlers)

    def take_request(self) -> RecordedRequest:
        """Remove and return the oldest received request.

        Blocks until a request is available, possibly forever.
        """
        return self._requests.take()

    def take_request_with_timeout(self, timeout: float) -> Optional[RecordedRequest]:
        """Remove and return the oldest received request, waiting up to timeout seconds.

        Returns:
            The request, or None if none arrived in time.
        """
        return self._requests.take(timeout=timeout)

    def poll_request(self) -> Optional[RecordedRequest]:
        """Remove and return the oldest received request without waiting."""
        return self._requests.take(block=False)

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def base_url(self) -> str:
        """Get the server URL."""
        if self._base_url is None:
            raise ServerStateError("Server has not been started")
        return self._base_url

    @property
    def port(self) -> int:
        """Get the bound port."""
        if self._server is None:
            raise ServerStateError("Server has not been started")
        return self._server.server_address[1]

    def url(self, path: str = "/") -> str:
        """Build a URL for path on this server."""
        return f"{self.base_url}/{path.lstrip('/')}"

    @property
    def request_count(self) -> int:
        """Total number of requests received."""
        return self._requests.count

    @property
    def pending_handlers(self) -> int:
        """Number of enqueued handlers not yet consumed."""
        return len(self._handlers)

    def __enter__(self) -> "MockServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
