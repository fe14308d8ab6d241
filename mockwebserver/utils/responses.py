"""Handler factories for common responses."""

import json
import time
from typing import Any, Callable, Optional

from flask import Response, make_response

from ..core.models import RecordedRequest

Handler = Callable[[RecordedRequest], Any]


def text_response(
    body: str,
    status: int = 200,
    headers: Optional[dict[str, str]] = None
) -> Handler:
    """Handler serving a plain-text body.

    Args:
        body: Response text.
        status: HTTP status code.
        headers: Extra response headers.

    Returns:
        Handler callable.
    """
    def handler(request: RecordedRequest) -> Response:
        return Response(body, status=status, headers=headers, mimetype="text/plain")
    return handler


def json_response(
    obj: Any,
    status: int = 200,
    headers: Optional[dict[str, str]] = None
) -> Handler:
    """Handler serving obj serialized as JSON."""
    def handler(request: RecordedRequest) -> Response:
        return Response(json.dumps(obj), status=status, headers=headers, mimetype="application/json")
    return handler


def status_response(status: int) -> Handler:
    """Handler serving an empty body with the given status."""
    def handler(request: RecordedRequest) -> Response:
        return Response(status=status)
    return handler


def echo_response(status: int = 200) -> Handler:
    """Handler echoing the request body and content type back."""
    def handler(request: RecordedRequest) -> Response:
        content_type = request.header("Content-Type", "application/octet-stream")
        return Response(request.body, status=status, content_type=content_type)
    return handler


def delayed(handler: Handler, seconds: float) -> Handler:
    """Wrap handler so it sleeps before responding."""
    def wrapper(request: RecordedRequest) -> Response:
        time.sleep(seconds)
        return make_response(handler(request))
    return wrapper
