"""Core data models for mockwebserver."""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DispatchPolicy(str, Enum):
    """How a request is matched to a handler that has not been enqueued yet."""
    BEST_EFFORT = "best_effort"  # serve the default response immediately
    RENDEZVOUS = "rendezvous"  # wait until the matching handler arrives


class ServerState(str, Enum):
    """Lifecycle of a MockServer."""
    NEW = "new"
    RUNNING = "running"
    STOPPED = "stopped"


class RecordedRequest(BaseModel):
    """A request received by the mock server.

    Snapshots everything the listener exposed about the request, so it stays
    usable after the response has been written.
    """
    model_config = ConfigDict(frozen=True)

    sequence_number: int
    method: str
    path: str
    query_string: str = ""
    url: str = ""
    # WSGI joins repeated request headers into one comma-separated value.
    headers: list[tuple[str, str]] = Field(default_factory=list)
    body: bytes = b""
    remote_addr: Optional[str] = None
    received_at: datetime = Field(default_factory=datetime.now)

    @property
    def target(self) -> str:
        """Request target as sent: path plus query string, if any."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first header value matching name, case-insensitively.

        Args:
            name: Header name.
            default: Value returned when the header is absent.

        Returns:
            Header value or default.
        """
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return default

    def get_json(self) -> Any:
        """Parse the body as JSON."""
        return json.loads(self.body)

    def __str__(self) -> str:
        return f"{self.method} {self.target}"
