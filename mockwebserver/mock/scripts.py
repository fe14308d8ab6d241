"""Response scripts: ordered canned responses loaded from YAML or JSON."""

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from flask import Response

from ..core.exceptions import ScriptError
from ..core.models import RecordedRequest

logger = logging.getLogger(__name__)


@dataclass
class CannedResponse:
    """A fixed response served to one request."""
    status: int = 200
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    delay_ms: int = 0  # Simulated latency before responding
    json: Optional[Any] = None  # Serialized as the body when set

    def render(self) -> Response:
        """Build the Flask response."""
        if self.json is not None:
            response = Response(
                json.dumps(self.json),
                status=self.status,
                mimetype="application/json",
            )
        else:
            response = Response(self.body, status=self.status)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response

    def as_handler(self):
        """Return a handler that serves this response."""
        def handler(request: RecordedRequest) -> Response:
            if self.delay_ms:
                time.sleep(self.delay_ms / 1000)
            return self.render()
        return handler

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status,
            "body": self.body,
            "headers": dict(self.headers),
            "delay_ms": self.delay_ms,
            "json": self.json,
        }


@dataclass
class ResponseScript:
    """An ordered sequence of canned responses."""
    name: str
    description: str = ""
    responses: list[CannedResponse] = field(default_factory=list)

    def handlers(self) -> list:
        """Handlers for every response, in order."""
        return [r.as_handler() for r in self.responses]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "responses": [r.to_dict() for r in self.responses],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ResponseScript":
        """Create from dictionary."""
        if not isinstance(data, dict) or "name" not in data:
            raise ScriptError("Response script must be a mapping with a 'name'")
        try:
            responses = [
                CannedResponse(**r) for r in data.get("responses", [])
            ]
        except TypeError as e:
            raise ScriptError(f"Invalid response in script {data['name']!r}: {e}") from e
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            responses=responses,
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ResponseScript":
        """Load a script from a .yaml, .yml or .json file.

        Args:
            path: Path to the script file.

        Returns:
            Loaded ResponseScript.
        """
        path = Path(path)
        if path.suffix not in (".yaml", ".yml", ".json"):
            raise ScriptError(f"Unsupported script format: {path.suffix}")

        with open(path, "r") as f:
            try:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise ScriptError(f"Could not parse {path}: {e}") from e

        script = cls.from_dict(data)
        logger.info(f"Loaded response script {script.name!r} ({len(script.responses)} responses)")
        return script

    def save(self, path: Union[str, Path]) -> str:
        """Save the script as YAML or JSON, chosen by file extension."""
        path = Path(path)
        with open(path, "w") as f:
            if path.suffix == ".json":
                json.dump(self.to_dict(), f, indent=2)
            else:
                yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        return str(path)
