"""Configuration management for mockwebserver."""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field

from .models import DispatchPolicy


class MockServerConfig(BaseModel):
    """Mock server configuration."""
    host: str = "127.0.0.1"
    port: int = Field(default=0, ge=0, le=65535)  # 0 lets the OS pick a free port
    dispatch_policy: DispatchPolicy = DispatchPolicy.BEST_EFFORT
    default_status: int = Field(default=200, ge=100, le=599)
    log_requests: bool = False

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "MockServerConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML file.

        Returns:
            MockServerConfig instance.
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


DEFAULT_CONFIG_PATHS = [
    Path("mockwebserver.yaml"),
    Path("mockwebserver.yml"),
    Path(".mockwebserver.yaml"),
]


def load_config(config_path: Optional[str] = None) -> MockServerConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, searches default locations.

    Returns:
        MockServerConfig instance. Defaults are used when no file is found.
    """
    if config_path is None:
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                config_path = str(path)
                break

    if config_path and Path(config_path).exists():
        return MockServerConfig.from_yaml(config_path)

    return MockServerConfig()
