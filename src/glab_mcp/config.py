"""
MCP server configuration.

Handles configuration file loading (~/.config/glab-mcp/config.yaml by
default) with environment variable overrides.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Literal, Optional

import yaml

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "glab-mcp" / "config.yaml"

VALID_TRANSPORTS = ("stdio", "sse")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MCPConfig:
    """
    glab MCP server configuration.

    Attributes:
        glab_executable: Name or path of the glab CLI (default: "glab")
        env: Environment variables overlaid on every glab invocation
        transport: Transport mode ("stdio" or "sse", default: "stdio")
        host: Server bind address for SSE (default: "127.0.0.1")
        port: Server port for SSE (default: 8000)
        log_level: Logging level name (default: "WARNING")
    """

    glab_executable: str = "glab"
    env: Dict[str, str] = field(default_factory=dict)
    transport: Literal["stdio", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate and normalize loaded values."""
        if self.transport not in VALID_TRANSPORTS:
            raise ValueError(
                f"Invalid transport '{self.transport}'. "
                "Must be 'stdio' or 'sse'."
            )

        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{self.log_level}'. "
                f"Must be one of: {', '.join(VALID_LOG_LEVELS)}."
            )

        if not isinstance(self.env, dict):
            raise ValueError("'env' must be a mapping of variable names to values")
        self.env = {str(k): str(v) for k, v in self.env.items()}

    @staticmethod
    def resolve_path(config_file: Optional[Path] = None) -> Path:
        """Pick the config file: explicit path, then $GLAB_MCP_CONFIG, then default."""
        if config_file is not None:
            return config_file
        if "GLAB_MCP_CONFIG" in os.environ:
            return Path(os.environ["GLAB_MCP_CONFIG"]).expanduser()
        return DEFAULT_CONFIG_FILE

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "MCPConfig":
        """
        Load configuration from YAML.

        Falls back to defaults if the file doesn't exist. Environment
        variables override config file values.

        Args:
            config_file: Explicit config file path (see resolve_path)

        Returns:
            MCPConfig instance with loaded/default values

        Raises:
            ValueError: If config file or environment has invalid values
        """
        path = cls.resolve_path(config_file)
        config_dict = {}

        # Load from config file if exists
        if path.exists():
            try:
                with open(path) as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid config file {path}: {e}") from e
            except OSError as e:
                raise ValueError(f"Cannot read config file {path}: {e}") from e

            if not isinstance(config_dict, dict):
                raise ValueError(f"Invalid config file {path}: expected a mapping")

        # Environment variables override config file
        if "GLAB_MCP_EXECUTABLE" in os.environ:
            config_dict["glab_executable"] = os.environ["GLAB_MCP_EXECUTABLE"]

        if "GLAB_MCP_TRANSPORT" in os.environ:
            config_dict["transport"] = os.environ["GLAB_MCP_TRANSPORT"]

        if "GLAB_MCP_HOST" in os.environ:
            config_dict["host"] = os.environ["GLAB_MCP_HOST"]

        if "GLAB_MCP_PORT" in os.environ:
            config_dict["port"] = os.environ["GLAB_MCP_PORT"]

        if "GLAB_MCP_LOG_LEVEL" in os.environ:
            config_dict["log_level"] = os.environ["GLAB_MCP_LOG_LEVEL"]

        if "port" in config_dict:
            try:
                config_dict["port"] = int(config_dict["port"])
            except (TypeError, ValueError):
                raise ValueError(
                    f"Invalid port: {config_dict['port']}. Must be an integer."
                )

        if config_dict.get("env") is None:
            config_dict.pop("env", None)

        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
