"""Configuration management for corsgate."""

import json
import logging
import os
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(value: str) -> bool:
    return value.lower() in _TRUTHY


@dataclass
class CORSGateConfig:
    """Main configuration for corsgate."""

    # Static policy settings
    allowed_origins: list[str] = field(default_factory=list)
    allowed_methods: list[str] = field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE"])
    allowed_headers: list[str] = field(default_factory=list)
    exposed_headers: list[str] = field(default_factory=list)
    max_age: int | None = None
    allow_credentials: bool = False

    # Server settings
    server_host: str = "localhost"
    server_port: int = 8080

    debug: bool = False

    @classmethod
    def load(cls) -> "CORSGateConfig":
        """Load configuration from various sources."""
        config = cls()

        # 1. Load from config file if exists
        config_paths = [Path.home() / ".corsgate" / "config.json", Path.cwd() / ".corsgate.json", Path.cwd() / "corsgate.config.json"]

        for config_path in config_paths:
            if config_path.exists():
                try:
                    with open(config_path) as f:
                        data = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning("Skipping unreadable config file %s: %s", config_path, e)
                    continue
                config = cls._merge_config(config, data)
                break

        # 2. Override with environment variables
        env_mappings: dict[str, str | tuple[str, Callable[[str], Any]]] = {
            "CORSGATE_ALLOWED_ORIGINS": ("allowed_origins", _split_list),
            "CORSGATE_ALLOWED_METHODS": ("allowed_methods", _split_list),
            "CORSGATE_ALLOWED_HEADERS": ("allowed_headers", _split_list),
            "CORSGATE_EXPOSED_HEADERS": ("exposed_headers", _split_list),
            "CORSGATE_MAX_AGE": ("max_age", int),
            "CORSGATE_ALLOW_CREDENTIALS": ("allow_credentials", _parse_bool),
            "CORSGATE_SERVER_HOST": "server_host",
            "CORSGATE_SERVER_PORT": ("server_port", int),
            "CORSGATE_DEBUG": ("debug", _parse_bool),
        }

        for env_var, config_mapping in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                if isinstance(config_mapping, tuple):
                    name, converter = config_mapping
                    setattr(config, name, converter(value))
                else:
                    setattr(config, config_mapping, value)

        return config

    @classmethod
    def _merge_config(cls, config: "CORSGateConfig", data: dict[str, Any]) -> "CORSGateConfig":
        """Merge configuration data into config object."""
        for key, value in data.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.debug("Ignoring unknown config key %r", key)

        return config

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            config_dir = Path.home() / ".corsgate"
            config_dir.mkdir(exist_ok=True)
            path = config_dir / "config.json"

        data = asdict(self)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)


# Global config instance
_config: CORSGateConfig | None = None


def get_config() -> CORSGateConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = CORSGateConfig.load()
    return _config


def reload_config() -> CORSGateConfig:
    """Reload configuration from sources."""
    global _config
    _config = CORSGateConfig.load()
    return _config
