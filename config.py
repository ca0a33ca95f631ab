"""
IoC Facades - Configuration

Settings for the facade registry and its logging, read from the process
environment (and a local .env file, when present).
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# .env values never override variables already set
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Environment(Enum):
    """Value of the ENVIRONMENT variable."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class FacadeSettings:
    """Facade registry behaviour."""
    # Guard the resolved-instances cache with a lock
    thread_safe: bool = field(default_factory=lambda: _env_flag("FACADES_THREAD_SAFE", "true"))
    # Emit debug events for resolution, cache hits and clears
    log_resolutions: bool = field(default_factory=lambda: _env_flag("FACADES_LOG_RESOLUTIONS", "true"))


@dataclass
class LoggingSettings:
    """Level and renderer for the facades logger."""
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    json_format: bool = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json")


@dataclass
class Config:
    """Top-level settings object."""
    env: Environment = field(default_factory=lambda: Environment(os.getenv("ENVIRONMENT", "development")))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))

    facades: FacadeSettings = field(default_factory=FacadeSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view, e.g. for startup logging."""
        return {
            "env": self.env.value,
            "debug": self.debug,
            "facades": {
                "thread_safe": self.facades.thread_safe,
                "log_resolutions": self.facades.log_resolutions,
            },
            "logging": {
                "level": self.logging.level,
                "json_format": self.logging.json_format,
            },
        }


# Process-wide settings, built on first get_config()
_config: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide settings, reading the environment once."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Re-read .env and the environment; the default registry is not rebuilt."""
    global _config
    load_dotenv(override=True)
    _config = Config()
    return _config
