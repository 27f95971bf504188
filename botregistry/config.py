"""
Server Configuration

Settings for the registry server, read from environment variables
(optionally loaded from a .env file) and overridable from the command line.

Environment variables:
- BOTREG_DEBUG: "true" for debug logging
- BOTREG_HOST: Bind address (default: 0.0.0.0)
- BOTREG_PORT: Listening port (default: 7978)
- BOTREG_ALIVE_TIMEOUT: Seconds of silence after which a robot isn't alive
- BOTREG_REFRESH_ALIVE: "true" to recompute the alive flag on every report
- BOTREG_AUTOSAVE_INTERVAL: Seconds between background saves (0 = off)
- BOTREG_STORAGE_BACKEND / BOTREG_FILE: see botregistry.storage.factory
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from botregistry.storage import StorageSettings, settings_from_env as storage_settings_from_env


DEFAULT_PORT = 7978


@dataclass
class Settings:
    """
    Configuration for the registry server.

    Attributes:
        debug: Whether to log debug output
        host: Address to bind
        port: Port to listen on
        alive_timeout_seconds: Liveness threshold
        refresh_alive: Recompute `alive` from the threshold on every report
        autosave_interval_seconds: Background save period (0 disables it)
        storage: Persistence configuration
    """
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    alive_timeout_seconds: float = 10.0
    refresh_alive: bool = False
    autosave_interval_seconds: float = 0.0
    storage: StorageSettings = field(default_factory=StorageSettings)


def _env_flag(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


def settings_from_env() -> Settings:
    """
    Create Settings from environment variables.

    Raises:
        ValueError: If a numeric or enum variable is malformed
    """
    return Settings(
        debug=_env_flag("BOTREG_DEBUG"),
        host=os.getenv("BOTREG_HOST", "0.0.0.0"),
        port=int(os.getenv("BOTREG_PORT", str(DEFAULT_PORT))),
        alive_timeout_seconds=float(os.getenv("BOTREG_ALIVE_TIMEOUT", "10")),
        refresh_alive=_env_flag("BOTREG_REFRESH_ALIVE"),
        autosave_interval_seconds=float(os.getenv("BOTREG_AUTOSAVE_INTERVAL", "0")),
        storage=storage_settings_from_env(),
    )
