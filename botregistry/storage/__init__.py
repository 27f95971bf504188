# Storage Layer
# Pluggable persistence for the robot registry
#
# This module provides:
# - Port interface (ABC) defining the storage contract
# - JSON file implementation for the legacy status file
# - In-memory implementation for development/testing
# - Factory for configuration-based adapter selection

from .ports import (
    RobotStore,
    StorageError,
    CorruptStateError,
)
from .file import JsonFileRobotStore
from .memory import InMemoryRobotStore
from .factory import (
    DEFAULT_FILE,
    StorageSettings,
    StorageBackend,
    create_store,
    settings_from_env,
)

__all__ = [
    # Ports
    "RobotStore",
    "StorageError",
    "CorruptStateError",
    # Adapters
    "JsonFileRobotStore",
    "InMemoryRobotStore",
    # Factory
    "DEFAULT_FILE",
    "StorageSettings",
    "StorageBackend",
    "create_store",
    "settings_from_env",
]
