"""
Storage Factory

Environment-based configuration and factory for storage adapters.

Supported backends:
- file: JSON file on local disk (default)
- memory: In-memory storage (development/testing)

Usage:
    # From environment
    store = create_store(settings_from_env())

    # From settings
    store = create_store(StorageSettings(file_path="/var/lib/robots.json"))
    registry = RobotRegistry(store=store)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from .ports import RobotStore
from .file import JsonFileRobotStore
from .memory import InMemoryRobotStore


DEFAULT_FILE = ".robot_statuses"


class StorageBackend(str, Enum):
    """Supported storage backends."""
    FILE = "file"
    MEMORY = "memory"


@dataclass
class StorageSettings:
    """
    Configuration for storage layer.

    Attributes:
        backend: Storage backend type
        file_path: Persistence file (file backend only)
    """
    backend: StorageBackend = StorageBackend.FILE
    file_path: str = DEFAULT_FILE


def settings_from_env() -> StorageSettings:
    """
    Create StorageSettings from environment variables.

    Environment variables:
        BOTREG_STORAGE_BACKEND: "file" or "memory"
        BOTREG_FILE: Persistence file path
    """
    return StorageSettings(
        backend=StorageBackend(os.getenv("BOTREG_STORAGE_BACKEND", "file")),
        file_path=os.getenv("BOTREG_FILE", DEFAULT_FILE),
    )


def create_store(settings: StorageSettings) -> RobotStore:
    """
    Create a store from settings.

    Raises:
        ValueError: If settings are invalid
    """
    if settings.backend == StorageBackend.MEMORY:
        return InMemoryRobotStore()

    if not settings.file_path:
        raise ValueError(f"file_path required for backend {settings.backend}")
    return JsonFileRobotStore(settings.file_path)
