"""
Storage Port Interfaces

Abstract base class defining the persistence contract for the robot
registry. All persistence APIs are async.

The registry depends only on this interface; adapters (JSON file,
in-memory) implement it and are injected at startup.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from botregistry.registry.robot import RobotRecord


# =============================================================================
# Robot Store
# =============================================================================

class RobotStore(ABC):
    """
    Storage interface for the registry state.

    The state is stored as one opaque blob: every save overwrites the
    previous one with the full collection.
    """

    @abstractmethod
    async def load(self) -> list["RobotRecord"]:
        """
        Read the stored robots.

        Returns:
            Robots in their stored order (empty if nothing was stored)

        Raises:
            StorageError: If the state cannot be read or decoded
        """
        ...

    @abstractmethod
    async def save(self, records: list["RobotRecord"]) -> None:
        """
        Overwrite the stored state with `records`.

        Args:
            records: Full collection, in registry order

        Raises:
            StorageError: If the state cannot be encoded or written
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the store."""
        pass


# =============================================================================
# Errors
# =============================================================================

class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStateError(StorageError):
    """Stored state exists but cannot be decoded."""
    pass
