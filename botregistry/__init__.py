# Robot Registry
# A small HTTP registry where robots report their name, user, address and
# coordinates, and clients read the latest known state of every robot

__version__ = "0.1.0"

# Re-export commonly used components for convenience
from botregistry.registry import (
    RobotRecord,
    RobotRegistry,
)
from botregistry.storage import (
    RobotStore,
    JsonFileRobotStore,
    InMemoryRobotStore,
    StorageError,
    create_store,
)

__all__ = [
    "__version__",
    # Registry
    "RobotRecord",
    "RobotRegistry",
    # Storage
    "RobotStore",
    "JsonFileRobotStore",
    "InMemoryRobotStore",
    "StorageError",
    "create_store",
]
