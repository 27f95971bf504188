"""
JSON File Storage Adapter

Persists the registry as a JSON array of robot objects with the legacy
keys (Name, User, IP, X, Y, Alive, LastAlive), overwriting the whole
file on every save.

Blocking file I/O runs in a worker thread so the event loop keeps
serving requests while a slow disk is written.
"""

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from botregistry.registry.robot import RobotRecord
from botregistry.storage.ports import CorruptStateError, RobotStore, StorageError

logger = logging.getLogger(__name__)


class JsonFileRobotStore(RobotStore):
    """
    File-backed robot storage.

    There is no atomic rename: a crash mid-write can leave a truncated
    file, which the next load reports as corrupt.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: File holding the serialized registry
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> list[RobotRecord]:
        logger.debug(f"Reading from {self._path}")
        try:
            raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"{self._path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise StorageError(f"couldn't read from {self._path}: {e}") from e

        return self.decode(raw)

    async def save(self, records: list[RobotRecord]) -> None:
        logger.debug(f"Saving to {self._path}")
        data = self.encode(records)
        try:
            await asyncio.to_thread(self._path.write_text, data, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"couldn't write to {self._path}: {e}") from e

    @staticmethod
    def encode(records: list[RobotRecord]) -> str:
        """Serialize robots to the compact JSON array format."""
        try:
            return json.dumps(
                [r.to_wire_dict() for r in records],
                separators=(",", ":"),
            )
        except (TypeError, ValueError) as e:
            raise StorageError(f"couldn't marshal robot statuses: {e}") from e

    @staticmethod
    def decode(raw: str) -> list[RobotRecord]:
        """
        Parse the JSON array format.

        A literal `null` is an empty registry.

        Raises:
            CorruptStateError: If the content is not a list of robot objects
        """
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            raise CorruptStateError(f"couldn't unmarshal robot statuses: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise CorruptStateError(
                f"expected a JSON array of robots, got {type(data).__name__}"
            )

        try:
            return [RobotRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise CorruptStateError(f"invalid robot record: {e}") from e
