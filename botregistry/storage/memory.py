"""
In-Memory Storage Adapter

Keeps the last saved state in memory; it is lost on restart.
Use for local development and testing.
"""

import asyncio

from botregistry.registry.robot import RobotRecord
from botregistry.storage.ports import RobotStore


class InMemoryRobotStore(RobotStore):
    """
    In-memory robot storage.

    Stores copies so later registry mutations don't leak into saved state.
    """

    def __init__(self, records: list[RobotRecord] | None = None):
        self._records: list[RobotRecord] = [r.model_copy() for r in records or []]
        self._lock = asyncio.Lock()
        self.save_count = 0

    async def load(self) -> list[RobotRecord]:
        async with self._lock:
            return [r.model_copy() for r in self._records]

    async def save(self, records: list[RobotRecord]) -> None:
        async with self._lock:
            self._records = [r.model_copy() for r in records]
            self.save_count += 1
