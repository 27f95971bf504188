"""
Robot Registry

In-memory registry holding the latest report of every robot, in the
order robots were first seen. Lookup is a linear scan by name.

The registry owns its persistence: state is loaded from a RobotStore
at startup and written back after every report (and, optionally, on a
periodic autosave timer).
"""

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from botregistry.registry.robot import ALIVE, NOT_ALIVE, RobotRecord
from botregistry.storage.ports import StorageError

if TYPE_CHECKING:
    from botregistry.storage import RobotStore

logger = logging.getLogger(__name__)


class RobotRegistry:
    """
    Tracks robot reports and answers the read projections.

    Thread-safe for async operations using a single asyncio lock that
    guards the whole collection, including saves.
    """

    def __init__(
        self,
        store: "RobotStore | None" = None,
        alive_timeout_seconds: float = 10.0,
        refresh_alive: bool = False,
        autosave_interval_seconds: float = 0.0,
    ):
        """
        Initialize the registry.

        Args:
            store: Persistence adapter (None = memory only)
            alive_timeout_seconds: A robot silent for longer is not alive
            refresh_alive: Rewrite `alive` from the timeout on every report.
                When False, `alive` keeps the value it got at creation.
            autosave_interval_seconds: Period of background saves (0 = off)
        """
        self._store = store
        self._alive_timeout = alive_timeout_seconds
        self._refresh_alive = refresh_alive
        self._autosave_interval = autosave_interval_seconds

        self._robots: list[RobotRecord] = []
        self._lock = asyncio.Lock()
        self._autosave_task: asyncio.Task | None = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Start the background autosave task, if configured."""
        if self._autosave_interval > 0 and self._autosave_task is None:
            self._autosave_task = asyncio.create_task(self._autosave_loop())
            logger.info(
                f"Robot registry autosave started "
                f"(every {self._autosave_interval}s)"
            )

    async def stop(self) -> None:
        """Stop the autosave task and flush state one last time."""
        if self._autosave_task:
            self._autosave_task.cancel()
            try:
                await self._autosave_task
            except asyncio.CancelledError:
                pass
            self._autosave_task = None
            await self.save()
            logger.info("Robot registry autosave stopped")

    async def _autosave_loop(self) -> None:
        """Periodically write the registry to the store."""
        while True:
            try:
                await asyncio.sleep(self._autosave_interval)
                await self.save()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Error in autosave loop: {e}")

    # =========================================================================
    # Persistence
    # =========================================================================

    async def load(self) -> int:
        """
        Replace the collection with the stored state.

        Storage failures are logged and leave the registry empty.

        Returns:
            Number of robots loaded
        """
        if self._store is None:
            return 0

        async with self._lock:
            logger.debug("Loading robot statuses from store")
            try:
                robots = await self._store.load()
            except StorageError as e:
                logger.error(f"Couldn't load robot statuses: {e}")
                robots = []
            self._robots = list(robots)
            logger.info(f"Loaded {len(self._robots)} robots")
            return len(self._robots)

    async def save(self) -> bool:
        """
        Write the full collection to the store.

        Failures are logged only; the previously stored state stays.

        Returns:
            True if the store accepted the write
        """
        if self._store is None:
            return False

        async with self._lock:
            logger.debug("Saving robot statuses to store")
            try:
                await self._store.save([r.model_copy() for r in self._robots])
            except StorageError as e:
                logger.error(f"Couldn't save robot statuses: {e}")
                return False
            return True

    # =========================================================================
    # Updates
    # =========================================================================

    async def upsert(
        self,
        name: str,
        user: str,
        address: str,
        x: str,
        y: str,
        now: int | None = None,
    ) -> tuple[RobotRecord, bool]:
        """
        Record a report from a robot.

        An existing robot with the same name is updated in place; an unseen
        name is appended with alive="true".

        Args:
            name: Robot name
            user: User logged in to the robot
            address: Network origin of the report
            x: x coordinate
            y: y coordinate
            now: Report time in Unix seconds (default: current time)

        Returns:
            Tuple of (copy of the stored record, was_created)
        """
        if now is None:
            now = int(time.time())

        async with self._lock:
            for robot in self._robots:
                if robot.name != name:
                    continue

                robot.user = user
                robot.ip = address
                robot.x = x
                robot.y = y

                still_alive = robot.is_alive(self._alive_timeout, now)
                if self._refresh_alive:
                    robot.alive = ALIVE if still_alive else NOT_ALIVE
                robot.touch(now)

                logger.debug(f"Updated {name}")
                return robot.model_copy(), False

            robot = RobotRecord(
                name=name,
                user=user,
                ip=address,
                x=x,
                y=y,
                alive=ALIVE,
                last_alive=str(now),
            )
            self._robots.append(robot)
            logger.debug(f"Adding new robot: {name}")
            return robot.model_copy(), True

    # =========================================================================
    # Queries
    # =========================================================================

    async def snapshot(self) -> list[RobotRecord]:
        """Copies of all robots in the order they were first seen."""
        async with self._lock:
            return [r.model_copy() for r in self._robots]

    async def get(self, name: str) -> RobotRecord | None:
        """Get a copy of the robot with this name."""
        async with self._lock:
            for robot in self._robots:
                if robot.name == name:
                    return robot.model_copy()
            return None

    async def all_as_text(self) -> str:
        """Human-readable block per robot."""
        robots = await self.snapshot()
        return "".join(r.to_text() for r in robots)

    async def all_as_json(self) -> list[dict[str, str]]:
        """Full dump of every field of every robot."""
        robots = await self.snapshot()
        return [r.to_wire_dict() for r in robots]

    async def hosts_text(self) -> str:
        """Legacy hosts listing: `name\\t\\tip` per line."""
        robots = await self.snapshot()
        return "".join(f"{r.name}\t\t{r.ip}\n" for r in robots)

    async def name_to_address_map(self) -> dict[str, str]:
        """Map every robot name to its address."""
        robots = await self.snapshot()
        return {r.name: r.ip for r in robots}

    async def alive_name_to_address_map(self) -> dict[str, str]:
        """Map name to address for robots flagged alive."""
        robots = await self.snapshot()
        return {r.name: r.ip for r in robots if r.alive == ALIVE}

    @property
    def robot_count(self) -> int:
        """Number of known robots."""
        return len(self._robots)

    @property
    def alive_count(self) -> int:
        """Number of robots flagged alive."""
        return sum(1 for r in self._robots if r.alive == ALIVE)
