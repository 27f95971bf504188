"""
Robot Record Model

Represents a reporting robot as the registry sees it.
Every field is a string, exactly as it was reported or persisted:
coordinates are not validated, and liveness/timestamps are kept
in their textual form.
"""

import time

from pydantic import BaseModel, Field


ALIVE = "true"
NOT_ALIVE = "false"


class RobotRecord(BaseModel):
    """
    Latest known state of one robot.

    Persisted and served under the legacy capitalized keys
    (Name, User, IP, X, Y, Alive, LastAlive).
    """

    # === Identity ===
    name: str = Field(
        default="",
        alias="Name",
        description="Robot name, unique by convention"
    )
    user: str = Field(
        default="",
        alias="User",
        description="User logged in to the robot"
    )

    # === Location ===
    ip: str = Field(
        default="",
        alias="IP",
        description="Network origin of the last report"
    )
    x: str = Field(default="", alias="X", description="x coordinate")
    y: str = Field(default="", alias="Y", description="y coordinate")

    # === Presence ===
    alive: str = Field(
        default=ALIVE,
        alias="Alive",
        description="'true' while the robot is considered alive"
    )
    last_alive: str = Field(
        default="",
        alias="LastAlive",
        description="Unix epoch seconds of the last report"
    )

    def last_alive_epoch(self) -> int:
        """Parse last_alive, treating garbage as the epoch."""
        try:
            return int(self.last_alive)
        except ValueError:
            return 0

    def is_alive(self, timeout_seconds: float, now: int | None = None) -> bool:
        """Check whether the last report falls within the timeout."""
        if now is None:
            now = int(time.time())
        return now - self.last_alive_epoch() < timeout_seconds

    def touch(self, now: int) -> None:
        """Record a report at `now`."""
        self.last_alive = str(now)

    def to_text(self) -> str:
        """Human-readable block used by the /text endpoint."""
        return (
            f"{self.name}\n"
            f"\tUser: {self.user}\n"
            f"\tIP: {self.ip}\n"
            f"\tCoordinates: ({self.x}, {self.y})\n"
            f"\tAlive: {self.alive}\n"
            f"\tTime Last Alive: {self.last_alive}\n"
        )

    def to_wire_dict(self) -> dict[str, str]:
        """Return the persisted/served form with legacy keys."""
        return self.model_dump(by_alias=True)

    class Config:
        # Accept both `name=` and `Name=` on construction
        populate_by_name = True
