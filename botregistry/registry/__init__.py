# Robot Registry
# Tracks robot reports: upsert by name, read projections, persistence hooks

from botregistry.registry.robot import ALIVE, NOT_ALIVE, RobotRecord
from botregistry.registry.registry import RobotRegistry

__all__ = ["ALIVE", "NOT_ALIVE", "RobotRecord", "RobotRegistry"]
