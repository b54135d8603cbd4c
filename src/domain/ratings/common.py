"""Shared types for chat rating tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PlayerHandle = str
GroupId = int


class RatingMode(str, Enum):
    """Which rating map a query or update targets."""

    INDIVIDUAL = "individual"
    TEAM = "team"

    @property
    def label(self) -> str:
        return "1v1" if self is RatingMode.INDIVIDUAL else "2v2"


@dataclass(frozen=True)
class StandingEntry:
    """One row of a standings listing."""

    handle: PlayerHandle
    rating: int

    def __str__(self) -> str:
        return f"{self.handle}: {self.rating}"


__all__ = ["GroupId", "PlayerHandle", "RatingMode", "StandingEntry"]
