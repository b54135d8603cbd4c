"""Chat rating tables and Elo math."""

from domain.ratings.common import GroupId, PlayerHandle, RatingMode, StandingEntry
from domain.ratings.table import RatingTable

__all__ = [
    "GroupId",
    "PlayerHandle",
    "RatingMode",
    "RatingTable",
    "StandingEntry",
]
