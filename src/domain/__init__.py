"""Rating domain modules."""

from domain.ratings.common import GroupId, PlayerHandle, RatingMode, StandingEntry

__all__ = ["GroupId", "PlayerHandle", "RatingMode", "StandingEntry"]
