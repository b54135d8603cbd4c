"""Per-chat rating table holding 1v1 and 2v2 Elo maps."""

from __future__ import annotations

from typing import Any

from domain.ratings.common import PlayerHandle, RatingMode, StandingEntry
from domain.ratings.elo.calculator import (
    DEFAULT_PARAMETERS,
    EloParameters,
    calculate_expected_score,
    truncated_delta,
)


class RatingTable:
    """Individual and team ratings for one chat.

    Update methods expect every referenced player to have been passed through
    ``initialize_player`` first. They return ``False`` without touching any
    rating when the reported winners do not match the players.
    """

    def __init__(self, params: EloParameters = DEFAULT_PARAMETERS) -> None:
        self.params = params
        self.individual: dict[PlayerHandle, int] = {}
        self.team: dict[PlayerHandle, int] = {}

    def initialize_player(self, handle: PlayerHandle) -> None:
        self.individual.setdefault(handle, self.params.initial_elo)
        self.team.setdefault(handle, self.params.initial_elo)

    def update_individual(
        self,
        player1: PlayerHandle,
        player2: PlayerHandle,
        winner: PlayerHandle,
    ) -> bool:
        if winner not in (player1, player2):
            return False

        loser = player2 if winner == player1 else player1

        winner_pre = self.individual[winner]
        loser_pre = self.individual[loser]

        expected_winner = calculate_expected_score(
            rating=winner_pre,
            opponent_rating=loser_pre,
            scale_factor=self.params.scale_factor,
        )
        expected_loser = calculate_expected_score(
            rating=loser_pre,
            opponent_rating=winner_pre,
            scale_factor=self.params.scale_factor,
        )

        winner_delta = truncated_delta(self.params.k_factor, 1.0, expected_winner)
        loser_delta = truncated_delta(self.params.k_factor, 0.0, expected_loser)

        # A self-match (player1 == player2) nets both deltas onto one handle.
        self.individual[winner] = winner_pre + winner_delta
        self.individual[loser] = self.individual[loser] + loser_delta
        return True

    def update_team(
        self,
        player1: PlayerHandle,
        player2: PlayerHandle,
        player3: PlayerHandle,
        player4: PlayerHandle,
        winner1: PlayerHandle,
        winner2: PlayerHandle,
    ) -> bool:
        team1 = _unique(player1, player2)
        team2 = _unique(player3, player4)
        winners = {winner1, winner2}

        if winners <= set(team1):
            self._update_team_ratings(team1, team2)
        elif winners <= set(team2):
            self._update_team_ratings(team2, team1)
        else:
            return False
        return True

    def _update_team_ratings(
        self,
        winning_team: tuple[PlayerHandle, ...],
        losing_team: tuple[PlayerHandle, ...],
    ) -> None:
        winning_rating = sum(self.team[player] for player in winning_team)
        losing_rating = sum(self.team[player] for player in losing_team)

        expected_winning = calculate_expected_score(
            rating=winning_rating,
            opponent_rating=losing_rating,
            scale_factor=self.params.team_scale_factor,
        )
        expected_losing = calculate_expected_score(
            rating=losing_rating,
            opponent_rating=winning_rating,
            scale_factor=self.params.team_scale_factor,
        )

        # Every member gets the full team delta; it is not split between players.
        winning_delta = truncated_delta(self.params.k_factor, 1.0, expected_winning)
        losing_delta = truncated_delta(self.params.k_factor, 0.0, expected_losing)

        for player in winning_team:
            self.team[player] += winning_delta
        for player in losing_team:
            self.team[player] += losing_delta

    def _ratings_for(self, mode: RatingMode) -> dict[PlayerHandle, int]:
        return self.individual if mode is RatingMode.INDIVIDUAL else self.team

    def get_standings(self, mode: RatingMode) -> list[StandingEntry]:
        """Return ratings for ``mode`` ordered best first; ties keep insertion order."""
        ratings = self._ratings_for(mode)
        ordered = sorted(ratings.items(), key=lambda item: item[1], reverse=True)
        return [StandingEntry(handle=handle, rating=rating) for handle, rating in ordered]

    def format_standings(self, mode: RatingMode) -> str:
        return "\n".join(str(entry) for entry in self.get_standings(mode))

    def is_empty(self) -> bool:
        return not self.individual and not self.team

    def as_snapshot(self) -> dict[str, dict[PlayerHandle, int]]:
        return {
            RatingMode.INDIVIDUAL.value: dict(self.individual),
            RatingMode.TEAM.value: dict(self.team),
        }

    @classmethod
    def from_snapshot(
        cls,
        payload: Any,
        params: EloParameters = DEFAULT_PARAMETERS,
    ) -> RatingTable:
        """Rebuild a table from ``as_snapshot`` output, raising ``ValueError`` on bad shape."""
        if not isinstance(payload, dict):
            raise ValueError(f"rating table must be an object, got {type(payload).__name__}")

        table = cls(params)
        table.individual = _parse_rating_map(payload, RatingMode.INDIVIDUAL)
        table.team = _parse_rating_map(payload, RatingMode.TEAM)
        return table


def _unique(*players: PlayerHandle) -> tuple[PlayerHandle, ...]:
    return tuple(dict.fromkeys(players))


def _parse_rating_map(payload: dict[str, Any], mode: RatingMode) -> dict[PlayerHandle, int]:
    raw = payload.get(mode.value)
    if not isinstance(raw, dict):
        raise ValueError(f"'{mode.value}' ratings must be an object")

    ratings: dict[PlayerHandle, int] = {}
    for handle, rating in raw.items():
        # bool is an int subclass; JSON true/false is never a rating.
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValueError(
                f"rating for {handle!r} in '{mode.value}' must be an integer, got {rating!r}"
            )
        ratings[handle] = rating
    return ratings


__all__ = ["RatingTable"]
