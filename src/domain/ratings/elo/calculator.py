"""Elo expected-score and delta math."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EloParameters:
    initial_elo: int = 1500
    k_factor: float = 32.0
    scale_factor: float = 400.0
    team_scale_factor: float = 800.0


DEFAULT_PARAMETERS = EloParameters()


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def truncated_delta(k_factor: float, actual_score: float, expected_score: float) -> int:
    """Rating change truncated toward zero, e.g. 15.9 -> 15 and -15.9 -> -15."""
    return int(k_factor * (actual_score - expected_score))


__all__ = [
    "DEFAULT_PARAMETERS",
    "EloParameters",
    "calculate_expected_score",
    "truncated_delta",
]
