"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    DEFAULT_PARAMETERS,
    EloParameters,
    calculate_expected_score,
    truncated_delta,
)

__all__ = [
    "DEFAULT_PARAMETERS",
    "EloParameters",
    "calculate_expected_score",
    "truncated_delta",
]
