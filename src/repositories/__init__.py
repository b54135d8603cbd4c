"""Persistence for chat rating tables."""

from repositories.rating_store import PersistenceError, PersistenceErrorKind, RatingStore

__all__ = ["PersistenceError", "PersistenceErrorKind", "RatingStore"]
