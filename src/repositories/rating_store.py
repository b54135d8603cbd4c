"""JSON snapshot persistence for per-chat rating tables."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from domain.ratings.common import GroupId
from domain.ratings.table import RatingTable

logger = logging.getLogger(__name__)

_MIN_GROUP_ID = -(2**63)
_MAX_GROUP_ID = 2**63 - 1


class PersistenceErrorKind(str, Enum):
    """Why a snapshot could not be loaded or saved."""

    MISSING = "missing"
    EMPTY = "empty"
    UNREADABLE = "unreadable"
    CORRUPT = "corrupt"
    UNWRITABLE = "unwritable"


@dataclass(frozen=True)
class PersistenceError:
    """Non-fatal snapshot failure returned to the caller instead of raised."""

    kind: PersistenceErrorKind
    path: Path
    detail: str = ""

    def __str__(self) -> str:
        message = f"{self.kind.value} snapshot at {self.path}"
        return f"{message}: {self.detail}" if self.detail else message


class RatingStore:
    """All chat rating tables plus the snapshot file they are saved to."""

    def __init__(self, path: Path, groups: dict[GroupId, RatingTable] | None = None) -> None:
        self.path = path
        self.groups: dict[GroupId, RatingTable] = groups if groups is not None else {}

    def __contains__(self, group_id: object) -> bool:
        return group_id in self.groups

    def __len__(self) -> int:
        return len(self.groups)

    def group_ids(self) -> list[GroupId]:
        return list(self.groups)

    def get_or_create(self, group_id: GroupId) -> RatingTable:
        table = self.groups.get(group_id)
        if table is None:
            table = RatingTable()
            self.groups[group_id] = table
        return table

    def as_snapshot(self) -> dict[str, dict[str, dict[str, int]]]:
        return {str(group_id): table.as_snapshot() for group_id, table in self.groups.items()}

    def save_all(self) -> PersistenceError | None:
        """Overwrite the snapshot with every group; returns an error instead of raising."""
        payload = json.dumps(self.as_snapshot(), ensure_ascii=False)
        try:
            self.path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            return PersistenceError(PersistenceErrorKind.UNWRITABLE, self.path, str(exc))

        logger.debug("Saved %d chat rating tables to %s", len(self.groups), self.path)
        return None

    @classmethod
    def load(cls, path: Path) -> tuple[RatingStore, PersistenceError | None]:
        """Read the snapshot at ``path``.

        Any failure yields an empty store together with the reason; the
        snapshot is never partially applied.
        """
        try:
            if not path.exists():
                return cls(path), PersistenceError(PersistenceErrorKind.MISSING, path)
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return cls(path), PersistenceError(PersistenceErrorKind.UNREADABLE, path, str(exc))

        if not raw.strip():
            return cls(path), PersistenceError(PersistenceErrorKind.EMPTY, path)

        try:
            groups = _parse_groups(json.loads(raw))
        except (ValueError, RecursionError) as exc:
            # json.JSONDecodeError is a ValueError subclass; deep nesting overflows the decoder.
            return cls(path), PersistenceError(PersistenceErrorKind.CORRUPT, path, str(exc))

        logger.debug("Loaded %d chat rating tables from %s", len(groups), path)
        return cls(path, groups), None


def _parse_groups(payload: Any) -> dict[GroupId, RatingTable]:
    if not isinstance(payload, dict):
        raise ValueError(f"snapshot root must be an object, got {type(payload).__name__}")

    groups: dict[GroupId, RatingTable] = {}
    for raw_group_id, raw_table in payload.items():
        group_id = _parse_group_id(raw_group_id)
        try:
            groups[group_id] = RatingTable.from_snapshot(raw_table)
        except ValueError as exc:
            raise ValueError(f"chat {group_id}: {exc}") from exc
    return groups


def _parse_group_id(raw_group_id: str) -> GroupId:
    try:
        group_id = int(raw_group_id)
    except ValueError as exc:
        raise ValueError(f"chat id {raw_group_id!r} is not an integer") from exc
    if str(group_id) != raw_group_id:
        raise ValueError(f"chat id {raw_group_id!r} is not written in canonical form")
    if not _MIN_GROUP_ID <= group_id <= _MAX_GROUP_ID:
        raise ValueError(f"chat id {raw_group_id!r} is outside the 64-bit range")
    return group_id


__all__ = ["PersistenceError", "PersistenceErrorKind", "RatingStore"]
