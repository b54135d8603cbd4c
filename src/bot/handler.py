"""Turn chat commands into rating updates and reply text."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from bot.commands import (
    USAGE_1V1,
    USAGE_2V2,
    Command,
    CommandKind,
    CommandParseError,
    parse_command,
)
from domain.ratings.common import GroupId, RatingMode
from domain.ratings.table import RatingTable
from repositories.rating_store import PersistenceErrorKind, RatingStore

logger = logging.getLogger(__name__)

NO_RATINGS_REPLY = "No ratings recorded yet."
STATS_HEADER = "Player ratings:\n"
UPDATED_REPLY = "Ratings updated."
WINNER_1V1_ERROR = "Error: the winner must be either @player1 or @player2."
WINNERS_2V2_ERROR = "Error: the winners must be from the same team."
USAGE_REPLY = (
    "Invalid command format. Use:\n"
    f"{USAGE_1V1} for 1v1\n"
    f"{USAGE_2V2} for 2v2"
)
INFO_REPLY = (
    "Bot commands:\n"
    "/stats - Show the ratings of this chat.\n"
    f"{USAGE_1V1} - Record a 1v1 game.\n"
    f"{USAGE_2V2} - Record a 2v2 game."
)


def load_store(path: Path) -> RatingStore:
    """Load the snapshot at ``path``, logging why it was skipped if it was."""
    store, error = RatingStore.load(path)
    if error is None:
        logger.info("Loaded ratings for %d chats from %s", len(store), path)
    elif error.kind is PersistenceErrorKind.MISSING:
        logger.info("No ratings snapshot at %s, starting empty", path)
    else:
        logger.warning("Starting with empty ratings: %s", error)
    return store


def render_stats(table: RatingTable) -> str:
    if table.is_empty():
        return NO_RATINGS_REPLY

    message = STATS_HEADER
    for mode, separator in ((RatingMode.INDIVIDUAL, "\n\n"), (RatingMode.TEAM, "")):
        standings = table.format_standings(mode)
        if standings.strip():
            message += f"{mode.label}:\n{standings}{separator}"
    return message


class CommandHandler:
    """Dispatch chat messages against a shared rating store.

    Every call runs under one lock so a threaded transport still applies
    updates one at a time.
    """

    def __init__(self, store: RatingStore) -> None:
        self.store = store
        self._lock = threading.Lock()

    def handle(self, group_id: GroupId, text: str | None) -> list[str]:
        """Return the replies to send for ``text``; empty when the message is ignored."""
        with self._lock:
            table = self.store.get_or_create(group_id)
            if text is None:
                return []

            try:
                command = parse_command(text)
            except CommandParseError as exc:
                logger.debug("Rejected command in chat %s: %s", group_id, exc)
                return [USAGE_REPLY]

            if command is None:
                return []
            return self._dispatch(group_id, table, command)

    def _dispatch(self, group_id: GroupId, table: RatingTable, command: Command) -> list[str]:
        if command.kind is CommandKind.STATS:
            return [render_stats(table)]
        if command.kind is CommandKind.INFO:
            return [INFO_REPLY]
        if command.kind is CommandKind.REPORT_1V1:
            return self._report_1v1(group_id, table, command)
        return self._report_2v2(group_id, table, command)

    def _report_1v1(self, group_id: GroupId, table: RatingTable, command: Command) -> list[str]:
        player1, player2, winner = command.players
        table.initialize_player(player1)
        table.initialize_player(player2)

        if not table.update_individual(player1, player2, winner):
            return [WINNER_1V1_ERROR]

        logger.info("Chat %s: 1v1 %s vs %s, winner %s", group_id, player1, player2, winner)
        self._save()
        return [UPDATED_REPLY, render_stats(table)]

    def _report_2v2(self, group_id: GroupId, table: RatingTable, command: Command) -> list[str]:
        player1, player2, player3, player4, winner1, winner2 = command.players
        for player in (player1, player2, player3, player4):
            table.initialize_player(player)

        if not table.update_team(player1, player2, player3, player4, winner1, winner2):
            return [WINNERS_2V2_ERROR]

        logger.info(
            "Chat %s: 2v2 %s+%s vs %s+%s, winners %s+%s",
            group_id, player1, player2, player3, player4, winner1, winner2,
        )
        self._save()
        return [UPDATED_REPLY, render_stats(table)]

    def _save(self) -> bool:
        error = self.store.save_all()
        if error is not None:
            logger.warning("Ratings kept in memory only: %s", error)
            return False
        return True

    def shutdown(self) -> bool:
        """Flush every chat to the snapshot; failures are logged, not raised."""
        with self._lock:
            return self._save()


__all__ = ["INFO_REPLY", "CommandHandler", "load_store", "render_stats"]
