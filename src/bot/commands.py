"""Parse chat message text into rating commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from domain.ratings.common import PlayerHandle

STATS_PREFIX = "/stats"
GAME_PREFIX = "/game"
INFO_PREFIX = "/info"

USAGE_1V1 = "/game @player1 @player2 @winner"
USAGE_2V2 = "/game @player1 @player2 @player3 @player4 @winner1 @winner2"


class CommandKind(str, Enum):
    STATS = "stats"
    REPORT_1V1 = "report-1v1"
    REPORT_2V2 = "report-2v2"
    INFO = "info"


@dataclass(frozen=True)
class Command:
    """A parsed command; ``players`` is only filled for match reports."""

    kind: CommandKind
    players: tuple[PlayerHandle, ...] = ()


class CommandParseError(ValueError):
    """A recognised command with the wrong number of arguments."""


def _command_word(token: str) -> str:
    # "/game@some_bot" is how group chats address a specific bot.
    return token.split("@", 1)[0]


def parse_command(text: str) -> Command | None:
    """Return the command in ``text``, or ``None`` for ordinary chat messages.

    Raises ``CommandParseError`` for a ``/game`` message whose player count
    fits neither a 1v1 nor a 2v2 report.
    """
    if text.startswith(STATS_PREFIX):
        return Command(CommandKind.STATS)

    if text.startswith(GAME_PREFIX):
        args = text.split(" ")
        if _command_word(args[0]) == GAME_PREFIX:
            if len(args) == 4:
                return Command(CommandKind.REPORT_1V1, tuple(args[1:]))
            if len(args) == 7:
                return Command(CommandKind.REPORT_2V2, tuple(args[1:]))
        raise CommandParseError(
            f"expected {USAGE_1V1!r} or {USAGE_2V2!r}, got {len(args) - 1} arguments"
        )

    if text.startswith(INFO_PREFIX):
        return Command(CommandKind.INFO)

    return None


__all__ = [
    "Command",
    "CommandKind",
    "CommandParseError",
    "USAGE_1V1",
    "USAGE_2V2",
    "parse_command",
]
