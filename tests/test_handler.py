"""Tests for chat command handling against a rating store."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from bot.handler import (
    INFO_REPLY,
    NO_RATINGS_REPLY,
    UPDATED_REPLY,
    USAGE_REPLY,
    WINNER_1V1_ERROR,
    WINNERS_2V2_ERROR,
    CommandHandler,
    load_store,
)
from repositories.rating_store import RatingStore

CHAT_ID = -100500


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / "ratings.json"


@pytest.fixture
def handler(snapshot_path: Path) -> CommandHandler:
    return CommandHandler(RatingStore(snapshot_path))


def test_stats_for_new_chat(handler: CommandHandler) -> None:
    assert handler.handle(CHAT_ID, "/stats") == [NO_RATINGS_REPLY]
    assert CHAT_ID in handler.store


def test_any_message_registers_the_chat(handler: CommandHandler) -> None:
    assert handler.handle(CHAT_ID, "good game everyone") == []
    assert handler.handle(7, None) == []
    assert handler.store.group_ids() == [CHAT_ID, 7]


def test_info(handler: CommandHandler) -> None:
    assert handler.handle(CHAT_ID, "/info") == [INFO_REPLY]


def test_bad_game_usage(handler: CommandHandler, snapshot_path: Path) -> None:
    assert handler.handle(CHAT_ID, "/game @a @b") == [USAGE_REPLY]
    assert not snapshot_path.exists()


def test_1v1_report_updates_saves_and_shows_stats(
    handler: CommandHandler, snapshot_path: Path
) -> None:
    replies = handler.handle(CHAT_ID, "/game @a @b @a")

    assert replies == [
        UPDATED_REPLY,
        "Player ratings:\n1v1:\n@a: 1516\n@b: 1484\n\n2v2:\n@a: 1500\n@b: 1500",
    ]
    saved = json.loads(snapshot_path.read_text(encoding="utf-8"))
    assert saved[str(CHAT_ID)]["individual"] == {"@a": 1516, "@b": 1484}


def test_2v2_report_updates_team_ratings(handler: CommandHandler) -> None:
    replies = handler.handle(CHAT_ID, "/game @a @b @c @d @c @d")

    assert replies[0] == UPDATED_REPLY
    assert replies[1].endswith("2v2:\n@c: 1516\n@d: 1516\n@a: 1484\n@b: 1484")
    assert handler.store.get_or_create(CHAT_ID).individual == {
        "@a": 1500,
        "@b": 1500,
        "@c": 1500,
        "@d": 1500,
    }


def test_rejected_1v1_does_not_save(handler: CommandHandler, snapshot_path: Path) -> None:
    assert handler.handle(CHAT_ID, "/game @a @b @c") == [WINNER_1V1_ERROR]
    assert not snapshot_path.exists()
    # Named players are still registered at the default rating.
    assert handler.store.get_or_create(CHAT_ID).individual == {"@a": 1500, "@b": 1500}


def test_rejected_2v2_does_not_save(handler: CommandHandler, snapshot_path: Path) -> None:
    assert handler.handle(CHAT_ID, "/game @a @b @c @d @a @c") == [WINNERS_2V2_ERROR]
    assert not snapshot_path.exists()


def test_chats_are_rated_separately(handler: CommandHandler) -> None:
    handler.handle(1, "/game @a @b @a")
    handler.handle(2, "/game @a @b @b")

    assert handler.store.get_or_create(1).individual["@a"] == 1516
    assert handler.store.get_or_create(2).individual["@a"] == 1484


def test_save_failure_is_logged_and_update_kept(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    handler = CommandHandler(RatingStore(tmp_path / "no-such-dir" / "ratings.json"))

    with caplog.at_level(logging.WARNING, logger="bot.handler"):
        replies = handler.handle(CHAT_ID, "/game @a @b @a")

    assert replies[0] == UPDATED_REPLY
    assert "kept in memory only" in caplog.text
    assert handler.store.get_or_create(CHAT_ID).individual["@a"] == 1516


def test_shutdown_flushes_store(handler: CommandHandler, snapshot_path: Path) -> None:
    handler.handle(CHAT_ID, "/stats")

    assert handler.shutdown() is True

    loaded, error = RatingStore.load(snapshot_path)
    assert error is None
    assert loaded.group_ids() == [CHAT_ID]


def test_restart_continues_from_snapshot(snapshot_path: Path) -> None:
    CommandHandler(load_store(snapshot_path)).handle(CHAT_ID, "/game @a @b @a")

    restarted = CommandHandler(load_store(snapshot_path))
    restarted.handle(CHAT_ID, "/game @a @b @a")

    assert restarted.store.get_or_create(CHAT_ID).individual == {"@a": 1530, "@b": 1470}


def test_load_store_logs_corrupt_snapshot(
    snapshot_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    snapshot_path.write_text("{oops")

    with caplog.at_level(logging.INFO, logger="bot.handler"):
        store = load_store(snapshot_path)

    assert store.groups == {}
    assert any(
        record.levelno == logging.WARNING and "corrupt" in record.getMessage()
        for record in caplog.records
    )


def test_load_store_missing_snapshot_is_not_a_warning(
    snapshot_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO, logger="bot.handler"):
        load_store(snapshot_path)

    assert [record.levelno for record in caplog.records] == [logging.INFO]
