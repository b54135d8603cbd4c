#!/usr/bin/env python3
"""Run rating-bot chat commands against a local ratings snapshot."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from bot.handler import INFO_REPLY, CommandHandler, load_store
from domain.config import BotConfig, load_bot_config
from domain.logging_setup import configure_logging

logger = logging.getLogger("ratings_bot")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Chat Elo rating bot.",
)

ChatIdOption = Annotated[int, typer.Option("--chat-id", help="Chat the command is sent to.")]


def _handler(ctx: typer.Context) -> CommandHandler:
    config: BotConfig = ctx.obj
    return CommandHandler(load_store(config.data_file))


def _send(handler: CommandHandler, chat_id: int, text: str) -> None:
    for reply in handler.handle(chat_id, text):
        typer.echo(reply)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="TOML config file with [storage] and [logging] tables."),
    ] = None,
    data_file: Annotated[
        Optional[Path],
        typer.Option("--data-file", help="Ratings snapshot file; overrides the config file."),
    ] = None,
) -> None:
    config = BotConfig()
    if config_path is not None:
        try:
            config = load_bot_config(config_path)
        except (FileNotFoundError, ValueError) as exc:
            raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if data_file is not None:
        config = BotConfig(data_file=data_file, log_level=config.log_level, file_path=config.file_path)

    configure_logging(config.log_level)
    ctx.obj = config


@app.command("stats")
def stats(ctx: typer.Context, chat_id: ChatIdOption) -> None:
    """Show the chat's 1v1 and 2v2 standings."""
    _send(_handler(ctx), chat_id, "/stats")


@app.command("info")
def info() -> None:
    """Show the bot command help."""
    typer.echo(INFO_REPLY)


@app.command("game")
def game(
    ctx: typer.Context,
    chat_id: ChatIdOption,
    handles: Annotated[
        list[str],
        typer.Argument(help="p1 p2 winner, or p1 p2 p3 p4 winner1 winner2."),
    ],
) -> None:
    """Record a 1v1 or 2v2 game result."""
    _send(_handler(ctx), chat_id, " ".join(["/game", *handles]))


@app.command("console")
def console(ctx: typer.Context, chat_id: ChatIdOption) -> None:
    """Read chat messages from stdin, one per line, until EOF."""
    handler = _handler(ctx)
    logger.info("Bot is running for chat %s", chat_id)
    try:
        for line in sys.stdin:
            _send(handler, chat_id, line.rstrip("\r\n"))
    finally:
        handler.shutdown()


if __name__ == "__main__":
    app()
