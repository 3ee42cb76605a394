"""Command-line entry point: run the bot, send the weekly digest, or print admin stats."""

import argparse
import asyncio
import json
import logging
import sys

from telegram import Bot

from .bot import SportTrackerBot
from .config import Config
from .core import TrackerService
from .database.connection import DatabaseManager
from .database.models import Language
from .digest import broadcast_weekly_digest
from .presentation import render_admin_report
from .state import InMemoryStateStore


def build_service(config: Config) -> TrackerService:
    return TrackerService(DatabaseManager(config.database, echo=config.debug))


def run_bot(config: Config) -> None:
    if not config.telegram.token:
        print("TELEGRAM__TOKEN not set in .env")
        sys.exit(1)

    bot = SportTrackerBot(
        build_service(config),
        InMemoryStateStore(config.wizard.ttl_seconds),
        config.telegram,
        leaderboard_size=config.digest.leaderboard_size,
    )
    bot.run()


async def run_digest(config: Config) -> int:
    if not config.telegram.token:
        print("TELEGRAM__TOKEN not set in .env")
        return 1

    service = build_service(config)
    await service.initialize()
    try:
        async with Bot(config.telegram.token) as bot:
            outcome = await broadcast_weekly_digest(
                service,
                bot,
                delay_seconds=config.digest.delay_seconds,
                leaderboard_size=config.digest.leaderboard_size,
            )
    finally:
        await service.close()

    print(f"Weekly summaries: {outcome.sent} sent, {outcome.failed} failed ({outcome.total} users)")
    return 0


async def run_admin_stats(config: Config, *, as_json: bool) -> int:
    service = build_service(config)
    await service.initialize()
    try:
        report = await service.admin_report()
    finally:
        await service.close()

    if as_json:
        print(json.dumps(report.as_dict(), indent=2))
    else:
        print(render_admin_report(Language.EN, report))
    return 0


async def create_tables(config: Config) -> int:
    db = DatabaseManager(config.database, echo=config.debug)
    await db.initialize()
    try:
        await db.create_all()
    finally:
        await db.close()
    print("Database tables created successfully!")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sport Tracker bot and reports")
    parser.add_argument(
        "command",
        nargs="?",
        default="bot",
        choices=["bot", "digest", "admin-stats", "create-tables"],
        help="Run mode: bot (default), digest, admin-stats or create-tables",
    )
    parser.add_argument(
        "--json", action="store_true", help="admin-stats: print JSON instead of text"
    )
    args = parser.parse_args(argv)

    config = Config()
    logging.basicConfig(
        level=config.logging.level,
        format=config.logging.format,
    )

    if args.command == "digest":
        return asyncio.run(run_digest(config))
    if args.command == "admin-stats":
        return asyncio.run(run_admin_stats(config, as_json=args.json))
    if args.command == "create-tables":
        return asyncio.run(create_tables(config))

    run_bot(config)
    return 0


def main_sync() -> None:
    """Entry point for pyproject.toml console_scripts."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nGoodbye!")
        sys.exit(0)


if __name__ == "__main__":
    main_sync()
