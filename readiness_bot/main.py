from __future__ import annotations

import asyncio
from pathlib import Path

from loguru import logger
from telegram import BotCommand, BotCommandScopeAllGroupChats, BotCommandScopeAllPrivateChats, BotCommandScopeDefault
from telegram.ext import Application, ApplicationBuilder

from readiness_bot.config import BotSettings
from readiness_bot.handlers.commands.analysis_commands import get_analysis_commands, get_seed_demo_command
from readiness_bot.handlers.commands.simulation_commands import get_sleep_options_command, get_what_if_command
from readiness_bot.handlers.conversations.checkin_conversation import get_checkin_handler
from readiness_bot.handlers.conversations.setup_profile_conversation import get_setup_profile_handler
from readiness_bot.service_factory import ServiceFactory

BOT_SETTINGS = BotSettings()
SERVICE_FACTORY = ServiceFactory(BOT_SETTINGS)


def setup_logger(out_dir: Path) -> None:
    log_dir = out_dir / "log"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(log_dir / "debug.log", rotation="100 MB", retention="7 days", level="DEBUG")
    logger.add(log_dir / "error.log", rotation="100 MB", retention="7 days", level="ERROR")
    logger.info("logger initialised")


def _build_commands() -> dict[str, list[BotCommand]]:
    tracking = [
        BotCommand("checkin", "Log today's metrics"),
        BotCommand("setup_profile", "Set up your profile"),
        BotCommand("profile", "Show your profile"),
        BotCommand("seed_demo", "Load a demo metrics history"),
        BotCommand("cancel", "Cancel current conversation"),
    ]

    analysis = [
        BotCommand("readiness", "Today's readiness score"),
        BotCommand("burnout", "Burnout risk over the last 7 days"),
        BotCommand("anomalies", "Unusual readings today"),
        BotCommand("plan", "Today's training and sleep plan"),
        BotCommand("recommendations", "Recommendations from all agents"),
        BotCommand("whatif", "Simulate tomorrow's impact of an activity"),
        BotCommand("sleep_options", "Compare bedtime options"),
    ]

    return {
        "default": analysis + tracking,
        "private": analysis + tracking,
        "group": [],
    }


async def _post_init(application: Application) -> None:
    commands = _build_commands()

    matrix: list[tuple[list[BotCommand], object, str | None]] = [
        (commands["private"], BotCommandScopeAllPrivateChats(), None),
        (commands["group"], BotCommandScopeAllGroupChats(), None),
        (commands["default"], BotCommandScopeDefault(), None),
        (commands["default"], BotCommandScopeDefault(), "en"),
    ]

    await asyncio.gather(
        *(application.bot.set_my_commands(cmds, scope=scope, language_code=lang) for cmds, scope, lang in matrix)
    )
    logger.info("Bot commands registered.")


async def _post_shutdown(application: Application) -> None:
    SERVICE_FACTORY.metrics_repository.close()
    logger.info("Metrics repository closed.")


def _build_app(bot_settings: BotSettings) -> Application:
    application = (
        ApplicationBuilder()
        .token(bot_settings.telegram_bot_api_key)
        .concurrent_updates(True)
        .read_timeout(bot_settings.read_timeout_s)
        .write_timeout(bot_settings.write_timeout_s)
        .post_init(_post_init)
        .post_shutdown(_post_shutdown)
        .build()
    )
    return application


def _setup_handlers(app: Application) -> None:
    app.add_handler(get_checkin_handler(SERVICE_FACTORY.metrics_repository))
    app.add_handler(get_setup_profile_handler(SERVICE_FACTORY.metrics_repository))
    app.add_handler(get_seed_demo_command(SERVICE_FACTORY.metrics_repository))

    for command in get_analysis_commands(SERVICE_FACTORY.recommendation_service):
        app.add_handler(command)
    app.add_handler(get_what_if_command(SERVICE_FACTORY.recommendation_service))
    app.add_handler(get_sleep_options_command(SERVICE_FACTORY.recommendation_service))


def build_configured_application() -> Application:
    if not BOT_SETTINGS.out_dir.exists():
        BOT_SETTINGS.out_dir.mkdir(parents=True)
    setup_logger(BOT_SETTINGS.out_dir)
    application = _build_app(BOT_SETTINGS)

    _setup_handlers(application)
    return application


def main() -> None:  # pragma: no cover
    application = build_configured_application()
    logger.info("Starting polling...")
    application.run_polling(allowed_updates="*")


if __name__ == "__main__":
    main()
