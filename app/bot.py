"""Construction of the Telegram application shared by both entry points."""
from __future__ import annotations

import logging

from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
)

from app.config import Settings
from app.identity import BotIdentity
from handlers.commands import (
    BOT_COMMANDS,
    GAME_COMMANDS,
    NOVELTY_COMMANDS,
    about,
    choose_game,
    game_command,
    help_command,
    minesweeper,
    novelty,
    start,
)
from handlers.keyboard import MENU_PREFIX
from handlers.router import CALLBACK_PATTERN, game_callback
from logic.engine import VARIANTS, build_engines
from storage import GarbageCollector, SessionStore

logger = logging.getLogger(__name__)


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Exception while handling update %s", update, exc_info=context.error)


def setup_application(application: Application, settings: Settings) -> None:
    """Attach stores, engines, the collector and handlers to ``application``."""
    stores = {variant: SessionStore(variant) for variant in VARIANTS}
    application.bot_data["stores"] = stores
    application.bot_data["engines"] = build_engines(stores)
    application.bot_data["collector"] = GarbageCollector(
        stores.values(),
        lifetime=settings.session_lifetime,
        period=settings.gc_period,
    )
    application.bot_data["identity"] = BotIdentity()

    game_commands = [name for name in GAME_COMMANDS if name != "minesweeper"]
    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("about", about))
    application.add_handler(CommandHandler(game_commands, game_command))
    application.add_handler(CommandHandler("minesweeper", minesweeper))
    if settings.novelty_commands:
        application.add_handler(CommandHandler(list(NOVELTY_COMMANDS), novelty))
    application.add_handler(CallbackQueryHandler(choose_game, pattern=f"^{MENU_PREFIX}"))
    application.add_handler(CallbackQueryHandler(game_callback, pattern=CALLBACK_PATTERN))
    application.add_error_handler(handle_error)


async def start_background(application: Application) -> None:
    """Start the garbage collector and publish the command list."""
    application.bot_data["collector"].start()
    try:
        await application.bot.set_my_commands(BOT_COMMANDS)
    except Exception:
        logger.exception("Failed to register bot commands")


async def stop_background(application: Application) -> None:
    await application.bot_data["collector"].stop()


def build_application(settings: Settings, *, polling: bool = True) -> Application:
    """Return a configured application.

    With ``polling=False`` the built-in Updater is disabled and updates are
    expected to be fed through :meth:`Application.process_update`.
    """
    builder = (
        ApplicationBuilder()
        .token(settings.bot_token)
        .concurrent_updates(settings.concurrent_updates)
    )
    if settings.proxy_url:
        builder = builder.proxy(settings.proxy_url)
        if polling:
            builder = builder.get_updates_proxy(settings.proxy_url)
    if polling:
        builder = builder.post_init(start_background).post_shutdown(stop_background)
    else:
        builder = builder.updater(None)
    application = builder.build()
    setup_application(application, settings)
    return application


__all__ = [
    "build_application",
    "handle_error",
    "setup_application",
    "start_background",
    "stop_background",
]
