from __future__ import annotations

import logging
import signal
from typing import Any

from fastapi import FastAPI, Request
from telegram import Update

from app.bot import build_application, start_background, stop_background
from app.config import load_settings


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = load_settings(require_webhook=True)
webhook_url = settings.webhook_url

logger.info("Using webhook base URL %s", webhook_url)


def _handle_exit(sig: int, frame: object | None) -> None:
    """Log received termination signals for easier debugging on platforms like
    Render where processes may be stopped externally."""
    logger.info("Received shutdown signal %s", sig)


signal.signal(signal.SIGTERM, _handle_exit)
signal.signal(signal.SIGINT, _handle_exit)

# Updates arrive through the webhook route below, so the built-in Updater is
# disabled and background work is started from the FastAPI lifecycle hooks.
bot_app = build_application(settings, polling=False)


app = FastAPI()


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Starting bot application")
    try:
        await bot_app.initialize()
        await bot_app.start()
        await start_background(bot_app)
        webhook = f"{webhook_url}/webhook"
        await bot_app.bot.set_webhook(webhook)
        logger.info("Webhook set to %s", webhook)
    except Exception:
        logger.exception("Failed during startup")
        raise
    else:
        logger.info("Bot application started successfully")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    logger.info("Shutting down bot application")
    try:
        await bot_app.bot.delete_webhook()
        await stop_background(bot_app)
        await bot_app.stop()
        await bot_app.shutdown()
    except Exception:
        logger.exception("Error during shutdown")
        raise
    else:
        logger.info("Bot application stopped")


@app.post("/webhook")
async def telegram_webhook(request: Request) -> dict[str, bool]:
    update = Update.de_json(await request.json(), bot_app.bot)
    await bot_app.process_update(update)
    return {"ok": True}


@app.api_route("/", methods=["GET", "HEAD"])
async def root() -> dict[str, str]:
    return {"status": "running"}


@app.get("/healthz")
async def healthz() -> dict[str, Any]:
    """Health-check endpoint used by the hosting platform.

    Also reports how many sessions each game currently holds.
    """
    stores = bot_app.bot_data["stores"]
    return {
        "status": "ok",
        "sessions": {variant: len(store) for variant, store in stores.items()},
    }
