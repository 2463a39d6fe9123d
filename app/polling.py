"""Run the bot with long polling.

Usage: ``BOT_TOKEN=... python -m app.polling``
"""
from __future__ import annotations

import logging

from telegram import Update

from app.bot import build_application
from app.config import load_settings


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = load_settings()
    application = build_application(settings)
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
