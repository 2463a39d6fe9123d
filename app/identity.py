from __future__ import annotations

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class BotIdentity:
    """Lazily fetched username of the running bot.

    The value is written once, under the lock, on the first request; every
    later read returns the cached value without waiting.
    """

    def __init__(self, username: Optional[str] = None) -> None:
        self._username = username
        self._lock = asyncio.Lock()

    @property
    def cached(self) -> Optional[str]:
        return self._username

    async def username(self, bot) -> str:
        if self._username is not None:
            return self._username
        async with self._lock:
            if self._username is None:
                me = await bot.get_me()
                self._username = me.username or ""
                logger.info("Bot identity resolved as @%s", self._username)
        return self._username

    async def mention(self, bot) -> str:
        username = await self.username(bot)
        return f"@{username}" if username else ""
