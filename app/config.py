"""Runtime configuration read from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from storage import DEFAULT_LIFETIME, DEFAULT_PERIOD


def env_flag(name: str, *, default: bool = False) -> bool:
    """Return a boolean flag from environment variables.

    The helper treats common truthy values (``1``, ``true``, ``yes``, ``on``)
    as ``True`` and common falsy ones (``0``, ``false``, ``no``, ``off``) as
    ``False``.  If the variable is unset or contains an unrecognised value, the
    provided ``default`` is used.
    """
    value = os.getenv(name)
    if value is None:
        return default

    normalised = value.strip().lower()
    if normalised in {"1", "true", "yes", "on"}:
        return True
    if normalised in {"0", "false", "no", "off"}:
        return False
    return default


def env_float(name: str, *, default: float, minimum: float = 0.0) -> float:
    """Return a positive number from the environment, falling back to ``default``."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        number = float(value)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {value!r}") from None
    if number <= minimum:
        raise RuntimeError(f"{name} must be greater than {minimum:g}, got {value!r}")
    return number


def normalize_webhook_base(raw_url: str) -> str:
    """Strip trailing slashes and a trailing ``/webhook`` from ``raw_url``.

    Operators may configure ``WEBHOOK_URL`` with or without the ``/webhook``
    suffix; the application always appends it itself.
    """
    normalized = raw_url.rstrip("/")
    if normalized.endswith("/webhook"):
        normalized = normalized[: -len("/webhook")]
        normalized = normalized.rstrip("/")
    return normalized


@dataclass(frozen=True)
class Settings:
    bot_token: str
    webhook_url: Optional[str] = None
    proxy_url: Optional[str] = None
    session_lifetime: float = DEFAULT_LIFETIME
    gc_period: float = DEFAULT_PERIOD
    concurrent_updates: bool = True
    novelty_commands: bool = True


def load_settings(*, require_webhook: bool = False) -> Settings:
    token = os.getenv("BOT_TOKEN")
    if not token:
        raise RuntimeError("BOT_TOKEN environment variable is not set")

    webhook_raw = os.getenv("WEBHOOK_URL")
    if require_webhook and not webhook_raw:
        raise RuntimeError("WEBHOOK_URL environment variable is not set")

    return Settings(
        bot_token=token,
        webhook_url=normalize_webhook_base(webhook_raw) if webhook_raw else None,
        proxy_url=os.getenv("PROXY_URL") or None,
        session_lifetime=env_float("SESSION_LIFETIME", default=DEFAULT_LIFETIME),
        gc_period=env_float("GC_PERIOD", default=DEFAULT_PERIOD),
        concurrent_updates=env_flag("CONCURRENT_UPDATES", default=True),
        novelty_commands=env_flag("NOVELTY_COMMANDS", default=True),
    )


__all__ = [
    "Settings",
    "env_flag",
    "env_float",
    "load_settings",
    "normalize_webhook_base",
]
