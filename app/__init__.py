"""Telegram wiring: configuration, application factory and entry points."""
