"""Configuration: pydantic settings and logging setup."""

from proofbot.config.settings import BotSettings, HealthSettings, Settings, load_settings

__all__ = ["BotSettings", "HealthSettings", "Settings", "load_settings"]
