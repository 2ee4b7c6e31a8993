"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.

Both the nested form (BOT__TOKEN, HEALTH__PORT) and the flat variable names
used by common hosting templates (DISCORD_BOT_TOKEN, CLIENT_ID, PORT) are
accepted.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    token: str = Field(
        default="",
        validation_alias=AliasChoices("token", "discord_bot_token"),
        description="Discord bot token",
    )
    client_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("client_id", "discord_client_id"),
        description="Discord application (client) ID used for command registration",
    )
    command_prefix: str = Field(default="!", description="Command prefix for bot commands")
    activity: str = Field(
        default="Collecting proof of work",
        description="Text shown in the bot's 'Watching' presence",
    )
    allowed_channel_ids: list[int] = Field(
        default_factory=list,
        description="If non-empty, bot only responds in these channel IDs. "
                    "Set via BOT__ALLOWED_CHANNEL_IDS='[123456,789012]'",
    )
    dev_guild_id: int | None = Field(
        default=None,
        description="If set, syncs slash commands to this guild instantly (dev mode). "
                    "If None, syncs globally (up to 1 hour propagation).",
    )

    model_config = SettingsConfigDict(env_prefix="BOT_", env_file=".env", extra="ignore")


class HealthSettings(BaseSettings):
    """HTTP health-check server configuration."""

    enabled: bool = Field(default=True, description="Serve the GET / liveness endpoint")
    host: str = Field(default="0.0.0.0", description="Interface to bind the health server on")
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("port", "health_port"),
        ge=0,
        le=65535,
        description="Port for the health server (PORT is honoured for PaaS hosts)",
    )

    model_config = SettingsConfigDict(env_prefix="HEALTH_", env_file=".env", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bot: BotSettings = Field(default_factory=BotSettings)
    health: HealthSettings = Field(default_factory=HealthSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


def _apply_flat_env_names(settings: Settings, env_file: str | Path) -> Settings:
    """
    Fill sub-settings from the flat names (DISCORD_BOT_TOKEN, CLIENT_ID, PORT)
    in ``env_file``.

    Sub-settings built by default_factory only read ./.env, so a custom file
    is re-read here. Values given in nested form (BOT__TOKEN) take precedence.
    """
    for name, model_cls in (("bot", BotSettings), ("health", HealthSettings)):
        current = getattr(settings, name)
        from_file = model_cls(_env_file=env_file)
        overrides = {
            field: getattr(from_file, field)
            for field in from_file.model_fields_set
            if field not in current.model_fields_set
        }
        if overrides:
            setattr(settings, name, current.model_copy(update=overrides))
    return settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    if env_file:
        return _apply_flat_env_names(Settings(_env_file=env_file), env_file)
    return Settings()
