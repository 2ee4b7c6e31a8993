"""
ProofBot — discord.py bot client.

Manages the full bot lifecycle:
- Starts the HTTP health server once at startup (owned by the bot)
- Loads the ProofCog
- Syncs slash commands (guild-local for dev, global for production)
- Logs unhandled event, command and task errors without stopping the process
- Cleans up all resources on shutdown via AsyncExitStack
"""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack
from typing import Any

import discord
from discord import app_commands
from discord.ext import commands

from proofbot.config.logging import get_logger
from proofbot.config.settings import Settings
from proofbot.health import HealthServer

logger = get_logger(__name__)


class StartupError(RuntimeError):
    """Raised when the bot cannot finish its startup sequence."""


class ProofBot(commands.Bot):
    """
    Discord bot for proof-of-work submissions.

    Holds the long-lived handles (health server) and exposes settings to
    cogs. Async resources are registered on an AsyncExitStack so they're
    released when the bot shuts down.

    Args:
        settings: Full application settings (bot token, health port, etc.)
    """

    def __init__(self, settings: Settings) -> None:
        intents = discord.Intents.default()
        intents.message_content = True  # Required to read "!proof <url>" messages
        super().__init__(
            command_prefix=settings.bot.command_prefix,
            intents=intents,
            application_id=settings.bot.client_id,
            activity=discord.Activity(
                type=discord.ActivityType.watching, name=settings.bot.activity
            ),
        )
        self.settings = settings
        self.health_server: HealthServer | None = None
        self._exit_stack = AsyncExitStack()
        self.tree.error(self.on_app_command_error)

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        Starts the health server, loads cogs, and syncs slash commands.
        A failed command sync aborts startup.
        """
        asyncio.get_running_loop().set_exception_handler(_log_unhandled_task_error)

        # --- 1. Health server ---
        if self.settings.health.enabled:
            self.health_server = await self._exit_stack.enter_async_context(
                HealthServer(self.settings.health.host, self.settings.health.port)
            )
        else:
            logger.info("Health server disabled (HEALTH__ENABLED=false)")

        # --- 2. Load cogs ---
        from proofbot.bot.cogs.proof import ProofCog
        await self.add_cog(ProofCog(self))
        logger.info("Cogs loaded")

        # --- 3. Register slash commands ---
        await self.sync_commands()

    async def sync_commands(self) -> list[app_commands.AppCommand]:
        """
        Upsert the slash commands with Discord.

        Raises:
            StartupError: If Discord rejects the registration
        """
        logger.info("Started refreshing application (/) commands.")
        try:
            if self.settings.bot.dev_guild_id:
                guild = discord.Object(id=self.settings.bot.dev_guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info(
                    f"Synced {len(synced)} command(s) to dev guild "
                    f"{self.settings.bot.dev_guild_id} (instant)"
                )
            else:
                synced = await self.tree.sync()
                logger.info(
                    f"Synced {len(synced)} command(s) globally "
                    "(may take up to 1 hour to propagate)"
                )
        except discord.Forbidden as e:
            raise StartupError(
                "Could not register slash commands (403 Forbidden). Re-invite the bot "
                "with both the 'bot' and 'applications.commands' OAuth2 scopes."
            ) from e
        except discord.HTTPException as e:
            raise StartupError(f"Error registering commands: {e}") from e
        return synced

    async def on_ready(self) -> None:
        """Called when the bot successfully connects to Discord."""
        logger.info(f"✅ Bot is ready! Logged in as {self.user} (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def on_error(self, event_method: str, /, *args: Any, **kwargs: Any) -> None:
        """Log exceptions escaping event listeners; the bot keeps running."""
        logger.exception(f"Unhandled error in event {event_method!r}")

    async def on_command_error(
        self, context: commands.Context, exception: commands.CommandError, /
    ) -> None:
        # "!proof" is handled by a listener, not a prefix command; ignore the lookup miss
        if isinstance(exception, commands.CommandNotFound):
            return
        logger.error(f"Error in command {context.command}", exc_info=exception)

    async def on_app_command_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        logger.error(
            f"Unhandled app command error from {interaction.user}", exc_info=error
        )

    async def close(self) -> None:
        """Graceful shutdown — stop the health server before disconnecting."""
        logger.info("Shutting down ProofBot...")
        await self._exit_stack.aclose()
        await super().close()

    def is_allowed_channel(self, channel_id: int | None) -> bool:
        """
        Return True if the bot should respond in this channel.

        If `allowed_channel_ids` is empty (the default), the bot responds everywhere.
        If it's non-empty, the bot only responds in the listed channel IDs.
        """
        allowed = self.settings.bot.allowed_channel_ids
        return not allowed or channel_id in allowed


def _log_unhandled_task_error(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Event-loop exception handler: log and carry on."""
    exception = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    logger.error(f"Unhandled async error: {message}", exc_info=exception)
