"""
ProofCog — proof-of-work submissions via /proof, /quickproof and !proof.

Three entry points, one rendering path:
  - /proof video_url:<url> [description] [client]   (anyone)
  - /quickproof video_url:<url>                     (administrators only)
  - !proof <url>                                    (plain message fallback)

Each one validates the Loom link, renders the embed with create_proof_embed()
and replies. Rejections (bad link, missing permission) go back to the user
only. Unexpected failures while rendering or sending are logged and the user
gets a generic apology instead.

Every handler returns a ProofResult so the outcome is visible to callers
(and tests) without inspecting the replies.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import discord
from discord import app_commands
from discord.ext import commands
from pydantic import BaseModel, field_validator

from proofbot.config.logging import get_logger
from proofbot.proof import create_proof_embed, is_valid_loom_url

logger = get_logger(__name__)

MESSAGE_COMMAND_PREFIX = "!proof "

INVALID_URL_MESSAGE = "❌ Please provide a valid Loom video URL (e.g., https://loom.com/share/...)"
INVALID_MESSAGE_URL_MESSAGE = "❌ Please provide a valid Loom video URL after the command."
PERMISSION_DENIED_MESSAGE = "❌ You need administrator permissions to use this command."
CHANNEL_BLOCKED_MESSAGE = "I'm not configured to respond in this channel."
SUCCESS_MESSAGE = "✅ Proof of work submitted successfully!"

PROOF_ERROR_MESSAGE = "❌ There was an error processing your proof of work. Please try again."
QUICKPROOF_ERROR_MESSAGE = "❌ There was an error processing your quick proof. Please try again."
MESSAGE_ERROR_MESSAGE = "❌ There was an error processing your proof of work."

QUICKPROOF_DESCRIPTION = "Quick proof of work submission"
MESSAGE_DESCRIPTION = "Proof of work submitted via message"


class ProofErrorKind(enum.Enum):
    INVALID_INPUT = "invalid_input"
    PERMISSION_DENIED = "permission_denied"
    UNEXPECTED_FAILURE = "unexpected_failure"


@dataclass(frozen=True)
class ProofResult:
    """Outcome of one submission attempt. ``error`` is None on success."""

    error: ProofErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class QuickProofOptions(BaseModel):
    """Options for /quickproof (and the !proof message command)."""

    video_url: str = ""

    @field_validator("video_url", mode="before")
    @classmethod
    def _strip_url(cls, value: str | None) -> str:
        return (value or "").strip()


class ProofOptions(QuickProofOptions):
    """Options for /proof."""

    description: str | None = None
    client: str | None = None

    @field_validator("description", "client", mode="before")
    @classmethod
    def _optional_text(cls, value: str | None) -> str | None:
        return _blank_to_none(value)


def _is_admin(interaction: discord.Interaction) -> bool:
    """True if the invoking user holds the Administrator permission in this guild."""
    user = interaction.user
    return isinstance(user, discord.Member) and user.guild_permissions.administrator


async def _send_ephemeral(interaction: discord.Interaction, content: str) -> None:
    """Reply privately, whether or not the interaction was already answered."""
    if interaction.response.is_done():
        await interaction.followup.send(content, ephemeral=True)
    else:
        await interaction.response.send_message(content, ephemeral=True)


async def _reject(
    interaction: discord.Interaction, kind: ProofErrorKind, content: str
) -> ProofResult:
    await interaction.response.send_message(content, ephemeral=True)
    return ProofResult(kind)


class ProofCog(commands.Cog):
    """Handles proof-of-work submissions."""

    def __init__(self, bot) -> None:
        self.bot = bot

    # ------------------------------------------------------------------
    # Slash commands
    # ------------------------------------------------------------------

    @app_commands.command(name="proof", description="Show proof of work with Loom video")
    @app_commands.describe(
        video_url="Loom video URL",
        description="Description of the work completed",
        client="Client name",
    )
    async def proof(
        self,
        interaction: discord.Interaction,
        video_url: str,
        description: str | None = None,
        client: str | None = None,
    ) -> ProofResult:
        """
        /proof video_url:<loom link> [description:<text>] [client:<name>]

        Posts a proof-of-work embed publicly with a success message.
        """
        if not self.bot.is_allowed_channel(interaction.channel_id):
            return await _reject(interaction, ProofErrorKind.INVALID_INPUT, CHANNEL_BLOCKED_MESSAGE)

        options = ProofOptions(video_url=video_url, description=description, client=client)
        if not is_valid_loom_url(options.video_url):
            return await _reject(interaction, ProofErrorKind.INVALID_INPUT, INVALID_URL_MESSAGE)

        result = await self._reply_with_proof(
            interaction,
            options.video_url,
            description=options.description,
            client_name=options.client,
            content=SUCCESS_MESSAGE,
            error_message=PROOF_ERROR_MESSAGE,
        )
        if result.ok:
            logger.info(f"Proof submitted by {interaction.user}: {options.video_url}")
        return result

    @app_commands.command(name="quickproof", description="Quick proof of work (admin only)")
    @app_commands.describe(video_url="Loom video URL")
    @app_commands.default_permissions(administrator=True)
    async def quickproof(self, interaction: discord.Interaction, video_url: str) -> ProofResult:
        """
        /quickproof video_url:<loom link>

        Administrator shortcut: posts the embed only, with a fixed description.
        The permission is checked here as well, since guild admins can
        override the default command permissions.
        """
        if not self.bot.is_allowed_channel(interaction.channel_id):
            return await _reject(interaction, ProofErrorKind.INVALID_INPUT, CHANNEL_BLOCKED_MESSAGE)

        if not _is_admin(interaction):
            return await _reject(
                interaction, ProofErrorKind.PERMISSION_DENIED, PERMISSION_DENIED_MESSAGE
            )

        options = QuickProofOptions(video_url=video_url)
        if not is_valid_loom_url(options.video_url):
            return await _reject(interaction, ProofErrorKind.INVALID_INPUT, INVALID_URL_MESSAGE)

        result = await self._reply_with_proof(
            interaction,
            options.video_url,
            description=QUICKPROOF_DESCRIPTION,
            error_message=QUICKPROOF_ERROR_MESSAGE,
        )
        if result.ok:
            logger.info(f"Quick proof submitted by {interaction.user}: {options.video_url}")
        return result

    async def cog_app_command_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        # Logged by the bot's tree-level handler; only the user reply happens here
        command_name = interaction.command.name if interaction.command else None
        message = QUICKPROOF_ERROR_MESSAGE if command_name == "quickproof" else PROOF_ERROR_MESSAGE
        try:
            await _send_ephemeral(interaction, message)
        except discord.HTTPException as e:
            logger.warning(f"Could not send error reply: {e}")

    # ------------------------------------------------------------------
    # Message command
    # ------------------------------------------------------------------

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> ProofResult | None:
        """
        Respond to ``!proof <loom link>`` messages.

        Ignores:
        - Messages from bots (including ourselves)
        - Messages that don't start with ``!proof ``
        - Messages in non-allowed channels (if restriction is configured)
        """
        if message.author.bot:
            return None
        if not message.content.startswith(MESSAGE_COMMAND_PREFIX):
            return None
        if not self.bot.is_allowed_channel(message.channel.id):
            return None

        options = QuickProofOptions(video_url=message.content[len(MESSAGE_COMMAND_PREFIX):])
        if not options.video_url or not is_valid_loom_url(options.video_url):
            await message.reply(INVALID_MESSAGE_URL_MESSAGE)
            return ProofResult(ProofErrorKind.INVALID_INPUT)

        try:
            embed = create_proof_embed(
                options.video_url, MESSAGE_DESCRIPTION, None, message.author
            )
            await message.reply(embed=embed)
        except Exception:
            logger.exception("Error creating proof embed from message")
            try:
                await message.reply(MESSAGE_ERROR_MESSAGE)
            except discord.HTTPException as e:
                logger.warning(f"Could not send error reply: {e}")
            return ProofResult(ProofErrorKind.UNEXPECTED_FAILURE)

        logger.info(f"Proof submitted via message by {message.author}: {options.video_url}")
        return ProofResult()

    # ------------------------------------------------------------------
    # Shared reply path
    # ------------------------------------------------------------------

    async def _reply_with_proof(
        self,
        interaction: discord.Interaction,
        video_url: str,
        *,
        description: str | None = None,
        client_name: str | None = None,
        content: str | None = None,
        error_message: str,
    ) -> ProofResult:
        """
        Render the embed and send it as the interaction response.

        Never raises: failures are logged, the user gets ``error_message``
        privately, and the returned result carries UNEXPECTED_FAILURE.
        """
        try:
            embed = create_proof_embed(video_url, description, client_name, interaction.user)
            await interaction.response.send_message(content=content, embed=embed)
        except Exception:
            logger.exception(f"Error creating proof embed for {video_url!r}")
            try:
                await _send_ephemeral(interaction, error_message)
            except discord.HTTPException as e:
                logger.warning(f"Could not send error reply: {e}")
            return ProofResult(ProofErrorKind.UNEXPECTED_FAILURE)
        return ProofResult()
