"""
Proof-of-work embed rendering.

Defines the data carried by a single submission and turns it into the
discord.Embed posted back to the channel:

- Submitter: who posted the proof (display name with username fallback)
- ProofSubmission: one submission; lives only for the duration of a command
- build_embed / create_proof_embed: pure rendering into a discord.Embed

Rendering assumes the video URL was already checked with is_valid_loom_url();
it does not validate again.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import discord
from pydantic import BaseModel, Field

from proofbot.proof.loom import extract_loom_video_id, loom_thumbnail_url

EMBED_TITLE = "🎬 Proof of Work Submitted"
EMBED_COLOR = discord.Color(0x6366F1)
EMBED_FOOTER = "Proof of Work System"
DEFAULT_DESCRIPTION = "Work completed - video demonstration attached"

FIELD_SUBMITTED_BY = "👤 Submitted by"
FIELD_SUBMITTED_AT = "🕐 Submitted at"
FIELD_VIDEO_LINK = "🎥 Video Link"
FIELD_CLIENT = "🏢 Client"


class Submitter(BaseModel):
    """The Discord account that submitted a proof."""

    username: str = Field(description="Account name (always present)")
    display_name: str | None = Field(None, description="Server nickname or global display name")

    @property
    def name(self) -> str:
        return self.display_name or self.username

    @classmethod
    def from_user(cls, user: Any) -> Submitter:
        """Build from a discord.User / discord.Member (or anything shaped like one)."""
        return cls(
            username=str(user.name),
            display_name=getattr(user, "display_name", None) or None,
        )


class ProofSubmission(BaseModel):
    """A single proof-of-work submission. Never persisted."""

    video_url: str = Field(description="Validated Loom share link")
    description: str | None = Field(None, description="What the work was")
    client: str | None = Field(None, description="Client the work was done for")
    submitted_by: Submitter
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def video_id(self) -> str | None:
        return extract_loom_video_id(self.video_url)


def build_embed(submission: ProofSubmission) -> discord.Embed:
    """Render a submission as a discord.Embed."""
    embed = discord.Embed(
        title=EMBED_TITLE,
        description=submission.description or DEFAULT_DESCRIPTION,
        color=EMBED_COLOR,
        timestamp=submission.submitted_at,
    )
    embed.add_field(name=FIELD_SUBMITTED_BY, value=submission.submitted_by.name, inline=True)
    embed.add_field(
        name=FIELD_SUBMITTED_AT,
        value=discord.utils.format_dt(submission.submitted_at, style="F"),
        inline=True,
    )
    embed.add_field(
        name=FIELD_VIDEO_LINK,
        value=f"[Watch on Loom]({submission.video_url})",
        inline=False,
    )
    if submission.client:
        embed.add_field(name=FIELD_CLIENT, value=submission.client, inline=True)

    video_id = submission.video_id
    if video_id:
        embed.set_thumbnail(url=loom_thumbnail_url(video_id))

    embed.set_footer(text=EMBED_FOOTER)
    return embed


def create_proof_embed(
    video_url: str,
    description: str | None,
    client_name: str | None,
    user: Any,
    *,
    now: datetime | None = None,
) -> discord.Embed:
    """
    Build the proof-of-work embed for a submission.

    Args:
        video_url: Loom share link (already validated by the caller)
        description: Work description; falls back to a fixed text when empty
        client_name: Optional client; adds a Client field when non-empty
        user: discord.User / discord.Member or a Submitter
        now: Submission time, defaults to the current UTC time

    Returns:
        The rendered embed
    """
    submitter = user if isinstance(user, Submitter) else Submitter.from_user(user)
    submission = ProofSubmission(
        video_url=video_url,
        description=description,
        client=client_name,
        submitted_by=submitter,
        submitted_at=now or datetime.now(UTC),
    )
    return build_embed(submission)
