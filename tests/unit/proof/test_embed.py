"""
Tests for proof-of-work embed rendering.

Covers:
- Submitter name resolution (display name → username fallback)
- Description fallback
- Field order and the optional Client field
- Thumbnail derived from the Loom video id
- Fixed title, color, footer and timestamp
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import discord
import pytest

from proofbot.proof.embed import (
    DEFAULT_DESCRIPTION,
    EMBED_COLOR,
    FIELD_CLIENT,
    FIELD_SUBMITTED_AT,
    FIELD_SUBMITTED_BY,
    FIELD_VIDEO_LINK,
    ProofSubmission,
    Submitter,
    build_embed,
    create_proof_embed,
)

NOW = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)


def _make_user(display_name="Alice", username="alice"):
    user = MagicMock()
    user.name = username
    user.display_name = display_name
    return user


class TestSubmitter:
    def test_prefers_display_name(self):
        submitter = Submitter.from_user(_make_user(display_name="Alice A.", username="alice"))
        assert submitter.name == "Alice A."

    def test_falls_back_to_username_when_display_name_empty(self):
        submitter = Submitter.from_user(_make_user(display_name="", username="alice"))
        assert submitter.name == "alice"

    def test_falls_back_to_username_when_display_name_missing(self):
        user = MagicMock(spec=["name"])
        user.name = "bob"
        assert Submitter.from_user(user).name == "bob"


class TestCreateProofEmbed:
    def test_default_description_and_thumbnail(self):
        embed = create_proof_embed("https://loom.com/share/abc123", None, None, _make_user())
        assert embed.description == DEFAULT_DESCRIPTION
        assert embed.thumbnail.url == "https://cdn.loom.com/sessions/thumbnails/abc123-with-play.gif"

    def test_empty_description_uses_fallback(self):
        embed = create_proof_embed("https://loom.com/share/abc123", "", None, _make_user())
        assert embed.description == DEFAULT_DESCRIPTION

    def test_description_and_client_are_rendered(self):
        embed = create_proof_embed(
            "https://loom.com/share/abc123", "Built the login page", "Acme Corp", _make_user()
        )
        assert embed.description == "Built the login page"
        client_fields = [f for f in embed.fields if f.name == FIELD_CLIENT]
        assert len(client_fields) == 1
        assert client_fields[0].value == "Acme Corp"
        assert client_fields[0].inline is True

    def test_client_field_omitted_without_client(self):
        embed = create_proof_embed("https://loom.com/share/abc123", "Work", None, _make_user())
        assert FIELD_CLIENT not in [f.name for f in embed.fields]

    def test_field_order(self):
        embed = create_proof_embed(
            "https://loom.com/share/abc123", "Work", "Acme", _make_user()
        )
        assert [f.name for f in embed.fields] == [
            FIELD_SUBMITTED_BY,
            FIELD_SUBMITTED_AT,
            FIELD_VIDEO_LINK,
            FIELD_CLIENT,
        ]

    def test_video_link_is_markdown_link(self):
        url = "https://www.loom.com/share/xyz789?sid=1"
        embed = create_proof_embed(url, None, None, _make_user())
        video_field = next(f for f in embed.fields if f.name == FIELD_VIDEO_LINK)
        assert video_field.value == f"[Watch on Loom]({url})"
        assert video_field.inline is False

    def test_submitted_by_uses_display_name(self):
        embed = create_proof_embed(
            "https://loom.com/share/abc123", None, None, _make_user(display_name="Alice")
        )
        assert embed.fields[0].value == "Alice"

    def test_submitted_at_is_discord_timestamp(self):
        embed = create_proof_embed(
            "https://loom.com/share/abc123", None, None, _make_user(), now=NOW
        )
        assert embed.fields[1].value == f"<t:{int(NOW.timestamp())}:F>"
        assert embed.timestamp == NOW

    def test_fixed_title_color_and_footer(self):
        embed = create_proof_embed("https://loom.com/share/abc123", None, None, _make_user())
        assert embed.title == "🎬 Proof of Work Submitted"
        assert embed.color == EMBED_COLOR
        assert embed.color.value == 0x6366F1
        assert embed.footer.text == "Proof of Work System"

    def test_no_thumbnail_without_video_id(self):
        # The builder does not validate; an unmatched URL simply gets no thumbnail
        embed = create_proof_embed("https://example.com/video", None, None, _make_user())
        assert embed.thumbnail.url is None

    def test_accepts_submitter_directly(self):
        submitter = Submitter(username="carol", display_name=None)
        embed = create_proof_embed("https://loom.com/share/abc123", None, None, submitter)
        assert embed.fields[0].value == "carol"

    def test_user_is_a_required_argument(self):
        with pytest.raises(TypeError):
            create_proof_embed("https://loom.com/share/abc123", None, None)


class TestBuildEmbed:
    def test_renders_submission(self):
        submission = ProofSubmission(
            video_url="https://loom.com/share/def456",
            description="Fixed checkout",
            client="Globex",
            submitted_by=Submitter(username="dave", display_name="Dave"),
            submitted_at=NOW,
        )
        assert submission.video_id == "def456"

        embed = build_embed(submission)
        assert isinstance(embed, discord.Embed)
        assert embed.description == "Fixed checkout"
        assert embed.thumbnail.url.endswith("/def456-with-play.gif")
        assert embed.fields[-1].value == "Globex"
