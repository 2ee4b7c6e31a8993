"""
Proof-of-work core.

Loom share-link validation and embed rendering. Nothing in here talks to
Discord's API; the bot cogs call these functions and send the result.
"""

from proofbot.proof.embed import (
    DEFAULT_DESCRIPTION,
    ProofSubmission,
    Submitter,
    build_embed,
    create_proof_embed,
)
from proofbot.proof.loom import extract_loom_video_id, is_valid_loom_url, loom_thumbnail_url

__all__ = [
    "DEFAULT_DESCRIPTION",
    "ProofSubmission",
    "Submitter",
    "build_embed",
    "create_proof_embed",
    "extract_loom_video_id",
    "is_valid_loom_url",
    "loom_thumbnail_url",
]
