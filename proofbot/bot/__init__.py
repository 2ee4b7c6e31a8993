"""
Discord Bot Layer.

Handles slash command registration, message parsing and reply sending for
the proof-of-work bot. Rendering lives in proofbot.proof.
"""

from proofbot.bot.client import ProofBot, StartupError

__all__ = ["ProofBot", "StartupError"]
