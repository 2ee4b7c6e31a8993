"""
ProofBot - Discord bot for posting proof-of-work Loom videos.

Users submit a Loom share link (plus an optional description and client
name) and the bot posts it back to the channel as a formatted embed. A small
HTTP endpoint reports liveness for hosting platforms.
"""

__version__ = "0.1.0"
