"""Command cogs loaded by ProofBot.setup_hook()."""
