"""
ProofBot CLI entry point.

Provides command-line interface for running the bot and utility commands.
"""

import argparse
import sys
from pathlib import Path

import discord

from proofbot import __version__
from proofbot.config.logging import get_logger, setup_logging
from proofbot.config.settings import load_settings
from proofbot.proof import extract_loom_video_id, is_valid_loom_url, loom_thumbnail_url


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="proofbot",
        description="Discord bot for posting proof-of-work Loom videos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ProofBot {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "run",
        help="Run the Discord bot and health-check server",
    )

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Check whether a URL is an accepted Loom share link",
    )
    check_parser.add_argument(
        "url",
        help='URL to check, e.g. "https://www.loom.com/share/abc123"',
    )

    return parser


def cmd_config(settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== ProofBot Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"Client ID: {settings.bot.client_id or 'Not set (resolved at login)'}")
    logger.info(f"Command Prefix: {settings.bot.command_prefix}")
    logger.info(f"Dev Guild: {settings.bot.dev_guild_id or 'None (global sync)'}")
    logger.info(f"Allowed Channels: {settings.bot.allowed_channel_ids or 'All'}")
    logger.info(f"\nHealth Server: {'Enabled' if settings.health.enabled else 'Disabled'}")
    logger.info(f"Health Address: {settings.health.host}:{settings.health.port}")

    return 0


def cmd_check(args) -> int:
    """Report whether a URL would be accepted by /proof."""
    url: str = args.url.strip()
    if not is_valid_loom_url(url):
        print(f"Rejected: {url!r} is not a Loom share link (expected loom.com/share/<id>)")
        return 1

    video_id = extract_loom_video_id(url)
    print(f"Accepted: {url}")
    print(f"  Video ID:  {video_id}")
    print(f"  Thumbnail: {loom_thumbnail_url(video_id)}")
    return 0


def cmd_run(settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    if not settings.bot.token:
        logger.error(
            "Discord bot token not set. Add DISCORD_BOT_TOKEN=<your-token> to your .env file."
        )
        return 1

    from proofbot.bot import ProofBot, StartupError

    bot = ProofBot(settings)
    logger.info("Starting ProofBot...")
    try:
        # log_handler=None: disable discord.py's default logging setup and use ours
        bot.run(settings.bot.token, log_handler=None)
    except discord.LoginFailure as e:
        logger.error(f"Failed to start bot: login rejected ({e})")
        return 1
    except StartupError as e:
        logger.error(f"Failed to start bot: {e}", exc_info=e.__cause__)
        return 1
    except Exception as e:
        logger.error(f"Failed to start bot: {e}", exc_info=True)
        return 1
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    # Execute command
    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "check":
        return cmd_check(args)
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
