#!/usr/bin/env python3
"""
NeuralPulse admin store - command line entry point

Inspects and maintains the persisted admin store.

Usage:
    python -m neuralpulse.main                    # Show store status
    python -m neuralpulse.main --list articles    # List a table
    python -m neuralpulse.main --reset            # Restore demo data
    python -m neuralpulse.main --verbose          # Enable debug logging

Environment Variables:
    STORAGE_BACKEND   - json (default), sqlite or memory
    STORAGE_PATH      - Storage file location
    STORAGE_KEY       - Slot key (default: neural-pulse-storage)
    LOG_LEVEL         - Logging level (default: INFO)
"""

import argparse
import logging
import sys
from pathlib import Path

from neuralpulse.config.settings import ConfigurationError, create_backend, load_settings
from neuralpulse.content.articles import split_by_status
from neuralpulse.storage.serialization import StateStoreError
from neuralpulse.storage.state_store import AdminStore


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        level: Level name from settings
        verbose: If True, force DEBUG level logging
    """
    resolved = logging.DEBUG if verbose else getattr(logging, level, logging.INFO)

    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # basicConfig is a no-op once handlers exist, so apply the level directly
    logging.getLogger().setLevel(resolved)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Inspect and maintain the NeuralPulse admin store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m neuralpulse.main                    # Store status
    python -m neuralpulse.main --list users       # List users
    python -m neuralpulse.main --reset            # Restore demo data
    python -m neuralpulse.main --env .env.local   # Use custom env file
        """,
    )

    parser.add_argument(
        "--list",
        choices=("articles", "users", "images"),
        help="List the rows of one table",
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Discard stored data and restore the demo users",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose/debug logging",
    )

    parser.add_argument(
        "--env",
        type=Path,
        help="Path to .env file (default: .env in current directory)",
    )

    return parser.parse_args(argv)


def show_status(store: AdminStore) -> None:
    """
    Display current store status.

    Args:
        store: Store to query
    """
    logger = logging.getLogger(__name__)

    published, drafts = split_by_status(store.articles)
    session = store.current_user

    logger.info("=" * 50)
    logger.info("Store Status")
    logger.info("=" * 50)
    logger.info(f"Users:               {len(store.users)}")
    logger.info(f"Articles:            {len(store.articles)}")
    logger.info(f"  Published:         {len(published)}")
    logger.info(f"  Drafts:            {len(drafts)}")
    logger.info(f"Images:              {len(store.uploaded_images)}")
    logger.info(f"Session user:        {session.username if session else '(none)'}")
    logger.info("=" * 50)


def show_table(store: AdminStore, table: str) -> None:
    """Log one line per row of table."""
    logger = logging.getLogger(__name__)

    if table == "users":
        for user in store.users:
            logger.info(f"{user.id} | {user.username} | {user.role.value} | {user.name} | {user.email}")
    elif table == "articles":
        for article in store.articles:
            status = "published" if article.published else "draft"
            logger.info(f"{article.id} | {article.slug} | {status} | {article.author} | {article.title}")
    else:
        for image in store.uploaded_images:
            logger.info(f"{image.id} | {image.name} | {image.uploaded_by} | {image.uploaded_at}")


def main(argv=None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(env_file=args.env)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        logger.error("Please check your .env file or environment variables")
        return 1

    setup_logging(level=settings.log_level, verbose=args.verbose)

    try:
        store = AdminStore(create_backend(settings.storage))

        if args.reset:
            store.reset()

        if args.list:
            show_table(store, args.list)
        else:
            show_status(store)

        return 0

    except StateStoreError as e:
        logger.error(f"Storage error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
