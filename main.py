#!/usr/bin/env python3
"""
Main entry point for the Dev Environment Installer
"""

import asyncio
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from config.settings import Settings
from devenv.core.orchestrator import DevEnvOrchestrator
from devenv.utils.logging import setup_root_logger


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments. Unknown arguments exit with status 2."""
    parser = argparse.ArgumentParser(
        description="Bootstrap a developer workstation: tools, fonts, dotfiles and Neovim config"
    )

    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Report what would run without installing or fetching anything"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file (JSON format)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from settings, INFO)"
    )

    return parser.parse_args(argv)


def load_config(args) -> Settings:
    """Load configuration from file, environment and command line."""
    config_data = {}
    if args.config:
        if not args.config.exists():
            raise ValueError(f"Config file not found: {args.config}")
        with open(args.config) as f:
            config_data = json.load(f)

    # Override with command line args
    if args.dry_run:
        config_data["dry_run"] = True
    if args.log_level:
        config_data.setdefault("logging", {})["level"] = args.log_level

    return Settings(**config_data)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    try:
        settings = load_config(args)
    except Exception as e:
        setup_root_logger(level="INFO")
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        return 1

    setup_root_logger(
        settings.log_path,
        settings.logging.level,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count
    )
    logger = logging.getLogger(__name__)
    logger.info(f"Arguments: {vars(args)}")

    try:
        orchestrator = DevEnvOrchestrator(settings)
        results = await orchestrator.run()

        # Print summary
        logger.info("=" * 60)
        logger.info("SUMMARY")
        logger.info("=" * 60)
        for step in results.steps:
            logger.info(f"{step.name}: {step.status.value} - {step.message}")
        logger.info(f"Duration: {results.duration_seconds:.2f} seconds")
        logger.info("=" * 60)
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=logger.isEnabledFor(logging.DEBUG))
        return 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
