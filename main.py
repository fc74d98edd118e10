#!/usr/bin/env python3
"""
Main entry point for devsetup - developer machine bootstrap
"""

import asyncio
import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables from .env file
load_dotenv()

from devsetup.core import (
    CommandRunner,
    Decommissioner,
    HostEnvironment,
    InstallerDispatcher,
    InstallerRegistry,
    PostInstallSequence,
    Prober,
    ProvisionError,
    Provisioner,
    default_catalog,
)
from devsetup.utils import Console, setup_root_logger
from config.settings import Settings


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _describe_work(settings: Settings) -> str:
    lines = ["This script checks if the following software is installed:"]
    lines += [f"  - {tool.label}" for tool in default_catalog()]
    lines += [
        "",
        f"It installs missing software, sets up Python {settings.python_version} with asdf,",
        f"installs {settings.python_package}, and clones {settings.dotfiles_repo}",
        f"into {settings.clone_dir}.",
    ]
    return "\n".join(lines)


def parse_arguments(argv: Optional[List[str]] = None, settings: Optional[Settings] = None):
    """Parse command line arguments."""
    settings = settings or Settings()
    parser = ArgumentParser(
        prog="devsetup",
        description="Check for, install and remove the tools a developer machine needs.",
        epilog=_describe_work(settings),
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--uninstall",
        action="store_true",
        help="Uninstall all software installed by this script."
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show command output instead of progress animation."
    )

    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Install missing software without asking."
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.logging.level.upper(),
        help=f"Log file level (default: {settings.logging.level.upper()})"
    )

    return parser.parse_args(argv)


def load_config(args, settings: Settings) -> Settings:
    """Apply command line flags on top of environment and .env settings."""
    return settings.model_copy(update={
        "debug": settings.debug or args.debug,
        "assume_yes": settings.assume_yes or args.yes,
    })


async def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    try:
        settings = Settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        Console().failure(f"Invalid configuration: {problems}")
        sys.exit(1)

    args = parse_arguments(argv, settings)
    settings = load_config(args, settings)

    setup_root_logger(
        settings.logging.file_path,
        args.log_level,
        console_level="DEBUG" if settings.debug else "CRITICAL",
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count,
        format_string=settings.logging.format
    )
    logger = logging.getLogger(__name__)
    logger.info(f"Arguments: {vars(args)}")

    console = Console()
    host = HostEnvironment()
    catalog = default_catalog()
    prober = Prober(host, version_timeout=settings.progress.probe_timeout_seconds)
    runner = CommandRunner(host, console, debug=settings.debug,
                           interval=settings.progress.interval_seconds)
    registry = InstallerRegistry(runner, host, settings)

    try:
        if args.uninstall:
            decommissioner = Decommissioner(catalog, prober, registry, settings, console)
            await decommissioner.run()
        else:
            provisioner = Provisioner(
                catalog,
                prober,
                InstallerDispatcher(registry, prober, console),
                PostInstallSequence(runner, settings, console),
                console,
                assume_yes=settings.assume_yes
            )
            summary = await provisioner.run()
            logger.info(f"Summary: {summary.model_dump_json()}")
    except ProvisionError as e:
        logger.error(str(e))
        console.failure(f"\n{e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        console.failure(f"\nFatal error: {e}")
        sys.exit(1)

    sys.exit(0)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
