#!/usr/bin/env python3
"""
Command-line interface for prestashop_installer

Creates new PrestaShop applications from official release archives.
"""

import argparse
import logging
import sys
from pathlib import Path

from prestashop_installer import constants, utils
from prestashop_installer.api import ReleaseAPI
from prestashop_installer.downloader import ArchiveDownloader
from prestashop_installer.exceptions import InstallerError
from prestashop_installer.installer import Scaffolder
from prestashop_installer.models import Fixture, InvocationRequest


def positive_float(value):
    """argparse type for strictly positive numbers (e.g., timeouts)."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def cmd_new(args):
    """Handle new command to create a PrestaShop application."""
    request = InvocationRequest(
        folder=args.folder,
        working_dir=Path.cwd(),
        release=args.release,
        fixture=Fixture.parse(args.fixture),
    )

    if args.fixture and not request.fixture:
        print(f"{utils.SYMBOL_WARNING} Unknown fixture '{args.fixture}', continuing without one "
              f"(available: {', '.join(constants.FIXTURES)})")

    scaffolder = Scaffolder(
        api=ReleaseAPI(timeout=args.timeout),
        downloader=ArchiveDownloader(timeout=args.timeout),
        progress_callback=print,
    )

    scaffolder.create(request)

    install_script = f"{utils.display_path(request.target, request.working_dir)}/{constants.CLI_INSTALL_SCRIPT}"
    print(f"{utils.SYMBOL_CHECK} To proceed with the installation, open the website in your browser "
          f"or run CLI installer script: php {install_script}")
    return 0


def cmd_releases(args):
    """Handle releases command to list stable PrestaShop releases."""
    api = ReleaseAPI(timeout=args.timeout)

    print("Fetching PrestaShop version feed...")

    channel = api.get_version_feed().stable_channel()
    if channel is None or not channel.branches:
        print(f"{utils.SYMBOL_ERROR} No stable releases found")
        return 1

    latest = channel.latest_branch()

    print(f"\n{utils.SYMBOL_CHECK} Found {len(channel.branches)} stable branches:")
    for branch in channel.branches:
        marker = " (latest)" if branch is latest else ""
        print(f"  {branch.num:<12} {branch.download_link}{marker}")

    print("\nInstall a specific release with: prestashop new <folder> --release=<version>")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="prestashop",
        description="PrestaShop Installer - create new PrestaShop applications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n"
               "  prestashop new shop                      # Latest stable release\n"
               "  prestashop new shop --release=1.6.1.3    # Specific release\n"
               "  prestashop new shop --fixture=starwars   # Replace demo pictures\n"
               "  prestashop releases                      # List stable releases"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=constants.DEFAULT_TIMEOUT,
        help=f"HTTP request timeout in seconds (default: {constants.DEFAULT_TIMEOUT})"
    )

    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII status symbols (also enabled by FORCE_ASCII=1)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # New command
    new_parser = subparsers.add_parser("new", help="Create a new PrestaShop application")
    new_parser.add_argument("folder", help="Folder to create the application in (must not exist)")
    new_parser.add_argument(
        "--release", "-r",
        default=None,
        help="Specify PrestaShop release version to download. E.g. 1.6.1.3"
    )
    new_parser.add_argument(
        "--fixture",
        default=None,
        help="Replaces demo product, category, banner pictures. "
             f"Available values: {', '.join(constants.FIXTURES)}"
    )
    new_parser.set_defaults(func=cmd_new)

    # Releases command
    releases_parser = subparsers.add_parser("releases", help="List stable PrestaShop releases")
    releases_parser.set_defaults(func=cmd_releases)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    utils.setup_symbols(args.ascii)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except InstallerError as e:
        print(f"{utils.SYMBOL_ERROR} Error: {e}")
        return 1
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"\n{utils.SYMBOL_ERROR} Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
