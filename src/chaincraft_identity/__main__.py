"""
Peer identity CLI entry point.

Create a new identity or print the PeerId of the stored one.

Usage::

    python -m chaincraft_identity --new-peer-id
    python -m chaincraft_identity --new-peer-id --seed-phrase "correct horse"
    python -m chaincraft_identity --read-peer-id
    python -m chaincraft_identity --read-peer-id --home-dir /srv/node

Options:
    -n, --new-peer-id    Generate and store a new identity (overwrites the old one)
    -r, --read-peer-id   Print the PeerId of the stored identity
    -s, --seed-phrase    Seed phrase for a reproducible identity (with --new-peer-id)
    --home-dir           Use this directory instead of the user's home
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from chaincraft_identity.exceptions import IdentityError
from chaincraft_identity.identity import generate_new_identity, read_identity
from chaincraft_identity.store import (
    DefaultHomeDirectoryProvider,
    FixedHomeDirectoryProvider,
    HomeDirectoryProvider,
)

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors per level."""

    CYAN = "\x1b[38;5;51m"
    BLUE = "\x1b[38;5;39m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;5;244m",
        logging.INFO: "\x1b[38;5;40m",
        logging.WARNING: "\x1b[38;5;220m",
        logging.ERROR: "\x1b[38;5;196m",
        logging.CRITICAL: "\x1b[38;5;196;1m",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as '<time> <LEVEL> <logger>: <message>' with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """
    Configure logging on stderr.

    Stdout is reserved for the PeerId line, so scripts can capture it.
    """
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="chaincraft-identity",
        description="Create or read the peer identity of a chaincraft node",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    # Exactly one action per invocation.
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "-n",
        "--new-peer-id",
        action="store_true",
        help="Generate and store a new identity, replacing any existing one",
    )
    action.add_argument(
        "-r",
        "--read-peer-id",
        action="store_true",
        help="Print the PeerId of the stored identity",
    )

    parser.add_argument(
        "-s",
        "--seed-phrase",
        type=str,
        default=None,
        help="Seed phrase for a reproducible identity (only with --new-peer-id)",
    )
    parser.add_argument(
        "--home-dir",
        type=Path,
        default=None,
        help="Directory to use instead of the user's home directory",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit code: 0 on success, 1 if the identity operation failed.
        Usage errors exit with 2 from inside argparse.
    """
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    provider: HomeDirectoryProvider
    if args.home_dir is not None:
        provider = FixedHomeDirectoryProvider(args.home_dir)
    else:
        provider = DefaultHomeDirectoryProvider()

    if args.new_peer_id:
        try:
            peer_id = generate_new_identity(args.seed_phrase, provider)
        except IdentityError as e:
            print(f"Error generating Peer ID : {e}", file=sys.stderr)
            return 1
    else:
        if args.seed_phrase is not None:
            logger.warning("Ignoring --seed-phrase: it only applies to --new-peer-id")
        try:
            peer_id = read_identity(provider)
        except IdentityError as e:
            print(f"Error reading Peer ID : {e}", file=sys.stderr)
            return 1

    print(f"Peer ID : {peer_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
