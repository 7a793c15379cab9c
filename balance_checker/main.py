"""
Entry point — load the wallet list, fetch every balance concurrently, print the report.

Usage:
    balance-checker [-c config.yaml] [--max-concurrency N] [--log-level LEVEL]
"""

import argparse
import asyncio
import sys

from loguru import logger

from balance_checker import __version__
from balance_checker.aggregator import get_wallet_balances
from balance_checker.config import (
    DEFAULT_CONFIG_PATH, LOG_FILE, LOG_LEVEL, LOG_ROTATION, MAX_CONCURRENCY,
    ConfigError, load_config,
)
from balance_checker.report import print_report

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Console sink on stdout, plus a rotating file sink when LOG_FILE is set."""
    logger.remove()
    logger.add(sys.stdout, level=level, format=LOG_FORMAT)
    if LOG_FILE:
        logger.add(LOG_FILE, rotation=LOG_ROTATION, level=level, format=LOG_FORMAT)


def concurrency_limit(value: str) -> int | None:
    """argparse type: a non-negative int, 0 meaning unbounded."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 (unbounded) or a positive int, got {n}")
    return n or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="balance-checker",
        description="Fetch SOL balances for the wallets listed in a YAML config file.",
    )
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG_PATH,
                        help=f"path to the config file (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--max-concurrency", type=concurrency_limit, default=str(MAX_CONCURRENCY),
                        metavar="N", help="max in-flight RPC requests (default: unbounded)")
    parser.add_argument("--log-level", default=LOG_LEVEL,
                        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
                        type=str.upper)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Failed to load config file: {e}")
        return 1

    logger.debug(f"Loaded {len(config.wallets)} wallets from {args.config}")
    balances = asyncio.run(get_wallet_balances(config, max_concurrency=args.max_concurrency))
    print_report(balances)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
