"""Command line entry point.

Usage:
    epgstation-cleaner
    epgstation-cleaner --dry-run
    epgstation-cleaner --config /etc/epgstation-cleaner.yaml --log-level DEBUG
    python -m epgstation_cleaner

Configuration comes from environment variables (EPGSTATION_BASE_URL,
RETAIN_DURATION, IS_DRY_RUN, LOG_LEVEL, ...) and optionally a YAML file.
"""

import argparse
import sys
from datetime import datetime
from typing import Any, List, Optional

import httpx

from epgstation_cleaner import __version__
from epgstation_cleaner.client.epgstation import EPGStationClient
from epgstation_cleaner.client.exceptions import EPGStationError
from epgstation_cleaner.core.config import Config, ConfigService, normalize_log_level
from epgstation_cleaner.core.duration import format_duration
from epgstation_cleaner.core.errors import ConfigError, ExitCode, describe_error
from epgstation_cleaner.core.logging import create_logger
from epgstation_cleaner.services.cleanup import CleanupService
from epgstation_cleaner.services.policy import DeletionPolicy


def _log_level(value: str) -> str:
    try:
        return normalize_log_level(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epgstation-cleaner",
        description="Delete raw TS files of old, already encoded EPGStation recordings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  epgstation-cleaner --dry-run              Show what would be deleted
  RETAIN_DURATION=7d epgstation-cleaner     Keep one week of raw files
        """,
    )
    parser.add_argument("--config", metavar="PATH", help="YAML configuration file")
    parser.add_argument(
        "--dry-run", action="store_true", help="Log deletions without executing them"
    )
    parser.add_argument(
        "--log-level", type=_log_level, help="Override LOG_LEVEL (ERROR, WARN, INFO, DEBUG)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(
    config: Config,
    logger: Any,
    transport: Optional[httpx.BaseTransport] = None,
    now: Optional[datetime] = None,
) -> int:
    """Run one cleanup pass.

    Args:
        config: Loaded configuration.
        logger: Structured logger used by every component.
        transport: Optional httpx transport for the recording-service client.
        now: Reference time for the retention policy, defaults to now.

    Returns:
        Process exit code.
    """
    if config.dry_run:
        logger.info("Dry run mode is enabled. Delete operation is not executed")

    try:
        policy = DeletionPolicy.from_expression(config.retain_duration)
    except ConfigError as e:
        logger.error("invalid_retain_duration", value=config.retain_duration, **describe_error(e))
        return ExitCode.FAILURE

    logger.info(
        "retain_duration",
        retain_duration=format_duration(policy.retain_duration),
        retain_hours=round(policy.retain_duration.total_seconds() / 3600, 2),
    )

    with EPGStationClient.from_config(config, transport=transport, logger=logger) as client:
        try:
            listing = client.get_recorded()
        except EPGStationError as e:
            logger.error("recorded_listing_failed", base_url=config.base_url, **describe_error(e))
            return ExitCode.FAILURE

        selected = policy.select(listing.records, now=now, logger=logger)
        logger.info(
            "recordings_selected",
            selected=len(selected),
            listed=len(listing.records),
            total=listing.total,
        )

        CleanupService(client, dry_run=config.dry_run, logger=logger).run(selected)

    return ExitCode.OK


def main(
    argv: Optional[List[str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    """Parse arguments, load configuration and run the cleaner.

    Returns:
        Process exit code: 0 on completion (even when single deletions
        failed), 1 on configuration errors or when the recording list could
        not be fetched.
    """
    args = build_parser().parse_args(argv)

    logger = create_logger("INFO")
    logger.info("Starting", version=__version__)

    try:
        config = ConfigService(args.config).load()
    except ConfigError as e:
        logger.error("config_load_failed", **describe_error(e))
        return ExitCode.FAILURE

    overrides = {}
    if args.dry_run:
        overrides["dry_run"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        config = config.model_copy(update=overrides)

    logger = create_logger(config.log_level, config.log_format)
    logger.debug(
        "Configuration loaded",
        base_url=config.base_url,
        retain_duration=config.retain_duration,
        dry_run=config.dry_run,
        trust_all_certificates=config.trust_all_certificates,
        timeout=config.timeout,
    )

    return run(config, logger, transport=transport)


if __name__ == "__main__":
    sys.exit(main())
