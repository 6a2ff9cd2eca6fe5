"""
Main Entry Point - logparser CLI

Fetch events from the API into the local store and display filtered views
of what has been stored.

    logparser --fetch
    logparser --display --type PushEvent --actor octo --limit 10
"""

import argparse
import logging
import sys
from typing import List, Optional

from .coreutils.config import AppConfig, ConfigError, load_config
from .coreutils.logging import setup_logging
from .load.local_storage import LocalEventStore
from .orchestration.pagination import FetchAbortedError, fetch_all_pages
from .transformation.filters import describe_filters, filter_records, format_display

logger = logging.getLogger(__name__)


def run_fetch(config: AppConfig, store: LocalEventStore) -> int:
    """
    Fetch every page into the store

    Returns:
        int: Process exit code
    """
    logger.info("Starting fetch operation...")
    try:
        summary = fetch_all_pages(config.api, store)
    except FetchAbortedError as e:
        logger.error(f"❌ Failed to fetch data from API: {e}")
        print(
            f"Error: Failed to fetch data from API after {e.attempts} attempts "
            f"(last URL: {e.cursor}). Check logs for details.",
            file=sys.stderr,
        )
        return 1
    except Exception as e:
        logger.exception(f"❌ Failed to fetch data from API: {e}")
        print("Error: Failed to fetch data from API. Check logs for details.", file=sys.stderr)
        return 1

    logger.info(
        f"✅ Fetch operation completed successfully: {summary.pages} pages, {summary.records} records"
    )
    return 0


def run_display(
    config: AppConfig,
    store: LocalEventStore,
    event_type: Optional[str] = None,
    actor: Optional[str] = None,
    limit: Optional[int] = None,
) -> int:
    """
    Print stored records matching the filters

    Args:
        config: Application config (supplies the default type filter)
        store: Store to read
        event_type: Type filter; falls back to the configured default
        actor: Actor login substring filter
        limit: Maximum number of entries to print

    Returns:
        int: Process exit code
    """
    logger.info("Starting display operation...")
    try:
        records = store.load()
        if not records:
            print("No logs found. Use --fetch to retrieve data first.")
            return 0

        logger.info(f"Loaded {len(records)} total log entries")

        effective_type = event_type if event_type is not None else config.filter.type
        matches = filter_records(records, event_type=effective_type, actor=actor)

        if not matches:
            description = describe_filters(effective_type, actor)
            logger.info(
                "No logs found matching filter"
                + (f"s: {description}" if description else "s.")
            )
            return 0

        truncated = limit is not None and 0 < limit < len(matches)
        shown = matches[:limit] if truncated else matches

        for line in format_display(shown, limit if truncated else None):
            print(line)

        logger.info(f"Successfully displayed {len(shown)} log entries")
        return 0

    except Exception as e:
        logger.exception(f"❌ Failed to display logs: {e}")
        print("Error: Failed to load or display logs. Check logs for details.", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logparser", description="Fetch and display logs from a remote API."
    )
    parser.add_argument("--fetch", action="store_true", help="Fetch logs from API and save them")
    parser.add_argument("--display", action="store_true", help="Display stored logs")
    parser.add_argument("--type", dest="event_type", help="Filter by log type")
    parser.add_argument(
        "--actor", "-a", help="Filter by actor login name (partial match)"
    )
    parser.add_argument("--limit", "-l", type=int, help="Limit number of results displayed")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--store", help="Path to the JSON log store")
    parser.add_argument("--log-dir", help="Also write logs to a dated file in this directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Fatal error: Failed to load configuration - {e}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else config.log_level, log_dir=args.log_dir)

    if not args.fetch and not args.display:
        print("No operation specified. Use --help for usage information.")
        parser.print_help()
        return 0

    store = LocalEventStore(args.store or config.storage.path)

    if args.fetch:
        exit_code = run_fetch(config, store)
        if exit_code != 0:
            return exit_code

    if args.display:
        return run_display(config, store, args.event_type, args.actor, args.limit)

    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
