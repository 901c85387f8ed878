"""
Command-line interface for the procmonitor process collector.

This module provides the main CLI entry point: it loads the configuration,
restores the include list, and runs collection cycles either once or on an
interval, printing metric lines to stdout.
"""

import argparse
import dataclasses
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path
from ..core.include_store import IncludeListStore
from ..core.reporting import MetricPrinter
from ..monitoring.cycle import CollectionCycle
from ..sources.factory import SOURCE_CHOICES, create_process_source
from ..validation import (
    ValidationError,
    handle_cli_error,
    validate_positive_float,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging.

    Logs go to stderr because stdout carries the metric lines.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procmonitor",
        description="Collect per-process CPU and memory metrics.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml. Defaults to conf/config.toml in the current directory.",
    )
    parser.add_argument(
        "--source",
        choices=SOURCE_CHOICES,
        help="Override the process source from the configuration.",
    )
    parser.add_argument(
        "--interval",
        type=str,
        help="Seconds between cycles, overriding the configuration.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single collection cycle and exit.",
    )
    parser.add_argument(
        "--pin",
        metavar="NAME",
        action="append",
        default=[],
        help="Pin a process name so it is always reported, then exit. May be repeated.",
    )
    parser.add_argument(
        "--list-pinned",
        action="store_true",
        help="Print the pinned process names and exit.",
    )
    return parser


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for procmonitor.

    Raises:
        SystemExit: On configuration errors or invalid arguments.
    """
    args = build_parser().parse_args(argv)
    setup_logging()

    if args.config:
        set_config_path(args.config)

    try:
        config = get_config()
    except Exception as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    logging.getLogger().setLevel(config.log_level)

    overrides = {}
    if args.source:
        overrides["source"] = args.source
    if args.interval:
        try:
            overrides["interval_seconds"] = validate_positive_float(
                args.interval, min_value=1.0, field_name="--interval argument"
            )
        except ValidationError as e:
            handle_cli_error(
                error=e,
                context="interval argument validation",
                exit_code=1,
                logger=logger,
            )
    if overrides:
        config = dataclasses.replace(config, **overrides)

    include_store = IncludeListStore(config.include_list_file)
    include_store.load()

    if args.pin or args.list_pinned:
        _manage_pins(include_store, args.pin, args.list_pinned)
        return

    source = create_process_source(config.source)
    cycle = CollectionCycle(config, source, include_store)
    printer = MetricPrinter(config.metric_prefix)

    if args.once:
        printer.print_report(cycle.run())
        return

    _run_forever(cycle, printer, config.interval_seconds)


def _manage_pins(include_store: IncludeListStore, names: List[str], list_pinned: bool) -> None:
    added = [name for name in names if include_store.add(name)]
    if added:
        if not include_store.save():
            logger.error(f"Could not save include list to {include_store.path}")
            sys.exit(1)
        logger.info(f"Pinned {len(added)} process(es): {added}")
    elif names:
        logger.info("All given processes were already pinned")

    if list_pinned:
        for name in sorted(include_store.names):
            print(name)


def _run_forever(cycle: CollectionCycle, printer: MetricPrinter, interval: float) -> None:
    shutdown_event = threading.Event()

    def signal_handler(signum, frame):
        if shutdown_event.is_set():
            logger.warning("Shutdown already in progress.")
            return
        logger.info(f"Signal {signal.strsignal(signum)} received. Stopping after the current cycle...")
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(f"Starting collection every {interval}s")
    while not shutdown_event.is_set():
        printer.print_report(cycle.run())
        shutdown_event.wait(interval)

    if cycle.include_store.dirty:
        cycle.include_store.save()
    logger.info("Process collection stopped.")


if __name__ == "__main__":
    main_cli()
