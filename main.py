#!/usr/bin/env python3
"""autosink: keep the highest-priority audio sink as the default output."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QCoreApplication

from audio_cli import AudioCommands, pulse_server_label
from backend import SinkBackend
from errors import AutoSinkError, ConfigError
from log_config import setup_logging
from models import FORMATS
from poll_loop import PollLoop
from response_cache import ResponseCache
from store_config import AppConfig, ConfigStore
from switch_policy import SwitchPolicy

logger = logging.getLogger("autosink")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="autosink",
        description="Switch the default audio sink to the highest-priority connected sink.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to autosink.cfg")
    parser.add_argument(
        "--tool",
        choices=sorted(FORMATS),
        default=None,
        help="Audio tool whose text layout to parse (overrides the config file)",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        metavar="MS",
        help="Poll interval in milliseconds (default 1000)",
    )
    parser.add_argument("--once", action="store_true", help="Run a single check and exit")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log switch decisions without changing the default sink",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write the default config file and exit",
    )
    return parser.parse_args(argv)


def build_loop(config: AppConfig, dry_run: bool = False) -> PollLoop:
    cache = ResponseCache(config.cache_size, record_hit_rate=logger.isEnabledFor(logging.DEBUG))
    backend = SinkBackend(AudioCommands(config.fmt), config.fmt, cache)
    policy = SwitchPolicy(backend, dry_run=dry_run)
    return PollLoop(backend, policy, config.interval_ms)


def log_server(config: AppConfig) -> None:
    try:
        logger.info("audio server: %s", pulse_server_label(config.client_name))
    except AutoSinkError as e:
        logger.warning("%s; will keep polling", e)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else None)

    store = ConfigStore(path_override=args.config)
    if args.init_config:
        logger.info("config written to %s", store.write_default())
        return 0

    try:
        config = store.load(tool=args.tool, interval_ms=args.interval)
    except ConfigError as e:
        logger.error("bad configuration: %s", e)
        return 2

    logger.info("using %s, config %s", config.fmt.tool, store.file_path)
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    loop = build_loop(config, dry_run=args.dry_run)

    if args.once:
        return 0 if loop.tick() else 1

    log_server(config)

    # Python handlers run between ticks, so quitting waits for the current tick.
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    signal.signal(signal.SIGTERM, lambda *_: app.quit())

    loop.tick()
    loop.start()
    try:
        return app.exec()
    finally:
        loop.stop()


if __name__ == "__main__":
    sys.exit(main())
